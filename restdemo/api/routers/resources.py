"""
Resource routes.

CRUD endpoints under /api/resources. Every call requires X-Auth-Token;
the token is checked for presence only.
"""

import logging

from fastapi import APIRouter, Depends, Header, Query, Response, status

from restdemo.api.context import RequestContext, get_request_context
from restdemo.api.dependencies import (
    CLIENT_REQUEST_ID_HEADER,
    auth_token,
    ensure_valid,
    get_resource_service,
    get_settings,
)
from restdemo.api.models import ErrorResponse, ResourceRequest, ResourceResponse, ResourceUpdateRequest
from restdemo.config.settings import Settings
from restdemo.domain.resources import ResourceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/resources", tags=["resources"], dependencies=[Depends(auth_token)])

PROCESSED_BY = "ResourceRouter"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing header or invalid input"},
    500: {"model": ErrorResponse, "description": "Unexpected error"},
}

NOT_FOUND_RESPONSES = {
    **ERROR_RESPONSES,
    404: {"model": ErrorResponse, "description": "Resource not found"},
}


@router.get(
    "",
    response_model=list[ResourceResponse],
    responses=ERROR_RESPONSES,
    summary="List resources",
)
def list_resources(
    response: Response,
    name: str | None = Query(None, description="Case-insensitive exact name filter"),
    request_id: str | None = Header(None, alias=CLIENT_REQUEST_ID_HEADER),
    service: ResourceService = Depends(get_resource_service),
) -> list[ResourceResponse]:
    """
    List all resources, optionally filtered by name.

    An empty store yields a single default resource.
    """
    logger.debug("Listing resources (name=%s, client request id=%s)", name, request_id)
    resources = service.list_resources(name)
    response.headers["X-Processed-By"] = PROCESSED_BY
    return [ResourceResponse.from_entity(r) for r in resources]


@router.get(
    "/{resource_id}",
    response_model=ResourceResponse,
    responses=NOT_FOUND_RESPONSES,
    summary="Fetch one resource",
)
def get_resource(
    resource_id: str,
    response: Response,
    service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    resource = service.get(resource_id)
    response.headers["X-Processed-By"] = PROCESSED_BY
    return ResourceResponse.from_entity(resource)


@router.post(
    "",
    response_model=ResourceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a resource",
)
def create_resource(
    body: ResourceRequest,
    response: Response,
    context: RequestContext = Depends(get_request_context),
    settings: Settings = Depends(get_settings),
    service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    ensure_valid(body, context, settings)
    resource = service.create(body.id, body.name)
    response.headers["Location"] = f"{context.path.rstrip('/')}/{resource.id}"
    response.headers["X-Processed-By"] = PROCESSED_BY
    return ResourceResponse.from_entity(resource)


@router.put(
    "/{resource_id}",
    response_model=ResourceResponse,
    responses=ERROR_RESPONSES,
    summary="Rename a resource, creating it when absent",
)
def update_resource(
    resource_id: str,
    body: ResourceUpdateRequest,
    response: Response,
    context: RequestContext = Depends(get_request_context),
    settings: Settings = Depends(get_settings),
    service: ResourceService = Depends(get_resource_service),
) -> ResourceResponse:
    ensure_valid(body, context, settings)
    resource = service.update(resource_id, body.name)
    response.headers["X-Processed-By"] = PROCESSED_BY
    return ResourceResponse.from_entity(resource)


@router.delete(
    "/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=ERROR_RESPONSES,
    summary="Delete a resource",
)
def delete_resource(
    resource_id: str,
    service: ResourceService = Depends(get_resource_service),
) -> Response:
    """Deleting an unknown id is not an error."""
    service.delete(resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={"X-Processed-By": PROCESSED_BY})
