"""Resource domain service."""

import logging
from dataclasses import dataclass

from .exceptions import ResourceNotFound
from .ports import Resource, ResourceRepository

logger = logging.getLogger(__name__)

DEFAULT_RESOURCE = Resource(id="default-id", name="default-name")


@dataclass
class ResourceService:
    """Domain service for named resources."""

    repository: ResourceRepository

    def list_resources(self, name: str | None = None) -> list[Resource]:
        """
        Return resources, optionally filtered by name (case-insensitive).

        An empty store yields a single default resource before filtering.
        """
        resources = self.repository.find_all()
        if not resources:
            logger.debug("No resources found, returning default resource")
            resources = [DEFAULT_RESOURCE]
        if name is None:
            return resources
        wanted = name.casefold()
        return [r for r in resources if r.name.casefold() == wanted]

    def get(self, resource_id: str) -> Resource:
        """
        Raises:
            ResourceNotFound: If no resource has this id
        """
        resource = self.repository.find_by_id(resource_id)
        if resource is None:
            raise ResourceNotFound(resource_id)
        return resource

    def create(self, resource_id: str, name: str) -> Resource:
        logger.debug("Saving resource id=%s", resource_id)
        return self.repository.save(Resource(id=resource_id, name=name))

    def update(self, resource_id: str, name: str) -> Resource:
        """Replace the resource's name, creating it when absent."""
        logger.debug("Updating resource id=%s", resource_id)
        return self.repository.save(Resource(id=resource_id, name=name))

    def delete(self, resource_id: str) -> None:
        logger.debug("Deleting resource id=%s", resource_id)
        self.repository.delete_by_id(resource_id)
