"""
Request context - per-request values passed explicitly to handlers.

The request id is assigned by the middleware in main.py and stored on
request.state; handlers receive it through get_request_context rather
than reading any process-global state.
"""

import re
import uuid
from dataclasses import dataclass
from datetime import date

from fastapi import Request

REQUEST_ID_HEADER = "X-Request-ID"

# ASCII only, 1..64 chars, conservative charset to keep ids safe in logs
_REQUEST_ID_ALLOWED_RE = re.compile(r"^[A-Za-z0-9._-]{1,64}$", flags=re.ASCII)


def validate_request_id(value: str | None) -> str | None:
    """Return value if it is a safe request id, otherwise None."""
    if value is None or len(value) > 64:
        return None
    if _REQUEST_ID_ALLOWED_RE.fullmatch(value) is None:
        return None
    return value


def new_request_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class RequestContext:
    """Values a handler needs about the request it is serving."""

    path: str
    request_id: str
    today: date


def get_request_context(request: Request) -> RequestContext:
    """Build the context for the current request."""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = validate_request_id(request.headers.get(REQUEST_ID_HEADER)) or new_request_id()
    return RequestContext(path=request.url.path, request_id=request_id, today=date.today())
