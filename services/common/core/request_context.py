"""
RequestContext management.
Use ContextVar to share the invocation Request ID across async execution.
"""

from contextvars import ContextVar
from typing import Optional


# Context variable for the Lambda invocation Request ID.
_request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Get the current Request ID."""
    return _request_id_var.get()


def set_request_id(request_id: Optional[str]) -> Optional[str]:
    """
    Bind the Request ID of the invocation being handled to the current context.

    Tasks created afterwards inherit a copy of the context, so a background
    task that outlives the invocation should call clear_request_id() first.
    """
    _request_id_var.set(request_id)
    return request_id


def clear_request_id() -> None:
    """Clear the Request ID context."""
    _request_id_var.set(None)
