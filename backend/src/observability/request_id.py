"""Request ID context for log correlation.

Callers that own a request set request_id_var; RequestIDFilter copies it
onto every log record. Validation state is never read from it.
"""

from contextvars import ContextVar
from typing import Optional

# Context variable for request_id (async-safe)
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> str:
    """Get current request ID from context.

    Returns:
        str: Current request ID or "no-request-id" if not set
    """
    return request_id_var.get() or "no-request-id"
