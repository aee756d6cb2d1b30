"""
Lambda Extensions API event models.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

EVENT_INVOKE = "INVOKE"
EVENT_SHUTDOWN = "SHUTDOWN"


class ExtensionEvent(BaseModel):
    """
    Body of GET /extension/event/next.

    INVOKE carries requestId; SHUTDOWN carries shutdownReason. Other keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    event_type: str = Field(..., alias="eventType")
    request_id: Optional[str] = Field(None, alias="requestId")
    deadline_ms: Optional[int] = Field(None, alias="deadlineMs")
    invoked_function_arn: Optional[str] = Field(None, alias="invokedFunctionArn")
    shutdown_reason: Optional[str] = Field(None, alias="shutdownReason")
    tracing: Dict[str, Any] = Field(default_factory=dict)
