from typing import Optional

from pydantic import BaseModel, Field


class RequestPayload(BaseModel):
    url: str = Field(..., description="URL of the API to check")
    method: Optional[str] = Field(
        "GET", description="HEAD, GET, POST, PUT or DELETE. Empty or null means GET."
    )
    content_type: Optional[str] = Field(
        None, description="Content-Type sent with the body (only when body is set)"
    )
    body: Optional[str] = Field(None, description="Base64 encoded request body")
    query: str = Field(..., description="jq query; a true result triggers the notification")
    notification_message: Optional[str] = Field(
        "", description="Comment posted with the notification"
    )

    model_config = {"extra": "ignore"}
