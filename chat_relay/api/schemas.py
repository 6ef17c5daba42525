"""
Request bodies for the relay endpoints.

Fields are optional at the schema level so that a missing field is reported
by the gateway as a 400 envelope rather than by FastAPI as a 422.
"""

from typing import Optional

from pydantic import BaseModel


class SendMessageRequest(BaseModel):
    spaceName: Optional[str] = None
    message: Optional[str] = None


class SendToUserRequest(BaseModel):
    userEmail: Optional[str] = None
    message: Optional[str] = None
