from typing import Optional

from pydantic import BaseModel, ConfigDict

from .common import UtcDatetime


class CredentialsRequest(BaseModel):
    # presence is checked by the handler so the client gets the documented 400 message
    email: Optional[str] = None
    password: Optional[str] = None


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    created_at: UtcDatetime


class UserResponse(BaseModel):
    user: UserRead
