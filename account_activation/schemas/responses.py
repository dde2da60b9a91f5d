from typing import Literal

from pydantic import BaseModel, Field


class AcceptedOut(BaseModel):
    status: Literal["accepted"] = "accepted"


class OkOut(BaseModel):
    status: Literal["ok"] = "ok"


class SessionOut(BaseModel):
    token: str = Field(..., description="Bearer token for the new session")


class AccountOut(BaseModel):
    id: str = Field(..., description="The id of the account")
    email: str = Field(..., description="The email of the account")
    activation_state: str | None = Field(
        None, description="pending, active, or null for external accounts"
    )
