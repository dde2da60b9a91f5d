from pydantic import BaseModel, EmailStr, Field


class AccountCreateIn(BaseModel):
    email: EmailStr = Field(..., description="The email of the account", max_length=255)
    password: str = Field(..., description="The password of the account", min_length=4)


class AccountActivateIn(BaseModel):
    token: str = Field(
        ..., description="Activation token received by email", min_length=1, max_length=255
    )


class ActivationResendIn(BaseModel):
    email: EmailStr = Field(..., max_length=255)
