"""Request schemas for the Auth API"""

from pydantic import BaseModel, Field


class SignInRequestSchema(BaseModel):
    """
    Request schema for password sign-in

    Used for POST /auth/sign-in endpoint.
    """

    email: str = Field(..., min_length=1, description="Account email")
    password: str = Field(..., min_length=1, description="Account password")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "owner@acme.example",
                "password": "correct horse battery staple",
            }
        }
