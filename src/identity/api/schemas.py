"""Pydantic request/response schemas for the Identity API."""

from pydantic import Field

from shared.schemas import CamelModel


class RegisterRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Pema Wangmo",
                    "email": "pema@example.bt",
                    "password": "s3cret-pass",
                    "role": "BUYER",
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)
    role: str | None = Field(None, max_length=20)


class SignInRequest(CamelModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class PrincipalSchema(CamelModel):
    id: str
    email: str
    name: str
    role: str


class SessionResponse(CamelModel):
    user: PrincipalSchema
    token: str | None = None


class RegisterResponse(CamelModel):
    message: str = "User created successfully"
    user: PrincipalSchema
