"""Auth Schemas — credentials in, session/token out.

Invariants:
    - Credentials are passed through to the auth provider untouched (no format checks)
    - LoginResponse.token omitted from the body when the provider issued no session
"""

from pydantic import BaseModel, ConfigDict


class Credentials(BaseModel):
    email: str
    password: str


class AuthSession(BaseModel):
    """Session object issued by the auth provider on password login."""
    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str = "bearer"
    expires_in: int | None = None
    refresh_token: str | None = None
    user: dict | None = None


class LoginResponse(BaseModel):
    success: bool = True
    token: str | None = None
