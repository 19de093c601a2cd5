"""Account Routes — signup and login, delegated entirely to the auth provider.

Invariants:
    - Credentials are never inspected, stored, or logged here
    - Login returns the session's access token; the token key is omitted if no session
    - Provider rejections surface as 500 with the provider's message (AuthError)
"""

from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_auth
from storefront.core.store_protocols import AuthProvider
from storefront.schemas.auth import Credentials, LoginResponse
from storefront.schemas.product import SuccessResponse

router = APIRouter(prefix="/products", tags=["accounts"])


@router.post("/signup", response_model=SuccessResponse)
async def signup(body: Credentials, auth: AuthProvider = Depends(get_auth)):
    await auth.sign_up(body.email, body.password)
    return SuccessResponse(message="User registered successfully!")


@router.post(
    "/login", response_model=LoginResponse, response_model_exclude_none=True,
)
async def login(body: Credentials, auth: AuthProvider = Depends(get_auth)):
    session = await auth.sign_in_with_password(body.email, body.password)
    return LoginResponse(token=session.access_token if session else None)
