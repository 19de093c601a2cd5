"""Auth Client — httpx wrapper over the hosted auth provider's REST API.

Invariants:
    - Every request carries the service credential (apikey + bearer header)
    - Non-2xx responses and transport failures raise AuthError with the provider's message
    - Credentials are never logged
    - No retries: every failure is terminal for the request

Design Decisions:
    - One AsyncClient per process, opened in the lifespan and closed on shutdown
    - transport injectable: tests drive the client with httpx.MockTransport
"""

import logging

import httpx

from storefront.core.errors import AuthError
from storefront.schemas.auth import AuthSession

logger = logging.getLogger(__name__)

# Fields the provider has used for error text across API versions, in priority order
_ERROR_FIELDS = ("msg", "error_description", "message", "error")


def _extract_error_message(response: httpx.Response) -> str:
    """Pull a human-readable message out of an auth provider error body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in _ERROR_FIELDS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason_phrase or f"Auth request failed ({response.status_code})"


class AuthClient:
    """Registers users and issues password-grant sessions."""

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/auth/v1",
            headers={
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def sign_up(self, email: str, password: str) -> dict:
        """Register a new user. Returns the provider's user/session payload."""
        return await self._post(
            "/signup", {"email": email, "password": password},
        )

    async def sign_in_with_password(
        self, email: str, password: str,
    ) -> AuthSession | None:
        """Exchange credentials for a session; None if the provider issued none."""
        data = await self._post(
            "/token",
            {"email": email, "password": password},
            params={"grant_type": "password"},
        )
        if not data.get("access_token"):
            return None
        return AuthSession.model_validate(data)

    async def _post(
        self, path: str, payload: dict, params: dict | None = None,
    ) -> dict:
        try:
            response = await self.client.post(path, json=payload, params=params)
        except httpx.HTTPError as e:
            logger.error(
                f"Auth provider unreachable: {type(e).__name__}",
                extra={"path": path},
            )
            raise AuthError(str(e) or type(e).__name__)

        if response.is_error:
            message = _extract_error_message(response)
            logger.warning(
                f"Auth provider rejected request: {message}",
                extra={"path": path, "status_code": response.status_code},
            )
            raise AuthError(message, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
