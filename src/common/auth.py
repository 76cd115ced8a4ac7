"""
Bearer-token authentication for ninja routes.

Tokens are ninja_jwt access tokens whose "user_id" claim is the key of a
document in the users collection. request.auth is that user document.
"""

import structlog
from django.http import HttpRequest
from ninja.security import HttpBearer
from ninja_jwt.exceptions import TokenError
from ninja_jwt.tokens import AccessToken, RefreshToken

logger = structlog.get_logger(__name__)


class TokenAuth(HttpBearer):
    def authenticate(self, request: HttpRequest, token: str) -> dict | None:
        from src.apps.users.selectors import get_user

        try:
            access = AccessToken(token)
        except TokenError:
            logger.debug("invalid_access_token")
            return None

        user_id = access.get("user_id")
        if not user_id:
            return None

        user = get_user(user_id=user_id)
        if user is not None:
            structlog.contextvars.bind_contextvars(user_id=user_id)
        return user


def generate_tokens_for_user(*, user: dict) -> dict:
    refresh = RefreshToken()
    refresh["user_id"] = user["id"]
    refresh["role"] = user.get("role", "")

    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }
