"""
Authentication services.

Handles registration, login, token refresh and logout (token blacklisting).
"""

import structlog
from ninja_jwt.exceptions import TokenError
from ninja_jwt.tokens import RefreshToken

from src.apps.platform.selectors import registration_open
from src.apps.users.services import authenticate_user, create_user
from src.common.auth import generate_tokens_for_user
from src.common.exceptions import AuthenticationError, PermissionDeniedError, ValidationError

logger = structlog.get_logger(__name__)


# ── Registration ────────────────────────────────────────────────────────


def register_user(*, name: str, email: str, password: str, avatar: str | None = None) -> dict:
    """Create a Student account. Refused while registration is closed."""
    if not registration_open():
        raise PermissionDeniedError("Registration is currently closed.")

    user = create_user(name=name, email=email, password=password, avatar=avatar)

    logger.info("registration_complete", user_id=user["id"])
    return user


# ── Login ───────────────────────────────────────────────────────────────


def login(*, email: str, password: str) -> dict:
    user = authenticate_user(email=email, password=password)
    tokens = generate_tokens_for_user(user=user)

    logger.info("user_logged_in", user_id=user["id"])
    return {**tokens, "user": user}


# ── Refresh ─────────────────────────────────────────────────────────────


def refresh_access_token(*, refresh_token: str) -> dict:
    try:
        token = RefreshToken(refresh_token)
    except TokenError as e:
        raise AuthenticationError(f"Invalid or expired token: {e}")

    return {"access": str(token.access_token), "refresh": refresh_token}


# ── Logout ──────────────────────────────────────────────────────────────


def logout_user(*, refresh_token: str) -> None:
    try:
        token = RefreshToken(refresh_token)
        token.blacklist()
        logger.info("user_logged_out", jti=token["jti"])
    except TokenError as e:
        raise ValidationError(f"Invalid or expired token: {e}")
