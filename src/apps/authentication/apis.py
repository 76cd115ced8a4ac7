"""
Authentication API endpoints.

Register and login are public; they hand out ninja_jwt access/refresh pairs.
"""

from django.http import HttpRequest
from ninja import Router

from src.apps.authentication import services as auth_services
from src.apps.authentication.schemas import (
    LoginRequestSchema,
    LoginResponseSchema,
    LogoutRequestSchema,
    RefreshRequestSchema,
    RegisterRequestSchema,
    RegisterResponseSchema,
    TokenRefreshResponseSchema,
    UserResponseSchema,
)
from src.common.auth import TokenAuth
from src.common.schemas import ErrorSchema, MessageSchema

router = Router(tags=["Authentication"])


# ── Register ────────────────────────────────────────────────────────────


@router.post(
    "/register",
    response={201: RegisterResponseSchema, 400: ErrorSchema, 403: ErrorSchema, 409: ErrorSchema},
    summary="Register a new student account",
)
def register(request: HttpRequest, payload: RegisterRequestSchema):
    user = auth_services.register_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        avatar=payload.avatar,
    )
    return 201, {"message": "Registration successful.", "user": user}


# ── Login ───────────────────────────────────────────────────────────────


@router.post(
    "/login",
    response={200: LoginResponseSchema, 401: ErrorSchema},
    summary="Exchange email and password for tokens",
)
def login(request: HttpRequest, payload: LoginRequestSchema):
    return 200, auth_services.login(email=payload.email, password=payload.password)


@router.post(
    "/refresh",
    response={200: TokenRefreshResponseSchema, 401: ErrorSchema},
    summary="Get a new access token from a refresh token",
)
def refresh(request: HttpRequest, payload: RefreshRequestSchema):
    return 200, auth_services.refresh_access_token(refresh_token=payload.refresh)


# ── Logout ──────────────────────────────────────────────────────────────


@router.post(
    "/logout",
    response={200: MessageSchema, 400: ErrorSchema},
    auth=TokenAuth(),
    summary="Logout, blacklist the refresh token",
)
def logout(request: HttpRequest, payload: LogoutRequestSchema):
    auth_services.logout_user(refresh_token=payload.refresh)
    return 200, {"message": "Successfully logged out."}


# ── Session user ────────────────────────────────────────────────────────


@router.get(
    "/me",
    response=UserResponseSchema,
    auth=TokenAuth(),
    summary="Get the authenticated user",
)
def me(request: HttpRequest):
    return request.auth
