"""
Root URL configuration.

- /api/v1/   → Main NinjaExtraAPI (JWT bearer auth, REST endpoints)
- /admin/    → Django admin (document browser)
"""

from django.contrib import admin
from django.urls import path
from ninja_extra import NinjaExtraAPI

from src.apps.activities.apis import router as activities_router
from src.apps.authentication.apis import router as auth_router
from src.apps.budgets.apis import router as budgets_router
from src.apps.feedback.apis import router as feedback_router
from src.apps.join_requests.apis import router as requests_router
from src.apps.organizations.apis import router as organizations_router
from src.apps.platform.apis import router as platform_router
from src.apps.posts.apis import router as posts_router
from src.apps.users.apis import router as users_router
from src.common.exceptions import configure_exception_handlers

# ── Main API ────────────────────────────────────────────────────────────

api = NinjaExtraAPI(
    title="OrgHub API",
    version="1.0.0",
    description="University organizations: membership, roles and club management",
    urls_namespace="api",
)

configure_exception_handlers(api)

# Auth: /api/v1/auth/...
api.add_router("/auth", auth_router)

# Users: /api/v1/users/...
api.add_router("/users", users_router)

# Organizations and members: /api/v1/organizations/...
api.add_router("/organizations", organizations_router)

# Routers below carry full paths (/organizations/{org_id}/..., /requests/..., ...)
api.add_router("/", requests_router)
api.add_router("/", activities_router)
api.add_router("/", budgets_router)
api.add_router("/", feedback_router)
api.add_router("/", posts_router)

# Platform settings: /api/v1/settings
api.add_router("/settings", platform_router)

# ── URL patterns ────────────────────────────────────────────────────────

urlpatterns = [
    path("api/v1/", api.urls),
    path("admin/", admin.site.urls),
]
