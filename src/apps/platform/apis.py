"""
Platform settings API endpoints.

Reading is public so clients can show maintenance mode and announcements
before login; writing needs a system Admin.
"""

from django.http import HttpRequest
from ninja import Router

from src.apps.platform import services as platform_services
from src.apps.platform.schemas import SettingsSchema, SettingsUpdateSchema
from src.apps.platform.selectors import get_settings
from src.common.auth import TokenAuth
from src.common.permissions import require_admin
from src.common.schemas import ErrorSchema

router = Router(tags=["Platform"])


@router.get("", response=SettingsSchema, summary="Current platform settings")
def read_settings(request: HttpRequest):
    return get_settings()


@router.put(
    "",
    response={200: SettingsSchema, 400: ErrorSchema, 403: ErrorSchema},
    auth=TokenAuth(),
    summary="Update platform settings",
)
def write_settings(request: HttpRequest, payload: SettingsUpdateSchema):
    require_admin(request.auth)
    return platform_services.update_settings(**payload.dict())
