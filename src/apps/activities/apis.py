"""
Activity API endpoints.
"""

from django.http import HttpRequest
from ninja import Router

from src.apps.activities import services as activity_services
from src.apps.activities.schemas import ActivityCreateSchema, ActivitySchema, ActivityUpdateSchema
from src.apps.activities.selectors import get_activity, list_activities
from src.common.auth import TokenAuth
from src.common.exceptions import NotFoundError
from src.common.permissions import require_org_admin
from src.common.schemas import ErrorSchema, MessageSchema

router = Router(tags=["Activities"], auth=TokenAuth())


def _get_activity_or_404(activity_id: str) -> dict:
    activity = get_activity(activity_id=activity_id)
    if activity is None:
        raise NotFoundError("Activity not found.")
    return activity


@router.get(
    "/organizations/{org_id}/activities",
    response=list[ActivitySchema],
    summary="List activities, latest date first",
)
def get_activities(request: HttpRequest, org_id: str):
    return list_activities(org_id=org_id)


@router.post(
    "/organizations/{org_id}/activities",
    response={201: ActivitySchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Create an activity",
)
def create_activity(request: HttpRequest, org_id: str, payload: ActivityCreateSchema):
    require_org_admin(request.auth, org_id)
    return 201, activity_services.create_activity(org_id=org_id, **payload.dict())


@router.get(
    "/activities/{activity_id}",
    response={200: ActivitySchema, 404: ErrorSchema},
    summary="Get an activity",
)
def get_activity_by_id(request: HttpRequest, activity_id: str):
    return _get_activity_or_404(activity_id)


@router.put(
    "/activities/{activity_id}",
    response={200: ActivitySchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Update an activity",
)
def update_activity(request: HttpRequest, activity_id: str, payload: ActivityUpdateSchema):
    activity = _get_activity_or_404(activity_id)
    require_org_admin(request.auth, activity["org_id"])
    return activity_services.update_activity(activity_id=activity_id, **payload.dict())


@router.delete(
    "/activities/{activity_id}",
    response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Delete an activity",
)
def delete_activity(request: HttpRequest, activity_id: str):
    activity = _get_activity_or_404(activity_id)
    require_org_admin(request.auth, activity["org_id"])
    activity_services.delete_activity(activity_id=activity_id)
    return 200, {"message": "Activity deleted."}
