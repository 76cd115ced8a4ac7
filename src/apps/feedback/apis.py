"""
Feedback API endpoints.

Any authenticated user may leave feedback; reading, replying and
moderating need an organization admin.
"""

from django.http import HttpRequest
from ninja import Router

from src.apps.feedback import services as feedback_services
from src.apps.feedback.schemas import (
    FeedbackCreateSchema,
    FeedbackReplyCreateSchema,
    FeedbackSchema,
    FeedbackStatusSchema,
)
from src.apps.feedback.selectors import get_feedback, list_feedback
from src.common.auth import TokenAuth
from src.common.exceptions import NotFoundError
from src.common.permissions import require_org_admin
from src.common.schemas import ErrorSchema, MessageSchema

router = Router(tags=["Feedback"], auth=TokenAuth())


def _get_feedback_or_404(feedback_id: str) -> dict:
    feedback = get_feedback(feedback_id=feedback_id)
    if feedback is None:
        raise NotFoundError("Feedback not found.")
    return feedback


@router.get(
    "/organizations/{org_id}/feedback",
    response={200: list[FeedbackSchema], 403: ErrorSchema},
    summary="List feedback, newest first",
)
def get_organization_feedback(request: HttpRequest, org_id: str):
    require_org_admin(request.auth, org_id)
    return list_feedback(org_id=org_id)


@router.post(
    "/organizations/{org_id}/feedback",
    response={201: FeedbackSchema, 400: ErrorSchema, 404: ErrorSchema},
    summary="Leave feedback for an organization",
)
def submit_feedback(request: HttpRequest, org_id: str, payload: FeedbackCreateSchema):
    feedback = feedback_services.submit_feedback(
        org_id=org_id,
        user_id=request.auth["id"],
        message=payload.message,
        is_anonymous=payload.is_anonymous,
    )
    return 201, feedback


@router.post(
    "/feedback/{feedback_id}/replies",
    response={201: FeedbackSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Reply to feedback (marks it reviewed)",
)
def reply_to_feedback(request: HttpRequest, feedback_id: str, payload: FeedbackReplyCreateSchema):
    feedback = _get_feedback_or_404(feedback_id)
    require_org_admin(request.auth, feedback["org_id"])
    feedback = feedback_services.reply_to_feedback(
        feedback_id=feedback_id, user_id=request.auth["id"], message=payload.message
    )
    return 201, feedback


@router.put(
    "/feedback/{feedback_id}",
    response={200: FeedbackSchema, 400: ErrorSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Set feedback status",
)
def set_feedback_status(request: HttpRequest, feedback_id: str, payload: FeedbackStatusSchema):
    feedback = _get_feedback_or_404(feedback_id)
    require_org_admin(request.auth, feedback["org_id"])
    return feedback_services.set_feedback_status(feedback_id=feedback_id, status=payload.status)


@router.delete(
    "/feedback/{feedback_id}",
    response={200: MessageSchema, 403: ErrorSchema, 404: ErrorSchema},
    summary="Delete feedback",
)
def delete_feedback(request: HttpRequest, feedback_id: str):
    feedback = _get_feedback_or_404(feedback_id)
    require_org_admin(request.auth, feedback["org_id"])
    feedback_services.delete_feedback(feedback_id=feedback_id)
    return 200, {"message": "Feedback deleted."}
