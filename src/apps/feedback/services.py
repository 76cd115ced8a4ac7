"""
Feedback services (write operations).

Feedback starts "pending"; the first reply marks it "reviewed".
"""

import uuid

import structlog
from django.db import transaction
from django.utils import timezone

from src.apps.store.selectors import get_document_for_update
from src.apps.store.services import create_document, delete_document, update_document
from src.common.exceptions import NotFoundError, ValidationError
from src.common.types import Collection, FeedbackStatus

from .selectors import get_feedback

logger = structlog.get_logger(__name__)


@transaction.atomic
def submit_feedback(*, org_id: str, user_id: str, message: str, is_anonymous: bool = False) -> dict:
    from src.apps.organizations.selectors import get_organization

    if not message.strip():
        raise ValidationError("Message is required.")
    if get_organization(org_id=org_id) is None:
        raise NotFoundError("Organization not found.")

    feedback = create_document(
        collection=Collection.FEEDBACK,
        fields={
            "org_id": org_id,
            "user_id": user_id,
            "message": message.strip(),
            "is_anonymous": is_anonymous,
            "status": FeedbackStatus.PENDING,
            "replies": [],
        },
    )

    logger.info("feedback_submitted", feedback_id=feedback["id"], org_id=org_id, anonymous=is_anonymous)
    return feedback


@transaction.atomic
def reply_to_feedback(*, feedback_id: str, user_id: str, message: str) -> dict:
    if not message.strip():
        raise ValidationError("Message is required.")

    feedback = get_document_for_update(collection=Collection.FEEDBACK, key=feedback_id)
    if feedback is None:
        raise NotFoundError("Feedback not found.")

    replies = [
        *feedback.get("replies", []),
        {
            "id": uuid.uuid4().hex,
            "user_id": user_id,
            "message": message.strip(),
            "created_at": timezone.now().isoformat(),
        },
    ]
    feedback = update_document(
        collection=Collection.FEEDBACK,
        key=feedback_id,
        fields={"replies": replies, "status": FeedbackStatus.REVIEWED},
    )

    logger.info("feedback_replied", feedback_id=feedback_id, by=user_id)
    return feedback


@transaction.atomic
def set_feedback_status(*, feedback_id: str, status: str) -> dict:
    if status not in set(FeedbackStatus):
        raise ValidationError("Status must be 'pending' or 'reviewed'.")
    if get_feedback(feedback_id=feedback_id) is None:
        raise NotFoundError("Feedback not found.")

    feedback = update_document(collection=Collection.FEEDBACK, key=feedback_id, fields={"status": status})

    logger.info("feedback_status_changed", feedback_id=feedback_id, status=status)
    return feedback


@transaction.atomic
def delete_feedback(*, feedback_id: str) -> None:
    if get_feedback(feedback_id=feedback_id) is None:
        raise NotFoundError("Feedback not found.")

    delete_document(collection=Collection.FEEDBACK, key=feedback_id)
    logger.info("feedback_deleted", feedback_id=feedback_id)
