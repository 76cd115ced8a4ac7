"""
Activity services (write operations).
"""

import structlog
from django.db import transaction

from src.apps.store.services import create_document, delete_document, update_document
from src.common.exceptions import NotFoundError, ValidationError
from src.common.types import Collection

from .selectors import get_activity

logger = structlog.get_logger(__name__)


@transaction.atomic
def create_activity(
    *,
    org_id: str,
    title: str,
    date: str,
    description: str,
    image: str | None = None,
) -> dict:
    from src.apps.organizations.selectors import get_organization

    if not title.strip() or not date.strip() or not description.strip():
        raise ValidationError("Title, date, and description are required.")
    if get_organization(org_id=org_id) is None:
        raise NotFoundError("Organization not found.")

    activity = create_document(
        collection=Collection.ACTIVITIES,
        fields={
            "org_id": org_id,
            "title": title.strip(),
            "date": date,
            "description": description,
            "image": image or None,
        },
    )

    logger.info("activity_created", activity_id=activity["id"], org_id=org_id)
    return activity


@transaction.atomic
def update_activity(
    *,
    activity_id: str,
    title: str | None = None,
    date: str | None = None,
    description: str | None = None,
    image: str | None = None,
) -> dict:
    if get_activity(activity_id=activity_id) is None:
        raise NotFoundError("Activity not found.")

    fields = {
        key: value
        for key, value in {
            "title": title, "date": date, "description": description, "image": image,
        }.items()
        if value is not None
    }
    activity = update_document(collection=Collection.ACTIVITIES, key=activity_id, fields=fields)

    logger.info("activity_updated", activity_id=activity_id, fields=sorted(fields))
    return activity


@transaction.atomic
def delete_activity(*, activity_id: str) -> None:
    if get_activity(activity_id=activity_id) is None:
        raise NotFoundError("Activity not found.")

    delete_document(collection=Collection.ACTIVITIES, key=activity_id)
    logger.info("activity_deleted", activity_id=activity_id)
