"""
Platform settings services.
"""

import structlog
from django.db import transaction

from src.apps.store.selectors import document_exists
from src.apps.store.services import create_document, update_document
from src.common.exceptions import ValidationError
from src.common.types import Collection, PlatformStatus, RegistrationStatus

from .selectors import DEFAULT_SETTINGS, SETTINGS_KEY

logger = structlog.get_logger(__name__)


@transaction.atomic
def update_settings(
    *,
    status: str | None = None,
    registration: str | None = None,
    announcement: str | None = None,
) -> dict:
    fields = {}
    if status is not None:
        if status not in set(PlatformStatus):
            raise ValidationError("Status must be 'active' or 'maintenance'.")
        fields["status"] = status
    if registration is not None:
        if registration not in set(RegistrationStatus):
            raise ValidationError("Registration must be 'open' or 'closed'.")
        fields["registration"] = registration
    if announcement is not None:
        fields["announcement"] = announcement

    if document_exists(collection=Collection.SETTINGS, key=SETTINGS_KEY):
        settings = update_document(collection=Collection.SETTINGS, key=SETTINGS_KEY, fields=fields)
    else:
        settings = create_document(
            collection=Collection.SETTINGS,
            key=SETTINGS_KEY,
            fields={**DEFAULT_SETTINGS, **fields},
        )

    logger.info("platform_settings_updated", fields=sorted(fields))
    return settings
