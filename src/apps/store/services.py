"""
Document store services (write operations).

Generic create / update / delete over named collections.
Domain apps build on these; they never touch the Document model directly.
"""

import uuid

import structlog
from django.db import transaction

from src.apps.store.models import Document
from src.apps.store.selectors import Where, build_condition
from src.common.exceptions import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)

# Keys owned by the store itself; never persisted inside ``data``.
_RESERVED = {"id", "created_at", "updated_at"}


def _clean(fields: dict) -> dict:
    return {k: v for k, v in fields.items() if k not in _RESERVED}


@transaction.atomic
def create_document(*, collection: str, fields: dict, key: str | None = None) -> dict:
    key = key or uuid.uuid4().hex

    if Document.objects.filter(collection=collection, key=key).exists():
        raise ConflictError(f"Document '{collection}/{key}' already exists.")

    doc = Document.objects.create(collection=collection, key=key, data=_clean(fields))

    logger.debug("document_created", collection=collection, key=key)
    return doc.to_dict()


@transaction.atomic
def update_document(*, collection: str, key: str, fields: dict) -> dict:
    """Shallow-merge ``fields`` into the stored document."""
    doc = (
        Document.objects
        .select_for_update()
        .filter(collection=collection, key=key)
        .first()
    )
    if doc is None:
        raise NotFoundError(f"Document '{collection}/{key}' not found.")

    doc.data = {**doc.data, **_clean(fields)}
    doc.save(update_fields=["data", "updated_at"])

    logger.debug("document_updated", collection=collection, key=key, fields=sorted(fields))
    return doc.to_dict()


@transaction.atomic
def delete_document(*, collection: str, key: str) -> bool:
    deleted, _ = Document.objects.filter(collection=collection, key=key).delete()

    logger.debug("document_deleted", collection=collection, key=key, deleted=bool(deleted))
    return bool(deleted)


@transaction.atomic
def delete_documents(*, collection: str, where: list[Where]) -> int:
    """Delete every document matching ``where``. Returns the number removed."""
    deleted, _ = (
        Document.objects
        .filter(collection=collection)
        .filter(build_condition(where))
        .delete()
    )

    logger.debug("documents_deleted", collection=collection, count=deleted)
    return deleted
