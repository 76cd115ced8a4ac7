"""
Document store selectors (read operations).

Documents come back as plain dicts: {"id": key, **data, "created_at", "updated_at"}.
Absence is reported as None, never raised.
"""

from dataclasses import dataclass
from typing import Any

from django.db.models import Q, QuerySet

from src.apps.store.models import Document
from src.common.exceptions import ValidationError
from src.common.pagination import paginate_queryset

# Fields that map to real columns instead of JSON keys.
_COLUMNS = {"id": "key", "created_at": "created_at", "updated_at": "updated_at"}


@dataclass(frozen=True)
class Where:
    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


def _lookup(field: str) -> str:
    return _COLUMNS.get(field, f"data__{field}")


def build_condition(where: list[Where] | None) -> Q:
    condition = Q()
    for predicate in where or []:
        lookup = _lookup(predicate.field)
        if predicate.op == "==":
            condition &= Q(**{lookup: predicate.value})
        elif predicate.op == "in":
            condition &= Q(**{f"{lookup}__in": list(predicate.value)})
        else:
            raise ValidationError(f"Unsupported query operator '{predicate.op}'.")
    return condition


def _queryset(
    collection: str,
    where: list[Where] | None = None,
    order_by: OrderBy | None = None,
) -> QuerySet[Document]:
    qs = Document.objects.filter(collection=collection).filter(build_condition(where))
    if order_by is None:
        return qs.order_by("created_at")
    prefix = "-" if order_by.descending else ""
    return qs.order_by(f"{prefix}{_lookup(order_by.field)}", f"{prefix}created_at")


def get_document(*, collection: str, key: str) -> dict | None:
    doc = Document.objects.filter(collection=collection, key=key).first()
    return doc.to_dict() if doc else None


def get_document_for_update(*, collection: str, key: str) -> dict | None:
    """
    Read a document and hold a row lock on it until the surrounding
    transaction ends. Must be called inside transaction.atomic.
    """
    doc = (
        Document.objects
        .select_for_update()
        .filter(collection=collection, key=key)
        .first()
    )
    return doc.to_dict() if doc else None


def get_all_documents(*, collection: str) -> list[dict]:
    return [doc.to_dict() for doc in _queryset(collection)]


def query_documents(
    *,
    collection: str,
    where: list[Where] | None = None,
    order_by: OrderBy | None = None,
) -> list[dict]:
    """Return documents matching every predicate in ``where``."""
    return [doc.to_dict() for doc in _queryset(collection, where, order_by)]


def query_documents_page(
    *,
    collection: str,
    where: list[Where] | None = None,
    order_by: OrderBy | None = None,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[dict], int]:
    """Offset-paginated query. Returns (documents, total_count)."""
    sliced, total = paginate_queryset(
        _queryset(collection, where, order_by),
        page=page,
        page_size=page_size,
    )
    return [doc.to_dict() for doc in sliced], total


def count_documents(*, collection: str, where: list[Where] | None = None) -> int:
    return Document.objects.filter(collection=collection).filter(build_condition(where)).count()


def document_exists(*, collection: str, key: str) -> bool:
    return Document.objects.filter(collection=collection, key=key).exists()
