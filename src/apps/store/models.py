"""
Document store model.

Every domain entity (users, organizations, members, ...) is one row here,
addressed by (collection, key). Entity fields live in the JSON ``data`` column.
"""

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from src.common.models import BaseModel


class Document(BaseModel):
    collection = models.CharField(max_length=64, db_index=True)
    key = models.CharField(max_length=128)
    data = models.JSONField(default=dict, encoder=DjangoJSONEncoder)

    class Meta:
        db_table = "documents"
        unique_together = [("collection", "key")]
        ordering = ["collection", "-created_at"]

    def __str__(self) -> str:
        return f"{self.collection}/{self.key}"

    def to_dict(self) -> dict:
        return {
            "id": self.key,
            **self.data,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
