"""
Budget schemas.

Amounts arrive as numbers or numeric strings; services coerce them to floats.
"""

from ninja import Schema


class BudgetCreateSchema(Schema):
    category: str
    limit: float | str
    allocated: float | str | None = 0


class BudgetUpdateSchema(Schema):
    category: str | None = None
    allocated: float | str | None = None
    limit: float | str | None = None


class BudgetSchema(Schema):
    id: str
    org_id: str
    category: str
    allocated: float
    limit: float
    created_at: str
    updated_at: str
