"""
Organization and member schemas.
"""

from ninja import Schema

from src.apps.activities.schemas import ActivitySchema
from src.apps.budgets.schemas import BudgetSchema
from src.apps.feedback.schemas import FeedbackSchema
from src.apps.join_requests.schemas import JoinRequestDetailSchema
from src.apps.users.schemas import UserSummarySchema


# ── Request ─────────────────────────────────────────────────────────────


class OrganizationCreateSchema(Schema):
    name: str
    description: str
    mission: str
    logo: str | None = None
    cover: str | None = None
    creator_id: str | None = None


class CollectionDataInSchema(Schema):
    total_students: int | str | None = 0
    paid_students: int | str | None = 0
    student_fee: int | str | None = None


class OrganizationUpdateSchema(Schema):
    name: str | None = None
    description: str | None = None
    mission: str | None = None
    logo: str | None = None
    cover: str | None = None
    collection_data: CollectionDataInSchema | None = None
    cbl_data: str | None = None  # data:application/pdf URI, "" clears
    cbl_file_name: str | None = None


class MemberUpsertSchema(Schema):
    user_id: str
    role: str = "Member"


class MemberUpdateSchema(Schema):
    role: str | None = None
    show_in_leaders: bool | None = None
    quote: str | None = None


# ── Response ────────────────────────────────────────────────────────────


class CollectionDataSchema(Schema):
    total_students: int
    paid_students: int
    student_fee: int


class CblSchema(Schema):
    data: str
    file_name: str
    uploaded_at: str


class OrganizationSchema(Schema):
    id: str
    name: str
    description: str
    mission: str
    logo: str | None = None
    cover: str | None = None
    collection_data: CollectionDataSchema | None = None
    cbl: CblSchema | None = None
    created_at: str
    updated_at: str


class OrganizationSummarySchema(OrganizationSchema):
    member_count: int = 0
    activity_count: int = 0


class UserOrganizationSchema(OrganizationSchema):
    pending_requests: int = 0


class MemberSchema(Schema):
    id: str
    org_id: str
    user_id: str
    role: str
    joined_date: str
    show_in_leaders: bool = False
    quote: str = ""
    user: UserSummarySchema | None = None


class OrganizationDetailSchema(OrganizationSchema):
    members: list[MemberSchema] = []
    activities: list[ActivitySchema] = []
    budgets: list[BudgetSchema] = []
    feedback: list[FeedbackSchema] = []
    requests: list[JoinRequestDetailSchema] = []
