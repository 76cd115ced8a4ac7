# Shared enums (UserRole, MemberRole, JoinRequestStatus, etc.)
"""
Shared enums used across multiple apps.

These are plain Python StrEnums for use in service logic.
Values are the strings stored in the document store.
"""

from enum import StrEnum


class Collection(StrEnum):
    USERS = "users"
    ORGANIZATIONS = "organizations"
    MEMBERS = "members"
    JOIN_REQUESTS = "join_requests"
    ACTIVITIES = "activities"
    BUDGETS = "budgets"
    FEEDBACK = "feedback"
    SETTINGS = "settings"
    POSTS = "posts"
    COMMENTS = "comments"
    REACTIONS = "reactions"


class UserRole(StrEnum):
    """Platform-wide role of a user."""
    STUDENT = "Student"
    ORG_ADMIN = "OrgAdmin"
    ADMIN = "Admin"


class MemberRole(StrEnum):
    """
    Well-known member titles.

    Member.role is free text; only ADMIN carries authority.
    """
    PRESIDENT = "President"
    VICE_PRESIDENT = "Vice President"
    SECRETARY = "Secretary"
    TREASURER = "Treasurer"
    ADMIN = "Admin"
    MEMBER = "Member"


class JoinRequestStatus(StrEnum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PlatformStatus(StrEnum):
    ACTIVE = "active"
    MAINTENANCE = "maintenance"


class RegistrationStatus(StrEnum):
    OPEN = "open"
    CLOSED = "closed"


class FeedbackStatus(StrEnum):
    PENDING = "pending"
    REVIEWED = "reviewed"


class ReactionType(StrEnum):
    LIKE = "like"
