"""
Platform settings selectors.

Settings are a single document keyed "platform".
"""

from src.apps.store.selectors import get_document
from src.common.types import Collection, PlatformStatus, RegistrationStatus

SETTINGS_KEY = "platform"

DEFAULT_SETTINGS = {
    "status": PlatformStatus.ACTIVE,
    "registration": RegistrationStatus.OPEN,
    "announcement": "",
}


def get_settings() -> dict:
    """The stored settings, or the defaults when nothing has been saved yet."""
    stored = get_document(collection=Collection.SETTINGS, key=SETTINGS_KEY)
    if stored is None:
        return {"id": SETTINGS_KEY, **DEFAULT_SETTINGS}
    return {**DEFAULT_SETTINGS, **stored}


def registration_open() -> bool:
    return get_settings()["registration"] == RegistrationStatus.OPEN
