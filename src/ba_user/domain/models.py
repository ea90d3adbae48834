"""Domain models for ba_user."""

from dataclasses import dataclass, field
from datetime import datetime

SOCIAL_KEYS = ("twitter", "instagram", "website")


@dataclass
class UserProfile:
    address: str
    bio: str = ""
    avatar: str = ""
    banner: str = ""
    social: dict[str, str] = field(default_factory=dict)
    verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ProfileUpdate:
    """Partial update: None leaves a field unchanged; social keys are merged."""

    bio: str | None = None
    avatar: str | None = None
    banner: str | None = None
    social: dict[str, str] = field(default_factory=dict)
