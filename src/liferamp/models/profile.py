"""User profile data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    """What best describes the user."""

    HIGH_SCHOOL = "high-school"
    COLLEGE = "college"
    YOUNG_PROFESSIONAL = "young-professional"
    MID_CAREER = "mid-career"
    LATE_CAREER = "late-career"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]


ROLE_LABELS = {
    Role.HIGH_SCHOOL: "High School Student",
    Role.COLLEGE: "College Student",
    Role.YOUNG_PROFESSIONAL: "Young Professional",
    Role.MID_CAREER: "Mid-Career Professional",
    Role.LATE_CAREER: "Late-Career Professional",
}


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    @property
    def label(self) -> str:
        return GENDER_LABELS[self]


GENDER_LABELS = {
    Gender.MALE: "Male",
    Gender.FEMALE: "Female",
    Gender.OTHER: "Other / Prefer not to say",
}


@dataclass
class Profile:
    """A user's coaching profile, keyed by the auth provider's user id."""

    id: str
    full_name: str
    role: Role
    gender: Gender
    age: int
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "role": self.role.value,
            "gender": self.gender.value,
            "age": self.age,
        }

    @classmethod
    def from_dict(cls, data: dict, created_at: datetime | None = None) -> "Profile":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            full_name=data["full_name"],
            role=Role(data["role"]),
            gender=Gender(data["gender"]),
            age=int(data["age"]),
            created_at=created_at,
        )
