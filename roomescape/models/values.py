"""
Validated value objects for members and reservation dates
"""

from dataclasses import dataclass
from datetime import date
import re

from pydantic import EmailStr, TypeAdapter, ValidationError

from roomescape.core.security import security_manager

_email_adapter = TypeAdapter(EmailStr)

MAX_NAME_LENGTH = 50
MAX_EMAIL_LENGTH = 255


def _require_text(value, label: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(f"{label} must not be blank")
    return value


@dataclass(frozen=True)
class MemberName:
    value: str

    def __post_init__(self):
        _require_text(self.value, "Member name")
        if len(self.value) > MAX_NAME_LENGTH:
            raise ValueError(f"Member name must be at most {MAX_NAME_LENGTH} characters")


@dataclass(frozen=True)
class MemberEmail:
    value: str

    def __post_init__(self):
        _require_text(self.value, "Member email")
        if len(self.value) > MAX_EMAIL_LENGTH:
            raise ValueError(f"Member email must be at most {MAX_EMAIL_LENGTH} characters")
        try:
            _email_adapter.validate_python(self.value)
        except ValidationError:
            raise ValueError(f"Invalid member email: {self.value}")


@dataclass(frozen=True)
class MemberPassword:
    """Encoded credential. Build from a raw password with `encode`."""
    value: str

    def __post_init__(self):
        _require_text(self.value, "Member password")

    def __repr__(self):
        return "MemberPassword(****)"

    @classmethod
    def encode(cls, raw_password: str) -> "MemberPassword":
        _require_text(raw_password, "Member password")
        return cls(security_manager.hash_password(raw_password))

    def matches(self, raw_password: str) -> bool:
        return security_manager.verify_password(raw_password, self.value)


@dataclass(frozen=True)
class ReservationDate:
    value: date

    def __post_init__(self):
        if not isinstance(self.value, date):
            raise ValueError("Reservation date is required")

    @classmethod
    def parse(cls, text: str) -> "ReservationDate":
        """Parse an ISO calendar date (YYYY-MM-DD)."""
        if text is None or not re.fullmatch(r"\d{4}-\d{2}-\d{2}", text.strip()):
            raise ValueError(f"Invalid reservation date: {text}")
        try:
            return cls(date.fromisoformat(text.strip()))
        except ValueError:
            raise ValueError(f"Invalid reservation date: {text}")

    def is_before(self, today: date) -> bool:
        return self.value < today

    def is_today(self, today: date) -> bool:
        return self.value == today

    def isoformat(self) -> str:
        return self.value.isoformat()
