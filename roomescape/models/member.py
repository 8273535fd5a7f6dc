"""
Member model
"""

from typing import Optional

from sqlalchemy import Column, String, Enum
import enum

from roomescape.models.base import BaseModel
from roomescape.models.values import MemberName, MemberEmail, MemberPassword


class MemberRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class Member(BaseModel):
    """
    Member identity. Name, email, password and role are required.
    """
    __tablename__ = "members"

    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    role = Column(
        Enum(MemberRole),
        default=MemberRole.USER,
        nullable=False
    )

    def __init__(
        self,
        name: MemberName,
        email: MemberEmail,
        password: MemberPassword,
        role: MemberRole,
        id: Optional[int] = None
    ):
        if name is None:
            raise ValueError("Member name is required")
        if email is None:
            raise ValueError("Member email is required")
        if password is None:
            raise ValueError("Member password is required")
        if role is None:
            raise ValueError("Member role is required")
        self.id = id
        self.name = name.value
        self.email = email.value
        self.password = password.value
        self.role = role

    @classmethod
    def create_user(cls, name: MemberName, email: MemberEmail, password: MemberPassword) -> "Member":
        return cls(name, email, password, MemberRole.USER)

    @property
    def member_name(self) -> MemberName:
        return MemberName(self.name)

    @property
    def member_email(self) -> MemberEmail:
        return MemberEmail(self.email)

    @property
    def member_password(self) -> MemberPassword:
        return MemberPassword(self.password)

    def is_admin(self) -> bool:
        return self.role == MemberRole.ADMIN

    def __repr__(self):
        return f"<Member(id={self.id}, email={self.email}, role={self.role})>"
