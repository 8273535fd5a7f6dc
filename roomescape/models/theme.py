"""
Theme model
"""

from sqlalchemy import Column, String, Text

from roomescape.models.base import BaseModel


class Theme(BaseModel):
    """
    Escape-room theme
    """
    __tablename__ = "themes"

    name = Column(String(255), unique=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    thumbnail = Column(String(500), nullable=False, default="")

    def __repr__(self):
        return f"<Theme(id={self.id}, name={self.name})>"
