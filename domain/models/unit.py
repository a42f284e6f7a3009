"""
Unit model - measurement units (cup, gram, pinch...).
"""

from sqlalchemy import Column, Integer, Text, UniqueConstraint

from domain.models.database import Base


class Unit(Base):
    """Measurement unit referenced by recipe ingredient lines."""

    __tablename__ = "unit"

    unit_id = Column(Integer, primary_key=True, autoincrement=True)
    singular_name = Column(Text, nullable=False)
    plural_name = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("singular_name", "plural_name", name="uq_unit_singular_plural"),
    )

    @property
    def id(self):
        return self.unit_id

    def __repr__(self):
        return f"<Unit(id={self.unit_id}, name='{self.singular_name}')>"
