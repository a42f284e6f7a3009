"""
Ingredient model - Master ingredient table.
Recipes reference ingredients by ingredient_id.
"""

from sqlalchemy import Column, Integer, Text, UniqueConstraint

from domain.models.database import Base


class Ingredient(Base):
    """
    Master ingredient table.

    Ingredient ids form their own identifier space, independent of units.
    A (singular_name, plural_name) pair may only exist once.
    """

    __tablename__ = "ingredient"

    ingredient_id = Column(Integer, primary_key=True, autoincrement=True)
    singular_name = Column(Text, nullable=False)
    plural_name = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "singular_name", "plural_name", name="uq_ingredient_singular_plural"
        ),
    )

    @property
    def id(self):
        return self.ingredient_id

    def __repr__(self):
        return f"<Ingredient(id={self.ingredient_id}, name='{self.singular_name}')>"
