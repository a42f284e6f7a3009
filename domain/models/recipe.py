"""
Recipe-related models: the recipe row and its two kinds of child rows.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    UniqueConstraint,
)

from domain.models.database import Base


class Recipe(Base):
    """Recipe header row"""

    __tablename__ = "recipe"

    recipe_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")

    @property
    def id(self):
        return self.recipe_id

    def __repr__(self):
        return f"<Recipe(id={self.recipe_id}, name='{self.name}')>"


class RecipeIngredient(Base):
    """
    Glue between a recipe, an ingredient, a unit and a quantity.

    The composite primary key forbids the same ingredient twice in one recipe.
    Deleting the recipe cascades; deleting a referenced unit or ingredient is refused.
    """

    __tablename__ = "recipe_ingredient"

    recipe_id = Column(
        Integer,
        ForeignKey("recipe.recipe_id", ondelete="CASCADE"),
        primary_key=True,
    )
    ingredient_id = Column(
        Integer,
        ForeignKey("ingredient.ingredient_id", ondelete="RESTRICT"),
        primary_key=True,
    )
    unit_id = Column(
        Integer,
        ForeignKey("unit.unit_id", ondelete="RESTRICT"),
        nullable=False,
    )
    quantity = Column(String(50), nullable=False)


class Step(Base):
    """Ordered preparation step of a recipe"""

    __tablename__ = "step"

    step_id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer,
        ForeignKey("recipe.recipe_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    step_number = Column(Integer, nullable=False)
    instruction = Column(Text, nullable=False)

    __table_args__ = (
        UniqueConstraint("recipe_id", "step_number", name="uq_step_recipe_number"),
    )
