"""
db/models/recipe.py

Recipes created by record imports.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class Recipe(Base, TimestampMixin):
    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str | None] = mapped_column(String(120), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    servings: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    prep_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0, comment="Minutes")
    cook_time: Mapped[int] = mapped_column(Integer, nullable=False, default=0, comment="Minutes")
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    total_cost: Mapped[Decimal] = mapped_column(nullable=False, default=0)

    __table_args__ = (Index("ix_recipes_user_id", "user_id"),)
