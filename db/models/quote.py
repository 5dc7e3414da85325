"""
db/models/quote.py

Customer quotes created by record imports.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class Quote(Base, TimestampMixin):
    __tablename__ = "quotes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    quote_number: Mapped[str] = mapped_column(String(64), nullable=False)
    contact_id: Mapped[int] = mapped_column(Integer, nullable=False)
    event_type: Mapped[str] = mapped_column(String(120), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="Draft")
    theme: Mapped[str | None] = mapped_column(String(255), nullable=True)
    delivery_type: Mapped[str] = mapped_column(String(32), nullable=False, default="Pickup")
    discount: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    setup_fee: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    tax_rate: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    total: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        Index("ix_quotes_user_id", "user_id"),
        Index("ix_quotes_user_quote_number", "user_id", "quote_number"),
    )
