"""
db/models/order.py

Orders and order line items created by record imports.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class Order(Base, TimestampMixin):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    order_number: Mapped[str] = mapped_column(String(64), nullable=False)
    contact_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Contact id, or the unassigned sentinel for imported rows",
    )
    event_type: Mapped[str] = mapped_column(String(120), nullable=False)
    event_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="Quote")
    theme: Mapped[str | None] = mapped_column(String(255), nullable=True)
    delivery_type: Mapped[str] = mapped_column(String(32), nullable=False, default="Pickup")
    delivery_time: Mapped[str | None] = mapped_column(String(64), nullable=True)
    delivery_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivery_fee: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    total_amount: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    amount_outstanding: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    tax_rate: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    profit: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sub_total_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    discount_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    delivery_amount: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    deposit_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    balance_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_orders_user_id", "user_id"),
        Index("ix_orders_user_order_number", "user_id", "order_number"),
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)
    order_number: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Order number as exported; resolved to an order outside the import",
    )
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    serving: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    labour: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    overhead: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cost_price: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    sell_price: Mapped[Decimal] = mapped_column(nullable=False, default=0)
    contact_item: Mapped[str | None] = mapped_column(String(255), nullable=True)
    recipes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_order_items_user_id", "user_id"),
        Index("ix_order_items_order_number", "order_number"),
    )
