"""
app/mappers/entity_field_mappings.py

Static per-entity field mapping tables for record imports.

Aliases are listed in lookup order after the canonical key itself. Header
comparison is normalization-insensitive (see ``normalize_header``), so one
alias such as ``order_number`` also matches ``orderNumber`` and
``Order Number``. Product-specific labels from Bake Diary exports are listed
even where they normalize to an alias already present.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Mapping

from app.domain.record_import import EntityFieldMapping, FieldKind, FieldSpec, RawValue

BOUNDED_SMALL_INT = {"minimum": 0, "maximum": 99}


def _days_from_today(days: int):
    def factory() -> date:
        return date.today() + timedelta(days=days)

    return factory


def _split_contact_name(values: dict[str, RawValue]) -> dict[str, RawValue]:
    """
    Fill first/last name from a single full-name column when they are not mapped.
    """

    full_name = values.get("full_name")
    if "first_name" in values or full_name is None:
        return values

    parts = str(full_name).split()
    if not parts:
        return values
    derived = dict(values)
    derived["first_name"] = parts[0]
    if "last_name" not in derived and len(parts) > 1:
        derived["last_name"] = " ".join(parts[1:])
    return derived


ORDERS = EntityFieldMapping(
    entity_type="orders",
    table_name="orders",
    fields=(
        FieldSpec("order_number", FieldKind.STRING, ("Order Number", "order_no", "number"), required=True),
        FieldSpec("contact_id", FieldKind.REFERENCE, ("contact",)),
        FieldSpec("event_type", FieldKind.STRING, ("Event Type", "type"), default="Other"),
        FieldSpec("event_date", FieldKind.DATE, ("Event Date", "date", "order_date"), default=_days_from_today(7)),
        FieldSpec("status", FieldKind.STRING, ("Status",), default="Quote"),
        FieldSpec("theme", FieldKind.STRING, ("Theme", "title")),
        FieldSpec("delivery_type", FieldKind.STRING, ("delivery_option",), default="Pickup"),
        FieldSpec("delivery_time", FieldKind.STRING),
        FieldSpec("delivery_address", FieldKind.STRING, ("delivery_details",)),
        FieldSpec("delivery_fee", FieldKind.MONEY, ("delivery_cost",)),
        FieldSpec("total_amount", FieldKind.MONEY, ("Order Total", "total")),
        FieldSpec("amount_outstanding", FieldKind.MONEY, ("Amount Outstanding", "balance_due")),
        FieldSpec("tax_rate", FieldKind.MONEY),
        FieldSpec("profit", FieldKind.INTEGER, **BOUNDED_SMALL_INT),
        FieldSpec("sub_total_amount", FieldKind.INTEGER, **BOUNDED_SMALL_INT),
        FieldSpec("discount_amount", FieldKind.INTEGER, ("discount",), **BOUNDED_SMALL_INT),
        FieldSpec("delivery_amount", FieldKind.INTEGER, ("Delivery Amount",), **BOUNDED_SMALL_INT),
        FieldSpec("deposit_paid", FieldKind.BOOLEAN),
        FieldSpec("balance_paid", FieldKind.BOOLEAN),
        FieldSpec("notes", FieldKind.STRING, ("Notes", "special_instructions")),
    ),
)

ORDER_ITEMS = EntityFieldMapping(
    entity_type="order_items",
    table_name="order_items",
    fields=(
        FieldSpec("order_number", FieldKind.STRING, ("order_id", "Order Number", "number"), required=True),
        FieldSpec("name", FieldKind.STRING, ("Item", "product_name")),
        FieldSpec("description", FieldKind.STRING, ("Details",)),
        FieldSpec("quantity", FieldKind.INTEGER, default=1, minimum=0),
        FieldSpec("serving", FieldKind.INTEGER, ("Servings",), **BOUNDED_SMALL_INT),
        FieldSpec("labour", FieldKind.INTEGER, **BOUNDED_SMALL_INT),
        FieldSpec("hours", FieldKind.INTEGER, **BOUNDED_SMALL_INT),
        FieldSpec("overhead", FieldKind.INTEGER, **BOUNDED_SMALL_INT),
        FieldSpec("cost_price", FieldKind.MONEY, ("Cost Price",)),
        FieldSpec(
            "sell_price",
            FieldKind.MONEY,
            ("Sell Price (excl VAT)", "Sell Price", "unit_price", "price"),
        ),
        FieldSpec("contact_item", FieldKind.STRING, ("Contact Item",)),
        FieldSpec("recipes", FieldKind.STRING),
        FieldSpec("created_at", FieldKind.DATETIME, ("Date Created", "Date"), default=datetime.now),
    ),
)

EXPENSES = EntityFieldMapping(
    entity_type="expenses",
    table_name="expenses",
    fields=(
        FieldSpec("date", FieldKind.DATE, ("Date", "expense_date"), required=True),
        FieldSpec("category", FieldKind.STRING, ("Category",), required=True),
        FieldSpec("amount", FieldKind.MONEY, ("Amount (Incl VAT)", "Amount"), required=True),
        FieldSpec("description", FieldKind.STRING, ("Description",)),
        FieldSpec("supplier", FieldKind.STRING, ("Vendor", "Supplier")),
        FieldSpec("payment_source", FieldKind.STRING, ("Payment Source", "Payment")),
        FieldSpec("vat", FieldKind.MONEY, ("VAT",)),
        FieldSpec("total_inc_tax", FieldKind.MONEY, ("Total Inc Tax",)),
        FieldSpec("tax_deductible", FieldKind.BOOLEAN, ("Tax Deductible",)),
        FieldSpec("is_recurring", FieldKind.BOOLEAN, ("Is Recurring",)),
        FieldSpec("receipt_url", FieldKind.STRING),
    ),
)

SUPPLIES = EntityFieldMapping(
    entity_type="supplies",
    table_name="supplies",
    fields=(
        FieldSpec("name", FieldKind.STRING, ("Name", "supply", "item"), required=True),
        FieldSpec("category", FieldKind.STRING, ("Category",)),
        FieldSpec("unit", FieldKind.STRING, ("Unit",)),
        FieldSpec("cost_per_unit", FieldKind.MONEY, ("unit_cost", "cost", "price")),
        FieldSpec("stock_level", FieldKind.INTEGER, ("quantity", "stock"), minimum=0),
        FieldSpec("reorder_point", FieldKind.INTEGER, ("reorder_level",), minimum=0),
        FieldSpec("supplier", FieldKind.STRING, ("Vendor", "Supplier")),
        FieldSpec("notes", FieldKind.STRING, ("Notes",)),
    ),
)

CONTACTS = EntityFieldMapping(
    entity_type="contacts",
    table_name="contacts",
    fields=(
        FieldSpec("first_name", FieldKind.STRING, ("First Name", "firstname"), required=True),
        FieldSpec("last_name", FieldKind.STRING, ("Last Name", "surname", "lastname"), default=""),
        FieldSpec(
            "full_name",
            FieldKind.STRING,
            ("name", "Contact", "contact_name", "customer_name"),
            stored=False,
        ),
        FieldSpec("email", FieldKind.STRING, ("Contact Email", "email_address")),
        FieldSpec("phone", FieldKind.STRING, ("Phone", "telephone", "mobile")),
        FieldSpec("company", FieldKind.STRING, ("business_name", "Company")),
        FieldSpec("type", FieldKind.STRING, ("contact_type",), default="customer"),
        FieldSpec("address", FieldKind.STRING, ("Address",)),
        FieldSpec("city", FieldKind.STRING),
        FieldSpec("state", FieldKind.STRING, ("county",)),
        FieldSpec("zip", FieldKind.STRING, ("postal_code", "postcode")),
        FieldSpec("country", FieldKind.STRING),
        FieldSpec("notes", FieldKind.STRING, ("Notes",)),
    ),
    derive=_split_contact_name,
)

RECIPES = EntityFieldMapping(
    entity_type="recipes",
    table_name="recipes",
    fields=(
        FieldSpec("name", FieldKind.STRING, ("Recipe", "recipe_name", "title"), required=True),
        FieldSpec("category", FieldKind.STRING, ("Category",)),
        FieldSpec("description", FieldKind.STRING, ("Description",)),
        FieldSpec("servings", FieldKind.INTEGER, ("serving_size", "Servings"), default=1, minimum=0),
        FieldSpec("prep_time", FieldKind.INTEGER, ("Prep Time",), minimum=0),
        FieldSpec("cook_time", FieldKind.INTEGER, ("Cook Time",), minimum=0),
        FieldSpec("instructions", FieldKind.STRING, ("method", "notes")),
        FieldSpec("total_cost", FieldKind.MONEY, ("cost", "Total Cost")),
    ),
)

QUOTES = EntityFieldMapping(
    entity_type="quotes",
    table_name="quotes",
    fields=(
        FieldSpec("quote_number", FieldKind.STRING, ("quote_id", "Quote Number", "Order Number"), required=True),
        FieldSpec("contact_id", FieldKind.REFERENCE, ("contact",)),
        FieldSpec("event_type", FieldKind.STRING, ("Event Type",), default="Other"),
        FieldSpec("event_date", FieldKind.DATE, ("Event Date",), default=date.today),
        FieldSpec("status", FieldKind.STRING, ("Status",), default="Draft"),
        FieldSpec("theme", FieldKind.STRING, ("Theme",)),
        FieldSpec("delivery_type", FieldKind.STRING, default="Pickup"),
        FieldSpec("discount", FieldKind.MONEY),
        FieldSpec("setup_fee", FieldKind.MONEY),
        FieldSpec("tax_rate", FieldKind.MONEY),
        FieldSpec("total", FieldKind.MONEY, ("Order Total", "total_amount", "price")),
        FieldSpec("notes", FieldKind.STRING, ("Notes", "description")),
        FieldSpec("expiry_date", FieldKind.DATE, ("Expiry Date",), default=_days_from_today(30)),
    ),
)

ENTITY_FIELD_MAPPINGS: Mapping[str, EntityFieldMapping] = MappingProxyType(
    {
        mapping.entity_type: mapping
        for mapping in (ORDERS, ORDER_ITEMS, EXPENSES, SUPPLIES, CONTACTS, RECIPES, QUOTES)
    }
)
