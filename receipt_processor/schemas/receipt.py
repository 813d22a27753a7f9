"""
Validated receipt document.

Wire names are camelCase (``purchaseDate``, ``shortDescription``); the
Python attributes are snake_case. Instances are frozen.
"""
from __future__ import annotations

from datetime import date, time
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer

from receipt_processor.validators import (
    format_amount,
    format_date,
    format_time,
    parse_amount,
    parse_description,
    parse_purchase_date,
    parse_purchase_time,
    parse_retailer,
)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

Retailer = Annotated[str, BeforeValidator(parse_retailer)]
Description = Annotated[str, BeforeValidator(parse_description)]
PurchaseDate = Annotated[
    date,
    BeforeValidator(parse_purchase_date),
    PlainSerializer(format_date, return_type=str),
]
PurchaseTime = Annotated[
    time,
    BeforeValidator(parse_purchase_time),
    PlainSerializer(format_time, return_type=str),
]
# Integer cents; rendered back as "12.25"
Amount = Annotated[
    int,
    BeforeValidator(parse_amount),
    PlainSerializer(format_amount, return_type=str),
]


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

class Item(BaseModel):
    """A single purchased line item."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    short_description: Description = Field(
        ..., alias="shortDescription", description="e.g. 'Mountain Dew 12PK'"
    )
    price: Amount = Field(..., description="Price in cents, wire form '6.49'")


class Receipt(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    retailer: Retailer = Field(..., description="e.g. 'M&M Corner Market'")
    purchase_date: PurchaseDate = Field(..., alias="purchaseDate")
    purchase_time: PurchaseTime = Field(..., alias="purchaseTime")
    items: tuple[Item, ...] = Field(..., description="May be empty")
    total: Amount = Field(..., description="Total in cents, wire form '35.35'")
