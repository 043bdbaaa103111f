"""Custom Pydantic types for catalogkit."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

DecimalNumber = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]
"""Decimal that stays exact in Python but serializes as a JSON number.

Pydantic renders Decimal as a string in JSON mode by default; clients of the
catalog expect ``"price": 1200.0`` rather than ``"price": "1200.00"``.
"""
