"""Order model with tolerance-based equality."""

from __future__ import annotations

import math
import re
import struct
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from nash_stats.core.exceptions import ErrorCode, ParseError

AMOUNT_TOLERANCE = sys.float_info.epsilon

# Plain decimal notation only: no "NaN", "inf", underscores or padding.
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class OrderType(str, Enum):
    """Side of a completed order."""

    BUY = "buy"
    SELL = "sell"

    @classmethod
    def parse(cls, token: Any) -> OrderType:
        for member in cls:
            if token == member.value:
                return member
        raise ParseError(
            f"Order type {token} not supported",
            field="type",
            error_code=ErrorCode.INVALID_ORDER_TYPE,
        )

    def __str__(self) -> str:
        return self.value


def parse_amount(value: Any, field: str) -> float:
    """Parse an upstream amount into a finite float.

    Upstream sends amounts as decimal strings; plain JSON numbers are
    accepted too. Anything non-finite is rejected.
    """
    if isinstance(value, bool):
        raise ParseError(f"{field} must be a decimal number", field=field, error_code=ErrorCode.INVALID_AMOUNT)
    if not isinstance(value, (int, float)) and not (isinstance(value, str) and _DECIMAL_PATTERN.fullmatch(value)):
        raise ParseError(
            f"{field} must be a decimal number, got {value!r}",
            field=field,
            error_code=ErrorCode.INVALID_AMOUNT,
        )
    try:
        parsed = float(value)
    except (OverflowError, ValueError) as exc:
        # Integers past the float range raise instead of becoming inf.
        raise ParseError(
            f"{field} is out of range",
            field=field,
            error_code=ErrorCode.INVALID_AMOUNT,
        ) from exc
    if not math.isfinite(parsed):
        raise ParseError(
            f"{field} must be finite, got {value!r}",
            field=field,
            error_code=ErrorCode.INVALID_AMOUNT,
        )
    return parsed


def amounts_equal(left: float, right: float) -> bool:
    """Compare two amounts within machine epsilon."""

    return abs(left - right) <= AMOUNT_TOLERANCE


def _float_bits(value: float) -> int:
    return struct.unpack("<Q", struct.pack("<d", value))[0]


def _text(raw: Mapping[str, Any], field: str) -> str:
    value = raw[field]
    if not isinstance(value, str):
        raise ParseError(f"{field} must be a string", field=field)
    return value


@dataclass(frozen=True, slots=True, eq=False)
class Order:
    """One completed order reported by the upstream endpoint.

    Orders have no key of their own; identity is the full value. The three
    amounts compare within :data:`AMOUNT_TOLERANCE` while the hash is taken
    from their exact bit patterns, so equal orders are not guaranteed to
    share a hash bucket. Use :func:`nash_stats.core.services.detect_new_orders`
    rather than plain set difference when tolerance matters.
    """

    order_type: OrderType
    blockchain: str
    crypto_amount: float
    crypto_symbol: str
    fiat_amount: float
    fiat_price: float
    fiat_symbol: str

    WIRE_FIELDS = (
        "type",
        "blockchain",
        "cryptoAmount",
        "cryptoSymbol",
        "fiatAmount",
        "fiatPrice",
        "fiatSymbol",
    )

    @classmethod
    def parse(cls, raw: Any) -> Order:
        """Build an order from its upstream representation."""

        if not isinstance(raw, Mapping):
            raise ParseError(f"order must be an object, got {type(raw).__name__}")
        missing = [name for name in cls.WIRE_FIELDS if name not in raw]
        if missing:
            raise ParseError(f"order is missing {', '.join(missing)}", field=missing[0])

        return cls(
            order_type=OrderType.parse(raw["type"]),
            blockchain=_text(raw, "blockchain"),
            crypto_amount=parse_amount(raw["cryptoAmount"], "cryptoAmount"),
            crypto_symbol=_text(raw, "cryptoSymbol"),
            fiat_amount=parse_amount(raw["fiatAmount"], "fiatAmount"),
            fiat_price=parse_amount(raw["fiatPrice"], "fiatPrice"),
            fiat_symbol=_text(raw, "fiatSymbol"),
        )

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> Order:
        """Build an order from an ``orders`` table row (without ``created_at``)."""

        order_type, blockchain, crypto_amount, crypto_symbol, fiat_amount, fiat_price, fiat_symbol = row
        return cls(
            order_type=OrderType.parse(order_type),
            blockchain=blockchain,
            crypto_amount=float(crypto_amount),
            crypto_symbol=crypto_symbol,
            fiat_amount=float(fiat_amount),
            fiat_price=float(fiat_price),
            fiat_symbol=fiat_symbol,
        )

    def to_row(self) -> tuple[str, str, float, str, float, float, str]:
        return (
            self.order_type.value,
            self.blockchain,
            self.crypto_amount,
            self.crypto_symbol,
            self.fiat_amount,
            self.fiat_price,
            self.fiat_symbol,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.order_type.value,
            "blockchain": self.blockchain,
            "crypto_amount": self.crypto_amount,
            "crypto_symbol": self.crypto_symbol,
            "fiat_amount": self.fiat_amount,
            "fiat_price": self.fiat_price,
            "fiat_symbol": self.fiat_symbol,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return (
            self.order_type == other.order_type
            and self.blockchain == other.blockchain
            and amounts_equal(self.crypto_amount, other.crypto_amount)
            and self.crypto_symbol == other.crypto_symbol
            and amounts_equal(self.fiat_amount, other.fiat_amount)
            and amounts_equal(self.fiat_price, other.fiat_price)
            and self.fiat_symbol == other.fiat_symbol
        )

    def __hash__(self) -> int:
        return hash(
            (
                self.order_type,
                self.blockchain,
                _float_bits(self.crypto_amount),
                self.crypto_symbol,
                _float_bits(self.fiat_amount),
                _float_bits(self.fiat_price),
                self.fiat_symbol,
            )
        )

    def __str__(self) -> str:
        return (
            f"{self.order_type} {self.crypto_amount} {self.crypto_symbol} "
            f"for {self.fiat_amount} {self.fiat_symbol} "
            f"at {self.fiat_price} {self.fiat_symbol} on {self.blockchain}"
        )
