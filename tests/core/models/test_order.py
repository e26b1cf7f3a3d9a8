"""Tests for order parsing and equality semantics."""

from __future__ import annotations

import math
import sys

import pytest

from nash_stats.core.exceptions import ErrorCode, ParseError
from nash_stats.core.models import Order, OrderType, amounts_equal, parse_amount


class TestParse:
    def test_parse_converts_wire_fields(self, raw_order):
        order = Order.parse(raw_order(type="sell", cryptoAmount="1.25", fiatAmount="50.5", fiatPrice="40.4"))

        assert order.order_type is OrderType.SELL
        assert order.blockchain == "bitcoin"
        assert order.crypto_amount == 1.25
        assert order.crypto_symbol == "BTC"
        assert order.fiat_amount == 50.5
        assert order.fiat_price == 40.4
        assert order.fiat_symbol == "EUR"

    @pytest.mark.parametrize("value", ["NaN", "nan", "inf", "-Infinity", "1e999", "abc", "", " 1.0", "1_000"])
    def test_parse_rejects_non_finite_or_non_decimal_amounts(self, raw_order, value):
        with pytest.raises(ParseError) as exc_info:
            Order.parse(raw_order(cryptoAmount=value))

        assert exc_info.value.error_code is ErrorCode.INVALID_AMOUNT
        assert exc_info.value.field == "cryptoAmount"

    def test_parse_rejects_unknown_order_type(self, raw_order):
        with pytest.raises(ParseError) as exc_info:
            Order.parse(raw_order(type="hold"))

        assert exc_info.value.error_code is ErrorCode.INVALID_ORDER_TYPE
        assert "hold" in exc_info.value.message

    def test_parse_rejects_missing_fields(self, raw_order):
        raw = raw_order()
        del raw["fiatPrice"]

        with pytest.raises(ParseError, match="fiatPrice"):
            Order.parse(raw)

    def test_parse_rejects_non_string_symbol(self, raw_order):
        with pytest.raises(ParseError):
            Order.parse(raw_order(cryptoSymbol=7))

    def test_parse_rejects_non_mapping(self):
        with pytest.raises(ParseError):
            Order.parse(["buy"])


class TestParseAmount:
    def test_accepts_exponent_and_sign(self):
        assert parse_amount("-1.5e2", "fiatAmount") == -150.0
        assert parse_amount(".5", "fiatAmount") == 0.5

    def test_accepts_json_numbers(self):
        assert parse_amount(3, "fiatAmount") == 3.0

    def test_rejects_booleans(self):
        with pytest.raises(ParseError):
            parse_amount(True, "fiatAmount")

    def test_rejects_non_finite_floats(self):
        with pytest.raises(ParseError):
            parse_amount(math.nan, "fiatAmount")

    def test_rejects_integers_beyond_float_range(self):
        with pytest.raises(ParseError) as exc_info:
            parse_amount(int("9" * 400), "cryptoAmount")

        assert exc_info.value.error_code is ErrorCode.INVALID_AMOUNT
        assert exc_info.value.field == "cryptoAmount"


class TestEquality:
    def test_orders_one_ulp_apart_are_equal(self, make_order):
        base = make_order(crypto_amount=1.0)
        nudged = make_order(crypto_amount=math.nextafter(1.0, 2.0))

        assert base == nudged
        assert amounts_equal(0.5, math.nextafter(0.5, 1.0))

    def test_orders_beyond_epsilon_are_not_equal(self, make_order):
        base = make_order(crypto_amount=1.0)

        assert base != make_order(crypto_amount=1.0 + 4 * sys.float_info.epsilon)
        assert base != make_order(crypto_amount=1.0, fiat_price=200.5)
        assert base != make_order(crypto_amount=1.0, fiat_amount=101.0)

    def test_non_amount_fields_compare_exactly(self, make_order):
        base = make_order()

        assert base != make_order(order_type=OrderType.SELL)
        assert base != make_order(blockchain="ethereum")
        assert base != make_order(crypto_symbol="ETH")
        assert base != make_order(fiat_symbol="USD")

    def test_hash_follows_bit_pattern(self, make_order):
        positive = make_order(crypto_amount=0.0)
        negative = make_order(crypto_amount=-0.0)

        assert positive == negative
        assert hash(positive) != hash(negative)
        assert hash(make_order()) == hash(make_order())

    def test_identical_orders_collapse_in_a_set(self, make_order):
        assert len({make_order(), make_order(), make_order(crypto_amount=2.0)}) == 2

    def test_comparison_with_other_types(self, make_order):
        assert make_order() != "buy"


class TestConversions:
    def test_str_reads_as_sentence(self, make_order):
        assert str(make_order()) == "buy 0.5 BTC for 100.0 EUR at 200.0 EUR on bitcoin"

    def test_row_round_trip(self, make_order):
        order = make_order(order_type=OrderType.SELL)

        assert order.to_row() == ("sell", "bitcoin", 0.5, "BTC", 100.0, 200.0, "EUR")
        assert Order.from_row(order.to_row()) == order

    def test_from_row_rejects_unknown_type(self):
        with pytest.raises(ParseError):
            Order.from_row(("swap", "bitcoin", 1.0, "BTC", 1.0, 1.0, "EUR"))
