"""Unit tests for the Sale aggregate."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from ims.domain.exceptions import ValidationError
from ims.domain.model.sale import MAX_LINES, WALK_IN_CUSTOMER, PaymentMethod, Sale, SaleLine
from ims.domain.model.value_objects import Money, Quantity

NOW = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


def _line(product_id="p1", qty=1, price="3.00"):
    return SaleLine(product_id, f"Product {product_id}", Quantity(qty), Money.of(price))


def _sale(lines, discount="0", customer=None):
    return Sale.create("s1", lines, Decimal(discount), PaymentMethod.CASH, customer, NOW)


class TestSale:

    def test_total_applies_discount(self):
        sale = _sale([_line("a", 2, "3.00"), _line("b", 1, "5.00")], discount="10")
        assert sale.subtotal.amount == Decimal("11.00")
        assert sale.total.amount == Decimal("9.90")
        assert sale.item_count == 3

    def test_line_subtotal(self):
        assert _line(qty=3, price="1.25").subtotal.amount == Decimal("3.75")

    def test_blank_customer_is_walk_in(self):
        assert _sale([_line()], customer="  ").customer_label == WALK_IN_CUSTOMER

    def test_customer_label_trimmed(self):
        assert _sale([_line()], customer=" Ada ").customer_label == "Ada"

    def test_no_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _sale([])

    def test_too_many_lines_rejected(self):
        with pytest.raises(ValidationError, match="Maximum"):
            _sale([_line(str(i)) for i in range(MAX_LINES + 1)])

    def test_discount_out_of_range_rejected(self):
        with pytest.raises(ValidationError, match="Discount"):
            _sale([_line()], discount="101")


class TestPaymentMethod:

    def test_default_is_cash(self):
        assert PaymentMethod.parse(None) is PaymentMethod.CASH

    def test_case_insensitive(self):
        assert PaymentMethod.parse("Mobile") is PaymentMethod.MOBILE

    def test_unknown_rejected(self):
        with pytest.raises(ValidationError, match="Invalid payment method"):
            PaymentMethod.parse("cheque")
