"""Tests for orders, receipts and receipt numbering."""

from datetime import datetime
from decimal import Decimal

import pytest

from james_cafe import (
    PLAIN,
    Console,
    DineOption,
    Menu,
    Order,
    OrderLine,
    ReceiptNumberer,
    SEED_STOCK,
)

STAMP = datetime(2026, 10, 18, 9, 30, 5)
LATTE = 1


def make_order(menu: Menu | None = None, **kwargs) -> Order:
    defaults = dict(
        customer_name="Ana",
        dine_option=DineOption.EAT_IN,
        receipt_number=1234,
        timestamp=STAMP,
    )
    defaults.update(kwargs)
    return Order(menu or Menu.from_seed(), **defaults)


class TestOrderTotals:
    def test_latte_times_three(self):
        """Three lattes at 150.00 come to 450.00."""
        order = make_order()
        line = order.add_line(LATTE, 3)
        assert line == OrderLine(LATTE, 3)
        assert line.subtotal(order.menu) == Decimal("450.00")
        assert order.total() == Decimal("450.00")
        assert "₱ 450.00" in order.render_receipt()

    def test_total_is_exact_sum(self):
        order = make_order()
        order.add_line(0, 2)
        order.add_line(4, 1)
        order.add_line(12, 3)
        assert order.total() == Decimal("140.00") * 2 + Decimal("75.00") + Decimal("270.00") * 3

    def test_total_is_stable(self):
        order = make_order()
        order.add_line(2, 4)
        assert order.total() == order.total() == Decimal("480.00")

    def test_empty_order_total(self):
        assert make_order().total() == Decimal("0")

    def test_add_line_commits_stock(self):
        """Adding a line updates stock and sold before returning."""
        order = make_order()
        order.add_line(LATTE, 5)
        assert order.menu[LATTE].stock == SEED_STOCK - 5
        assert order.menu[LATTE].sold == 5

    def test_add_line_beyond_stock_leaves_order_unchanged(self):
        order = make_order()
        with pytest.raises(ValueError):
            order.add_line(LATTE, SEED_STOCK + 1)
        assert order.lines == []
        assert order.menu[LATTE].stock == SEED_STOCK


class TestRenderReceipt:
    def test_layout(self):
        order = make_order(dine_option=DineOption.TAKE_OUT)
        order.add_line(LATTE, 3)
        lines = order.render_receipt().splitlines()
        assert "=== James' Café Receipt ===" in lines
        assert "Receipt# 1234     2026-10-18 09:30:05" in lines
        assert "Customer: Ana     (Take-Out)" in lines
        assert f"{'Item':<30}{'Qty':<6}{'Subtotal':<12}" in lines
        assert f"{'Latte':<30}{3:<6}₱ 450.00" in lines
        assert "TOTAL: ₱ 450.00" in lines
        assert lines.count("-" * 47) == 2

    def test_rendering_has_no_side_effects(self):
        order = make_order()
        order.add_line(0, 2)
        before = (list(order.lines), order.menu[0].stock, order.menu[0].sold)
        first = order.render_receipt()
        assert order.render_receipt() == first
        assert (list(order.lines), order.menu[0].stock, order.menu[0].sold) == before

    def test_plain_console_has_no_escape_codes(self):
        order = make_order()
        order.add_line(0, 1)
        assert "\x1b[" not in order.render_receipt(PLAIN)

    def test_forced_colour_adds_escape_codes(self):
        order = make_order()
        order.add_line(0, 1)
        assert "\x1b[" in order.render_receipt(Console(color=True))


class TestReceiptNumberer:
    def test_same_millisecond_gives_distinct_numbers(self):
        """A frozen clock still produces distinct, increasing numbers."""
        numberer = ReceiptNumberer(clock=lambda: 1_760_000_000.123)
        numbers = [numberer.next_number() for _ in range(50)]
        assert len(set(numbers)) == 50
        assert numbers == sorted(numbers)

    def test_reference_policy(self):
        numberer = ReceiptNumberer(clock=lambda: 12.5)
        assert numberer.next_number() == 12_500 + 1
        assert numberer.next_number() == 12_500 + 2

    def test_clock_going_backwards(self):
        ticks = iter([100.0, 50.0, 10.0])
        numberer = ReceiptNumberer(clock=lambda: next(ticks))
        numbers = [numberer.next_number() for _ in range(3)]
        assert len(set(numbers)) == 3

    def test_modulus_wrap(self):
        ticks = iter([0.75, 1.0])
        numberer = ReceiptNumberer(clock=lambda: next(ticks), modulus=1000)
        first, second = numberer.next_number(), numberer.next_number()
        assert first == 750 + 1
        assert second == first + 1

    def test_counters_are_per_numberer(self):
        """No hidden process-wide state between numberers."""
        a = ReceiptNumberer(clock=lambda: 0.0)
        b = ReceiptNumberer(clock=lambda: 0.0)
        assert a.next_number() == b.next_number() == 1
