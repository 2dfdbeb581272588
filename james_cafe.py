#!/usr/bin/env python3

# james' café till ☕
# serves customers one at a time and closes the day with a summary.
# nothing is saved: the menu starts fresh every run.

import logging
import re
import signal
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Callable, Iterator, TextIO

from termcolor import cprint, colored
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

logger = logging.getLogger(__name__)

# constants
CAFE_NAME = "James' Café"
CURRENCY_SYMBOL = "₱"
RECEIPT_MODULUS = 1_000_000_000
RECEIPT_WIDTH = 47
SEED_STOCK = 20

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

class EndOfInput(EOFError):
    """input stream ran dry while a prompt still wanted an answer"""

# presentation
class Console:
    """line-based terminal i/o; colour is cosmetic and can be switched off"""
    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None,
                 color: bool | None = None):
        self._stdin = stdin
        self._stdout = stdout
        # None lets termcolor decide from the tty / NO_COLOR / FORCE_COLOR
        self.color = color

    @property
    def stdin(self) -> TextIO:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    def paint(self, text: str, color: str | None = None, attrs: list[str] | None = None) -> str:
        """wrap text in ansi codes unless colour is off"""
        return colored(text, color, attrs=attrs,
                       no_color=self.color is False, force_color=self.color is True)

    def say(self, text: str = "", color: str | None = None,
            attrs: list[str] | None = None, end: str = "\n"):
        self.stdout.write(self.paint(text, color, attrs) + end)

    def error(self, text: str):
        self.say(text, "red", attrs=["bold"])

    def read_line(self, prompt: str = "") -> str:
        """write prompt, return the raw line; raises EndOfInput on eof"""
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            raise EndOfInput("no more input")
        return line

PLAIN = Console(color=False)

def format_money(amount: Decimal) -> str:
    """two decimals behind the peso sign"""
    return f"{CURRENCY_SYMBOL} {amount:.2f}"

# input parsers
def safe_int(value: str) -> int | None:
    """return int value or none if the text is not a bare integer"""
    value = value.strip()
    if not _INT_PATTERN.fullmatch(value):
        return None
    try:
        return int(value)
    except ValueError:
        # past the interpreter's digit limit
        return None

def parse_boolean_input(value: str) -> bool | None:
    """y/yes -> true, n/no -> false, anything else -> none"""
    p = value.strip().lower()
    if p in ("y", "yes"):
        return True
    if p in ("n", "no"):
        return False
    return None

def read_trimmed_line(console: Console, prompt: str = "") -> str:
    """one line, surrounding whitespace and \\r\\n stripped"""
    return console.read_line(prompt).strip()

def read_int_in_range(console: Console, prompt: str, minimum: int, maximum: int) -> int:
    """keep asking until we get an integer in [minimum, maximum]"""
    while True:
        value = safe_int(read_trimmed_line(console, prompt))
        if value is None:
            console.error("Invalid number. Try again.")
        elif not minimum <= value <= maximum:
            console.error(f"Please enter a number between {minimum} and {maximum}.")
        else:
            return value

def read_yes_no(console: Console, prompt: str) -> bool:
    while True:
        answer = parse_boolean_input(read_trimmed_line(console, prompt))
        if answer is not None:
            return answer
        console.error("Please answer Y or N.")

# menu / inventory
class Category(Enum):
    """the four fixed groupings, in display order"""
    BEVERAGES = "Beverages"
    SNACKS = "Snacks"
    MEALS = "Meals"
    DESSERTS = "Desserts"

@dataclass
class MenuItem:
    name: str
    price: Decimal
    stock: int
    category: Category
    sold: int = 0

SEED_MENU = [
    ("Cappuccino", "140.00", Category.BEVERAGES),
    ("Latte", "150.00", Category.BEVERAGES),
    ("Iced Americano", "120.00", Category.BEVERAGES),
    ("Chocolate Milkshake", "190.00", Category.BEVERAGES),
    ("Blueberry Muffin", "75.00", Category.SNACKS),
    ("Garlic Parmesan Toast", "95.00", Category.SNACKS),
    ("Glazed Donut Holes", "100.00", Category.SNACKS),
    ("Chicken Wrap", "180.00", Category.MEALS),
    ("Garlic Rice + Burger", "220.00", Category.MEALS),
    ("Chicken Alfredo Pasta", "275.00", Category.MEALS),
    ("Chocolate Cake Slice", "130.00", Category.DESSERTS),
    ("Fruit Parfait", "110.00", Category.DESSERTS),
    ("Tiramisu", "270.00", Category.DESSERTS),
]

class Menu:
    """owns every MenuItem; everything else refers to items by index"""
    def __init__(self, items: list[MenuItem]):
        names = [i.name for i in items]
        if len(set(names)) != len(names):
            raise ValueError("menu item names must be unique")
        for item in items:
            if item.price < 0 or item.stock < 0:
                raise ValueError(f"bad seed values for {item.name}")
        self.items = items

    @classmethod
    def from_seed(cls) -> "Menu":
        """fresh copy of the hardcoded catalog"""
        return cls([MenuItem(name, Decimal(price), SEED_STOCK, category)
                    for name, price, category in SEED_MENU])

    def __getitem__(self, index: int) -> MenuItem:
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self.items)

    def in_category(self, category: Category) -> list[tuple[int, MenuItem]]:
        return [(i, item) for i, item in enumerate(self.items) if item.category is category]

    def available_in(self, category: Category) -> list[tuple[int, MenuItem]]:
        """in-stock items of a category, catalog order"""
        return [(i, item) for i, item in self.in_category(category) if item.stock > 0]

    def is_category_sold_out(self, category: Category) -> bool:
        return not self.available_in(category)

    def commit_sale(self, index: int, quantity: int):
        """take quantity off the shelf and onto the sold counter together"""
        item = self.items[index]
        if not 1 <= quantity <= item.stock:
            raise ValueError(f"cannot sell {quantity} x {item.name} ({item.stock} left)")
        item.stock -= quantity
        item.sold += quantity
        logger.debug("sold %d x %s, %d left", quantity, item.name, item.stock)

# browsing
def show_categories(console: Console, menu: Menu):
    """print all four categories, flagging the empty ones"""
    console.say("Menu categories:", "cyan")
    for number, category in enumerate(Category, start=1):
        line = f"{number}) {category.value}"
        if menu.is_category_sold_out(category):
            line += console.paint(" [SOLD OUT]", "red")
        console.say(line)
    console.say("0) Finish order")

def list_available_in_category(console: Console, menu: Menu,
                               category: Category) -> list[tuple[int, MenuItem]]:
    """print a numbered listing of what is left in a category and return it"""
    available = menu.available_in(category)
    if not available:
        console.say(f"(No available items in {category.value})", "light_grey")
        return available
    for number, (_, item) in enumerate(available, start=1):
        console.say(f"{number}) {item.name}  {format_money(item.price)}  ({item.stock} left)")
    console.say("0) Back to categories")
    return available

# orders
class DineOption(Enum):
    EAT_IN = "Eat-In"
    TAKE_OUT = "Take-Out"

@dataclass(frozen=True)
class OrderLine:
    """quantity of one menu item, by index into the menu"""
    item_index: int
    quantity: int

    def subtotal(self, menu: Menu) -> Decimal:
        return menu[self.item_index].price * self.quantity

@dataclass
class Order:
    """one customer's transaction"""
    menu: Menu = field(repr=False)
    customer_name: str
    dine_option: DineOption
    receipt_number: int
    timestamp: datetime = field(default_factory=datetime.now)
    lines: list[OrderLine] = field(default_factory=list)

    def add_line(self, item_index: int, quantity: int) -> OrderLine:
        """commit the sale against the menu and record the line"""
        self.menu.commit_sale(item_index, quantity)
        line = OrderLine(item_index, quantity)
        self.lines.append(line)
        return line

    def total(self) -> Decimal:
        return sum((line.subtotal(self.menu) for line in self.lines), Decimal("0"))

    def render_receipt(self, console: Console = PLAIN) -> str:
        """receipt text; reading the order only"""
        stamp = self.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        rule = "-" * RECEIPT_WIDTH
        out = [
            console.paint(f"\n=== {CAFE_NAME} Receipt ===", "cyan", attrs=["bold"]),
            console.paint(f"Receipt# {self.receipt_number}     {stamp}", "cyan"),
            console.paint(f"Customer: {self.customer_name}     ({self.dine_option.value})",
                          "light_grey"),
            "",
            f"{'Item':<30}{'Qty':<6}{'Subtotal':<12}",
            rule,
        ]
        for line in self.lines:
            name = self.menu[line.item_index].name
            out.append(f"{name:<30}{line.quantity:<6}{format_money(line.subtotal(self.menu))}")
        out += [
            rule,
            console.paint(f"TOTAL: {format_money(self.total())}", "green", attrs=["bold"]),
            console.paint(f"Thank you for choosing {CAFE_NAME} — come back soon! ☕\n",
                          "cyan", attrs=["bold"]),
        ]
        return "\n".join(out)

class ReceiptNumberer:
    """wall-clock millis folded with a per-run counter; never repeats within a run"""
    def __init__(self, clock: Callable[[], float] = time.time, modulus: int = RECEIPT_MODULUS):
        self._clock = clock
        self._modulus = modulus
        self._counter = 0
        self._last: int | None = None

    def next_number(self) -> int:
        self._counter += 1
        millis = int(self._clock() * 1000)
        number = millis % self._modulus + self._counter
        # clock stepping back or the modulus wrapping must not reuse a number
        if self._last is not None and number <= self._last:
            number = self._last + 1
        self._last = number
        return number

# daily summary
@dataclass
class DailySummary:
    customers_served: int
    total_revenue: Decimal
    total_items_sold: int
    best_seller: tuple[str, int] | None
    inventory: list[tuple[str, int]]

    @classmethod
    def compute(cls, orders: list[Order], menu: Menu, customers_served: int) -> "DailySummary":
        best: MenuItem | None = None
        for item in menu:
            # strict > keeps the first item in catalog order on ties
            if best is None or item.sold > best.sold:
                best = item
        return cls(
            customers_served=customers_served,
            total_revenue=sum((o.total() for o in orders), Decimal("0")),
            total_items_sold=sum(item.sold for item in menu),
            best_seller=(best.name, best.sold) if best is not None and best.sold > 0 else None,
            inventory=[(item.name, item.stock) for item in menu],
        )

    @classmethod
    def from_session(cls, session: "CafeSession") -> "DailySummary":
        return cls.compute(session.orders, session.menu, session.customers_served)

    def render(self, console: Console = PLAIN) -> str:
        out = [
            console.paint("\n=== Daily Summary ===", "cyan", attrs=["bold"]),
            f"Customers served: {self.customers_served}",
            f"Total revenue: {format_money(self.total_revenue)}",
            f"Total items sold: {self.total_items_sold}",
        ]
        if self.best_seller:
            name, sold = self.best_seller
            out.append(f"Best seller: {name} ({sold} sold)")
        else:
            out.append("No sales recorded.")
        out.append("\nRemaining inventory:")
        out += [f"- {name} : {stock} left" for name, stock in self.inventory]
        return "\n".join(out)

# session loop
class CafeSession:
    """drives the till: customers one after another, then the daily summary"""
    def __init__(self, console: Console | None = None, menu: Menu | None = None,
                 numberer: ReceiptNumberer | None = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.console = console if console is not None else Console()
        self.menu = menu if menu is not None else Menu.from_seed()
        self.numberer = numberer if numberer is not None else ReceiptNumberer()
        self._now = clock
        self.orders: list[Order] = []
        self.customers_served = 0
        self._current: Order | None = None

    def print_backstory(self):
        self.console.say(f"Welcome to {CAFE_NAME} — A cozy corner for your calm mornings.",
                         "cyan", attrs=["bold"])
        self.console.say("Here we brew slow, chat quietly, and make every cup with care.\n",
                         "light_grey")

    def run(self) -> DailySummary:
        """serve until the operator says no more customers, then print the summary"""
        self.print_backstory()
        try:
            while True:
                self.serve_customer()
                if not read_yes_no(self.console, "Serve next customer? (Y/N): "):
                    break
        except EndOfInput:
            logger.warning("input ended before the day was closed")
            self.console.say()
            if self._current is not None:
                self._finalize(self._current)
        summary = DailySummary.from_session(self)
        self.console.say(summary.render(self.console))
        self.console.say(f"\nThank you for running {CAFE_NAME} today. Good job! ☕",
                         "cyan", attrs=["bold"])
        return summary

    def serve_customer(self) -> Order | None:
        """take one order from name to receipt; returns it if it was kept"""
        self.console.say("---- New Customer ----", "yellow")
        receipt_number = self.numberer.next_number()
        timestamp = self._now()
        name = self._take_name()
        eat_in = read_yes_no(self.console, "Dine option - Eat in? or Take-Out (Y/N): ")
        order = Order(
            self.menu,
            customer_name=name,
            dine_option=DineOption.EAT_IN if eat_in else DineOption.TAKE_OUT,
            receipt_number=receipt_number,
            timestamp=timestamp,
        )
        self._current = order
        self._browse(order)
        return self._finalize(order)

    def _take_name(self) -> str:
        while True:
            name = read_trimmed_line(self.console, "Enter customer name: ")
            if name:
                return name
            self.console.error("Name cannot be empty.")

    def _browse(self, order: Order):
        """category -> item -> quantity until the customer is done"""
        categories = list(Category)
        while True:
            show_categories(self.console, self.menu)
            choice = read_int_in_range(self.console, f"Choose category (0-{len(categories)}): ",
                                       0, len(categories))
            if choice == 0:
                return
            category = categories[choice - 1]
            if self.menu.is_category_sold_out(category):
                self.console.error(f"Sorry, {category.value} is completely sold out for today.")
                continue

            available = list_available_in_category(self.console, self.menu, category)
            if not available:
                continue
            pick = read_int_in_range(self.console, "Select item number (0 to go back): ",
                                     0, len(available))
            if pick == 0:
                continue

            index, item = available[pick - 1]
            quantity = read_int_in_range(self.console, "Enter quantity: ", 1, item.stock)
            order.add_line(index, quantity)
            self.console.say(f"{quantity} x {item.name} added to order.", "green", attrs=["bold"])

            if not read_yes_no(self.console, "Add more items? (Y/N): "):
                if not read_yes_no(self.console, "Continue ordering (another category)? (Y/N): "):
                    return

    def _finalize(self, order: Order) -> Order | None:
        self._current = None
        if not order.lines:
            self.console.say("No items ordered. Cancelling this transaction.", "light_grey")
            logger.debug("discarded empty order for %s", order.customer_name)
            return None
        self.console.say(order.render_receipt(self.console))
        self.orders.append(order)
        self.customers_served += 1
        logger.debug("receipt #%d stored, total %s", order.receipt_number, order.total())
        return order

# signal handler
class SignalHandler:
    """ctrl+c closes the till without a summary"""
    @staticmethod
    def sigint(_, __):
        cprint("\nnext time, close the day with 'Serve next customer? N'!", "yellow")
        sys.exit(0)

# entry point
def main():
    """entrypoint wrapper"""
    # fix windows terminal misinterpreting ansi escape sequences
    enable_windows_ansi_interpretation()
    signal.signal(signal.SIGINT, SignalHandler.sigint)
    CafeSession().run()

if __name__ == "__main__":
    main()
