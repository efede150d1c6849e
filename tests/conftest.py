"""Pytest fixtures for ordertrack tests."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from ordertrack.model import Model
from ordertrack.models import (
    CustomerOrder,
    Ingredient,
    OrderStatus,
    Person,
    Product,
    Remark,
    SupplyOrder,
)
from ordertrack.storage import OrderBookStore

ALICE = Person(name="Alice Tan", phone="91234567", email="alice@example.com", address="1 Main St")
BOB_SUPPLIES = Person(name="Bob Supplies", phone="87654321")

CAKE = Product(product_id=1, name="Chocolate Cake")
BREAD = Product(product_id=2, name="Sourdough")
FLOUR = Ingredient(product_id=10, name="Flour", unit="kg")
SUGAR = Ingredient(product_id=11, name="Sugar", unit="kg")

ORDER_DATE = datetime(2024, 1, 1, 10, 0)


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def customer_order():
    return CustomerOrder(
        person=ALICE,
        items=[CAKE, BREAD],
        status=OrderStatus.IN_PROGRESS,
        remark=Remark("Deliver before noon"),
        order_date=ORDER_DATE,
    )


@pytest.fixture
def supply_order():
    return SupplyOrder(
        person=BOB_SUPPLIES,
        items=[FLOUR, SUGAR],
        status=OrderStatus.PENDING,
        remark=Remark(""),
        order_date=ORDER_DATE,
    )


@pytest.fixture
def customer_order_record():
    """A valid persisted customer order record."""
    return {
        "person": {"name": "Alice Tan", "phone": "91234567"},
        "items": [{"id": 1, "name": "Chocolate Cake"}],
        "status": "PENDING",
        "remark": "",
        "orderDate": "01-01-2024 10:00",
    }


@pytest.fixture
def supply_order_record():
    """A valid persisted supply order record."""
    return {
        "person": {"name": "Bob Supplies", "phone": "87654321"},
        "ingredients": [
            {"id": 10, "name": "Flour", "unit": "kg"},
            {"id": 11, "name": "Sugar", "unit": "kg"},
        ],
        "status": "COMPLETED",
        "remark": "Paid in cash",
        "orderDate": "15-03-2024 08:30",
    }


@pytest.fixture
def model(customer_order, supply_order):
    """A model with two persons, a catalogue and one order of each type."""
    m = Model()
    m.add_person(ALICE)
    m.add_person(BOB_SUPPLIES)
    for product in (CAKE, BREAD, FLOUR, SUGAR):
        m.add_product(product)
    m.add_order(customer_order)
    m.add_order(supply_order)
    return m


@pytest.fixture
def order_book(temp_dir, model):
    """An order book file seeded with ``model``."""
    store = OrderBookStore(temp_dir / "orderbook.json")
    store.save(model)
    return store
