"""Tests for command execution and the in-memory model."""

import pytest

from ordertrack.commands import AddCustomerOrderCommand
from ordertrack.errors import (
    CommandError,
    OrderNotFoundError,
    PersonNotFoundError,
    ProductNotFoundError,
)
from ordertrack.models import CustomerOrder, OrderStatus, Remark, SupplyOrder

from .conftest import ALICE, BREAD, CAKE, FLOUR


class TestAddCustomerOrderCommand:
    def test_adds_pending_order(self, model):
        result = AddCustomerOrderCommand(phone="91234567", product_ids=[2, 1, 2]).execute(model)

        order = result.order
        assert isinstance(order, CustomerOrder)
        assert order.person == ALICE
        assert order.items == [BREAD, CAKE, BREAD]
        assert order.status is OrderStatus.PENDING
        assert order.remark == Remark("")
        assert result.feedback.startswith("New customer order added: Customer Order for Alice Tan")

    def test_customer_orders_stay_before_supply_orders(self, model):
        result = AddCustomerOrderCommand(phone="91234567", product_ids=[1]).execute(model)

        assert result.index == 2
        assert model.get_order(2) is result.order
        assert isinstance(model.get_order(3), SupplyOrder)

    def test_unknown_phone(self, model):
        with pytest.raises(PersonNotFoundError) as exc_info:
            AddCustomerOrderCommand(phone="00000", product_ids=[1]).execute(model)
        assert "00000" in str(exc_info.value)
        assert len(model.orders) == 2

    def test_unknown_product(self, model):
        with pytest.raises(ProductNotFoundError) as exc_info:
            AddCustomerOrderCommand(phone="91234567", product_ids=[1, 99]).execute(model)
        assert exc_info.value.product_id == 99
        assert len(model.orders) == 2

    def test_no_products(self, model):
        with pytest.raises(CommandError):
            AddCustomerOrderCommand(phone="91234567", product_ids=[]).execute(model)


class TestModel:
    def test_get_order_is_one_based(self, model, customer_order):
        assert model.get_order(1) is customer_order

    @pytest.mark.parametrize("index", [0, 3, -1])
    def test_get_order_out_of_range(self, model, index):
        with pytest.raises(OrderNotFoundError):
            model.get_order(index)

    def test_remove_order(self, model, supply_order):
        removed = model.remove_order(2)
        assert removed is supply_order
        assert len(model.orders) == 1

    def test_set_status(self, model):
        order = model.set_order_status(2, OrderStatus.CANCELLED)
        assert order.status is OrderStatus.CANCELLED

    def test_variant_views(self, model, customer_order, supply_order):
        assert model.customer_orders == [customer_order]
        assert model.supply_orders == [supply_order]

    def test_supply_order_appended_last(self, model):
        order = SupplyOrder(person=ALICE, items=[FLOUR])
        assert model.add_order(order) == 3

    def test_add_non_order(self, model):
        with pytest.raises(TypeError):
            model.add_order(CAKE)
