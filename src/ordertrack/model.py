"""In-memory order book that commands operate on."""

from dataclasses import dataclass, field

from .errors import OrderNotFoundError, PersonNotFoundError, ProductNotFoundError
from .models import CustomerOrder, Order, OrderStatus, Person, Product, Remark, SupplyOrder


@dataclass
class Model:
    """
    Persons, products and orders.

    Orders are kept with all customer orders before all supply orders, each
    group in insertion order. This matches the layout of the order book file,
    so an order's 1-based index is the same before and after a save/load.
    """

    persons: list[Person] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    orders: list[Order] = field(default_factory=list)

    def add_person(self, person: Person) -> None:
        self.persons.append(person)

    def add_product(self, product: Product) -> None:
        self.products.append(product)

    def add_order(self, order: Order) -> int:
        """Add an order and return its 1-based index."""
        if isinstance(order, CustomerOrder):
            position = len(self.customer_orders)
        elif isinstance(order, SupplyOrder):
            position = len(self.orders)
        else:
            raise TypeError(f"Not an order: {type(order).__name__}")
        self.orders.insert(position, order)
        return position + 1

    def find_person_by_phone(self, phone: str) -> Person:
        """
        Get the person with the given phone number.

        Raises:
            PersonNotFoundError: If nobody has that number.
        """
        for person in self.persons:
            if person.phone == phone:
                return person
        raise PersonNotFoundError(phone)

    def find_product(self, product_id: int) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If no product has that ID.
        """
        for product in self.products:
            if product.product_id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    def _order_position(self, index: int) -> int:
        if index < 1 or index > len(self.orders):
            raise OrderNotFoundError(index, len(self.orders))
        return index - 1

    def get_order(self, index: int) -> Order:
        """Get an order by its 1-based position."""
        return self.orders[self._order_position(index)]

    def remove_order(self, index: int) -> Order:
        """Remove and return the order at a 1-based position."""
        return self.orders.pop(self._order_position(index))

    def set_order_status(self, index: int, status: OrderStatus) -> Order:
        order = self.get_order(index)
        order.status = status
        return order

    def set_order_remark(self, index: int, remark: Remark) -> Order:
        order = self.get_order(index)
        order.remark = remark
        return order

    @property
    def customer_orders(self) -> list[CustomerOrder]:
        return [o for o in self.orders if isinstance(o, CustomerOrder)]

    @property
    def supply_orders(self) -> list[SupplyOrder]:
        return [o for o in self.orders if isinstance(o, SupplyOrder)]
