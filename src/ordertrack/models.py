"""Data models for ordertrack."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, Union


def _now() -> datetime:
    """Return the current local time truncated to the minute."""
    return datetime.now().replace(second=0, microsecond=0)


class OrderStatus(str, Enum):
    """Lifecycle status of an order."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @classmethod
    def names(cls) -> list[str]:
        return [member.name for member in cls]

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Remark:
    """Free-text annotation attached to an order. Empty text is allowed."""

    MAX_LENGTH: ClassVar[int] = 500

    value: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise ValueError(f"remark must be text, got {type(self.value).__name__}")
        if len(self.value) > self.MAX_LENGTH:
            raise ValueError(
                f"remark must be at most {self.MAX_LENGTH} characters long "
                f"(got {len(self.value)})"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Person:
    """A customer or supplier an order is placed with."""

    name: str
    phone: str
    email: str | None = None
    address: str | None = None


@dataclass(frozen=True)
class Product:
    """A catalogue item that can appear on a customer order."""

    product_id: int
    name: str


@dataclass(frozen=True)
class Ingredient(Product):
    """A product bought from suppliers, measured in a unit (e.g. "kg")."""

    unit: str = "unit"


@dataclass
class CustomerOrder:
    """An order where a customer receives products."""

    order_type: ClassVar[str] = "Customer Order"

    person: Person
    items: list[Product]
    status: OrderStatus = OrderStatus.PENDING
    remark: Remark = field(default_factory=Remark)
    order_date: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        self.items = list(self.items)


@dataclass
class SupplyOrder:
    """An order where a supplier provides ingredients."""

    order_type: ClassVar[str] = "Supply Order"

    person: Person
    items: list[Product]  # Ingredient instances; checked by the codec
    status: OrderStatus = OrderStatus.PENDING
    remark: Remark = field(default_factory=Remark)
    order_date: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        self.items = list(self.items)


Order = Union[CustomerOrder, SupplyOrder]


@dataclass
class CommandResult:
    """Outcome of executing a command, shown to the user."""

    feedback: str
    order: Order | None = None
    index: int | None = None  # 1-based position of the order in the model
