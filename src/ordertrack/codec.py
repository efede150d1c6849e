"""
Conversion between orders and their persisted JSON records.

Encoding assumes a valid in-memory order. Decoding validates every field of
a record and raises the first problem it finds as an IllegalValueError
subclass; no partially built order is ever returned.

Record layout:

    {
      "person": {"name": ..., "phone": ..., "email": ..., "address": ...},
      "items": [...]            # "ingredients" for supply orders
      "status": "PENDING",
      "remark": "",
      "orderDate": "01-01-2024 10:00"
    }
"""

import re
from datetime import datetime
from typing import Any, Callable

from .errors import (
    EmptyOrderError,
    IllegalValueError,
    InvalidDateError,
    InvalidStatusError,
    InvalidValueError,
    MissingFieldError,
)
from .models import (
    CustomerOrder,
    Ingredient,
    Order,
    OrderStatus,
    Person,
    Product,
    Remark,
    SupplyOrder,
)

DATE_FORMAT = "%d-%m-%Y %H:%M"
DATE_PATTERN = "dd-MM-yyyy HH:mm"
_DATE_RE = re.compile(r"^[0-9]{2}-[0-9]{2}-[0-9]{4} [0-9]{2}:[0-9]{2}$")

_NAME_RE = re.compile(r"^[A-Za-z0-9]+( [A-Za-z0-9]+)*$")
_PHONE_RE = re.compile(r"^[0-9]{3,}$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")

NAME_CONSTRAINTS = (
    "Names should only contain alphanumeric characters and spaces, "
    "and it should not be blank"
)
PHONE_CONSTRAINTS = (
    "Phone numbers should only contain numbers, and it should be at least 3 digits long"
)
EMAIL_CONSTRAINTS = "Emails should be of the format local-part@domain"

CUSTOMER_ORDER = "CustomerOrder"
SUPPLY_ORDER = "SupplyOrder"

CUSTOMER_ITEMS_FIELD = "items"
SUPPLY_ITEMS_FIELD = "ingredients"

EMPTY_CUSTOMER_ORDER_MESSAGE = "CustomerOrder must contain at least one item"
EMPTY_SUPPLY_ORDER_MESSAGE = "SupplyOrder must contain at least one ingredient item"


def _require_record(data: Any, owner: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise InvalidValueError(
            f"{owner} record must be a JSON object, got {type(data).__name__}"
        )
    return data


# --- Dates ---


def format_order_date(value: datetime) -> str:
    """Format a timestamp as dd-MM-yyyy HH:mm."""
    # %Y is not zero-padded below year 1000 on all platforms
    return f"{value:%d-%m-}{value.year:04d}{value: %H:%M}"


def parse_order_date(value: Any) -> datetime:
    """
    Parse a dd-MM-yyyy HH:mm timestamp.

    Raises:
        InvalidDateError: If the value is not text in exactly that pattern.
    """
    if not isinstance(value, str):
        raise InvalidDateError(
            value, f"expected text in pattern {DATE_PATTERN}, got {type(value).__name__}"
        )
    if not _DATE_RE.match(value):
        raise InvalidDateError(
            value, f"Text '{value}' does not match pattern {DATE_PATTERN}"
        )
    try:
        return datetime.strptime(value, DATE_FORMAT)
    except ValueError as e:
        raise InvalidDateError(value, f"Text '{value}' could not be parsed: {e}") from e


# --- Person ---


def encode_person(person: Person) -> dict[str, Any]:
    result: dict[str, Any] = {
        "name": person.name,
        "phone": person.phone,
    }
    if person.email is not None:
        result["email"] = person.email
    if person.address is not None:
        result["address"] = person.address
    return result


def decode_person(data: Any) -> Person:
    """Decode and validate a person record."""
    data = _require_record(data, "Person")

    name = data.get("name")
    if name is None:
        raise MissingFieldError("Person", "name")
    if not isinstance(name, str) or not _NAME_RE.match(name):
        raise InvalidValueError(NAME_CONSTRAINTS, field="name")

    phone = data.get("phone")
    if phone is None:
        raise MissingFieldError("Person", "phone")
    if not isinstance(phone, str) or not _PHONE_RE.match(phone):
        raise InvalidValueError(PHONE_CONSTRAINTS, field="phone")

    email = data.get("email")
    if email is not None and (not isinstance(email, str) or not _EMAIL_RE.match(email)):
        raise InvalidValueError(EMAIL_CONSTRAINTS, field="email")

    address = data.get("address")
    if address is not None and not isinstance(address, str):
        raise InvalidValueError("Addresses must be text", field="address")

    return Person(name=name, phone=phone, email=email, address=address)


# --- Products ---


def encode_product(product: Product) -> dict[str, Any]:
    return {"id": product.product_id, "name": product.name}


def encode_ingredient(ingredient: Ingredient) -> dict[str, Any]:
    result = encode_product(ingredient)
    result["unit"] = ingredient.unit
    return result


def _decode_product_fields(data: Any, owner: str) -> tuple[dict[str, Any], int, str]:
    data = _require_record(data, owner)

    product_id = data.get("id")
    if product_id is None:
        raise MissingFieldError(owner, "id")
    # bool is an int subclass
    if not isinstance(product_id, int) or isinstance(product_id, bool):
        raise InvalidValueError(f"{owner} id must be an integer", field="id")

    name = data.get("name")
    if name is None:
        raise MissingFieldError(owner, "name")
    if not isinstance(name, str) or not name.strip():
        raise InvalidValueError(f"{owner} name must not be blank", field="name")

    return data, product_id, name


def decode_product(data: Any) -> Product:
    """Decode and validate a product record."""
    _, product_id, name = _decode_product_fields(data, "Product")
    return Product(product_id=product_id, name=name)


def decode_ingredient(data: Any) -> Ingredient:
    """Decode and validate an ingredient record."""
    data, product_id, name = _decode_product_fields(data, "Ingredient")

    unit = data.get("unit")
    if unit is None:
        raise MissingFieldError("Ingredient", "unit")
    if not isinstance(unit, str) or not unit.strip():
        raise InvalidValueError("Ingredient unit must not be blank", field="unit")

    return Ingredient(product_id=product_id, name=name, unit=unit)


def encode_catalogue_item(product: Product) -> dict[str, Any]:
    """Encode a catalogue entry, keeping the unit of ingredients."""
    if isinstance(product, Ingredient):
        return encode_ingredient(product)
    return encode_product(product)


def decode_catalogue_item(data: Any) -> Product:
    """Decode a catalogue entry; records carrying a unit become ingredients."""
    if isinstance(data, dict) and "unit" in data:
        return decode_ingredient(data)
    return decode_product(data)


# --- Orders ---


def decode_status(value: Any) -> OrderStatus:
    """
    Decode a status name case-insensitively.

    Raises:
        InvalidStatusError: If the name is not an OrderStatus member.
    """
    if isinstance(value, str):
        try:
            return OrderStatus[value.upper()]
        except KeyError:
            pass
    raise InvalidStatusError(str(value), OrderStatus.names())


def _decode_items(
    raw_items: list[Any], decode_item: Callable[[Any], Product]
) -> list[Product]:
    items: list[Product] = []
    for raw in raw_items:
        items.append(decode_item(raw))
    return items


def _decode_order_fields(
    data: Any,
    owner: str,
    items_field: str,
    empty_message: str,
    decode_item: Callable[[Any], Product],
) -> tuple[Person, list[Product], OrderStatus, Remark, datetime]:
    data = _require_record(data, owner)

    raw_person = data.get("person")
    if raw_person is None:
        raise MissingFieldError(owner, "person")
    try:
        person = decode_person(raw_person)
    except IllegalValueError as e:
        raise InvalidValueError(f"Invalid person details: {e}", field="person") from e

    raw_items = data.get(items_field)
    if raw_items is None:
        raise MissingFieldError(owner, items_field)
    if not isinstance(raw_items, list):
        raise InvalidValueError(f"{owner}'s {items_field} field must be a list", field=items_field)
    if not raw_items:
        raise EmptyOrderError(empty_message)
    items = _decode_items(raw_items, decode_item)

    raw_status = data.get("status")
    if raw_status is None:
        raise MissingFieldError(owner, "status")
    status = decode_status(raw_status)

    raw_remark = data.get("remark")
    if raw_remark is None:
        raise MissingFieldError(owner, "remark")
    try:
        remark = Remark(raw_remark)
    except ValueError as e:
        raise InvalidValueError(f"Invalid remark: {e}", field="remark") from e

    raw_date = data.get("orderDate")
    if raw_date is None:
        raise MissingFieldError(owner, "orderDate")
    order_date = parse_order_date(raw_date)

    return person, items, status, remark, order_date


def decode_customer_order(data: Any) -> CustomerOrder:
    """Decode and validate a customer order record."""
    person, items, status, remark, order_date = _decode_order_fields(
        data, CUSTOMER_ORDER, CUSTOMER_ITEMS_FIELD, EMPTY_CUSTOMER_ORDER_MESSAGE,
        decode_catalogue_item,
    )
    return CustomerOrder(
        person=person, items=items, status=status, remark=remark, order_date=order_date
    )


def decode_supply_order(data: Any) -> SupplyOrder:
    """Decode and validate a supply order record."""
    person, items, status, remark, order_date = _decode_order_fields(
        data, SUPPLY_ORDER, SUPPLY_ITEMS_FIELD, EMPTY_SUPPLY_ORDER_MESSAGE, decode_ingredient
    )
    return SupplyOrder(
        person=person, items=items, status=status, remark=remark, order_date=order_date
    )


def decode_order(data: Any, order_type: str) -> Order:
    """Decode a record as the order variant labelled ``order_type``."""
    if order_type == CustomerOrder.order_type:
        return decode_customer_order(data)
    if order_type == SupplyOrder.order_type:
        return decode_supply_order(data)
    raise ValueError(f"Unknown order type: {order_type}")


def encode_order(order: Order) -> dict[str, Any]:
    """Encode an order into its persisted record."""
    if isinstance(order, CustomerOrder):
        items_field = CUSTOMER_ITEMS_FIELD
        items = [encode_catalogue_item(item) for item in order.items]
    elif isinstance(order, SupplyOrder):
        items_field = SUPPLY_ITEMS_FIELD
        items = [encode_ingredient(item) for item in order.items]
    else:
        raise TypeError(f"Not an order: {type(order).__name__}")

    return {
        "person": encode_person(order.person),
        items_field: items,
        "status": order.status.name.upper(),
        "remark": str(order.remark),
        "orderDate": format_order_date(order.order_date),
    }
