"""Order book storage for ordertrack."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Callable

from .codec import (
    decode_catalogue_item,
    decode_customer_order,
    decode_person,
    decode_supply_order,
    encode_catalogue_item,
    encode_order,
    encode_person,
)
from .errors import (
    DataFileExistsError,
    DataFileNotFoundError,
    DataLoadError,
    IllegalValueError,
)
from .model import Model

logger = logging.getLogger(__name__)

# Can be overridden via ORDERTRACK_DATA_DIR environment variable
DATA_DIR = Path(os.environ.get("ORDERTRACK_DATA_DIR", "data"))
DATA_FILE = "orderbook.json"

PERSONS_KEY = "persons"
PRODUCTS_KEY = "products"
CUSTOMER_ORDERS_KEY = "customerOrders"
SUPPLY_ORDERS_KEY = "supplyOrders"


def default_data_path() -> Path:
    """Path of the order book file in the configured data directory."""
    return DATA_DIR / DATA_FILE


def _decode_section(
    data: dict[str, Any], key: str, decode: Callable[[Any], Any]
) -> list[Any]:
    records = data.get(key, [])
    if not isinstance(records, list):
        raise IllegalValueError(f"{key} must be a list")

    decoded = []
    for i, record in enumerate(records):
        try:
            decoded.append(decode(record))
        except IllegalValueError as e:
            raise IllegalValueError(f"{key}[{i}]: {e}") from e
    return decoded


def model_to_dict(model: Model) -> dict[str, Any]:
    """Encode the whole model as the order book document."""
    return {
        PERSONS_KEY: [encode_person(p) for p in model.persons],
        PRODUCTS_KEY: [encode_catalogue_item(p) for p in model.products],
        CUSTOMER_ORDERS_KEY: [encode_order(o) for o in model.customer_orders],
        SUPPLY_ORDERS_KEY: [encode_order(o) for o in model.supply_orders],
    }


def model_from_dict(data: Any) -> Model:
    """
    Decode an order book document.

    Customer orders come before supply orders in the resulting model.

    Raises:
        IllegalValueError: If any record is invalid, prefixed with its location.
    """
    if not isinstance(data, dict):
        raise IllegalValueError("order book must be a JSON object")

    persons = _decode_section(data, PERSONS_KEY, decode_person)
    products = _decode_section(data, PRODUCTS_KEY, decode_catalogue_item)
    orders = _decode_section(data, CUSTOMER_ORDERS_KEY, decode_customer_order)
    orders += _decode_section(data, SUPPLY_ORDERS_KEY, decode_supply_order)

    return Model(persons=persons, products=products, orders=orders)


class OrderBookStore:
    """Manages reading and writing the order book file."""

    def __init__(self, path: Path | None = None):
        """
        Initialize OrderBookStore.

        Args:
            path: Override the order book file (defaults to DATA_DIR/DATA_FILE).
        """
        self.path = Path(path) if path is not None else default_data_path()

    def exists(self) -> bool:
        """Check if the order book file exists."""
        return self.path.exists()

    def load(self) -> Model:
        """
        Load the order book from disk.

        Raises:
            DataFileNotFoundError: If the file doesn't exist.
            DataLoadError: If the file is not valid JSON or holds an invalid record.
        """
        if not self.exists():
            raise DataFileNotFoundError(str(self.path))

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DataLoadError(str(self.path), f"invalid JSON: {e}") from e

        try:
            model = model_from_dict(data)
        except IllegalValueError as e:
            raise DataLoadError(str(self.path), str(e)) from e

        logger.debug(
            "Loaded %d person(s), %d product(s), %d order(s) from %s",
            len(model.persons),
            len(model.products),
            len(model.orders),
            self.path,
        )
        return model

    def save(self, model: Model) -> None:
        """
        Save the order book to disk atomically.

        Uses write-to-temp-then-rename for atomicity.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        data = model_to_dict(model)
        fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=".orderbook_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
                f.write("\n")  # trailing newline
            os.replace(temp_path, self.path)
        except Exception:
            # Clean up temp file on failure (ignore errors if already removed)
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

        logger.debug("Saved %d order(s) to %s", len(model.orders), self.path)

    def init(self, force: bool = False) -> Model:
        """
        Create an empty order book.

        Raises:
            DataFileExistsError: If the file exists and force=False.
        """
        if self.exists() and not force:
            raise DataFileExistsError(str(self.path))

        model = Model()
        self.save(model)
        return model
