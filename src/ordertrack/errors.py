"""Custom exceptions for ordertrack."""


class OrdertrackError(Exception):
    """Base exception for all ordertrack errors."""

    pass


# Decode / validation errors


class IllegalValueError(OrdertrackError):
    """Raised when a persisted record violates a data constraint."""

    pass


class MissingFieldError(IllegalValueError):
    """Raised when a required field is absent from a record."""

    def __init__(self, owner: str, field: str):
        self.owner = owner
        self.field = field
        super().__init__(f"{owner}'s {field} field is missing!")


class InvalidValueError(IllegalValueError):
    """Raised when a field is present but its value is rejected."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class EmptyOrderError(IllegalValueError):
    """Raised when an order record carries an empty item list."""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidStatusError(IllegalValueError):
    """Raised when an order status is not a known OrderStatus name."""

    def __init__(self, value: str, valid: list[str]):
        self.value = value
        self.valid = valid
        super().__init__(
            f"Invalid order status: {value}. Valid statuses are: {', '.join(valid)}"
        )


class InvalidDateError(IllegalValueError):
    """Raised when an order date does not match dd-MM-yyyy HH:mm."""

    def __init__(self, value: object, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid order date time: {reason}")


# Command errors


class ParseError(OrdertrackError):
    """Raised when command text cannot be parsed."""

    pass


class CommandError(OrdertrackError):
    """Raised when a parsed command cannot be executed against the model."""

    pass


class PersonNotFoundError(CommandError):
    """Raised when no person has the given phone number."""

    def __init__(self, phone: str):
        self.phone = phone
        super().__init__(f"No person found with phone number: {phone}")


class ProductNotFoundError(CommandError):
    """Raised when a product ID doesn't exist."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class OrderNotFoundError(CommandError):
    """Raised when an order index is out of range."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        super().__init__(
            f"Order not found: {index} (there are {count} order(s), indexes start at 1)"
        )


# Storage errors


class DataFileNotFoundError(OrdertrackError):
    """Raised when the order book file doesn't exist."""

    def __init__(self, path: str | None = None):
        self.path = path
        msg = "Order book not initialized. Run 'ordertrack init' first."
        if path:
            msg = f"Order book not found at {path}. Run 'ordertrack init' first."
        super().__init__(msg)


class DataFileExistsError(OrdertrackError):
    """Raised when trying to init but the order book already exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Order book already exists at {path}. Use --force to overwrite.")


class DataLoadError(OrdertrackError):
    """Raised when the order book file is unreadable or holds an invalid record."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load order book {path}: {reason}")
