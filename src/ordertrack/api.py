"""FastAPI REST API for ordertrack order management."""

import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .codec import decode_status, encode_catalogue_item, encode_person, format_order_date
from .errors import (
    CommandError,
    DataFileExistsError,
    DataFileNotFoundError,
    DataLoadError,
    IllegalValueError,
    OrderNotFoundError,
    OrdertrackError,
    ParseError,
    PersonNotFoundError,
    ProductNotFoundError,
)
from .models import CustomerOrder, Order, Remark, SupplyOrder
from .parser import parse_add_customer_order
from .storage import OrderBookStore

logger = logging.getLogger(__name__)


# --- Pydantic Schemas ---


class PersonSchema(BaseModel):
    name: str
    phone: str
    email: Optional[str] = None
    address: Optional[str] = None


class ItemSchema(BaseModel):
    id: int
    name: str
    unit: Optional[str] = None  # ingredients only


class OrderSchema(BaseModel):
    index: int  # 1-based position in the order book
    order_type: str  # "Customer Order" | "Supply Order"
    person: PersonSchema
    items: list[ItemSchema]
    status: str
    remark: str
    order_date: str  # dd-MM-yyyy HH:mm


class OrderListResponse(BaseModel):
    orders: list[OrderSchema]
    count: int


class CustomerOrderCreateRequest(BaseModel):
    """Request body for adding a customer order."""

    command: str = Field(
        ...,
        description="Command text: 'PHONE_NUMBER PRODUCT_ID [PRODUCT_ID]...'",
    )


class OrderUpdateRequest(BaseModel):
    """Request body for updating an order."""

    status: Optional[str] = None
    remark: Optional[str] = None


# --- Helper Functions ---


_store: OrderBookStore | None = None


def set_store(store: OrderBookStore | None) -> None:
    """Select the order book served by the API (None restores the default)."""
    global _store
    _store = store


def get_store() -> OrderBookStore:
    """Get the OrderBookStore in use."""
    return _store if _store is not None else OrderBookStore()


def order_to_schema(index: int, order: Order) -> OrderSchema:
    """Convert an order dataclass to its Pydantic schema."""
    items = [ItemSchema(**encode_catalogue_item(item)) for item in order.items]
    return OrderSchema(
        index=index,
        order_type=order.order_type,
        person=PersonSchema(**encode_person(order.person)),
        items=items,
        status=order.status.name,
        remark=str(order.remark),
        order_date=format_order_date(order.order_date),
    )


# --- FastAPI App ---


app = FastAPI(
    title="ordertrack API",
    description="REST API for customer and supply orders",
    version="0.1.0",
)


# --- Global Exception Handler ---


# Map exception types to HTTP status codes; subclasses fall back to their bases
ERROR_STATUS_CODES: dict[type, int] = {
    ParseError: 400,
    IllegalValueError: 400,
    PersonNotFoundError: 404,
    ProductNotFoundError: 404,
    OrderNotFoundError: 404,
    CommandError: 400,
    DataFileNotFoundError: 409,
    DataFileExistsError: 409,
    DataLoadError: 500,
}


def _status_code_for(exc: OrdertrackError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


@app.exception_handler(OrdertrackError)
async def ordertrack_error_handler(request: Request, exc: OrdertrackError) -> JSONResponse:
    """Map OrdertrackError subclasses to appropriate HTTP responses."""
    status_code = _status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error_type": type(exc).__name__},
    )


# --- Endpoints ---


@app.get("/api/health")
def health_check():
    """
    Health check endpoint.

    Reports whether the order book exists and loads.
    """
    store = get_store()
    if not store.exists():
        return {"status": "ok", "initialized": False, "order_count": 0}
    try:
        model = store.load()
    except OrdertrackError as e:
        return {"status": "error", "initialized": True, "detail": str(e)}
    return {"status": "ok", "initialized": True, "order_count": len(model.orders)}


@app.get("/api/orders", response_model=OrderListResponse)
def list_orders(order_type: Optional[str] = Query(default=None, alias="type")):
    """List orders, optionally only 'customer' or 'supply' ones."""
    model = get_store().load()
    orders = list(enumerate(model.orders, start=1))
    if order_type == "customer":
        orders = [(i, o) for i, o in orders if isinstance(o, CustomerOrder)]
    elif order_type == "supply":
        orders = [(i, o) for i, o in orders if isinstance(o, SupplyOrder)]
    return OrderListResponse(
        orders=[order_to_schema(i, o) for i, o in orders],
        count=len(orders),
    )


@app.get("/api/orders/{index}", response_model=OrderSchema)
def get_order(index: int):
    """Get a single order by its 1-based position."""
    model = get_store().load()
    return order_to_schema(index, model.get_order(index))


@app.post("/api/orders/customer", response_model=OrderSchema, status_code=201)
def create_customer_order(request: CustomerOrderCreateRequest):
    """Add a customer order from command text."""
    store = get_store()
    model = store.load()

    command = parse_add_customer_order(request.command)
    result = command.execute(model)
    store.save(model)

    logger.info(result.feedback)
    return order_to_schema(result.index, result.order)


@app.patch("/api/orders/{index}", response_model=OrderSchema)
def update_order(index: int, request: OrderUpdateRequest):
    """Update the status and/or remark of an order."""
    store = get_store()
    model = store.load()
    order = model.get_order(index)

    update_data = request.model_dump(exclude_unset=True)

    if update_data.get("status") is not None:
        order.status = decode_status(request.status)
    if "remark" in update_data:
        try:
            order.remark = Remark(request.remark)
        except ValueError as e:
            raise IllegalValueError(f"Invalid remark: {e}") from e

    store.save(model)
    return order_to_schema(index, order)


@app.delete("/api/orders/{index}", response_model=OrderSchema)
def delete_order(index: int):
    """Remove an order."""
    store = get_store()
    model = store.load()
    order = model.remove_order(index)
    store.save(model)
    return order_to_schema(index, order)
