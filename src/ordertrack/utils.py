"""Utility functions for ordertrack."""

from .codec import format_order_date
from .models import Order


def format_order_summary(order: Order) -> str:
    """One-line description of an order."""
    names = ", ".join(item.name for item in order.items)
    return f"{order.order_type} for {order.person.name} ({order.person.phone}): {names}"


def format_order(index: int, order: Order, verbose: bool = False) -> str:
    """Format an order for display."""
    result = (
        f"{index:>3}. [{order.status}] {order.order_type}  "
        f"{format_order_date(order.order_date)}  {order.person.name} ({order.person.phone})"
    )

    if verbose:
        result += "\n     Items:"
        for item in order.items:
            unit = getattr(item, "unit", None)
            unit_str = f" ({unit})" if unit else ""
            result += f"\n       #{item.product_id} {item.name}{unit_str}"
        if str(order.remark):
            # Truncate long remarks
            remark = str(order.remark)
            display = remark[:60] + "..." if len(remark) > 60 else remark
            result += f"\n     Remark: {display}"
    else:
        result += f"  ({len(order.items)} item(s))"

    return result
