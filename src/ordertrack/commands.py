"""Commands that mutate the order model."""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .errors import CommandError
from .models import CommandResult, CustomerOrder, OrderStatus, Product, Remark
from .utils import format_order_summary

if TYPE_CHECKING:
    from .model import Model

logger = logging.getLogger(__name__)


@dataclass
class AddCustomerOrderCommand:
    """Create a customer order for the person with ``phone`` from product IDs."""

    COMMAND_WORD = "add-order"
    MESSAGE_USAGE = (
        f"{COMMAND_WORD}: Adds a customer order for the person with the given phone number.\n"
        "Parameters: PHONE_NUMBER PRODUCT_ID [PRODUCT_ID]...\n"
        f"Example: {COMMAND_WORD} 91234567 1 2 2"
    )
    MESSAGE_SUCCESS = "New customer order added: {}"
    MESSAGE_NO_ITEMS = "A customer order must contain at least one product"

    phone: str
    product_ids: list[int] = field(default_factory=list)

    def execute(self, model: "Model") -> CommandResult:
        """
        Resolve the phone number and product IDs and add the order to ``model``.

        Raises:
            PersonNotFoundError: If no person has the phone number.
            ProductNotFoundError: If any product ID is unknown.
            CommandError: If no product IDs were given.
        """
        if not self.product_ids:
            raise CommandError(self.MESSAGE_NO_ITEMS)

        person = model.find_person_by_phone(self.phone)
        items: list[Product] = [model.find_product(pid) for pid in self.product_ids]

        order = CustomerOrder(
            person=person,
            items=items,
            status=OrderStatus.PENDING,
            remark=Remark(""),
        )
        index = model.add_order(order)
        logger.debug("Added customer order for %s with %d item(s)", self.phone, len(items))

        return CommandResult(
            feedback=self.MESSAGE_SUCCESS.format(format_order_summary(order)),
            order=order,
            index=index,
        )
