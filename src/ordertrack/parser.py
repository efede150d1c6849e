"""Parsing of command text into command objects."""

import re

from .commands import AddCustomerOrderCommand
from .errors import ParseError

MESSAGE_INVALID_COMMAND_FORMAT = "Invalid command format! \n{}"
MESSAGE_INVALID_ID = "ID must be a valid integer."

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


def parse_add_customer_order(args: str) -> AddCustomerOrderCommand:
    """
    Parse the arguments of an add-order command.

    Format: "PHONE_NUMBER PRODUCT_ID [PRODUCT_ID]..."

    The phone number is passed through unvalidated; product IDs are kept in
    the order given, duplicates included. IDs must fit in a signed 32-bit int.

    Raises:
        ParseError: If fewer than two tokens are given or an ID is not an integer.
    """
    tokens = args.split()

    if len(tokens) < 2:
        raise ParseError(
            MESSAGE_INVALID_COMMAND_FORMAT.format(AddCustomerOrderCommand.MESSAGE_USAGE)
        )

    phone = tokens[0]

    product_ids: list[int] = []
    for token in tokens[1:]:
        if not _INTEGER_RE.match(token):
            raise ParseError(MESSAGE_INVALID_ID)
        product_id = int(token)
        if not INT_MIN <= product_id <= INT_MAX:
            raise ParseError(MESSAGE_INVALID_ID)
        product_ids.append(product_id)

    return AddCustomerOrderCommand(phone=phone, product_ids=product_ids)
