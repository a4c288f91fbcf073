from dataclasses import dataclass
from typing import Any, Tuple

required_receipt_attributes = ["retailer", "purchaseDate", "purchaseTime", "total", "items"]
required_item_attributes = ["shortDescription", "price"]


class InvalidReceiptError(ValueError):
    """ Raised when a submitted receipt does not have the expected JSON shape """


@dataclass(frozen=True)
class Item:
    short_description: str
    price: str


@dataclass(frozen=True)
class Receipt:
    retailer: str
    purchase_date: str
    purchase_time: str
    total: str
    items: Tuple[Item, ...] = ()


def _require_string(value: Any, name: str) -> str:
    if not isinstance(value, str) or value == "":
        raise InvalidReceiptError(f"Error: invalid {name} format")
    return value


def parse_item(item: Any) -> Item:
    """ Validates the shape of a single item object """
    if not isinstance(item, dict):
        raise InvalidReceiptError("Error: invalid receipt item format")
    for attribute in required_item_attributes:
        if attribute not in item:
            raise InvalidReceiptError(f"Error: missing {attribute} in receipt item")
        _require_string(item[attribute], attribute)
    return Item(short_description=item["shortDescription"], price=item["price"])


def parse_receipt(receipt: Any) -> Receipt:
    """
    Validates the structure of the submitted JSON and builds an immutable Receipt.

    Only the shape is checked here: required keys present, non-empty strings where
    strings are expected and a list of item objects. Number and date formats are left
    to the scoring rules, which treat anything unparseable as worth zero points.
    """
    if not isinstance(receipt, dict):
        raise InvalidReceiptError("Error: receipt must be a JSON object")
    for attribute in required_receipt_attributes:
        if attribute not in receipt:
            raise InvalidReceiptError(f"Error: missing {attribute} in receipt")
        if attribute != "items":
            _require_string(receipt[attribute], attribute)

    if not isinstance(receipt["items"], list):
        raise InvalidReceiptError("Error: invalid receipt items list format")

    return Receipt(
        retailer=receipt["retailer"],
        purchase_date=receipt["purchaseDate"],
        purchase_time=receipt["purchaseTime"],
        total=receipt["total"],
        items=tuple(parse_item(item) for item in receipt["items"]),
    )
