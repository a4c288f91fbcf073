import math
import re
from decimal import MAX_EMAX, MIN_EMIN, Decimal, getcontext, localcontext
from typing import Iterable, Optional

from models import Item, Receipt

POINTS_RETAILER_NAME_ALPHANUM_CHARACTER = 1
POINTS_ITEMS_COUNT = 5
POINTS_TOTAL_HAS_NO_CENTS = 50
POINTS_TOTAL_IS_MULTIPLE_OF_QUARTERS = 25
POINTS_ODD_PURCHASE_DAY = 6
POINTS_VALID_PURCHASE_HOUR = 10
POINTS_ITEM_DESCRIPTION = Decimal("0.2")
REWARD_ITEM_DESCRIPTION_LENGTH_FACTOR = 3
REWARD_HOUR_START = 14
REWARD_HOUR_END = 16
QUARTER = Decimal("0.25")
# day and hour numbers wider than a signed 64-bit integer are not numbers
MAX_FIELD_DIGITS = 18

AMOUNT_PATTERN = re.compile(r"\+?(\d+(\.\d*)?|\.\d+)")
TOTAL_PATTERN = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")
DIGITS_PATTERN = re.compile(r"[0-9]+")
ALPHANUM_PATTERN = re.compile(r"[A-Za-z0-9]")


def exact_context(value: Decimal):
    """ Decimal context wide enough that remainders and products of value are exact """
    context = getcontext().copy()
    context.prec = max(context.prec, len(value.as_tuple().digits) + 2)
    context.Emax = MAX_EMAX
    context.Emin = MIN_EMIN
    return localcontext(context)


def parse_amount(amount: str) -> Optional[Decimal]:
    """ Parses a non-negative decimal amount such as "12.25", returns None when it is not one """
    if not AMOUNT_PATTERN.fullmatch(amount):
        return None
    return Decimal(amount)


def parse_total(total: str) -> Optional[Decimal]:
    """ Like parse_amount, but a receipt total may also be negative """
    if not TOTAL_PATTERN.fullmatch(total):
        return None
    return Decimal(total)


def parse_field_number(text: str) -> Optional[int]:
    if not DIGITS_PATTERN.fullmatch(text):
        return None
    significant = text.lstrip("0")
    if len(significant) > MAX_FIELD_DIGITS:
        return None
    return int(significant or "0")


def parse_purchase_day(date: str) -> Optional[int]:
    parts = date.split("-")
    if len(parts) != 3:
        return None
    return parse_field_number(parts[2])


def parse_purchase_hour(time: str) -> Optional[int]:
    return parse_field_number(time.partition(":")[0])


def score_retailer(retailer_name: str) -> int:
    """ One point for every alphanumeric character in the retailer name """
    return len(ALPHANUM_PATTERN.findall(retailer_name)) * POINTS_RETAILER_NAME_ALPHANUM_CHARACTER


def score_item_count(items: Iterable[Item]) -> int:
    """ 5 points for every two items on the receipt """
    return (len(list(items)) // 2) * POINTS_ITEMS_COUNT


def score_total(total: str) -> int:
    """ Round dollar and multiple of 0.25 bonuses, both apply to a round total """
    parsed_total = parse_total(total)
    if parsed_total is None:
        return 0
    points = 0
    with exact_context(parsed_total):
        if parsed_total % 1 == 0:
            points += POINTS_TOTAL_HAS_NO_CENTS
        if parsed_total % QUARTER == 0:
            points += POINTS_TOTAL_IS_MULTIPLE_OF_QUARTERS
    return points


def score_purchase_date(date: str) -> int:
    day = parse_purchase_day(date)
    if day is None or day % 2 == 0:
        return 0
    return POINTS_ODD_PURCHASE_DAY


def score_purchase_time(time: str) -> int:
    hour = parse_purchase_hour(time)
    if hour is None or not REWARD_HOUR_START <= hour < REWARD_HOUR_END:
        return 0
    return POINTS_VALID_PURCHASE_HOUR


def score_item(item: Item) -> int:
    """
    If the trimmed length of the item description is a multiple of 3, multiply the
    price by 0.2 and round up to the nearest integer. An empty trimmed description
    counts as a multiple of 3.
    """
    if len(item.short_description.strip()) % REWARD_ITEM_DESCRIPTION_LENGTH_FACTOR != 0:
        return 0
    price = parse_amount(item.price)
    if price is None:
        return 0
    with exact_context(price):
        return math.ceil(price * POINTS_ITEM_DESCRIPTION)


def calculate_points(receipt: Receipt) -> int:
    """ Calculates points earned from each component of the receipt """
    points = 0
    points += score_retailer(receipt.retailer)
    points += score_item_count(receipt.items)
    points += score_total(receipt.total)
    points += score_purchase_date(receipt.purchase_date)
    points += score_purchase_time(receipt.purchase_time)
    points += sum(score_item(item) for item in receipt.items)
    return points
