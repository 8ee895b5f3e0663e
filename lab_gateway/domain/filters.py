"""Transaction filtering by time window and type, applied before aggregation"""

from datetime import date
from typing import List, Optional, Sequence
from lab_gateway.domain.models import Transaction
from lab_gateway.domain.exceptions import InvalidFilterError
from lab_gateway.utils.date_utils import window_start

# Trailing windows offered by the transactions page
FREQUENCY_DAYS = {"7": 7, "30": 30, "365": 365}
CUSTOM_FREQUENCY = "custom"
ALL = "all"
TRANSACTION_TYPES = (ALL, "income", "expense")


def resolve_date_range(
    frequency: Optional[str],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    today: Optional[date] = None,
) -> tuple[Optional[date], Optional[date]]:
    """
    Turn a frequency selection into an inclusive (start, end) range.

    Returns (None, None) when no date restriction applies.
    """
    if frequency is None or frequency == ALL:
        return None, None

    if frequency == CUSTOM_FREQUENCY:
        if start_date is None or end_date is None:
            raise InvalidFilterError("Custom range requires both start_date and end_date")
        if start_date > end_date:
            raise InvalidFilterError("start_date must not be after end_date")
        return start_date, end_date

    if frequency not in FREQUENCY_DAYS:
        raise InvalidFilterError(f"Unknown frequency: {frequency}")

    today = today or date.today()
    return window_start(FREQUENCY_DAYS[frequency], today), today


def filter_transactions(
    transactions: Sequence[Transaction],
    frequency: Optional[str] = None,
    transaction_type: str = ALL,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    today: Optional[date] = None,
) -> List[Transaction]:
    """
    Keep transactions matching the selected window and type, preserving order.

    Undated records cannot fall inside a window, so they are only kept when no
    date restriction applies.
    """
    if transaction_type not in TRANSACTION_TYPES:
        raise InvalidFilterError(f"Unknown transaction type: {transaction_type}")

    range_start, range_end = resolve_date_range(frequency, start_date, end_date, today)

    selected = []
    for txn in transactions:
        if transaction_type != ALL and txn.type != transaction_type:
            continue
        if range_start is not None:
            if txn.date is None or not (range_start <= txn.date <= range_end):
                continue
        selected.append(txn)

    return selected
