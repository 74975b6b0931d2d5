# utils/pricing.py
import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

_AMOUNT = re.compile(r'-?\d+(?:\.\d+)?')


def parse_price(text: str) -> float:
    """'$29.99' -> 29.99. A leading currency symbol is stripped."""
    cleaned = text.strip().lstrip('$€£¥').replace(',', '')
    return float(cleaned)


def parse_amount(label: str) -> float:
    """Pull the amount out of a summary label such as 'Item total: $29.99'."""
    match = _AMOUNT.search(label.replace(',', ''))
    if match is None:
        raise ValueError(f"No amount in label: {label!r}")
    return float(match.group())


def total_price(prices: Iterable[str]) -> float:
    return round(sum(parse_price(price) for price in prices), 2)


@dataclass(frozen=True)
class SortCheck:
    ok: bool
    index: Optional[int] = None
    left: object = None
    right: object = None

    def __bool__(self) -> bool:
        return self.ok


def _check(values: Sequence, in_order: Callable[[object, object], bool], label: str) -> SortCheck:
    for i in range(len(values) - 1):
        if not in_order(values[i], values[i + 1]):
            logger.warning(f"{label} order violated at index {i}: {values[i]!r} then {values[i + 1]!r}")
            return SortCheck(False, i, values[i], values[i + 1])
    return SortCheck(True)


def verify_sorted_ascending(values: Sequence[float]) -> SortCheck:
    return _check(values, lambda a, b: a <= b, 'Ascending')


def verify_sorted_descending(values: Sequence[float]) -> SortCheck:
    return _check(values, lambda a, b: a >= b, 'Descending')


def verify_names_ascending(names: Sequence[str]) -> SortCheck:
    return _check(names, lambda a, b: a.casefold() <= b.casefold(), 'Name ascending')


def verify_names_descending(names: Sequence[str]) -> SortCheck:
    return _check(names, lambda a, b: a.casefold() >= b.casefold(), 'Name descending')


def prices_as_floats(prices: Iterable[str]) -> List[float]:
    values = []
    for price in prices:
        try:
            values.append(parse_price(price))
        except ValueError:
            logger.error(f"Invalid price format: {price}")
    return values
