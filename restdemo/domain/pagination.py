"""
Pagination - page requests, sort orders and the page envelope.

Page numbers are zero-based. Totals always describe the full matching
dataset, never the slice being returned, so a request past the last page
yields an empty page that still reports the real totalElements/totalPages.

Ordering applied in memory is stable and total: ties on the requested
sort keys are broken by the entity identifier, which keeps page
boundaries deterministic across repeated calls against an unordered store.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from .failures import ParameterValidationFailed
from .validation import Maximum, Minimum, validate_parameters

T = TypeVar("T")
U = TypeVar("U")


class Direction(str, Enum):
    """Sort direction."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class Order:
    """Sort order on a single field (external/JSON name)."""

    field: str
    direction: Direction = Direction.ASC

    @property
    def descending(self) -> bool:
        return self.direction is Direction.DESC


@dataclass(frozen=True)
class Sort:
    """Ordered collection of sort orders. Empty means unsorted."""

    orders: tuple[Order, ...] = ()

    @classmethod
    def by(cls, *properties: str, direction: Direction = Direction.ASC) -> "Sort":
        return cls(tuple(Order(p, direction) for p in properties))

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    def __str__(self) -> str:
        if not self.orders:
            return "UNSORTED"
        return ", ".join(f"{o.field}: {o.direction.value}" for o in self.orders)


UNSORTED = Sort()
DEFAULT_SORT = Sort.by("id")

# Largest page index or size a store query can take
MAX_PAGE_VALUE = 2**31 - 1

PAGE_PARAMETER_CONSTRAINTS = (
    Minimum("page", 0),
    Maximum("page", MAX_PAGE_VALUE),
    Minimum("size", 1),
    Maximum("size", MAX_PAGE_VALUE),
)


@dataclass(frozen=True)
class PageRequest:
    """Requested page descriptor."""

    page: int
    size: int
    sort: Sort = UNSORTED

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One bounded slice of a larger ordered result set.

    Constructed once per request from a store query result; immutable
    thereafter. All metadata is derived from number, size and
    total_elements.
    """

    content: tuple[T, ...]
    number: int
    size: int
    total_elements: int
    sort: Sort = UNSORTED

    def __post_init__(self) -> None:
        if self.number < 0:
            raise ValueError("Page index must not be less than zero")
        if self.size < 1:
            raise ValueError("Page size must not be less than one")
        if self.total_elements < 0:
            raise ValueError("Total elements must not be negative")
        if len(self.content) > self.size:
            raise ValueError("Page content must not exceed the page size")

    @property
    def total_pages(self) -> int:
        return (self.total_elements + self.size - 1) // self.size

    @property
    def first(self) -> bool:
        return self.number == 0

    @property
    def last(self) -> bool:
        return self.number >= self.total_pages - 1

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def empty(self) -> bool:
        return self.number_of_elements == 0

    @property
    def offset(self) -> int:
        return self.number * self.size

    def map(self, func: Callable[[T], U]) -> "Page[U]":
        """Convert each item, keeping the page metadata."""
        return Page(
            content=tuple(func(item) for item in self.content),
            number=self.number,
            size=self.size,
            total_elements=self.total_elements,
            sort=self.sort,
        )


def paginate(
    total_elements: int,
    page: int,
    size: int,
    content: Iterable[T],
    sort: Sort = UNSORTED,
) -> Page[T]:
    """
    Build the page envelope for a store query result.

    Args:
        total_elements: Count of all matching items in the store
        page: Requested zero-based page index
        size: Requested page size (>= 1)
        content: Items of the requested page, already sliced
        sort: Sort the content was ordered by

    Returns:
        Immutable Page; totals are taken from total_elements only
    """
    return Page(
        content=tuple(content),
        number=page,
        size=size,
        total_elements=total_elements,
        sort=sort,
    )


def parse_sort(values: Sequence[str], allowed: Iterable[str]) -> Sort | ParameterValidationFailed:
    """
    Parse 'property[,property...][,asc|desc]' query values into a Sort.

    Each value may name several properties sharing one trailing direction,
    e.g. 'title,dueDate,desc'. Blank tokens are ignored.
    """
    allowed = tuple(allowed)
    orders: list[Order] = []
    for value in values:
        tokens = [t.strip() for t in value.split(",") if t.strip()]
        if not tokens:
            continue
        direction = Direction.ASC
        if tokens[-1].upper() in Direction.__members__:
            direction = Direction(tokens.pop().upper())
        for token in tokens:
            if token not in allowed:
                return ParameterValidationFailed(
                    errors=(f"Parameter 'sort' must reference one of: {', '.join(allowed)}",)
                )
            orders.append(Order(token, direction))
    return Sort(tuple(orders))


def _lenient_int(value: int | str | None) -> int | None:
    if value is None or isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        return None


def resolve_page_request(
    page: int | str | None,
    size: int | str | None,
    sort: Sort,
    default_size: int = 10,
    max_size: int = 2000,
) -> PageRequest:
    """
    Lenient resolution: out-of-range values fall back instead of failing.

    Absent, unparseable, oversized or negative page -> 0; absent, unparseable or
    non-positive size -> default; size above max_size -> max_size;
    unsorted -> ascending by id.
    """
    page = _lenient_int(page)
    size = _lenient_int(size)
    if page is None or not 0 <= page <= MAX_PAGE_VALUE:
        page = 0
    if size is None or size < 1:
        size = default_size
    size = min(size, max_size)
    return PageRequest(page=page, size=size, sort=sort if sort.is_sorted else DEFAULT_SORT)


def strict_page_request(page: int, size: int, sort: Sort = DEFAULT_SORT) -> PageRequest | ParameterValidationFailed:
    """Strict resolution: page and size within their bounds, all violations reported together."""
    failure = validate_parameters({"page": page, "size": size}, PAGE_PARAMETER_CONSTRAINTS)
    if failure is not None:
        return failure
    return PageRequest(page=page, size=size, sort=sort)


def _sort_value(value: Any) -> tuple[bool, Any]:
    # None sorts last ascending, first descending
    return (value is None, value)


def sort_items(
    items: Iterable[T],
    sort: Sort,
    attributes: Mapping[str, str],
    tiebreak: str = "id",
) -> list[T]:
    """
    Order items by the sort, breaking ties by the tiebreak attribute.

    Args:
        items: Items to order
        sort: Orders on external property names
        attributes: External property name -> item attribute name
        tiebreak: Attribute holding a unique key

    Returns:
        New list in deterministic order
    """
    ordered = sorted(items, key=lambda item: getattr(item, tiebreak))
    # Python's sort is stable: apply the least significant key first
    for order in reversed(sort.orders):
        attribute = attributes[order.field]
        ordered.sort(
            key=lambda item, a=attribute: _sort_value(getattr(item, a)),
            reverse=order.descending,
        )
    return ordered
