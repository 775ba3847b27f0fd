"""
Header guard - presence checks over mandatory request headers.

Every missing name is collected before failing, so a client that forgets
both X-Client-Id and X-Request-Id learns about both in one response.
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence

from .failures import MissingHeaders


class HeaderSet(Mapping[str, str]):
    """
    Case-insensitive, order-preserving view over inbound request headers.

    Lookups ignore case; the original spelling and insertion order of
    the first occurrence of each name are kept for iteration.
    """

    def __init__(self, headers: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        items = headers.items() if isinstance(headers, Mapping) else headers
        self._values: dict[str, tuple[str, str]] = {}
        for name, value in items:
            self._values.setdefault(name.lower(), (name, value))

    def __getitem__(self, name: str) -> str:
        return self._values[name.lower()][1]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._values.values())

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._values

    def is_present(self, name: str) -> bool:
        """True when the header exists and its value is not blank."""
        value = self.get(name)
        return value is not None and value.strip() != ""


def check_required(headers: HeaderSet, required: Sequence[str]) -> MissingHeaders | None:
    """
    Check that every required header is present and non-blank.

    Args:
        headers: Inbound request headers
        required: Header names in declaration order

    Returns:
        MissingHeaders listing the absent names in declaration order,
        or None when all headers are present
    """
    missing = tuple(name for name in required if not headers.is_present(name))
    if missing:
        return MissingHeaders(missing)
    return None
