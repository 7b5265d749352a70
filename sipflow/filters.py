"""Display filters: regular expressions that decide which calls are shown.

A call is displayed only when it matches every enabled filter. Filters
are case-insensitive regular expressions searched anywhere in the text
of the filtered field.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from enum import IntEnum
from typing import Any, Union

AttributeValue = Union[str, Iterable[str], None]


class FilterType(IntEnum):
    """Fields a display filter can be applied to, in evaluation order."""

    SIPFROM = 0
    SIPTO = 1
    SOURCE = 2
    DESTINATION = 3
    METHOD = 4
    PAYLOAD = 5
    CALL_LIST = 6


class FilterError(ValueError):
    """Raised when a filter expression is not a valid regular expression."""


class Filters:
    """The set of display filters, one optional expression per filter type.

    Calls checked with :meth:`check_call` must provide ``msgs`` (a sized
    collection of messages) and a writable ``filtered`` attribute, which
    caches the result: ``None`` means not evaluated yet, ``True`` means
    the call is filtered out and ``False`` that it is displayed.
    """

    def __init__(self) -> None:
        self._filters: dict[FilterType, tuple[str, re.Pattern[str]]] = {}

    def set(self, filter_type: FilterType, expr: str | None) -> None:
        """Set the expression of a filter, or remove it when ``expr`` is None.

        The previous expression is kept when the new one does not compile.
        """
        filter_type = FilterType(filter_type)
        if expr is None:
            self._filters.pop(filter_type, None)
            return
        try:
            pattern = re.compile(expr, re.IGNORECASE)
        except re.error as exc:
            raise FilterError(f"invalid filter expression {expr!r}: {exc}") from exc
        self._filters[filter_type] = (expr, pattern)

    def get(self, filter_type: FilterType) -> str | None:
        """Return the text expression of a filter, or None if it is unset."""
        entry = self._filters.get(FilterType(filter_type))
        return entry[0] if entry else None

    def check_expr(self, filter_type: FilterType, data: str) -> bool:
        """Tell whether ``data`` matches the filter; an unset filter matches all."""
        entry = self._filters.get(FilterType(filter_type))
        if entry is None:
            return True
        return entry[1].search(data) is not None

    def check_call(
        self, call: Any, attribute: Callable[[FilterType], AttributeValue]
    ) -> bool:
        """Tell whether ``call`` matches every enabled filter.

        ``attribute`` returns the text of the given field for the call; for
        :attr:`FilterType.PAYLOAD` it returns the payloads of all the
        call's messages, and the call matches if any of them does.
        Calls without messages never match.
        """
        if not call.msgs:
            return False
        if call.filtered is not None:
            return not call.filtered

        call.filtered = False
        for filter_type in FilterType:
            entry = self._filters.get(filter_type)
            if entry is None:
                continue
            pattern = entry[1]
            value = attribute(filter_type)
            if filter_type is FilterType.PAYLOAD:
                payloads = [value] if isinstance(value, str) else (value or ())
                if not any(pattern.search(payload) for payload in payloads):
                    call.filtered = True
                    break
            elif pattern.search(value or "") is None:
                call.filtered = True
                break

        return not call.filtered

    def reset_calls(self, calls: Iterable[Any]) -> None:
        """Forget the cached filter result of every call."""
        for call in calls:
            call.filtered = None