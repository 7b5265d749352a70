"""Statistics over captured dialogs: call states, request methods and responses."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional


class CallState(IntEnum):
    """State of a dialog that started with an INVITE."""

    CALLSETUP = 1
    INCALL = 2
    CANCELLED = 3
    REJECTED = 4
    DIVERTED = 5
    BUSY = 6
    COMPLETED = 7


_COUNTED_METHODS = frozenset(
    {
        "REGISTER",
        "INVITE",
        "SUBSCRIBE",
        "NOTIFY",
        "OPTIONS",
        "PUBLISH",
        "MESSAGE",
        "CANCEL",
        "BYE",
        "ACK",
        "INFO",
        "UPDATE",
    }
)

_SHOWN_METHODS = (
    "INVITE",
    "REGISTER",
    "SUBSCRIBE",
    "UPDATE",
    "NOTIFY",
    "OPTIONS",
    "PUBLISH",
    "MESSAGE",
    "INFO",
    "BYE",
    "CANCEL",
)

_SHOWN_STATES = (
    ("COMPLETED", CallState.COMPLETED),
    ("CANCELLED", CallState.CANCELLED),
    ("IN CALL", CallState.INCALL),
    ("REJECTED", CallState.REJECTED),
    ("BUSY", CallState.BUSY),
    ("DIVERTED", CallState.DIVERTED),
    ("CALL SETUP", CallState.CALLSETUP),
)

_RESPONSE_CLASSES = range(1, 9)
_LEFT_WIDTH = 30


def _percent(count: int, total: int) -> float:
    return count * 100 / total if total else 0.0


@dataclass
class DialogStats:
    """Counters gathered over a set of dialogs.

    ``states`` counts calls per :class:`CallState`, ``methods`` counts
    requests per method name and ``responses`` counts responses per
    class (1 for 1XX up to 8 for 8XX and above).
    """

    dialogs: int = 0
    calls: int = 0
    messages: int = 0
    states: Counter = field(default_factory=Counter)
    methods: Counter = field(default_factory=Counter)
    responses: Counter = field(default_factory=Counter)

    def render(self) -> str:
        """Return the statistics as the text of the stats screen."""
        if not self.dialogs:
            return "No information to display\n"

        left_top = [
            f"Dialogs: {self.dialogs}",
            f"Calls: {self.calls} ({_percent(self.calls, self.dialogs):.1f}%)",
            f"Messages: {self.messages}",
        ]
        right_top: list[str] = []
        if self.calls:
            for label, state in _SHOWN_STATES:
                count = self.states[state]
                right_top.append(
                    f"{label + ':':<12}{count} ({_percent(count, self.calls):.1f}%)"
                )

        left_bottom = [
            f"{name + ':':<11}{self.methods[name]} "
            f"({_percent(self.methods[name], self.messages):.1f}%)"
            for name in _SHOWN_METHODS
        ]
        right_bottom = [
            f"{digit}XX: {self.responses[digit]} "
            f"({_percent(self.responses[digit], self.messages):.1f}%)"
            for digit in _RESPONSE_CLASSES
        ]

        lines = _columns(left_top, right_top) + [""] + _columns(left_bottom, right_bottom)
        return "".join(line + "\n" for line in lines)


def _columns(left: list[str], right: list[str]) -> list[str]:
    rows = max(len(left), len(right))
    padded_left = left + [""] * (rows - len(left))
    padded_right = right + [""] * (rows - len(right))
    return [
        (one.ljust(_LEFT_WIDTH) + two).rstrip()
        for one, two in zip(padded_left, padded_right)
    ]


def _response_class(code: int) -> Optional[int]:
    if code >= 800:
        return 8
    if code >= 100:
        return code // 100
    return None


def compute_stats(calls: Iterable[Any]) -> DialogStats:
    """Gather statistics over ``calls``.

    Each call provides ``state`` (a :class:`CallState`, or a false value
    when the dialog is not a call) and ``msgs``, whose items provide
    ``reqresp``: a method name for requests or a status code for responses.
    Requests whose method is not tracked are only counted as messages.
    """
    stats = DialogStats()
    for call in calls:
        stats.dialogs += 1
        state = getattr(call, "state", None)
        if state:
            stats.calls += 1
            stats.states[CallState(state)] += 1
        for msg in getattr(call, "msgs", ()):
            stats.messages += 1
            reqresp = getattr(msg, "reqresp", None)
            if isinstance(reqresp, str):
                name = reqresp.upper()
                if name in _COUNTED_METHODS:
                    stats.methods[name] += 1
            elif isinstance(reqresp, int):
                digit = _response_class(reqresp)
                if digit is not None:
                    stats.responses[digit] += 1
    return stats