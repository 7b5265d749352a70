"""Call groups: sets of calls whose messages are shown together in one flow."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Optional, TypeVar

_T = TypeVar("_T")


@dataclass(eq=False)
class Message:
    """A captured SIP message: its capture time and whether it carries SDP."""

    time: float
    sdp: bool = False
    payload: str = ""
    call: Optional["Call"] = field(default=None, repr=False)


@dataclass(eq=False)
class Stream:
    """A media stream seen for a call."""

    time: float
    packet_count: int = 0
    rtp: bool = True


@dataclass(eq=False)
class Call:
    """A SIP dialog: its messages, media streams and related calls."""

    callid: str = ""
    msgs: list[Message] = field(default_factory=list)
    streams: list[Stream] = field(default_factory=list)
    xcalls: list["Call"] = field(default_factory=list, repr=False)
    changed: bool = False
    locked: bool = False
    filtered: Optional[bool] = None

    def add_message(self, msg: Message) -> Message:
        """Append ``msg`` to this call and mark the call as changed."""
        msg.call = self
        self.msgs.append(msg)
        self.changed = True
        return msg

    def has_changed(self) -> bool:
        """Tell whether the call changed since its flag was last reset."""
        return self.changed


def _index(items: Sequence[_T], item: Optional[_T]) -> int:
    if item is None:
        return -1
    return next((position for position, candidate in enumerate(items) if candidate is item), -1)


def _item(items: Sequence[_T], position: int) -> Optional[_T]:
    return items[position] if 0 <= position < len(items) else None


def _is_later(one: Message, other: Optional[Message]) -> bool:
    return other is None or one.time > other.time


class CallGroup:
    """An ordered set of calls displayed in the same flow.

    Calls added to a group are locked; removing them unlocks them again.
    """

    def __init__(self, callid: Optional[str] = None, sdp_only: bool = False) -> None:
        self.callid = callid
        self.sdp_only = sdp_only
        self.last_color = 0
        self.calls: list[Call] = []

    def __len__(self) -> int:
        return len(self.calls)

    def __contains__(self, call: object) -> bool:
        return any(member is call for member in self.calls)

    def clone(self) -> "CallGroup":
        """Return a new group holding the same calls (the calls are shared)."""
        copy = CallGroup()
        copy.calls = list(self.calls)
        return copy

    def has_changed(self) -> bool:
        """Tell whether any call changed, resetting the flag of every call.

        When the group is built around a Call-ID, the related calls of that
        call are added to the group as they appear.
        """
        changed = False
        call = self.next_call(None)
        while call is not None:
            if call.has_changed():
                call.changed = False
                changed = True
                if self.callid and self.callid == call.callid:
                    self.add_calls(call.xcalls)
            call = self.next_call(call)
        return changed

    def add(self, call: Optional[Call]) -> None:
        """Add ``call`` to the group unless it is None or already there."""
        if call is None:
            return
        if not self.exists(call):
            call.locked = True
            self.calls.append(call)

    def add_calls(self, calls: Iterable[Call]) -> None:
        """Lock every given call and add those not yet in the group."""
        for call in list(calls):
            call.locked = True
            if not self.exists(call):
                self.calls.append(call)

    def remove(self, call: Optional[Call]) -> None:
        """Unlock ``call`` and take it out of the group."""
        if call is None:
            return
        call.locked = False
        position = _index(self.calls, call)
        if position >= 0:
            del self.calls[position]

    def clear(self) -> None:
        """Remove every call from the group."""
        while self.calls:
            self.remove(self.calls[0])

    def exists(self, call: Call) -> bool:
        """Tell whether ``call`` is in the group."""
        return _index(self.calls, call) >= 0

    def color(self, call: Call) -> int:
        """Return the colour number of ``call``: 1 to 7 by position, 0 if absent."""
        position = _index(self.calls, call)
        if position < 0:
            return 0
        return position % 7 + 1

    def next_call(self, call: Optional[Call]) -> Optional[Call]:
        """Return the call following ``call``.

        With None, returns the call owning the group's first message.
        Otherwise returns the first call, in group order, whose first
        message is later than the first message of ``call``.
        """
        if call is None:
            first = self.next_msg(None)
            return first.call if first is not None else None

        reference = call.msgs[0] if call.msgs else None
        for candidate in self.calls:
            if candidate is call or not candidate.msgs:
                continue
            if _is_later(candidate.msgs[0], reference):
                return candidate
        return None

    def count(self) -> int:
        """Return the number of calls in the group."""
        return len(self.calls)

    def msg_count(self) -> int:
        """Return the number of messages of all calls (only SDP ones if sdp_only)."""
        return sum(
            1
            for call in self.calls
            for msg in call.msgs
            if not self.sdp_only or msg.sdp
        )

    def msg_number(self, msg: Message) -> int:
        """Return the chronological position of ``msg`` in the group, 0 if absent."""
        if self.sdp_only and not msg.sdp:
            return 0
        for number, current in enumerate(self._iter_messages()):
            if current is msg:
                return number
        return 0

    def next_msg(self, msg: Optional[Message]) -> Optional[Message]:
        """Return the message after ``msg`` in time order, or the first with None."""
        return self._walk(msg, forward=True)

    def prev_msg(self, msg: Optional[Message]) -> Optional[Message]:
        """Return the message before ``msg`` in time order, or the last with None."""
        return self._walk(msg, forward=False)

    def next_stream(self, stream: Optional[Stream]) -> Optional[Stream]:
        """Return the earliest RTP stream with packets started after ``stream``."""
        best: Optional[Stream] = None
        for call in self.calls:
            for candidate in call.streams:
                if not candidate.packet_count or not candidate.rtp:
                    continue
                if (stream is None or candidate.time > stream.time) and (
                    best is None or best.time > candidate.time
                ):
                    best = candidate
        return best

    def _sorted_messages(self) -> list[Message]:
        return sorted(
            (msg for call in self.calls for msg in call.msgs), key=lambda msg: msg.time
        )

    def _step(self, msg: Optional[Message], forward: bool) -> Optional[Message]:
        if self.count() == 1:
            messages: Sequence[Message] = self.calls[0].msgs
        else:
            messages = self._sorted_messages()
        position = _index(messages, msg)
        if forward:
            return _item(messages, position + 1)
        if msg is None:
            return _item(messages, len(messages) - 1)
        return _item(messages, position - 1)

    def _walk(self, msg: Optional[Message], forward: bool) -> Optional[Message]:
        current = msg
        while True:
            found = self._step(current, forward)
            if found is None or not self.sdp_only or found.sdp:
                return found
            current = found

    def _iter_messages(self) -> Iterator[Message]:
        current = self.next_msg(None)
        while current is not None:
            yield current
            current = self.next_msg(current)