"""Key bindings: the mapping between terminal key codes and UI actions."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum

MAX_BINDINGS = 5

KEY_DOWN = 0o402
KEY_UP = 0o403
KEY_LEFT = 0o404
KEY_RIGHT = 0o405
KEY_HOME = 0o406
KEY_BACKSPACE = 0o407
KEY_F0 = 0o410
KEY_DC = 0o512
KEY_NPAGE = 0o522
KEY_PPAGE = 0o523
KEY_END = 0o550
KEY_RESIZE = 0o632

KEY_ESC = 27
KEY_INTRO = 10
KEY_TAB = 9
KEY_BACKSPACE2 = 8
KEY_BACKSPACE3 = 127
KEY_SPACE = ord(" ")


def key_ctrl(char: str | int) -> int:
    """Return the key code of Ctrl plus the given (upper case) character."""
    code = ord(char) if isinstance(char, str) else char
    return code - 64


def key_f(number: int) -> int:
    """Return the key code of function key ``number``."""
    return KEY_F0 + number


class Action(IntEnum):
    PRINTABLE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4
    DELETE = 5
    BACKSPACE = 6
    NPAGE = 7
    PPAGE = 8
    HNPAGE = 9
    HPPAGE = 10
    BEGIN = 11
    END = 12
    PREV_FIELD = 13
    NEXT_FIELD = 14
    RESIZE_SCREEN = 15
    CLEAR = 16
    CLEAR_CALLS = 17
    CLEAR_CALLS_SOFT = 18
    TOGGLE_SYNTAX = 19
    CYCLE_COLOR = 20
    COMPRESS = 21
    SHOW_HOSTNAMES = 22
    SHOW_ALIAS = 23
    TOGGLE_PAUSE = 24
    PREV_SCREEN = 25
    SHOW_HELP = 26
    SHOW_RAW = 27
    SHOW_FLOW = 28
    SHOW_FLOW_EX = 29
    SHOW_FILTERS = 30
    SHOW_COLUMNS = 31
    SHOW_SETTINGS = 32
    SHOW_STATS = 33
    COLUMN_MOVE_UP = 34
    COLUMN_MOVE_DOWN = 35
    SDP_INFO = 36
    DISP_FILTER = 37
    SAVE = 38
    SELECT = 39
    CONFIRM = 40
    TOGGLE_MEDIA = 41
    ONLY_MEDIA = 42
    TOGGLE_RAW = 43
    INCREASE_RAW = 44
    DECREASE_RAW = 45
    RESET_RAW = 46
    ONLY_SDP = 47
    TOGGLE_HINT = 48
    AUTOSCROLL = 49
    SORT_PREV = 50
    SORT_NEXT = 51
    SORT_SWAP = 52
    TOGGLE_TIME = 53


@dataclass
class KeyBinding:
    """An action, its configuration name and the keys bound to it."""

    id: Action
    name: str
    keys: list[int] = field(default_factory=list)


def _default_table() -> list[KeyBinding]:
    c = ord
    table = [
        (Action.PRINTABLE, "", ()),
        (Action.UP, "up", (KEY_UP, c("k"))),
        (Action.DOWN, "down", (KEY_DOWN, c("j"))),
        (Action.LEFT, "left", (KEY_LEFT, c("h"))),
        (Action.RIGHT, "right", (KEY_RIGHT, c("l"))),
        (Action.DELETE, "delete", (KEY_DC,)),
        (Action.BACKSPACE, "backspace", (KEY_BACKSPACE, KEY_BACKSPACE2, KEY_BACKSPACE3)),
        (Action.NPAGE, "npage", (KEY_NPAGE, key_ctrl("F"))),
        (Action.PPAGE, "ppage", (KEY_PPAGE, key_ctrl("B"))),
        (Action.HNPAGE, "hnpage", (key_ctrl("D"),)),
        (Action.HPPAGE, "hppage", (key_ctrl("U"), 0)),
        (Action.BEGIN, "begin", (KEY_HOME, key_ctrl("A"))),
        (Action.END, "end", (KEY_END, key_ctrl("E"))),
        (Action.PREV_FIELD, "pfield", (KEY_UP,)),
        (Action.NEXT_FIELD, "nfield", (KEY_DOWN, KEY_TAB)),
        (Action.RESIZE_SCREEN, "", (KEY_RESIZE,)),
        (Action.CLEAR, "clear", (key_ctrl("U"), key_ctrl("W"))),
        (Action.CLEAR_CALLS, "clearcalls", (key_f(5), key_ctrl("L"))),
        (Action.CLEAR_CALLS_SOFT, "clearcallssoft", (key_f(9), 0)),
        (Action.TOGGLE_SYNTAX, "togglesyntax", (key_f(8), c("C"))),
        (Action.CYCLE_COLOR, "colormode", (c("c"),)),
        (Action.COMPRESS, "compress", (c("s"),)),
        (Action.SHOW_ALIAS, "togglealias", (c("a"),)),
        (Action.TOGGLE_PAUSE, "pause", (c("p"),)),
        (Action.PREV_SCREEN, "prevscreen", (KEY_ESC, c("q"), c("Q"))),
        (Action.SHOW_HELP, "help", (key_f(1), c("h"), c("H"), c("?"))),
        (Action.SHOW_RAW, "raw", (key_f(6), c("R"), c("r"))),
        (Action.SHOW_FLOW, "flow", (KEY_INTRO,)),
        (Action.SHOW_FLOW_EX, "flowex", (key_f(4), c("x"))),
        (Action.SHOW_FILTERS, "filters", (key_f(7), c("f"), c("F"))),
        (Action.SHOW_COLUMNS, "columns", (key_f(10), c("t"), c("T"))),
        (Action.SHOW_SETTINGS, "settings", (key_f(8), c("o"), c("O"))),
        (Action.SHOW_STATS, "stats", (c("i"),)),
        (Action.COLUMN_MOVE_UP, "columnup", (c("-"),)),
        (Action.COLUMN_MOVE_DOWN, "columndown", (c("+"),)),
        (Action.SDP_INFO, "sdpinfo", (key_f(2), c("d"))),
        (Action.DISP_FILTER, "search", (key_f(3), c("/"), KEY_TAB)),
        (Action.SAVE, "save", (key_f(2), c("s"), c("S"))),
        (Action.SELECT, "select", (KEY_SPACE,)),
        (Action.CONFIRM, "confirm", (KEY_INTRO,)),
        (Action.TOGGLE_MEDIA, "togglemedia", (key_f(3), c("m"))),
        (Action.ONLY_MEDIA, "onlymedia", (c("M"),)),
        (Action.TOGGLE_RAW, "rawpreview", (c("t"),)),
        (Action.INCREASE_RAW, "morerawpreview", (c("9"),)),
        (Action.DECREASE_RAW, "lessrawpreview", (c("0"),)),
        (Action.RESET_RAW, "resetrawpreview", (c("T"),)),
        (Action.ONLY_SDP, "onlysdp", (c("D"),)),
        (Action.AUTOSCROLL, "autoscroll", (c("A"),)),
        (Action.TOGGLE_HINT, "hintalt", (c("K"),)),
        (Action.SORT_PREV, "sortprev", (c("<"),)),
        (Action.SORT_NEXT, "sortnext", (c(">"),)),
        (Action.SORT_SWAP, "sortswap", (c("z"),)),
        (Action.TOGGLE_TIME, "toggletime", (c("w"),)),
    ]
    return [KeyBinding(action, name, list(keys)) for action, name, keys in table]


def key_is_printable(key: int) -> bool:
    """Tell whether ``key`` is treated as a printable character."""
    return key == KEY_SPACE or 33 < key < 126 or 160 < key < 255


_FUNCTION_KEY_NAMES = {key_f(n): f"F{n}" for n in range(1, 11)}


def _keyname(key: int) -> str:
    if key >= 0x80:
        return "M-" + chr(key - 0x80)
    return chr(key)


def key_to_str(key: int) -> str:
    """Return a human readable name for ``key``, or an empty string."""
    if key in _FUNCTION_KEY_NAMES:
        return _FUNCTION_KEY_NAMES[key]
    if key == KEY_ESC:
        return "Esc"
    if key == KEY_INTRO:
        return "Enter"
    if key == KEY_SPACE:
        return "Space"
    if key_is_printable(key):
        return _keyname(key)
    return ""


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _upper_ascii(char: str) -> str:
    return char.upper() if char.isascii() else char


def key_from_str(key: str | None) -> int:
    """Parse a key as written in the configuration file into a key code.

    Returns 0 when the text is not a known key description.
    """
    if key is None:
        return 0
    if len(key) == 1:
        return ord(key)
    if key.startswith("F"):
        return key_f(_atoi(key[1:]))
    if key.startswith("^"):
        return key_ctrl(_upper_ascii(key[1:2] or "\0"))
    if key[:5].lower() == "ctrl-":
        return key_ctrl(_upper_ascii(key[5:6] or "\0"))
    lowered = key.lower()
    if lowered == "esc":
        return KEY_ESC
    if lowered == "space":
        return KEY_SPACE
    if lowered == "enter":
        return KEY_INTRO
    return 0


class KeyBindings:
    """The set of key bindings of every action."""

    def __init__(self) -> None:
        self._table = _default_table()

    def __iter__(self):
        return iter(self._table)

    def binding(self, action: int) -> KeyBinding | None:
        """Return the binding of ``action``, or None if it has none."""
        for entry in self._table:
            if entry.id == action:
                return entry
        return None

    def bind(self, action: int, key: int) -> None:
        """Add ``key`` to the keys of ``action``; ignored once it holds the maximum."""
        entry = self.binding(action)
        if entry is None or len(entry.keys) >= MAX_BINDINGS:
            return
        entry.keys.append(key)

    def unbind(self, action: int, key: int) -> None:
        """Remove every occurrence of ``key`` from the keys of ``action``."""
        entry = self.binding(action)
        if entry is None:
            return
        previous = entry.keys
        entry.keys = []
        for bound in previous:
            if bound != key:
                self.bind(action, bound)

    def find_action(self, key: int, start: int | None = -1) -> Action | None:
        """Return the next action bound to ``key`` after action ``start``.

        Use -1 (or None) as ``start`` to search from the first action.
        Printable keys always match the printable-character action.
        """
        if start is None or start == -1:
            position = 0
        else:
            for index, entry in enumerate(self._table):
                if entry.id == start:
                    position = index + 1
                    break
            else:
                return None

        for entry in self._table[position:]:
            if entry.id == Action.PRINTABLE and key_is_printable(key):
                return Action.PRINTABLE
            if key in entry.keys:
                return entry.id
        return None

    def action_id(self, name: str) -> Action | None:
        """Return the action configured under ``name`` (case-insensitive)."""
        wanted = name.lower()
        for entry in self._table:
            if entry.id != Action.PRINTABLE and entry.name.lower() == wanted:
                return entry.id
        return None

    def action_key(self, action: int, alt_hint: bool = False) -> int | None:
        """Return the main key of ``action``, or its first alternative key."""
        entry = self.binding(action)
        if entry is None:
            return None
        if alt_hint and len(entry.keys) > 1:
            return entry.keys[1]
        return entry.keys[0] if entry.keys else 0

    def action_key_str(self, action: int, alt_hint: bool = False) -> str | None:
        """Return the readable name of the key shown for ``action``."""
        key = self.action_key(action, alt_hint)
        return None if key is None else key_to_str(key)

    def dump(self) -> str:
        """Return a listing of every configured binding, one per line."""
        lines = [
            f"ActionID: {int(entry.id)}\t ActionName: {entry.name:<21} "
            f"Key: {key} ({key_to_str(key)})"
            for entry in self._table
            if entry.id != Action.PRINTABLE
            for key in entry.keys
        ]
        return "".join(line + "\n" for line in lines)