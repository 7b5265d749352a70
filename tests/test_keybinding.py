import pytest

from sipflow.keybinding import (
    KEY_DC,
    KEY_ESC,
    KEY_F0,
    KEY_INTRO,
    KEY_UP,
    MAX_BINDINGS,
    Action,
    KeyBindings,
    key_ctrl,
    key_f,
    key_from_str,
    key_is_printable,
    key_to_str,
)


def test_key_ctrl_and_function_keys():
    assert key_ctrl("A") == 1
    assert key_f(3) == KEY_F0 + 3


@pytest.mark.parametrize(
    "key,expected",
    [(ord(" "), True), (ord("a"), True), (ord("!"), False), (ord("~"), False), (KEY_UP, False)],
)
def test_key_is_printable(key, expected):
    assert key_is_printable(key) is expected


@pytest.mark.parametrize(
    "key,text",
    [
        (key_f(1), "F1"),
        (key_f(10), "F10"),
        (KEY_ESC, "Esc"),
        (KEY_INTRO, "Enter"),
        (ord(" "), "Space"),
        (ord("q"), "q"),
        (KEY_UP, ""),
    ],
)
def test_key_to_str(key, text):
    assert key_to_str(key) == text


@pytest.mark.parametrize(
    "text,key",
    [
        ("x", ord("x")),
        ("F5", key_f(5)),
        ("F10", key_f(10)),
        ("Fx", key_f(0)),
        ("^a", key_ctrl("A")),
        ("Ctrl-w", key_ctrl("W")),
        ("ctrl-L", key_ctrl("L")),
        ("esc", KEY_ESC),
        ("SPACE", ord(" ")),
        ("Enter", KEY_INTRO),
        ("unknown", 0),
        (None, 0),
    ],
)
def test_key_from_str(text, key):
    assert key_from_str(text) == key


@pytest.mark.parametrize("name", ["F1", "F7", "Esc", "Enter", "Space", "z"])
def test_str_round_trip(name):
    assert key_to_str(key_from_str(name)) == name


def test_action_id_lookup():
    bindings = KeyBindings()
    assert bindings.action_id("UP") == Action.UP
    assert bindings.action_id("sortswap") == Action.SORT_SWAP
    assert bindings.action_id("no-such-action") is None


def test_find_action_walks_all_matches():
    bindings = KeyBindings()
    key = ord("h")
    found = []
    action = bindings.find_action(key, -1)
    while action is not None:
        found.append(action)
        action = bindings.find_action(key, action)
    assert found == [Action.PRINTABLE, Action.LEFT, Action.SHOW_HELP]


def test_find_action_special_key():
    bindings = KeyBindings()
    assert bindings.find_action(KEY_UP, -1) == Action.UP
    assert bindings.find_action(KEY_UP, Action.UP) == Action.PREV_FIELD
    assert bindings.find_action(KEY_UP, Action.PREV_FIELD) is None


def test_bind_and_unbind():
    bindings = KeyBindings()
    key = key_ctrl("Y")
    assert bindings.find_action(key, -1) is None
    bindings.bind(Action.SAVE, key)
    assert bindings.find_action(key, -1) == Action.SAVE
    bindings.unbind(Action.SAVE, key)
    assert bindings.find_action(key, -1) is None
    assert bindings.binding(Action.SAVE).keys == [key_f(2), ord("s"), ord("S")]


def test_bind_is_capped():
    bindings = KeyBindings()
    for offset in range(10):
        bindings.bind(Action.UP, key_ctrl("A") + offset)
    assert len(bindings.binding(Action.UP).keys) == MAX_BINDINGS


def test_unbind_removes_every_occurrence():
    bindings = KeyBindings()
    bindings.bind(Action.DELETE, ord("X"))
    bindings.bind(Action.DELETE, ord("X"))
    bindings.unbind(Action.DELETE, ord("X"))
    assert bindings.binding(Action.DELETE).keys == [KEY_DC]


def test_instances_are_independent():
    first = KeyBindings()
    second = KeyBindings()
    first.unbind(Action.UP, KEY_UP)
    assert second.action_key(Action.UP) == KEY_UP
    assert first.action_key(Action.UP) == ord("k")


def test_action_key_and_alternative():
    bindings = KeyBindings()
    assert bindings.action_key(Action.UP, False) == KEY_UP
    assert bindings.action_key(Action.UP, True) == ord("k")
    assert bindings.action_key(Action.DELETE, True) == KEY_DC
    assert bindings.action_key(Action.SHOW_HOSTNAMES) is None


def test_action_key_str():
    bindings = KeyBindings()
    assert bindings.action_key_str(Action.SHOW_HELP, False) == "F1"
    assert bindings.action_key_str(Action.SHOW_HELP, True) == "h"
    assert bindings.action_key_str(Action.PREV_SCREEN, False) == "Esc"
    assert bindings.action_key_str(Action.SHOW_HOSTNAMES) is None


def test_dump_lists_bindings():
    bindings = KeyBindings()
    lines = bindings.dump().splitlines()
    total = sum(len(entry.keys) for entry in bindings if entry.id != Action.PRINTABLE)
    assert len(lines) == total
    assert lines[0].startswith("ActionID: 1\t ActionName: up")
    assert lines[0].endswith(f"Key: {KEY_UP} ()")
    assert any(line.endswith("(F1)") for line in lines)