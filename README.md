# sipflow

Library pieces for inspecting SIP dialogs: the logic behind a terminal
SIP flow viewer, without the terminal. It has no dependencies outside
the standard library.

## Install

    pip install .

To run the tests:

    pip install .[test]
    pytest

## What is inside

- `sipflow.hashtable`: `HashTable`, a fixed-size table of chained buckets
  keyed by strings (`insert`, `remove`, `find`, `hash`, and `in`).
- `sipflow.keybinding`: the `Action` enumeration, `KeyBinding` and
  `KeyBindings` (`bind`, `unbind`, `find_action`, `action_id`,
  `action_key`, `action_key_str`, `dump`), plus `key_ctrl`, `key_f`,
  `key_is_printable`, `key_to_str` and `key_from_str` for turning key
  codes into names and back.
- `sipflow.filters`: `Filters`, a set of case-insensitive display filters
  indexed by `FilterType` (SIP From, SIP To, source, destination, method,
  payload, call list line). `check_call` tells whether a call matches every
  enabled filter and caches the answer on the call's `filtered` attribute;
  `reset_calls` clears that cache. An invalid expression raises
  `FilterError` and leaves the previous filter in place.
- `sipflow.filterform`: the values behind a filter form: `FilterField`,
  `field_method`, `methods_expression`, `selected_methods`,
  `apply_method_setting`, `apply_payload_setting` and `save_options`.
- `sipflow.media`: `Media` and `MediaFormat`, the media lines of an SDP
  body and their payload formats. `Media.preferred_format` takes an
  optional mapping or function giving the names of standard formats.
- `sipflow.group`: `Message`, `Stream`, `Call` and `CallGroup`, to walk the
  messages and RTP streams of several dialogs in time order
  (`next_msg`, `prev_msg`, `next_call`, `next_stream`, `msg_number`, ...),
  optionally restricted to messages carrying SDP.
- `sipflow.stats`: `compute_stats` builds a `DialogStats` summary of call
  states (`CallState`), request methods and response classes.
  `DialogStats.render` lays it out as text.
- `sipflow.msgdiff`: `line_highlight` and `differing_lines` mark the lines
  of one message payload that are missing from another.

## Example

    from sipflow.filters import Filters, FilterType
    from sipflow.keybinding import KeyBindings, Action, key_from_str
    from sipflow.group import Call, CallGroup, Message

    filters = Filters()
    filters.set(FilterType.METHOD, "(INVITE|BYE)")
    filters.get(FilterType.METHOD)                     # '(INVITE|BYE)'
    filters.check_expr(FilterType.METHOD, "bye")       # True

    bindings = KeyBindings()
    bindings.bind(Action.TOGGLE_PAUSE, key_from_str("^P"))
    bindings.action_id("pause")                        # Action.TOGGLE_PAUSE

    call = Call(callid="a")
    first = call.add_message(Message(time=1.0))
    second = call.add_message(Message(time=2.0))
    group = CallGroup()
    group.add(call)
    group.next_msg(first) is second                    # True

## What it does not do

There is no packet capture, no SIP parsing, no command to run and no
terminal interface: callers supply calls and messages themselves and
draw the results however they like. Nothing here reads or writes
configuration files or keeps a settings store.