"""Building blocks for inspecting SIP dialogs: filters, call groups, key bindings, media, message diffs and statistics."""

__version__ = "0.1.0"