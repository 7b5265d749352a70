"""Values behind the filter form: text filters and the SIP method checkboxes."""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum

from sipflow.filters import FilterError, Filters, FilterType

_METHOD_EXPR_MAX = 255


class FilterField(IntEnum):
    """Fields of the filter form, in form order."""

    SIPFROM = 0
    SIPTO = 1
    SRC = 2
    DST = 3
    PAYLOAD = 4
    REGISTER = 5
    INVITE = 6
    SUBSCRIBE = 7
    NOTIFY = 8
    INFO = 9
    KDMQ = 10
    OPTIONS = 11
    PUBLISH = 12
    MESSAGE = 13
    REFER = 14
    UPDATE = 15
    FILTER = 16
    CANCEL = 17


_TEXT_FIELDS = {
    FilterField.SIPFROM: FilterType.SIPFROM,
    FilterField.SIPTO: FilterType.SIPTO,
    FilterField.SRC: FilterType.SOURCE,
    FilterField.DST: FilterType.DESTINATION,
    FilterField.PAYLOAD: FilterType.PAYLOAD,
}

_METHOD_FIELDS = {
    FilterField.REGISTER: "REGISTER",
    FilterField.INVITE: "INVITE",
    FilterField.SUBSCRIBE: "SUBSCRIBE",
    FilterField.NOTIFY: "NOTIFY",
    FilterField.INFO: "INFO",
    FilterField.KDMQ: "KDMQ",
    FilterField.OPTIONS: "OPTIONS",
    FilterField.PUBLISH: "PUBLISH",
    FilterField.MESSAGE: "MESSAGE",
    FilterField.REFER: "REFER",
    FilterField.UPDATE: "UPDATE",
}


def field_method(field: FilterField) -> str:
    """Return the SIP method name of a method checkbox field."""
    try:
        return _METHOD_FIELDS[FilterField(field)]
    except KeyError:
        raise ValueError(f"{FilterField(field).name} is not a method field") from None


def methods_expression(value: str) -> str:
    """Turn a comma separated method list into a method filter expression.

    An empty list gives a single space, which matches no method name.
    """
    if not value:
        return " "
    return ("(" + value.replace(",", "|") + ")")[:_METHOD_EXPR_MAX]


def selected_methods(method_filter: str | None) -> tuple[FilterField, ...]:
    """Return the method fields whose name appears in ``method_filter``.

    Matching is a case-insensitive substring search, as the form uses to
    decide which checkboxes start checked.
    """
    if not method_filter:
        return ()
    lowered = method_filter.lower()
    return tuple(
        field for field, name in _METHOD_FIELDS.items() if name.lower() in lowered
    )


def apply_method_setting(filters: Filters, value: str) -> None:
    """Set the method filter from a comma separated method list."""
    filters.set(FilterType.METHOD, methods_expression(value))


def apply_payload_setting(filters: Filters, value: str | None) -> None:
    """Set the payload filter from a setting value, if there is one."""
    if value is not None:
        filters.set(FilterType.PAYLOAD, value)


def save_options(filters: Filters, values: Mapping[FilterField, str]) -> str:
    """Store the form's field values into ``filters``.

    ``values`` maps fields to their text; missing fields count as empty.
    Empty text fields remove their filter; method checkboxes holding "*"
    are joined into the method filter. Returns the comma separated list of
    selected methods. Every field is applied even when some expression is
    invalid; those keep their previous filter and a FilterError naming
    them is raised at the end.
    """
    invalid: list[str] = []
    methods: list[str] = []

    for field in FilterField:
        text = (values.get(field) or "").strip()
        if field in _TEXT_FIELDS:
            try:
                filters.set(_TEXT_FIELDS[field], text or None)
            except FilterError:
                invalid.append(field.name)
        elif field in _METHOD_FIELDS and text == "*":
            methods.append(_METHOD_FIELDS[field])

    method_list = ",".join(methods)
    apply_method_setting(filters, method_list)

    if invalid:
        raise FilterError("invalid filter expression in: " + ", ".join(invalid))
    return method_list