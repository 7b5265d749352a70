import pytest

from sipflow.filterform import (
    FilterField,
    apply_method_setting,
    apply_payload_setting,
    field_method,
    methods_expression,
    save_options,
    selected_methods,
)
from sipflow.filters import FilterError, Filters, FilterType


def test_field_method_names():
    assert field_method(FilterField.KDMQ) == "KDMQ"
    assert field_method(FilterField.REGISTER) == "REGISTER"
    assert field_method(FilterField.UPDATE) == "UPDATE"


@pytest.mark.parametrize("field", [FilterField.SIPFROM, FilterField.PAYLOAD, FilterField.CANCEL])
def test_field_method_rejects_non_method_fields(field):
    with pytest.raises(ValueError):
        field_method(field)


def test_methods_expression_joins_with_pipes():
    assert methods_expression("INVITE,REGISTER") == "(INVITE|REGISTER)"
    assert methods_expression("BYE") == "(BYE)"


def test_methods_expression_empty_is_space():
    assert methods_expression("") == " "


def test_selected_methods_case_insensitive():
    result = selected_methods("(invite|Notify)")
    assert result == (FilterField.INVITE, FilterField.NOTIFY)


def test_selected_methods_empty():
    assert selected_methods(None) == ()
    assert selected_methods(" ") == ()


def test_apply_method_setting_sets_filter():
    filters = Filters()
    apply_method_setting(filters, "INVITE,BYE")
    assert filters.get(FilterType.METHOD) == "(INVITE|BYE)"
    assert filters.check_expr(FilterType.METHOD, "BYE")
    assert not filters.check_expr(FilterType.METHOD, "OPTIONS")


def test_apply_method_setting_empty_matches_nothing():
    filters = Filters()
    apply_method_setting(filters, "")
    assert filters.get(FilterType.METHOD) == " "
    assert not filters.check_expr(FilterType.METHOD, "INVITE")


def test_apply_payload_setting():
    filters = Filters()
    apply_payload_setting(filters, None)
    assert filters.get(FilterType.PAYLOAD) is None
    apply_payload_setting(filters, "m=audio")
    assert filters.get(FilterType.PAYLOAD) == "m=audio"


def test_save_options_sets_text_and_methods():
    filters = Filters()
    values = {
        FilterField.SIPFROM: "  alice  ",
        FilterField.DST: "10.0.0.1",
        FilterField.INVITE: "*",
        FilterField.REGISTER: "*",
        FilterField.NOTIFY: " ",
    }
    methods = save_options(filters, values)
    assert methods == "REGISTER,INVITE"
    assert filters.get(FilterType.SIPFROM) == "alice"
    assert filters.get(FilterType.DESTINATION) == "10.0.0.1"
    assert filters.get(FilterType.SIPTO) is None
    assert filters.get(FilterType.METHOD) == "(REGISTER|INVITE)"
    assert selected_methods(filters.get(FilterType.METHOD)) == (
        FilterField.REGISTER,
        FilterField.INVITE,
    )


def test_save_options_clears_emptied_fields():
    filters = Filters()
    filters.set(FilterType.SIPTO, "bob")
    save_options(filters, {FilterField.SIPTO: "   "})
    assert filters.get(FilterType.SIPTO) is None


def test_save_options_invalid_expression_keeps_previous_and_applies_rest():
    filters = Filters()
    filters.set(FilterType.SOURCE, "old")
    with pytest.raises(FilterError):
        save_options(
            filters,
            {FilterField.SRC: "(unclosed", FilterField.SIPTO: "bob", FilterField.BYE if False else FilterField.INFO: "*"},
        )
    assert filters.get(FilterType.SOURCE) == "old"
    assert filters.get(FilterType.SIPTO) == "bob"
    assert filters.get(FilterType.METHOD) == "(INFO)"