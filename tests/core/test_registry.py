import pytest

from parambox.core import (
    DuplicateParameterError,
    Registry,
    TypeCoercionError,
    UnknownParameterError,
    ValueNotSetError,
)


def test_declare_then_get_before_set_raises_value_not_set():
    reg = Registry()
    reg.declare("a", int)

    assert reg.has_value("a") is False
    with pytest.raises(ValueNotSetError):
        reg.get_value("a")


def test_redeclare_keeps_original_kind_and_value():
    reg = Registry()
    reg.declare("a", "int")
    reg.set_value("a", "7")

    with pytest.raises(DuplicateParameterError):
        reg.declare("a", "str")

    assert reg.kind_of("a") == "int"
    assert reg.get_value("a") == 7


def test_declare_rejects_empty_name_and_unknown_kind():
    reg = Registry()
    with pytest.raises(ValueError):
        reg.declare("", "int")
    with pytest.raises(ValueError):
        reg.declare("a", "complex")
    with pytest.raises(ValueError):
        reg.declare("a", list)
    assert "a" not in reg


def test_python_types_map_to_kinds():
    reg = Registry()
    reg.declare("i", int)
    reg.declare("f", float)
    reg.declare("s", str)
    reg.declare("b", bool)

    assert [reg.kind_of(n) for n in reg] == ["int", "float", "str", "bool"]


def test_unknown_name_on_set_get_has():
    reg = Registry()
    with pytest.raises(UnknownParameterError):
        reg.set_value("x", "1")
    with pytest.raises(UnknownParameterError):
        reg.get_value("x")
    with pytest.raises(UnknownParameterError):
        reg.has_value("x")


def test_set_value_coerces_per_kind():
    reg = Registry()
    reg.declare("a", int)
    reg.declare("b", str)
    reg.declare("c", float)
    reg.declare("d", bool)

    reg.set_value("a", "  -12 ")
    reg.set_value("b", "  hello world ")
    reg.set_value("c", "1.5e3")
    reg.set_value("d", "Yes")

    assert reg.get_value("a") == -12
    assert reg.get_value("b") == "hello world"
    assert reg.get_value("c") == 1500.0
    assert reg.get_value("d") is True


def test_failed_coercion_keeps_previous_value():
    reg = Registry()
    reg.declare("c", float)
    reg.set_value("c", "2.5")

    with pytest.raises(TypeCoercionError) as excinfo:
        reg.set_value("c", "notanumber")

    assert excinfo.value.text == "notanumber"
    assert excinfo.value.kind == "float"
    assert excinfo.value.name == "c"
    assert reg.get_value("c") == 2.5


def test_last_write_wins():
    reg = Registry()
    reg.declare("a", int)
    reg.set_value("a", "1")
    reg.set_value("a", "1")
    assert reg.get_value("a") == 1
    reg.set_value("a", "2")
    assert reg.get_value("a") == 2


def test_assign_typed_value_checks_kind():
    reg = Registry()
    reg.declare("a", int)
    reg.declare("c", "f64")

    reg.assign("a", 5)
    reg.assign("c", 3)
    assert reg.get_value("a") == 5
    assert reg.get_value("c") == 3.0
    assert isinstance(reg.get_value("c"), float)

    with pytest.raises(TypeCoercionError):
        reg.assign("a", True)
    with pytest.raises(TypeCoercionError):
        reg.assign("a", "5")


def test_slot_returns_copy():
    reg = Registry()
    reg.declare("a", int)
    reg.set_value("a", "1")

    copied = reg.slot("a")
    copied.value = 99
    copied.kind = "str"

    assert reg.get_value("a") == 1
    assert reg.kind_of("a") == "int"


def test_unset_names_and_snapshot_follow_declaration_order():
    reg = Registry()
    for name in ["z", "a", "m"]:
        reg.declare(name, int)
    reg.set_value("a", "1")

    assert reg.names() == ["z", "a", "m"]
    assert reg.unset_names() == ["z", "m"]
    assert reg.snapshot() == {"a": 1}
    assert len(reg) == 3


def test_expect_value_exits_on_missing_value(caplog):
    reg = Registry()
    reg.declare("a", int)

    with pytest.raises(SystemExit) as excinfo:
        reg.expect_value("a")
    assert excinfo.value.code == 1
    assert "a" in caplog.text

    reg.set_value("a", "3")
    assert reg.expect_value("a") == 3


def test_error_count_counts_failed_operations():
    reg = Registry()
    reg.declare("a", int)
    assert reg.error_count == 0

    with pytest.raises(DuplicateParameterError):
        reg.declare("a", int)
    with pytest.raises(UnknownParameterError):
        reg.get_value("missing")
    with pytest.raises(TypeCoercionError):
        reg.set_value("a", "x")

    assert reg.error_count == 3
