from pathlib import Path

import pytest

from parambox.core import LoadError, Registry, load_file
from parambox.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


@pytest.fixture(autouse=True)
def _isolate_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def _declared() -> Registry:
    reg = Registry()
    reg.declare("a", "i32")
    reg.declare("b", str)
    reg.declare("c", "f64")
    reg.declare("d", str)
    return reg


def test_load_file(tmp_path: Path):
    path = tmp_path / "params.txt"
    path.write_text("# parameters\na 1\nb hello\n\nc 3\n", encoding="utf-8")

    reg = _declared()
    load_file(reg, path)

    assert reg.snapshot() == {"a": 1, "b": "hello", "c": 3.0}
    assert reg.unset_names() == ["d"]


def test_load_file_missing_raises_os_error(tmp_path: Path):
    reg = _declared()
    with pytest.raises(FileNotFoundError):
        load_file(reg, tmp_path / "missing.txt")
    assert reg.error_count == 0


def test_load_file_reports_path_and_line(tmp_path: Path):
    path = tmp_path / "params.txt"
    path.write_text("a 1\nc x\n", encoding="utf-8")

    reg = _declared()
    with pytest.raises(LoadError) as excinfo:
        load_file(reg, path)

    assert excinfo.value.line_number == 2
    assert excinfo.value.source == str(path)
    assert reg.get("a") == 1


def test_load_file_uses_configured_duplicate_policy(tmp_path: Path):
    cfg = tmp_path / ".parambox" / "config.yaml"
    cfg.parent.mkdir(parents=True, exist_ok=True)
    cfg.write_text("loader:\n  reject_duplicate_keys: true\n", encoding="utf-8")

    path = tmp_path / "params.txt"
    path.write_text("a 1\na 2\n", encoding="utf-8")

    reg = _declared()
    with pytest.raises(LoadError):
        load_file(reg, path)
    assert reg.get("a") == 1

    load_file(reg, path, reject_duplicates=False)
    assert reg.get("a") == 2


def test_load_file_honours_encoding(tmp_path: Path):
    path = tmp_path / "params.txt"
    path.write_bytes("b こんにちは\n".encode("cp932"))

    reg = _declared()
    load_file(reg, path, encoding="cp932")
    assert reg.get("b") == "こんにちは"


def test_load_file_splits_on_newlines_only(tmp_path: Path):
    path = tmp_path / "params.txt"
    path.write_text("b hello\x0cworld\nd x y\nc 1\n", encoding="utf-8")

    reg = _declared()
    load_file(reg, path)

    assert reg.get("b") == "hello\x0cworld"
    assert reg.get("d") == "x y"
    assert reg.get("c") == 1.0


def test_load_file_line_numbers_ignore_form_feed(tmp_path: Path):
    path = tmp_path / "params.txt"
    path.write_text("b a\x0cb\r\nc x\r\n", encoding="utf-8")

    reg = _declared()
    with pytest.raises(LoadError) as excinfo:
        load_file(reg, path)

    assert excinfo.value.line_number == 2
    assert reg.get("b") == "a\x0cb"
