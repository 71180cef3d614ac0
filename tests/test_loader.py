from __future__ import annotations

import pytest

from kvconf import DuplicateIndex, LoaderSettings, load_config, load_config_file


def test_load_config_file(tmp_path) -> None:
    path = tmp_path / "app.conf"
    path.write_text("# app\nname = MyApp\nworkers = 4\n", encoding="utf-8")

    parser = load_config_file(path)

    assert parser.processed
    assert parser.to_dict() == {"name": "MyApp", "workers": 4}


def test_load_config_preserves_crlf(tmp_path) -> None:
    path = tmp_path / "win.conf"
    path.write_bytes(b"a = on\r\nb = 2.5\r\n")

    assert load_config(path) == {"a": True, "b": 2.5}


def test_load_config_file_deferred(tmp_path) -> None:
    path = tmp_path / "app.conf"
    path.write_text("a = 1\n", encoding="utf-8")

    parser = load_config_file(path, LoaderSettings(auto_process=False))
    assert not parser.processed
    assert load_config(path, LoaderSettings(auto_process=False)) == {"a": 1}


def test_load_config_file_with_encoding(tmp_path) -> None:
    path = tmp_path / "latin.conf"
    path.write_bytes("greeting = h\xe9llo\n".encode("latin-1"))

    assert load_config(path, LoaderSettings(encoding="latin-1")) == {"greeting": "h\xe9llo"}


def test_load_config_propagates_errors(tmp_path) -> None:
    path = tmp_path / "dup.conf"
    path.write_text("a=1\na=2\n", encoding="utf-8")

    with pytest.raises(DuplicateIndex):
        load_config(path)
    with pytest.raises(OSError):
        load_config(tmp_path / "missing.conf")


def test_utf8_byte_order_mark_before_comment(tmp_path) -> None:
    path = tmp_path / "bom.conf"
    path.write_bytes("# header\r\nname = app\r\n".encode("utf-8-sig"))

    assert load_config(path) == {"name": "app"}


def test_utf8_byte_order_mark_before_assignment(tmp_path) -> None:
    path = tmp_path / "bom.conf"
    path.write_bytes("name = app\n".encode("utf-8-sig"))

    parser = load_config_file(path)
    assert list(parser) == ["name"]
    assert parser.get("name") == "app"
