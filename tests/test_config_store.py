import json
import os
from pathlib import Path

import pytest

from letsyolo.config_store import read_flat, read_object, write_flat, write_object
from letsyolo.errors import ConfigParseError, FilesystemError
from letsyolo.utils import atomic_write_text, compact_home_path


# --- JSON ---


def test_read_object_missing_file_is_empty(tmp_path: Path) -> None:
    assert read_object(tmp_path / "missing.json") == {}


def test_read_object_empty_and_blank_files_are_empty(tmp_path: Path) -> None:
    empty = tmp_path / "empty.json"
    empty.write_text("", encoding="utf-8")
    blank = tmp_path / "blank.json"
    blank.write_text("  \n", encoding="utf-8")

    assert read_object(empty) == {}
    assert read_object(blank) == {}


def test_read_object_malformed_raises(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigParseError) as exc_info:
        read_object(path)

    assert "Invalid JSON" in str(exc_info.value)
    assert str(path) in str(exc_info.value)


def test_read_object_undecodable_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_bytes(b'{"model": "\xff"}')

    with pytest.raises(ConfigParseError) as exc_info:
        read_object(path)

    assert "Invalid JSON" in str(exc_info.value)


def test_read_object_rejects_non_object_root(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ConfigParseError):
        read_object(path)


def test_write_object_uses_two_space_indent_and_trailing_newline(
    tmp_path: Path,
) -> None:
    path = tmp_path / "nested" / "settings.json"

    write_object(path, {"permissions": {"allow": ["Bash"]}})

    text = path.read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert '  "permissions": {' in text
    assert json.loads(text) == {"permissions": {"allow": ["Bash"]}}


# --- TOML ---


def test_read_flat_missing_file_is_empty(tmp_path: Path) -> None:
    assert read_flat(tmp_path / "config.toml") == {}


def test_read_flat_malformed_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text('model = "o3\n', encoding="utf-8")

    with pytest.raises(ConfigParseError) as exc_info:
        read_flat(path)

    assert "Invalid TOML" in str(exc_info.value)


def test_write_flat_keeps_tables(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        'model = "o3"\n\n[mcp_servers.docs]\ncommand = "docs-server"\n',
        encoding="utf-8",
    )

    payload = read_flat(path)
    payload["approval_policy"] = "never"
    write_flat(path, payload)

    assert read_flat(path) == {
        "model": "o3",
        "approval_policy": "never",
        "mcp_servers": {"docs": {"command": "docs-server"}},
    }


def test_read_flat_undecodable_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "config.toml"
    path.write_bytes(b'model = "\xff"\n')

    with pytest.raises(ConfigParseError) as exc_info:
        read_flat(path)

    assert "Invalid TOML" in str(exc_info.value)


# --- atomic writes ---


def test_atomic_write_leaves_no_temp_files(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"

    atomic_write_text(path, "first")
    atomic_write_text(path, "second")

    assert path.read_text(encoding="utf-8") == "second"
    assert [item.name for item in tmp_path.iterdir()] == ["out.txt"]


def test_atomic_write_failure_keeps_target_and_cleans_up(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "out.txt"
    path.write_text("original", encoding="utf-8")

    def failing_replace(src, dst) -> None:
        raise OSError("disk full")

    monkeypatch.setattr(os, "replace", failing_replace)

    with pytest.raises(FilesystemError) as exc_info:
        atomic_write_text(path, "updated")

    assert "disk full" in str(exc_info.value)
    assert path.read_text(encoding="utf-8") == "original"
    assert list(tmp_path.glob(".*.tmp")) == []
    assert [item.name for item in tmp_path.iterdir()] == ["out.txt"]


def test_atomic_write_applies_mode(tmp_path: Path) -> None:
    path = tmp_path / "secret.txt"

    atomic_write_text(path, "value", mode=0o600)

    assert path.stat().st_mode & 0o777 == 0o600


# --- compact_home_path ---


def test_compact_home_path_replaces_home_prefix(tmp_path: Path) -> None:
    assert compact_home_path(tmp_path / ".claude" / "settings.json", tmp_path) == (
        "~/.claude/settings.json"
    )
    assert compact_home_path(tmp_path, tmp_path) == "~"
    assert compact_home_path("/etc/hosts", tmp_path) == "/etc/hosts"
