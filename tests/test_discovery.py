import os

from xcwidget.details.discovery import discover_files


def test_single_level_only(source_root):
    found = discover_files(source_root / "widget", ".swift")
    assert [os.path.basename(f) for f in found] == ["Widget.swift", "WidgetBundle.swift"]
    assert all(os.path.isabs(f) for f in found)


def test_extension_without_dot(source_root):
    found = discover_files(source_root / "widget", "intentdefinition")
    assert [os.path.basename(f) for f in found] == ["Widget.intentdefinition"]


def test_directories_are_not_files(source_root):
    assert discover_files(source_root / "widget", ".xcassets") == []


def test_missing_directory(tmp_path):
    assert discover_files(tmp_path / "nope", ".swift") == []


def test_hidden_files_are_skipped(source_root):
    widget_dir = source_root / "widget"
    (widget_dir / "._Widget.swift").write_bytes(b"\x00\x05\x16\x07")
    (widget_dir / ".Hidden.swift").write_text("\n")
    found = discover_files(widget_dir, ".swift")
    assert [os.path.basename(f) for f in found] == ["Widget.swift", "WidgetBundle.swift"]
