from xcwidget.xcode.formatter import format_project, format_value, quote_string
from xcwidget.xcode.model import BuildSetting, Reference, SourceTree, XcodeID, YesNo
from xcwidget.xcode.synthesizer import apply_widget_changes


def test_project_layout(graph, settings, source_root):
    target = apply_widget_changes(graph, settings, source_root).target
    text = format_project(graph)

    assert text.startswith("// !$*UTF8*$!\n{\n")
    assert f"rootObject = {graph.root.id} /* Project object */;" in text
    assert "/* Begin PBXNativeTarget section */" in text
    assert "/* End PBXNativeTarget section */" in text
    assert f"{target.id} /* WidgetExtension */ = {{" in text
    assert 'name = "Embed Foundation Extensions";' in text
    assert "dstSubfolderSpec = 13;" in text
    assert 'productType = "com.apple.product-type.app-extension";' in text
    assert "/* WidgetExtension.appex in Embed Foundation Extensions */" in text


def test_sections_are_sorted(graph):
    text = format_project(graph)
    begins = [line for line in text.splitlines() if line.startswith("/* Begin ")]
    assert begins == sorted(begins)


def test_format_value():
    assert format_value(Reference(XcodeID("ABC"), "Info.plist"), 0) == "ABC /* Info.plist */"
    assert format_value(SourceTree.GROUP, 0) == '"<group>"'
    assert format_value(BuildSetting(value=YesNo.YES), 0) == "YES"
    assert format_value(13, 0) == "13"
    assert format_value(["a", "b c"], 0) == '(\n\ta,\n\t"b c",\n)'
    assert format_value([], 1) == "(\n\t)"


def test_quote_string():
    assert quote_string("Info.plist") == "Info.plist"
    assert quote_string("") == '""'
    assert quote_string('say "hi"') == '"say \\"hi\\""'
    assert quote_string("$(TARGET_NAME)") == '"$(TARGET_NAME)"'
