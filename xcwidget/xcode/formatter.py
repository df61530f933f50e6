"""
Xcode project file formatter.

This module converts a ProjectGraph into the text form of an Xcode project
file (.pbxproj). Objects are written grouped by isa in sections, the way
Xcode itself writes them, so that the output diffs cleanly against a file
saved by Xcode.
"""

import dataclasses
import enum
from typing import Dict, List, Union

from xcwidget.xcode.classifiers import display_name
from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.model import (
    BuildSetting,
    PBXBuildFile,
    Reference,
    XcodeID,
    XcodeObject,
)


FormattableValue = Union[None, Reference, dict, list, enum.Enum, int, float, bool, str, XcodeID]


def format_project(graph: ProjectGraph) -> str:
    """
    Convert a project graph to its string representation.

    Args:
        graph: The graph to format. It must have a root object.

    Returns:
        A string containing the formatted Xcode project file content.
    """
    root = graph.root
    result = "// !$*UTF8*$!\n"
    result += "{\n"
    result += "\tarchiveVersion = 1;\n"
    result += "\tclasses = {\n\t};\n"
    result += "\tobjectVersion = 56;\n"
    result += "\tobjects = {\n"
    result += format_objects(graph)
    result += "\t};\n"
    result += f"\trootObject = {root.id} /* Project object */;\n"
    result += "}\n"
    return result


def format_objects(graph: ProjectGraph) -> str:
    """
    Format every object of the graph, one section per isa.

    Args:
        graph: The graph holding the objects.

    Returns:
        The body of the objects dictionary.
    """
    sections: Dict[str, List[XcodeObject]] = {}
    for obj in graph.objects.values():
        sections.setdefault(obj.isa, []).append(obj)

    result = ""
    for isa in sorted(sections):
        result += f"\n/* Begin {isa} section */\n"
        for obj in sorted(sections[isa], key=lambda o: o.id):
            result += f"\t\t{object_label(graph, obj)} = {format_object(obj, 2)};\n"
        result += f"/* End {isa} section */\n"
    return result


def object_label(graph: ProjectGraph, obj: XcodeObject) -> str:
    if obj.id == graph.root.id:
        return f"{obj.id} /* Project object */"
    if isinstance(obj, PBXBuildFile):
        name = obj.fileRef.comment
    else:
        name = display_name(obj)
    if name:
        return f"{obj.id} /* {name} */"
    return f"{obj.id} /* {obj.isa} */"


def format_object(obj: XcodeObject, indent_level: int) -> str:
    props: Dict[str, FormattableValue] = {"isa": obj.isa}
    for field in dataclasses.fields(obj):
        value = getattr(obj, field.name)
        # Skip id field and None values
        if field.name == "id" or value is None:
            continue
        props[field.name] = value
    return format_dict(props, indent_level)


def format_value(value: FormattableValue, indent_level: int) -> str:
    """
    Format a value based on its type.

    Args:
        value: The value to format.
        indent_level: The current indentation level.

    Returns:
        A string representing the formatted value.
    """
    if value is None:
        return "(null)"

    # References contain IDs that should not be quoted
    elif isinstance(value, Reference):
        if value.comment:
            return f"{value.id} /* {value.comment} */"
        return value.id

    elif isinstance(value, XcodeID):
        return value

    elif isinstance(value, BuildSetting):
        return format_value(value.value, indent_level)

    elif isinstance(value, enum.Enum):
        return format_value(value.value, indent_level)

    elif isinstance(value, list):
        return format_list(value, indent_level)

    elif isinstance(value, dict):
        return format_dict(value, indent_level)

    # Xcode represents booleans as 0/1
    elif isinstance(value, bool):
        return "1" if value else "0"

    elif isinstance(value, (int, float)):
        return str(value)

    elif isinstance(value, str):
        return quote_string(value)

    else:
        raise TypeError(f"Unsupported type: {type(value).__name__} for value: {value}")


def quote_string(value: str) -> str:
    # Plain identifiers are written bare, like Xcode does
    if value and all(c.isalnum() or c in "._/" for c in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_dict(value_dict: Dict[str, FormattableValue], indent_level: int) -> str:
    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)

    # Empty dictionaries should have braces on separate lines for Xcode compatibility
    if not value_dict:
        return "{\n" + indent + "}"

    result = "{\n"
    # isa first, then the remaining keys sorted for consistent output
    keys = sorted(value_dict.keys(), key=lambda k: (k != "isa", k))
    for key in keys:
        value = value_dict[key]
        if value is None:
            continue
        result += f"{inner_indent}{key} = {format_value(value, indent_level + 1)};\n"
    result += f"{indent}}}"
    return result


def format_list(value_list: List[FormattableValue], indent_level: int) -> str:
    if not value_list:
        return "(\n" + "\t" * indent_level + ")"

    indent = "\t" * indent_level
    inner_indent = "\t" * (indent_level + 1)

    result = "(\n"
    for item in value_list:
        result += f"{inner_indent}{format_value(item, indent_level + 1)},\n"
    result += f"{indent})"
    return result
