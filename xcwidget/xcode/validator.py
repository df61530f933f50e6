from typing import Any, List, Set

from xcwidget.xcode.graph import ProjectGraph, iter_references
from xcwidget.xcode.model import (
    BuildSetting,
    DstSubfolderSpec,
    FileType,
    ProductType,
    ProxyType,
    Reference,
    SourceTree,
    XcodeID,
    XcodeObject,
    YesNo,
)
from dataclasses import fields


def validate_references(graph: ProjectGraph) -> List[str]:
    errors = []

    def check_references(obj: Any, context: str):
        if isinstance(obj, Reference):
            if obj.id not in graph:
                errors.append(f"Invalid reference in {context}: {obj.id}")
        elif isinstance(obj, list):
            for index, item in enumerate(obj):
                check_references(item, f"{context}[{index}]")
        elif isinstance(obj, dict):
            for key, value in obj.items():
                check_references(value, f"{context}.{key}")
        elif isinstance(obj, BuildSetting):
            pass
        elif isinstance(obj, XcodeObject):
            for field in fields(obj):
                check_references(getattr(obj, field.name), f"{context}.{field.name}")
        elif isinstance(
            obj,
            (
                str,
                int,
                float,
                XcodeID,
                SourceTree,
                FileType,
                ProductType,
                DstSubfolderSpec,
                YesNo,
                ProxyType,
                type(None),
            ),
        ):
            pass  # These are valid types and do not need further checking
        else:
            errors.append(f"Unknown type in {context}: {type(obj).__name__}")

    for object_id, obj in graph.objects.items():
        check_references(obj, f"{obj.isa}({object_id})")

    return errors


def find_unreachable(graph: ProjectGraph) -> List[XcodeObject]:
    """Nodes that cannot be reached from the project root by following references."""
    reachable: Set[XcodeID] = set()
    pending = [graph.root.id]
    while pending:
        node_id = pending.pop()
        if node_id in reachable or node_id not in graph:
            continue
        reachable.add(node_id)
        pending.extend(ref.id for _, ref in iter_references(graph.get(node_id)))
    return [obj for object_id, obj in graph.objects.items() if object_id not in reachable]
