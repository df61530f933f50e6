from pathlib import Path
from typing import Union

from xcwidget.config import WidgetSettings
from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.synthesizer import SyncResult, apply_widget_changes
from xcwidget.xcode.validator import find_unreachable, validate_references


def sync_widget_target(
    graph: ProjectGraph, settings: WidgetSettings, source_root: Union[str, Path]
) -> SyncResult:
    """Create or update the widget target, then check the graph is still consistent."""
    # Stray objects already in the project are tolerated by Xcode; only new ones count
    known_orphans = {obj.id for obj in find_unreachable(graph)}

    result = apply_widget_changes(graph, settings, source_root)

    if errors := validate_references(graph):
        raise ValueError(f"Invalid project: {errors}")

    orphans = [obj for obj in find_unreachable(graph) if obj.id not in known_orphans]
    if orphans:
        names = [f"{obj.isa}({obj.id})" for obj in orphans]
        raise ValueError(f"Unreachable objects in project: {names}")

    return result
