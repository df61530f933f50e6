from typing import Optional

from xcwidget.config import WidgetSettings
from xcwidget.xcode.classifiers import get_widget_targets
from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.model import PBXNativeTarget


def find_widget_target(
    graph: ProjectGraph, settings: WidgetSettings
) -> Optional[PBXNativeTarget]:
    targets = get_widget_targets(graph)
    for target in targets:
        if target.productName == settings.product_name:
            return target
    # Assume a single widget extension per project when no name matches
    return targets[0] if targets else None
