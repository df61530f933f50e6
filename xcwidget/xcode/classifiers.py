# Predicates that pick semantically meaningful nodes out of the generic graph.

from typing import List, Optional, Type, TypeVar

from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.model import (
    BuildPhase,
    PBXBuildFile,
    PBXFileReference,
    PBXFrameworksBuildPhase,
    PBXGroup,
    PBXNativeTarget,
    ProductType,
    SourceTree,
    XcodeObject,
)

PhaseT = TypeVar("PhaseT", bound=XcodeObject)

# Frameworks every WidgetKit extension links against
WIDGET_FRAMEWORKS = ("SwiftUI.framework", "WidgetKit.framework")


def display_name(node: XcodeObject) -> str:
    if isinstance(node, (PBXFileReference, PBXGroup)):
        return node.display_name
    return getattr(node, "name", None) or ""


def get_build_phase(
    graph: ProjectGraph, target: PBXNativeTarget, phase_type: Type[PhaseT]
) -> Optional[PhaseT]:
    for ref in target.buildPhases:
        phase = graph.resolve(ref)
        if isinstance(phase, phase_type):
            return phase
    return None


def get_native_targets(graph: ProjectGraph) -> List[PBXNativeTarget]:
    return [
        target
        for target in graph.resolve_all(graph.root.targets)
        if isinstance(target, PBXNativeTarget)
    ]


def find_main_app_target(graph: ProjectGraph) -> Optional[PBXNativeTarget]:
    for target in get_native_targets(graph):
        if target.productType == ProductType.APPLICATION:
            return target
    return None


def is_sdk_framework(file_ref: XcodeObject, name: str) -> bool:
    return (
        isinstance(file_ref, PBXFileReference)
        and file_ref.display_name == name
        and file_ref.sourceTree == SourceTree.SDKROOT
    )


def linked_files(
    graph: ProjectGraph, phase: Optional[BuildPhase]
) -> List[XcodeObject]:
    if phase is None:
        return []
    files = []
    for build_file in graph.resolve_all(phase.files):
        if isinstance(build_file, PBXBuildFile):
            files.append(graph.resolve(build_file.fileRef))
    return files


def is_widget_target(graph: ProjectGraph, target: PBXNativeTarget) -> bool:
    """
    Tell a WidgetKit extension apart from other app extensions.

    Product type alone is shared with share, today and other extensions, so
    the target must also link both SwiftUI and WidgetKit from the SDK.
    """
    if target.productType != ProductType.APP_EXTENSION:
        return False
    frameworks = linked_files(
        graph, get_build_phase(graph, target, PBXFrameworksBuildPhase)
    )
    return all(
        any(is_sdk_framework(file_ref, name) for file_ref in frameworks)
        for name in WIDGET_FRAMEWORKS
    )


def get_widget_targets(graph: ProjectGraph) -> List[PBXNativeTarget]:
    return [
        target for target in get_native_targets(graph) if is_widget_target(graph, target)
    ]
