from typing import List, Optional

from conftest import make_config_list

from xcwidget.config import WidgetSettings
from xcwidget.xcode.classifiers import (
    find_main_app_target,
    get_build_phase,
    get_widget_targets,
    is_widget_target,
)
from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.matcher import find_widget_target
from xcwidget.xcode.model import (
    FileType,
    PBXBuildFile,
    PBXFileReference,
    PBXFrameworksBuildPhase,
    PBXNativeTarget,
    PBXSourcesBuildPhase,
    ProductType,
    Reference,
    SourceTree,
)


def add_target(
    graph: ProjectGraph,
    name: str,
    frameworks: Optional[List[str]] = None,
    product_type: ProductType = ProductType.APP_EXTENSION,
    source_tree: SourceTree = SourceTree.SDKROOT,
) -> PBXNativeTarget:
    phases = []
    if frameworks is not None:
        build_files = []
        for framework in frameworks:
            file_ref = graph.create(
                PBXFileReference,
                name=framework,
                path=f"System/Library/Frameworks/{framework}",
                sourceTree=source_tree,
                lastKnownFileType=FileType.FRAMEWORK,
            )
            build_files.append(graph.create(PBXBuildFile, fileRef=Reference(file_ref.id)))
        phases.append(
            graph.create(
                PBXFrameworksBuildPhase, files=[Reference(bf.id) for bf in build_files]
            )
        )
    target = graph.create(
        PBXNativeTarget,
        name=name,
        productName=name,
        productType=product_type,
        buildConfigurationList=Reference(make_config_list(graph).id),
        buildPhases=[Reference(p.id) for p in phases],
    )
    graph.append_reference(graph.root, "targets", target, name)
    return target


WIDGET_FRAMEWORKS = ["SwiftUI.framework", "WidgetKit.framework"]


def test_main_app_target_is_found(graph):
    target = find_main_app_target(graph)
    assert target is not None
    assert target.productType == ProductType.APPLICATION


def test_main_app_target_missing(graph):
    graph.remove_reference(graph.root, graph.root.targets[0].id)
    assert find_main_app_target(graph) is None


def test_get_build_phase(graph):
    app = find_main_app_target(graph)
    assert isinstance(get_build_phase(graph, app, PBXSourcesBuildPhase), PBXSourcesBuildPhase)


def test_widget_target_needs_both_sdk_frameworks(graph):
    assert is_widget_target(graph, add_target(graph, "W", WIDGET_FRAMEWORKS))
    assert not is_widget_target(graph, add_target(graph, "K", ["WidgetKit.framework"]))
    assert not is_widget_target(graph, add_target(graph, "S", ["SwiftUI.framework"]))


def test_widget_target_needs_extension_product_type(graph):
    target = add_target(graph, "App2", WIDGET_FRAMEWORKS, product_type=ProductType.APPLICATION)
    assert not is_widget_target(graph, target)


def test_widget_frameworks_must_come_from_sdk(graph):
    target = add_target(graph, "W", WIDGET_FRAMEWORKS, source_tree=SourceTree.GROUP)
    assert not is_widget_target(graph, target)


def test_extension_without_frameworks_phase_is_not_widget(graph):
    assert not is_widget_target(graph, add_target(graph, "Share"))


def test_get_widget_targets_keeps_project_order(graph):
    add_target(graph, "Share", ["UIKit.framework"])
    first = add_target(graph, "A", WIDGET_FRAMEWORKS)
    second = add_target(graph, "B", WIDGET_FRAMEWORKS)
    assert get_widget_targets(graph) == [first, second]


def test_matcher_prefers_product_name(graph, settings: WidgetSettings):
    add_target(graph, "OtherExtension", WIDGET_FRAMEWORKS)
    named = add_target(graph, "WidgetExtension", WIDGET_FRAMEWORKS)
    assert find_widget_target(graph, settings) is named


def test_matcher_falls_back_to_first_widget(graph, settings):
    first = add_target(graph, "OtherExtension", WIDGET_FRAMEWORKS)
    add_target(graph, "ThirdExtension", WIDGET_FRAMEWORKS)
    assert find_widget_target(graph, settings) is first


def test_matcher_ignores_non_widget_targets(graph, settings):
    add_target(graph, "WidgetExtension", ["UIKit.framework"])
    assert find_widget_target(graph, settings) is None
