from pathlib import Path

import pytest

from xcwidget.config import WidgetSettings
from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.model import (
    BuildSetting,
    FileType,
    PBXBuildFile,
    PBXFileReference,
    PBXFrameworksBuildPhase,
    PBXGroup,
    PBXNativeTarget,
    PBXProject,
    PBXResourcesBuildPhase,
    PBXSourcesBuildPhase,
    ProductType,
    Reference,
    SourceTree,
    XCBuildConfiguration,
    XCConfigurationList,
)


def make_config_list(graph: ProjectGraph) -> XCConfigurationList:
    configs = [
        graph.create(
            XCBuildConfiguration,
            name=name,
            buildSettings={"SDKROOT": BuildSetting(value="iphoneos")},
        )
        for name in ("Debug", "Release")
    ]
    return graph.create(
        XCConfigurationList,
        buildConfigurations=[Reference(c.id, c.name) for c in configs],
    )


def make_app_project(with_libraries: bool = True) -> ProjectGraph:
    """A project with one application target, laid out like a fresh Xcode app."""
    graph = ProjectGraph()

    app_product = graph.create(
        PBXFileReference,
        path="App.app",
        sourceTree=SourceTree.BUILT_PRODUCTS_DIR,
        explicitFileType=FileType.APP,
        includeInIndex=0,
    )
    products = graph.create(
        PBXGroup, name="Products", children=[Reference(app_product.id, "App.app")]
    )
    app_delegate = graph.create(
        PBXFileReference, path="AppDelegate.swift", lastKnownFileType=FileType.SWIFT
    )
    app_group = graph.create(
        PBXGroup, name="App", path="App", children=[Reference(app_delegate.id)]
    )
    main_children = [Reference(app_group.id, "App")]
    if with_libraries:
        libraries = graph.create(PBXGroup, name="Libraries")
        main_children.append(Reference(libraries.id, "Libraries"))
    main_children.append(Reference(products.id, "Products"))
    main = graph.create(PBXGroup, children=main_children)

    app_delegate_bf = graph.create(
        PBXBuildFile,
        fileRef=Reference(app_delegate.id, "AppDelegate.swift"),
    )
    phases = [
        graph.create(PBXSourcesBuildPhase, files=[Reference(app_delegate_bf.id)]),
        graph.create(PBXFrameworksBuildPhase),
        graph.create(PBXResourcesBuildPhase),
    ]
    app_target = graph.create(
        PBXNativeTarget,
        name="App",
        productName="App",
        productType=ProductType.APPLICATION,
        buildConfigurationList=Reference(make_config_list(graph).id),
        productReference=Reference(app_product.id, "App.app"),
        buildPhases=[Reference(p.id) for p in phases],
    )
    project = graph.create(
        PBXProject,
        buildConfigurationList=Reference(make_config_list(graph).id),
        mainGroup=Reference(main.id),
        productRefGroup=Reference(products.id, "Products"),
        targets=[Reference(app_target.id, "App")],
    )
    graph.set_root(project)
    return graph


@pytest.fixture
def graph() -> ProjectGraph:
    return make_app_project()


@pytest.fixture
def settings() -> WidgetSettings:
    return WidgetSettings(
        name="Widget",
        cwd="widget",
        bundle_id="com.example.app.widget",
        deployment_target="16.4",
        current_project_version=1,
    )


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    widget_dir = tmp_path / "widget"
    widget_dir.mkdir()
    (widget_dir / "WidgetBundle.swift").write_text("import WidgetKit\n")
    (widget_dir / "Widget.swift").write_text("import SwiftUI\n")
    (widget_dir / "Widget.intentdefinition").write_text("<plist/>\n")
    (widget_dir / "Info.plist").write_text("<plist/>\n")
    (widget_dir / "Assets.xcassets").mkdir()
    (widget_dir / "nested").mkdir()
    (widget_dir / "nested" / "Ignored.swift").write_text("\n")
    return tmp_path
