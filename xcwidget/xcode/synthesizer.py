# Widget extension target synthesizer.
#
# Creates the widget extension target and wires it into the main application
# target on the first run. On later runs the target is recognized and only
# its configuration list is rebuilt; build phases, dependencies and groups are
# left as they are.

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from xcwidget.config import WidgetSettings
from xcwidget.details.discovery import discover_files
from xcwidget.xcode.classifiers import find_main_app_target, get_build_phase
from xcwidget.xcode.configuration import (
    create_configuration_list,
    replace_configuration_list,
)
from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.groups import (
    add_frameworks_to_display_folder,
    ensure_product_group,
    insert_before_libraries,
)
from xcwidget.xcode.matcher import find_widget_target
from xcwidget.xcode.model import (
    DstSubfolderSpec,
    FileType,
    PBXBuildFile,
    PBXContainerItemProxy,
    PBXCopyFilesBuildPhase,
    PBXFileReference,
    PBXFrameworksBuildPhase,
    PBXGroup,
    PBXNativeTarget,
    PBXResourcesBuildPhase,
    PBXSourcesBuildPhase,
    PBXTargetDependency,
    ProductType,
    ProxyType,
    Reference,
    SourceTree,
)

EMBED_EXTENSIONS_PHASE_NAME = "Embed Foundation Extensions"
ASSET_CATALOG_NAME = "Assets.xcassets"
INFO_PLIST_NAME = "Info.plist"
SDK_FRAMEWORKS_DIR = "System/Library/Frameworks"
# Marks display groups owned by this tool
GROUP_NAME_PREFIX = "xcwidget:"


@dataclass(frozen=True)
class SyncResult:
    target: PBXNativeTarget
    created: bool


def get_framework(graph: ProjectGraph, name: str) -> PBXFileReference:
    framework_name = name + ".framework"
    for entry in graph.objects_of_type(PBXFileReference):
        if (
            entry.sourceTree == SourceTree.SDKROOT
            and entry.file_type == FileType.FRAMEWORK
            and entry.display_name == framework_name
        ):
            return entry
    return graph.create(
        PBXFileReference,
        name=framework_name,
        path=f"{SDK_FRAMEWORKS_DIR}/{framework_name}",
        sourceTree=SourceTree.SDKROOT,
        lastKnownFileType=FileType.FRAMEWORK,
    )


def create_file_reference(
    graph: ProjectGraph, path: str, file_type: Optional[FileType] = None
) -> PBXFileReference:
    if file_type is None:
        file_type = FileType.from_extension(os.path.splitext(path)[1])
    return graph.create(
        PBXFileReference,
        path=os.path.basename(path),
        sourceTree=SourceTree.GROUP,
        lastKnownFileType=file_type,
    )


def create_build_file(
    graph: ProjectGraph, file_ref: PBXFileReference, **kwargs
) -> PBXBuildFile:
    return graph.create(
        PBXBuildFile,
        fileRef=Reference(file_ref.id, file_ref.display_name),
        **kwargs,
    )


def build_file_comment(build_file: PBXBuildFile, phase_name: str) -> str:
    return f"{build_file.fileRef.comment} in {phase_name}"


def build_file_refs(build_files: List[PBXBuildFile], phase_name: str) -> List[Reference]:
    return [Reference(bf.id, build_file_comment(bf, phase_name)) for bf in build_files]


def _add_build_phase(graph, target, phase_type, phase_name, build_files, **kwargs):
    phase = graph.create(
        phase_type, files=build_file_refs(build_files, phase_name), **kwargs
    )
    graph.append_reference(target, "buildPhases", phase, phase_name)
    return phase


def embed_extension(
    graph: ProjectGraph, main_target: PBXNativeTarget, product_build_file: PBXBuildFile
) -> PBXCopyFilesBuildPhase:
    # The phase may already exist, e.g. from a share extension
    for phase in graph.resolve_all(main_target.buildPhases):
        if (
            isinstance(phase, PBXCopyFilesBuildPhase)
            and phase.name == EMBED_EXTENSIONS_PHASE_NAME
        ):
            graph.append_reference(
                phase,
                "files",
                product_build_file,
                build_file_comment(product_build_file, EMBED_EXTENSIONS_PHASE_NAME),
            )
            return phase
    return _add_build_phase(
        graph,
        main_target,
        PBXCopyFilesBuildPhase,
        EMBED_EXTENSIONS_PHASE_NAME,
        [product_build_file],
        name=EMBED_EXTENSIONS_PHASE_NAME,
        dstPath="",
        dstSubfolderSpec=DstSubfolderSpec.PLUGINS,
        buildActionMask=2147483647,
        runOnlyForDeploymentPostprocessing=0,
    )


def ensure_sources_phase(
    graph: ProjectGraph, target: PBXNativeTarget
) -> PBXSourcesBuildPhase:
    phase = get_build_phase(graph, target, PBXSourcesBuildPhase)
    if phase is None:
        phase = _add_build_phase(graph, target, PBXSourcesBuildPhase, "Sources", [])
    return phase


def create_widget_target(
    graph: ProjectGraph,
    main_target: PBXNativeTarget,
    settings: WidgetSettings,
    source_root: Union[str, Path],
    frameworks: List[PBXFileReference],
) -> PBXNativeTarget:
    project = graph.root
    product_name = settings.product_name

    framework_build_files = [create_build_file(graph, f) for f in frameworks]

    # NOTE: single directory level only
    widget_dir = Path(source_root).joinpath(settings.cwd)
    swift_files = [
        create_file_reference(graph, path, FileType.SWIFT)
        for path in discover_files(widget_dir, ".swift")
    ]
    swift_build_files = [create_build_file(graph, f) for f in swift_files]
    intent_files = [
        create_file_reference(graph, path, FileType.INTENT_DEFINITION)
        for path in discover_files(widget_dir, ".intentdefinition")
    ]
    # Intent definitions are compiled by both the widget and the main app
    widget_intent_build_files = [create_build_file(graph, f) for f in intent_files]
    app_intent_build_files = [create_build_file(graph, f) for f in intent_files]

    assets = create_file_reference(graph, ASSET_CATALOG_NAME, FileType.ASSET_CATALOG)
    assets_build_file = create_build_file(graph, assets)

    product = graph.create(
        PBXFileReference,
        path=product_name + ".appex",
        sourceTree=SourceTree.BUILT_PRODUCTS_DIR,
        explicitFileType=FileType.APP_EXTENSION,
        includeInIndex=0,
    )
    product_build_file = create_build_file(
        graph, product, settings={"ATTRIBUTES": ["RemoveHeadersOnCopy"]}
    )
    graph.append_reference(
        ensure_product_group(graph), "children", product, product.display_name
    )

    config_list = create_configuration_list(graph, settings)
    target = graph.create(
        PBXNativeTarget,
        name=product_name,
        productName=product_name,
        productType=ProductType.APP_EXTENSION,
        buildConfigurationList=Reference(
            config_list.id,
            f'Build configuration list for PBXNativeTarget "{product_name}"',
        ),
        productReference=Reference(product.id, product.display_name),
    )
    graph.append_reference(project, "targets", target, product_name)

    _add_build_phase(
        graph,
        target,
        PBXSourcesBuildPhase,
        "Sources",
        swift_build_files + widget_intent_build_files,
    )
    _add_build_phase(
        graph, target, PBXFrameworksBuildPhase, "Frameworks", framework_build_files
    )
    _add_build_phase(
        graph, target, PBXResourcesBuildPhase, "Resources", [assets_build_file]
    )

    proxy = graph.create(
        PBXContainerItemProxy,
        containerPortal=Reference(project.id, "Project object"),
        proxyType=ProxyType.TARGET_DEPENDENCY,
        remoteGlobalIDString=target.id,
        remoteInfo=product_name,
    )
    dependency = graph.create(
        PBXTargetDependency,
        target=Reference(target.id, product_name),
        targetProxy=Reference(proxy.id, "PBXContainerItemProxy"),
    )
    # Only reached when no widget target existed, so this cannot duplicate
    graph.append_reference(main_target, "dependencies", dependency, "PBXTargetDependency")

    embed_extension(graph, main_target, product_build_file)

    main_sources = ensure_sources_phase(graph, main_target)
    for build_file in app_intent_build_files:
        graph.append_reference(
            main_sources, "files", build_file, build_file_comment(build_file, "Sources")
        )

    info_plist = create_file_reference(graph, INFO_PLIST_NAME, FileType.PLIST)
    children = swift_files + intent_files + [assets, info_plist]
    group = graph.create(
        PBXGroup,
        name=GROUP_NAME_PREFIX + settings.name,
        path=settings.cwd,
        sourceTree=SourceTree.GROUP,
        children=[Reference(f.id, f.display_name) for f in children],
    )
    insert_before_libraries(graph, group)

    return target


def apply_widget_changes(
    graph: ProjectGraph, settings: WidgetSettings, source_root: Union[str, Path]
) -> SyncResult:
    """
    Create or update the widget extension target in a project graph.

    Args:
        graph: The project graph, mutated in place.
        settings: Name, bundle id, deployment target, version and source directory.
        source_root: Directory that settings.cwd is relative to.

    Returns:
        The widget target and whether it was created by this call.

    Raises:
        RuntimeError: If the project has no application target.
    """
    main_target = find_main_app_target(graph)
    if main_target is None:
        raise RuntimeError("Couldn't find main application target in Xcode project.")

    existing = find_widget_target(graph, settings)

    widget_kit = get_framework(graph, "WidgetKit")
    swift_ui = get_framework(graph, "SwiftUI")
    add_frameworks_to_display_folder(graph, [widget_kit, swift_ui])

    if existing is not None:
        print(
            f'Widget "{existing.productName}" already exists, updating instead of creating a new one'
        )
        replace_configuration_list(graph, existing, settings)
        return SyncResult(target=existing, created=False)

    print(f'Creating widget "{settings.product_name}"')
    target = create_widget_target(
        graph, main_target, settings, source_root, [swift_ui, widget_kit]
    )
    return SyncResult(target=target, created=True)
