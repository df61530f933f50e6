# Placement of files and groups in the project navigator hierarchy.
#
# Groups are display-only: nothing here changes what gets built.

from typing import List, Optional

from xcwidget.xcode.classifiers import display_name
from xcwidget.xcode.graph import ProjectGraph
from xcwidget.xcode.model import PBXFileReference, PBXGroup, SourceTree

FRAMEWORKS_GROUP_NAME = "Frameworks"
LIBRARIES_GROUP_NAME = "Libraries"
PRODUCTS_GROUP_NAME = "Products"


def main_group(graph: ProjectGraph) -> PBXGroup:
    return graph.resolve(graph.root.mainGroup)


def find_child_group(
    graph: ProjectGraph, parent: PBXGroup, name: str
) -> Optional[PBXGroup]:
    for child in graph.resolve_all(parent.children):
        if isinstance(child, PBXGroup) and child.display_name == name:
            return child
    return None


def ensure_frameworks_group(graph: ProjectGraph) -> PBXGroup:
    parent = main_group(graph)
    group = find_child_group(graph, parent, FRAMEWORKS_GROUP_NAME)
    if group is None:
        group = graph.create(
            PBXGroup, name=FRAMEWORKS_GROUP_NAME, sourceTree=SourceTree.GROUP
        )
        graph.append_reference(parent, "children", group, FRAMEWORKS_GROUP_NAME)
    return group


def add_frameworks_to_display_folder(
    graph: ProjectGraph, frameworks: List[PBXFileReference]
) -> None:
    group = ensure_frameworks_group(graph)
    for framework in frameworks:
        present = {display_name(child) for child in graph.resolve_all(group.children)}
        if framework.display_name not in present:
            graph.append_reference(
                group, "children", framework, framework.display_name
            )


def ensure_product_group(graph: ProjectGraph) -> PBXGroup:
    project = graph.root
    if project.productRefGroup is not None:
        return graph.resolve(project.productRefGroup)
    parent = main_group(graph)
    group = find_child_group(graph, parent, PRODUCTS_GROUP_NAME)
    if group is None:
        group = graph.create(
            PBXGroup, name=PRODUCTS_GROUP_NAME, sourceTree=SourceTree.GROUP
        )
        graph.append_reference(parent, "children", group, PRODUCTS_GROUP_NAME)
    graph.set_reference(project, "productRefGroup", group, PRODUCTS_GROUP_NAME)
    return group


def insert_before_libraries(graph: ProjectGraph, group: PBXGroup) -> int:
    """Insert group into the main group ahead of "Libraries", else first. Returns the index."""
    parent = main_group(graph)
    index = 0
    for i, child in enumerate(graph.resolve_all(parent.children)):
        if display_name(child) == LIBRARIES_GROUP_NAME:
            index = i
            break
    graph.insert_reference(parent, "children", index, group, group.display_name)
    return index
