# Xcode project object graph store.
#
# Holds every node of a project keyed by its identifier and keeps a reverse
# index of references ("who points at me") in step with the forward references
# stored in node fields. All edge mutations go through this class so both
# directions stay consistent.

from dataclasses import fields
from typing import Callable, Dict, Iterator, List, Optional, Set, Type, TypeVar, Union

from xcwidget.xcode.model import (
    PBXProject,
    Reference,
    XcodeID,
    XcodeObject,
    generate_id,
)

T = TypeVar("T", bound=XcodeObject)

NodeOrID = Union[XcodeObject, XcodeID, str]


def _as_id(node: NodeOrID) -> XcodeID:
    if isinstance(node, XcodeObject):
        return node.id
    return XcodeID(node)


def iter_references(obj: XcodeObject) -> Iterator[tuple[str, Reference]]:
    """Yield (field name, reference) for every outgoing edge of obj."""
    for f in fields(obj):
        value = getattr(obj, f.name)
        if isinstance(value, Reference):
            yield f.name, value
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Reference):
                    yield f.name, item


class ProjectGraph:
    def __init__(self):
        self.objects: Dict[XcodeID, XcodeObject] = {}
        self._referrers: Dict[XcodeID, Set[XcodeID]] = {}
        # Every id handed out, including those of removed nodes
        self._issued: Set[XcodeID] = set()
        self._root: Optional[XcodeID] = None

    def __contains__(self, node: NodeOrID) -> bool:
        return _as_id(node) in self.objects

    def __len__(self) -> int:
        return len(self.objects)

    def _new_id(self, obj: XcodeObject) -> XcodeID:
        key = obj.key()
        candidate = generate_id(key)
        serial = 0
        while candidate in self._issued:
            serial += 1
            candidate = generate_id(f"{key}#{serial}")
        return candidate

    def add(self, obj: T, id: Optional[str] = None) -> T:
        """
        Insert a node into the store.

        Args:
            obj: The node to insert. Every reference it holds must already resolve.
            id: Explicit identifier, used when mirroring an existing project file.

        Returns:
            The inserted node, with its id assigned.

        Raises:
            ValueError: If the id is taken or a reference does not resolve.
        """
        if id is not None:
            node_id = XcodeID(id)
            if node_id in self.objects:
                raise ValueError(f"object with id={node_id} already exists")
        else:
            node_id = self._new_id(obj)
        for field_name, ref in iter_references(obj):
            if ref.id not in self.objects:
                raise ValueError(
                    f"{obj.isa}.{field_name} references unknown object {ref.id}"
                )
        obj.id = node_id
        self._issued.add(node_id)
        self.objects[node_id] = obj
        self._referrers.setdefault(node_id, set())
        for _, ref in iter_references(obj):
            self._referrers[ref.id].add(node_id)
        return obj

    def create(self, cls: Type[T], **props) -> T:
        return self.add(cls(**props))

    def get(self, id: str) -> XcodeObject:
        try:
            return self.objects[XcodeID(id)]
        except KeyError:
            raise KeyError(f"no object with id={id}") from None

    def resolve(self, ref: Reference[T]) -> T:
        return self.get(ref.id)  # type: ignore[return-value]

    def resolve_all(self, refs: List[Reference[T]]) -> List[T]:
        return [self.resolve(ref) for ref in refs]

    def find(self, predicate: Callable[[XcodeObject], bool]) -> Iterator[XcodeObject]:
        for obj in list(self.objects.values()):
            if predicate(obj):
                yield obj

    def objects_of_type(self, cls: Type[T]) -> List[T]:
        return [obj for obj in self.objects.values() if isinstance(obj, cls)]

    def referrers(self, node: NodeOrID) -> List[XcodeObject]:
        node_id = _as_id(node)
        if node_id not in self.objects:
            raise KeyError(f"no object with id={node_id}")
        return [self.objects[owner] for owner in sorted(self._referrers[node_id])]

    @property
    def root(self) -> PBXProject:
        if self._root is None:
            raise ValueError("project graph has no root object")
        return self.objects[self._root]  # type: ignore[return-value]

    def set_root(self, project: PBXProject) -> None:
        if self._root is not None and self._root != project.id:
            raise ValueError(f"project graph already has root object {self._root}")
        if project.id not in self.objects:
            raise ValueError("root object must be added to the graph first")
        self._root = project.id

    def _check_edge(self, owner: XcodeObject, child: XcodeObject) -> None:
        if owner.id not in self.objects:
            raise ValueError(f"{owner.isa} {owner.id} is not in the graph")
        if child.id not in self.objects:
            raise ValueError(f"{child.isa} {child.id} is not in the graph")

    def _list_field(self, owner: XcodeObject, field_name: str) -> list:
        value = getattr(owner, field_name)
        if not isinstance(value, list):
            raise ValueError(f"{owner.isa}.{field_name} is not a list field")
        return value

    def append_reference(
        self,
        owner: XcodeObject,
        field_name: str,
        child: XcodeObject,
        comment: Optional[str] = None,
    ) -> Reference:
        self._check_edge(owner, child)
        ref = Reference(child.id, comment)
        self._list_field(owner, field_name).append(ref)
        self._referrers[child.id].add(owner.id)
        return ref

    def insert_reference(
        self,
        owner: XcodeObject,
        field_name: str,
        index: int,
        child: XcodeObject,
        comment: Optional[str] = None,
    ) -> Reference:
        self._check_edge(owner, child)
        ref = Reference(child.id, comment)
        self._list_field(owner, field_name).insert(index, ref)
        self._referrers[child.id].add(owner.id)
        return ref

    def set_reference(
        self,
        owner: XcodeObject,
        field_name: str,
        child: XcodeObject,
        comment: Optional[str] = None,
    ) -> Reference:
        self._check_edge(owner, child)
        previous = getattr(owner, field_name)
        if isinstance(previous, list):
            raise ValueError(f"{owner.isa}.{field_name} is a list field")
        ref = Reference(child.id, comment)
        setattr(owner, field_name, ref)
        if isinstance(previous, Reference):
            self._forget_edge_if_gone(owner, previous.id)
        self._referrers[child.id].add(owner.id)
        return ref

    def remove_reference(self, owner: XcodeObject, child_id: str) -> None:
        """Drop every edge from owner to child_id; scalar fields become None."""
        child_id = XcodeID(child_id)
        for f in fields(owner):
            value = getattr(owner, f.name)
            if isinstance(value, Reference) and value.id == child_id:
                setattr(owner, f.name, None)
            elif isinstance(value, list):
                value[:] = [
                    item
                    for item in value
                    if not (isinstance(item, Reference) and item.id == child_id)
                ]
        if child_id in self._referrers:
            self._referrers[child_id].discard(owner.id)

    def remove_from_store(self, node: NodeOrID) -> None:
        node_id = _as_id(node)
        obj = self.get(node_id)
        if self._referrers[node_id]:
            owners = ", ".join(sorted(self._referrers[node_id]))
            raise ValueError(
                f"cannot remove {obj.isa} {node_id}, still referenced by {owners}"
            )
        if node_id == self._root:
            raise ValueError("cannot remove the project root object")
        for _, ref in iter_references(obj):
            if ref.id in self._referrers:
                self._referrers[ref.id].discard(node_id)
        del self.objects[node_id]
        del self._referrers[node_id]

    def _forget_edge_if_gone(self, owner: XcodeObject, child_id: XcodeID) -> None:
        if any(ref.id == child_id for _, ref in iter_references(owner)):
            return
        if child_id in self._referrers:
            self._referrers[child_id].discard(owner.id)
