"""Keyed node/edge collections consumed by the renderer.

`DataSet` mirrors the vis.js DataSet contract the renderer expects: items are
keyed by their ``id``, ``add`` refuses duplicates, and ``remove`` succeeds
whether or not the id is present. Subscribers receive ``(event, ids)`` after
every mutation so a renderer can redraw incrementally.

`GraphDataset` groups the node and edge collections and converts the current
view to a ``networkx.MultiDiGraph`` keyed by edge id. The command line reports
its size and connectivity from that graph.
"""

from __future__ import annotations

from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

import networkx as nx

from fibreview.logging import get_logger
from fibreview.model import Edge, Node

logger = get_logger(__name__)

T = TypeVar("T", Node, Edge)

#: Callback signature for change notifications: ``(event, ids)``.
Listener = Callable[[str, List[str]], None]


class DataSet(Generic[T]):
    """Ordered collection of items keyed by ``item.id``."""

    def __init__(self, items: Optional[List[T]] = None) -> None:
        self._items: Dict[str, T] = {}
        self._listeners: List[Listener] = []
        for item in items or []:
            self.add(item)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def ids(self) -> List[str]:
        """Return item ids in insertion order."""
        return list(self._items)

    def get(self, item_id: str) -> Optional[T]:
        """Return the item with ``item_id`` or None when absent."""
        return self._items.get(item_id)

    def add(self, item: T) -> str:
        """Insert a new item.

        Raises:
            ValueError: If an item with the same id already exists.
        """
        if item.id in self._items:
            raise ValueError(f"Item with id '{item.id}' already exists.")
        self._items[item.id] = item
        self._emit("add", [item.id])
        return item.id

    def remove(self, item_id: str) -> bool:
        """Remove ``item_id`` if present.

        Returns:
            True if an item was removed, False if the id was absent.
        """
        if self._items.pop(item_id, None) is None:
            return False
        self._emit("remove", [item_id])
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: str, ids: List[str]) -> None:
        for listener in list(self._listeners):
            listener(event, ids)


class GraphDataset:
    """Node and edge collections of the rendered view."""

    def __init__(self) -> None:
        self.nodes: DataSet[Node] = DataSet()
        self.edges: DataSet[Edge] = DataSet()

    def snapshot(self) -> Tuple[frozenset, frozenset]:
        """Return the current ``(node_ids, edge_ids)``."""
        return frozenset(self.nodes.ids()), frozenset(self.edges.ids())

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        """Return the vis.js payload ``{"nodes": [...], "edges": [...]}``."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }

    def to_networkx(self) -> nx.MultiDiGraph:
        """Convert the current view to a MultiDiGraph keyed by edge id.

        Edges whose endpoints are not present as nodes are left out, the same
        way the renderer skips them.
        """
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(
                node.id,
                label=node.label,
                kind=node.kind,
                title=node.title,
                attrs=dict(node.attrs),
            )
        for edge in self.edges:
            if edge.source not in self.nodes or edge.target not in self.nodes:
                logger.debug(f"Skipping dangling edge '{edge.id}'")
                continue
            graph.add_edge(
                edge.source, edge.target, key=edge.id, label=edge.label, kind=edge.kind
            )
        return graph

    def summary(self) -> Dict[str, int]:
        """Count drawable nodes, edges and weakly connected components."""
        graph = self.to_networkx()
        return {
            "nodes": graph.number_of_nodes(),
            "edges": graph.number_of_edges(),
            "components": nx.number_weakly_connected_components(graph),
        }
