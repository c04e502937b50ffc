"""Lazy expansion of fibre branches and their collapse.

`ExpansionEngine.expand` walks the fibre cables leaving a node depth-first and
inserts the reached nodes and fibre edges into the dataset, skipping ids that
are already present. Every id it touches is recorded in the owned
`ExpansionState` so `collapse` can remove exactly the expansion-produced
elements later. Closure nodes are never removed by a collapse, even when a fibre
leads back into the base graph and records one of them.

The traversal keeps a stack of fibre iterators instead of recursing, so long
fibre chains are not bounded by the interpreter recursion limit. Visit order is
the same as a recursive walk: a target is guarded on entry and its fibres are
processed before the next sibling fibre.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set

from fibreview.dataset import GraphDataset
from fibreview.logging import get_logger
from fibreview.model import Edge, EdgeKind, Node, NodeKind
from fibreview.topology import FibreCable, Topology

logger = get_logger(__name__)


@dataclass
class ExpansionState:
    """Ids of the currently rendered expansion branch.

    Attributes:
        visible_node_ids: Node ids recorded by expansion (plus the branch root).
        visible_edge_ids: Fibre edge ids recorded by expansion.
        root_node_id: Node the branch was started from, None when idle.
    """

    visible_node_ids: Set[str] = field(default_factory=set)
    visible_edge_ids: Set[str] = field(default_factory=set)
    root_node_id: Optional[str] = None

    def clear(self) -> None:
        self.visible_node_ids.clear()
        self.visible_edge_ids.clear()
        self.root_node_id = None

    def in_branch(self, node_id: str) -> bool:
        """True if ``node_id`` belongs to the active branch or is its root."""
        return node_id in self.visible_node_ids or node_id == self.root_node_id


@dataclass
class ExpansionDelta:
    """Elements inserted (or removed) by a single engine call."""

    nodes: List[str] = field(default_factory=list)
    edges: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.nodes or self.edges)


class ExpansionEngine:
    """Expands and collapses fibre branches on a ``GraphDataset``."""

    def __init__(
        self,
        topology: Topology,
        dataset: GraphDataset,
        state: Optional[ExpansionState] = None,
    ) -> None:
        self.topology = topology
        self.dataset = dataset
        self.state = state if state is not None else ExpansionState()

    def expand(
        self, node_id: str, visited: Optional[Set[str]] = None
    ) -> ExpansionDelta:
        """Reveal every fibre reachable from ``node_id``.

        Calling this again on an expanded node only records ids; nothing is
        inserted twice. Dangling fibre targets become endpoint nodes without
        children.

        Args:
            node_id: Node to expand from.
            visited: Traversal guard shared by one call chain. A node already
                in it is not expanded again.

        Returns:
            Ids of the nodes and edges inserted by this call.
        """
        if visited is None:
            visited = set()
        delta = ExpansionDelta()
        if node_id in visited:
            return delta
        visited.add(node_id)

        stack: List[Iterator[FibreCable]] = [iter(self.topology.fibres_from(node_id))]
        while stack:
            fibre = next(stack[-1], None)
            if fibre is None:
                stack.pop()
                continue
            self._reveal(fibre, delta)
            if fibre.target not in visited:
                visited.add(fibre.target)
                stack.append(iter(self.topology.fibres_from(fibre.target)))

        if delta:
            logger.debug(
                f"Expanded '{node_id}': +{len(delta.nodes)} nodes, "
                f"+{len(delta.edges)} edges"
            )
        return delta

    def _reveal(self, fibre: FibreCable, delta: ExpansionDelta) -> None:
        nodes = self.dataset.nodes
        edges = self.dataset.edges

        if nodes.get(fibre.target) is None:
            nodes.add(self._fibre_target_node(fibre.target))
            delta.nodes.append(fibre.target)
        self.state.visible_node_ids.add(fibre.target)

        if edges.get(fibre.label) is None:
            edges.add(
                Edge(
                    id=fibre.label,
                    source=fibre.source,
                    target=fibre.target,
                    label=fibre.label,
                    kind=EdgeKind.FIBRE,
                )
            )
            delta.edges.append(fibre.label)
        self.state.visible_edge_ids.add(fibre.label)

    def _fibre_target_node(self, node_id: str) -> Node:
        tap = self.topology.find_tap(node_id)
        if tap is None:
            return Node(
                id=node_id,
                kind=NodeKind.FIBRE_ENDPOINT,
                label=node_id,
                title="Fibre endpoint",
            )
        attrs = {"olt_name": tap.olt_name}
        attrs.update(tap.attrs)
        return Node(
            id=node_id,
            kind=NodeKind.OPTICAL_TAP,
            label=node_id,
            title=f"Optical Tap\nOLT: {tap.olt_name}",
            attrs=attrs,
        )

    def collapse(self) -> ExpansionDelta:
        """Remove the tracked branch from the dataset and reset the state.

        Closure nodes survive even when recorded. Ids already missing from the
        dataset are skipped.

        Returns:
            Ids actually removed from the dataset.
        """
        removed = ExpansionDelta()
        for edge_id in self.state.visible_edge_ids:
            if self.dataset.edges.remove(edge_id):
                removed.edges.append(edge_id)

        base_ids = self.topology.closure_ids
        for node_id in self.state.visible_node_ids:
            if node_id in base_ids:
                continue
            if self.dataset.nodes.remove(node_id):
                removed.nodes.append(node_id)

        previous_root = self.state.root_node_id
        self.state.clear()
        if removed:
            logger.debug(
                f"Collapsed branch of '{previous_root}': -{len(removed.nodes)} nodes, "
                f"-{len(removed.edges)} edges"
            )
        return removed
