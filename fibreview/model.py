"""Node and edge elements stored in the graph dataset."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict


class NodeKind(IntEnum):
    """Kind of a rendered node."""

    OLT = 1
    SP = 2
    OPTICAL_TAP = 3
    FIBRE_ENDPOINT = 4

    @property
    def group(self) -> str:
        """vis.js group name used for styling."""
        return _NODE_GROUPS[self]


_NODE_GROUPS = {
    NodeKind.OLT: "OLT",
    NodeKind.SP: "SP",
    NodeKind.OPTICAL_TAP: "OT",
    NodeKind.FIBRE_ENDPOINT: "FibreEnd",
}


class EdgeKind(IntEnum):
    """Kind of a rendered edge."""

    #: Permanent cable between closures, part of the base graph.
    FEEDER = 1
    #: Cable revealed by expansion, removed on collapse.
    FIBRE = 2


@dataclass(frozen=True)
class Node:
    """A node of the view.

    Attributes:
        id: Unique id across the base graph and every expansion.
        kind: Closure kind (OLT/SP) or expansion kind (tap/endpoint).
        label: Display label.
        title: Hover tooltip text.
        attrs: Source record fields as strings.
    """

    id: str
    kind: NodeKind
    label: str = ""
    title: str = ""
    attrs: Dict[str, str] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "group": self.kind.group,
            "title": self.title,
        }


@dataclass(frozen=True)
class Edge:
    """A directed edge of the view.

    Attributes:
        id: Unique edge id. Fibre edges use the fibre label.
        source: Source node id.
        target: Target node id.
        label: Display label.
        kind: Feeder or fibre.
    """

    id: str
    source: str
    target: str
    label: str = ""
    kind: EdgeKind = EdgeKind.FEEDER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "from": self.source,
            "to": self.target,
            "label": self.label,
        }
