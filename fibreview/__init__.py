"""fibreview: progressive exploration of fibre network topologies.

A topology document (splice closures, feeder cables, optical taps, fibre
cables) becomes a base graph of closures and feeders. Clicking a node reveals
the fibre branch downstream of it; clicking outside the branch replaces it.
The clicked device is mirrored in a shareable URL so a view can be reopened.

Example:
    from fibreview import FibreView, load_topology

    topology = load_topology(document_text)
    view = FibreView.from_topology(topology, url="https://maps/?from_device=C1")
    view.click("T1")
    html = view.render_html()
"""

from __future__ import annotations

from fibreview import cli, logging
from fibreview._version import __version__
from fibreview.builder import build_base_graph
from fibreview.config import VIEW_CONFIG, ViewConfig, load_view_config
from fibreview.controller import ClickEvent, FocusRequest, ViewController, ViewState
from fibreview.dataset import DataSet, GraphDataset
from fibreview.expansion import ExpansionDelta, ExpansionEngine, ExpansionState
from fibreview.model import Edge, EdgeKind, Node, NodeKind
from fibreview.session import FibreView
from fibreview.topology import (
    Topology,
    TopologyLoadError,
    load_topology,
    load_topology_file,
)
from fibreview.url import ShareableUrl

__all__ = [
    "__version__",
    "cli",
    "logging",
    "build_base_graph",
    "VIEW_CONFIG",
    "ViewConfig",
    "load_view_config",
    "ClickEvent",
    "FocusRequest",
    "ViewController",
    "ViewState",
    "DataSet",
    "GraphDataset",
    "ExpansionDelta",
    "ExpansionEngine",
    "ExpansionState",
    "Edge",
    "EdgeKind",
    "Node",
    "NodeKind",
    "FibreView",
    "Topology",
    "TopologyLoadError",
    "load_topology",
    "load_topology_file",
    "ShareableUrl",
]
