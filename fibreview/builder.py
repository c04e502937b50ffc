"""Base graph construction from closures and feeder cables."""

from __future__ import annotations

import uuid
from typing import Optional

from fibreview.config import VIEW_CONFIG, ViewConfig
from fibreview.dataset import GraphDataset
from fibreview.logging import get_logger
from fibreview.model import Edge, EdgeKind, Node, NodeKind
from fibreview.topology import FeederCable, SpliceClosure, Topology

logger = get_logger(__name__)


def closure_node(closure: SpliceClosure, config: ViewConfig = VIEW_CONFIG) -> Node:
    """Return the base node for a splice closure."""
    kind = NodeKind.OLT if closure.enc_type == config.olt_enc_type else NodeKind.SP
    attrs = {"enc_type": closure.enc_type, "olt_name": closure.olt_name}
    attrs.update(closure.attrs)
    return Node(
        id=closure.label,
        kind=kind,
        label=closure.label,
        title=(
            "Type: Splice Closure\n"
            f"enc_type: {closure.enc_type}\n"
            f"OLT: {closure.olt_name}"
        ),
        attrs=attrs,
    )


def feeder_edge(cable: FeederCable) -> Edge:
    """Return the permanent edge for a feeder cable.

    Feeder ids are generated so they never collide with fibre labels, which
    double as fibre edge ids.
    """
    return Edge(
        id=f"feeder|{uuid.uuid4().hex}",
        source=cable.source,
        target=cable.target,
        label=cable.label,
        kind=EdgeKind.FEEDER,
    )


def build_base_graph(
    topology: Topology,
    dataset: Optional[GraphDataset] = None,
    config: ViewConfig = VIEW_CONFIG,
) -> GraphDataset:
    """Populate ``dataset`` with one node per closure and one edge per feeder.

    Args:
        topology: Loaded topology records.
        dataset: Target dataset; a new one is created when omitted.
        config: View settings (OLT classification).

    Returns:
        The populated dataset.
    """
    if dataset is None:
        dataset = GraphDataset()

    for closure in topology.splice_closures:
        if closure.label in dataset.nodes:
            logger.debug(f"Duplicate closure '{closure.label}' ignored")
            continue
        dataset.nodes.add(closure_node(closure, config))

    for cable in topology.feeder_cables:
        dataset.edges.add(feeder_edge(cable))

    logger.info(
        f"Base graph built: {len(dataset.nodes)} nodes, {len(dataset.edges)} edges"
    )
    return dataset
