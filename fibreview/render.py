"""HTML export of the current view through pyvis (vis.js).

The exported page is a snapshot of the dataset: closures, feeder edges and the
currently expanded branch. Fibre edges are dashed and colored apart from feeder
edges. When a focus request is given, the page centers the camera on that node
after drawing.

The page does not expand or collapse branches and does not touch its own URL.
To reproduce a view elsewhere, pass its URL (``FibreView.url``, also printed
by ``fibreview expand``) to ``fibreview render --url``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pyvis.network import Network

from fibreview.config import VIEW_CONFIG, ViewConfig
from fibreview.controller import FocusRequest
from fibreview.dataset import GraphDataset
from fibreview.logging import get_logger
from fibreview.model import EdgeKind

logger = get_logger(__name__)

_FOCUS_JS = "network.focus({node_id}, {{ scale: {scale} }});\n"


def build_network(dataset: GraphDataset, config: ViewConfig = VIEW_CONFIG) -> Network:
    """Create a pyvis ``Network`` holding the dataset's nodes and edges."""
    net = Network(
        height=config.height,
        width=config.width,
        directed=True,
        notebook=False,
        cdn_resources="remote",
    )

    for node in dataset.nodes:
        group = node.kind.group
        # pyvis always sets a shape; take it from the group style
        shape = config.groups.get(group, {}).get("shape", "dot")
        net.add_node(
            node.id,
            label=node.label or node.id,
            shape=shape,
            title=node.title,
            group=group,
        )

    for edge in dataset.edges:
        if edge.source not in dataset.nodes or edge.target not in dataset.nodes:
            logger.debug(f"Edge '{edge.id}' has a missing endpoint; not drawn")
            continue
        if edge.kind == EdgeKind.FIBRE:
            net.add_edge(
                edge.source,
                edge.target,
                id=edge.id,
                label=edge.label,
                color={"color": config.fibre_color},
                dashes=config.fibre_dashes,
            )
        else:
            net.add_edge(
                edge.source,
                edge.target,
                id=edge.id,
                label=edge.label,
                color={"color": config.feeder_color},
            )

    net.set_options(json.dumps(config.network_options()))
    return net


def render_html(
    dataset: GraphDataset,
    config: ViewConfig = VIEW_CONFIG,
    focus: Optional[FocusRequest] = None,
) -> str:
    """Return a standalone HTML page for the dataset."""
    net = build_network(dataset, config)
    html = net.generate_html()

    if focus is None:
        return html
    script = _FOCUS_JS.format(node_id=json.dumps(focus.node_id), scale=focus.scale)

    # pyvis scopes the `network` variable to its drawing script
    if "drawGraph();" in html:
        html = html.replace("drawGraph();", f"drawGraph();\n{script}", 1)
    else:
        html = html.replace("</body>", f"<script>{script}</script>\n</body>", 1)
    return html


def write_html(
    dataset: GraphDataset,
    path: Path,
    config: ViewConfig = VIEW_CONFIG,
    focus: Optional[FocusRequest] = None,
) -> Path:
    """Write the HTML page for ``dataset`` to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_html(dataset, config, focus), encoding="utf-8")
    logger.info(f"View written to: {path}")
    return path
