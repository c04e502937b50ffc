"""Session wiring: load the document, build the base graph, attach a controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from fibreview.builder import build_base_graph
from fibreview.config import VIEW_CONFIG, ViewConfig
from fibreview.controller import ClickEvent, ViewController
from fibreview.dataset import GraphDataset
from fibreview.expansion import ExpansionEngine
from fibreview.logging import get_logger
from fibreview.render import render_html, write_html
from fibreview.topology import Topology, load_topology_file
from fibreview.url import ShareableUrl

logger = get_logger(__name__)


@dataclass
class FibreView:
    """One interactive view over a loaded topology.

    Attributes:
        topology: Immutable records for the session.
        dataset: Rendered nodes and edges.
        controller: Click policy and URL state.
        config: View settings.
    """

    topology: Topology
    dataset: GraphDataset
    controller: ViewController
    config: ViewConfig = field(default_factory=ViewConfig)

    @classmethod
    def from_topology(
        cls,
        topology: Topology,
        url: str = "",
        config: ViewConfig = VIEW_CONFIG,
        start: bool = True,
    ) -> FibreView:
        """Build the base graph and apply the start URL.

        Args:
            topology: Loaded records.
            url: Page URL; a ``from_device`` parameter triggers auto-expansion.
            config: View settings.
            start: Apply the URL immediately.
        """
        dataset = build_base_graph(topology, config=config)
        engine = ExpansionEngine(topology, dataset)
        controller = ViewController(engine, ShareableUrl(url), config)
        view = cls(
            topology=topology, dataset=dataset, controller=controller, config=config
        )
        if start:
            controller.start()
        return view

    @classmethod
    def from_file(
        cls, path: Path, url: str = "", config: ViewConfig = VIEW_CONFIG
    ) -> FibreView:
        """Load the document at ``path`` and build a started view.

        Raises:
            TopologyLoadError: If the document cannot be read or parsed.
        """
        return cls.from_topology(load_topology_file(path), url=url, config=config)

    @property
    def url(self) -> str:
        return self.controller.url.current

    def click(self, node_id: Optional[str]) -> None:
        """Simulate a renderer click on ``node_id`` (None for empty canvas)."""
        self.controller.handle_click(ClickEvent([node_id] if node_id else []))

    def replay(self, clicks: Iterable[str]) -> None:
        for node_id in clicks:
            self.click(node_id)

    def render_html(self) -> str:
        return render_html(self.dataset, self.config, self.controller.focus)

    def write_html(self, path: Path) -> Path:
        return write_html(self.dataset, path, self.config, self.controller.focus)
