"""Click policy and URL synchronization for the fibre view.

The controller owns a single `ExpansionEngine` and therefore a single
`ExpansionState`. A click inside the active branch (a visible node or the
branch root) grows the branch from that node. A click anywhere else collapses
the branch and starts a new one rooted at the clicked node. Every node click
writes the node id to the shareable URL; clicks on empty canvas do nothing.

On start, a device named by the URL is expanded without a prior collapse and a
focus request is recorded for the renderer.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Generator, List, Optional, Union

from fibreview.config import VIEW_CONFIG, ViewConfig
from fibreview.expansion import ExpansionDelta, ExpansionEngine, ExpansionState
from fibreview.logging import get_logger
from fibreview.url import ShareableUrl

logger = get_logger(__name__)


class ViewState(IntEnum):
    """Controller state."""

    IDLE = 1
    BRANCH_ACTIVE = 2


@dataclass
class ClickEvent:
    """Click emitted by the renderer; ``nodes`` is empty on canvas clicks."""

    nodes: List[str] = field(default_factory=list)

    @property
    def node_id(self) -> Optional[str]:
        return self.nodes[0] if self.nodes else None


@dataclass(frozen=True)
class FocusRequest:
    """Camera focus the renderer should apply once."""

    node_id: str
    scale: float


class ViewController:
    """Decides what each click reveals and keeps the URL in sync.

    Attributes:
        engine: Expansion engine owning the branch state.
        url: Shareable URL updated on every node click.
        focus: Focus request issued by ``start``, if any.
        busy_listeners: Callables notified with True before and False after
            each expansion sequence.
    """

    def __init__(
        self,
        engine: ExpansionEngine,
        url: Optional[ShareableUrl] = None,
        config: ViewConfig = VIEW_CONFIG,
    ) -> None:
        self.engine = engine
        self.url = url if url is not None else ShareableUrl()
        self.config = config
        self.focus: Optional[FocusRequest] = None
        self.busy_listeners: List[Callable[[bool], None]] = []

    @property
    def expansion(self) -> ExpansionState:
        return self.engine.state

    @property
    def state(self) -> ViewState:
        if self.expansion.root_node_id is None:
            return ViewState.IDLE
        return ViewState.BRANCH_ACTIVE

    def start(self, url: Optional[str] = None) -> Optional[str]:
        """Apply the start URL once.

        Args:
            url: Page URL; when omitted the controller's current URL is used.

        Returns:
            The auto-expanded device id, or None if the controller stays idle.
        """
        if url is not None:
            self.url = ShareableUrl(url)
        device = self.url.get_param(self.config.url_param)
        if not device or self.engine.dataset.nodes.get(device) is None:
            if device:
                logger.info(f"Start device '{device}' not in graph; staying idle")
            return None

        with self._busy():
            self.engine.expand(device)
        self._set_root(device)
        self.focus = FocusRequest(device, self.config.focus_scale)
        logger.info(f"Auto-expanded from {device}")
        return device

    def handle_click(
        self, event: Union[ClickEvent, str, None]
    ) -> Optional[ExpansionDelta]:
        """Apply the click policy.

        Args:
            event: A ``ClickEvent``, a bare node id, or None for canvas clicks.

        Returns:
            Nodes and edges inserted by the click, or None for canvas clicks.
        """
        node_id = event.node_id if isinstance(event, ClickEvent) else event
        if not node_id:
            return None

        logger.debug(f"Clicked node: {node_id}")
        self.url.push_state(self.config.url_param, node_id)

        if self.expansion.in_branch(node_id):
            with self._busy():
                return self.engine.expand(node_id)

        with self._busy():
            self.engine.collapse()
            delta = self.engine.expand(node_id)
        self._set_root(node_id)
        logger.info(f"Expanded branch from {node_id}")
        return delta

    def _set_root(self, node_id: str) -> None:
        self.expansion.root_node_id = node_id
        self.expansion.visible_node_ids.add(node_id)

    @contextmanager
    def _busy(self) -> Generator[None, None, None]:
        """Notify busy listeners around an expansion sequence."""
        for listener in self.busy_listeners:
            listener(True)
        try:
            yield
        finally:
            for listener in self.busy_listeners:
                listener(False)
