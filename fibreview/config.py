"""Configuration for the fibre network view."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

import yaml


def _default_groups() -> Dict[str, Dict[str, Any]]:
    return {
        "OLT": {"color": {"background": "#FFA500"}, "shape": "box"},
        "SP": {"color": {"background": "#ADD8E6"}, "shape": "ellipse"},
        "OT": {"color": {"background": "#90EE90"}, "shape": "triangle"},
        "FibreEnd": {"color": {"background": "#D3D3D3"}, "shape": "dot"},
    }


def _default_layout() -> Dict[str, Any]:
    return {
        "hierarchical": {
            "direction": "LR",
            "sortMethod": "directed",
            "shakeTowards": "roots",
            "levelSeparation": 300,
            "nodeSpacing": 22,
            "treeSpacing": 15,
            "blockShifting": False,
            "edgeMinimization": True,
            "parentCentralization": False,
        }
    }


def _default_physics() -> Dict[str, Any]:
    return {
        "enabled": True,
        "hierarchicalRepulsion": {
            "avoidOverlap": 1,
            "centralGravity": 0.0,
            "springLength": 200,
            "springConstant": 0.01,
            "nodeDistance": 150,
            "damping": 0.09,
        },
        "maxVelocity": 50,
        "minVelocity": 0.1,
        "solver": "barnesHut",
        "stabilization": {
            "enabled": True,
            "iterations": 1000,
            "updateInterval": 100,
            "onlyDynamicEdges": False,
            "fit": True,
        },
    }


def _default_interaction() -> Dict[str, Any]:
    return {"tooltipDelay": 200, "hideEdgesOnDrag": True, "hideEdgesOnZoom": True}


@dataclass
class ViewConfig:
    """Settings shared by the builder, the controller and the HTML export."""

    # Query parameter carrying the clicked device
    url_param: str = "from_device"

    # Closures with this enc_type are drawn as OLTs
    olt_enc_type: str = "5"

    # Zoom applied when focusing the device named in the start URL
    focus_scale: float = 0.15

    feeder_color: str = "#7F8C8D"
    fibre_color: str = "#3498DB"
    fibre_dashes: bool = True

    height: str = "100vh"
    width: str = "100%"

    groups: Dict[str, Dict[str, Any]] = field(default_factory=_default_groups)
    layout: Dict[str, Any] = field(default_factory=_default_layout)
    physics: Dict[str, Any] = field(default_factory=_default_physics)
    interaction: Dict[str, Any] = field(default_factory=_default_interaction)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ViewConfig":
        """Build a config from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unrecognized view config key(s): {', '.join(unknown)}. "
                f"Allowed keys are {sorted(known)}"
            )
        return cls(**data)

    def network_options(self) -> Dict[str, Any]:
        """Return the vis.js options object for the network."""
        return {
            "groups": self.groups,
            "edges": {"arrows": "to", "font": {"align": "middle", "size": 10}},
            "layout": self.layout,
            "physics": self.physics,
            "interaction": self.interaction,
        }


def load_view_config(path: Path) -> ViewConfig:
    """Load a ``ViewConfig`` from a YAML file.

    An empty file yields the defaults.

    Raises:
        ValueError: If the file does not hold a mapping or names unknown keys.
    """
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Malformed view config {path}: {exc}") from exc
    if data is None:
        return ViewConfig()
    if not isinstance(data, dict):
        raise ValueError("The view config YAML must map to a dictionary at top-level.")
    return ViewConfig.from_dict(data)


# Global configuration instance
VIEW_CONFIG = ViewConfig()
