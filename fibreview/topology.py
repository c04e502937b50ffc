"""Topology records and document loading.

The input document is a mapping with four sequences: ``splice_closures``,
``feeder_cables``, ``optical_tap`` and ``fibre_cables``. Each entry is parsed
into a frozen record with every optional field defaulted to an empty string, so
downstream code never probes raw dictionaries. A missing or null sequence is
treated as empty. JSON documents load through the YAML safe loader since JSON
is a YAML subset.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

import yaml

from fibreview.logging import get_logger

logger = get_logger(__name__)


class TopologyLoadError(RuntimeError):
    """Raised when the topology document cannot be read or parsed."""


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _extras(entry: Mapping[str, Any], consumed: Iterable[str]) -> Dict[str, str]:
    skip = set(consumed)
    return {str(k): _text(v) for k, v in entry.items() if k not in skip}


@dataclass(frozen=True)
class SpliceClosure:
    """A physical splice point; becomes a base graph node."""

    label: str
    enc_type: str = ""
    olt_name: str = ""
    attrs: Dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> SpliceClosure:
        return cls(
            label=_text(entry.get("label")),
            enc_type=_text(entry.get("enc_type")),
            olt_name=_text(entry.get("olt_name")),
            attrs=_extras(entry, ("label", "enc_type", "olt_name")),
        )


@dataclass(frozen=True)
class FeederCable:
    """Permanent cable between two closures."""

    source: str
    target: str
    label: str = ""

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> FeederCable:
        return cls(
            source=_text(entry.get("from")),
            target=_text(entry.get("to")),
            label=_text(entry.get("label")),
        )


@dataclass(frozen=True)
class OpticalTap:
    """Tap record used to classify expansion-created nodes."""

    label: str
    olt_name: str = ""
    attrs: Dict[str, str] = field(default_factory=dict, compare=False)

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> OpticalTap:
        return cls(
            label=_text(entry.get("label")),
            olt_name=_text(entry.get("olt_name")),
            attrs=_extras(entry, ("label", "olt_name")),
        )


@dataclass(frozen=True)
class FibreCable:
    """Directed cable revealed only by expansion."""

    source: str
    target: str
    label: str = ""

    @classmethod
    def from_entry(cls, entry: Mapping[str, Any]) -> FibreCable:
        return cls(
            source=_text(entry.get("from")),
            target=_text(entry.get("to")),
            label=_text(entry.get("label")),
        )


@dataclass(frozen=True)
class Topology:
    """Immutable record set loaded once per session.

    Attributes:
        splice_closures: Closures in document order.
        feeder_cables: Feeder cables in document order.
        optical_taps: Optical taps in document order.
        fibre_cables: Fibre cables in document order.
    """

    splice_closures: Tuple[SpliceClosure, ...] = ()
    feeder_cables: Tuple[FeederCable, ...] = ()
    optical_taps: Tuple[OpticalTap, ...] = ()
    fibre_cables: Tuple[FibreCable, ...] = ()
    _fibres_by_source: Dict[str, List[FibreCable]] = field(
        init=False, repr=False, compare=False
    )
    _taps_by_label: Dict[str, OpticalTap] = field(init=False, repr=False, compare=False)
    _closure_ids: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        fibres_by_source: Dict[str, List[FibreCable]] = defaultdict(list)
        for fibre in self.fibre_cables:
            fibres_by_source[fibre.source].append(fibre)
        taps: Dict[str, OpticalTap] = {}
        for tap in self.optical_taps:
            # First matching record wins
            taps.setdefault(tap.label, tap)
        object.__setattr__(self, "_fibres_by_source", dict(fibres_by_source))
        object.__setattr__(self, "_taps_by_label", taps)
        object.__setattr__(
            self, "_closure_ids", frozenset(c.label for c in self.splice_closures)
        )

    @property
    def closure_ids(self) -> FrozenSet[str]:
        """Labels of all splice closures, i.e. the base node ids."""
        return self._closure_ids

    def fibres_from(self, node_id: str) -> List[FibreCable]:
        """Return fibre cables leaving ``node_id`` in document order."""
        return list(self._fibres_by_source.get(node_id, ()))

    def find_tap(self, label: str) -> Optional[OpticalTap]:
        """Return the optical tap with this label, if any."""
        return self._taps_by_label.get(label)


def _records(data: Mapping[str, Any], key: str, factory: Any) -> Tuple[Any, ...]:
    section = data.get(key)
    if section is None:
        return ()
    if not isinstance(section, list):
        raise TopologyLoadError(f"'{key}' must be a list, got {type(section).__name__}")
    records = []
    for index, entry in enumerate(section):
        if not isinstance(entry, dict):
            logger.debug(f"Skipping non-mapping entry {index} in '{key}'")
            continue
        records.append(factory(entry))
    return tuple(records)


def topology_from_dict(data: Mapping[str, Any]) -> Topology:
    """Build a ``Topology`` from an already parsed document."""
    topology = Topology(
        splice_closures=_records(data, "splice_closures", SpliceClosure.from_entry),
        feeder_cables=_records(data, "feeder_cables", FeederCable.from_entry),
        optical_taps=_records(data, "optical_tap", OpticalTap.from_entry),
        fibre_cables=_records(data, "fibre_cables", FibreCable.from_entry),
    )
    logger.debug(
        f"Topology: {len(topology.splice_closures)} closures, "
        f"{len(topology.feeder_cables)} feeders, "
        f"{len(topology.optical_taps)} taps, "
        f"{len(topology.fibre_cables)} fibres"
    )
    return topology


def load_topology(text: str) -> Topology:
    """Parse a JSON or YAML document into a ``Topology``.

    Raises:
        TopologyLoadError: If the text is not well-formed or is not a mapping.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise TopologyLoadError(f"Malformed topology document: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TopologyLoadError(
            "The topology document must map to a dictionary at top-level."
        )
    return topology_from_dict(data)


def load_topology_file(path: Path) -> Topology:
    """Read and parse the topology document at ``path``.

    Raises:
        TopologyLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TopologyLoadError(f"Cannot read topology document {path}: {exc}") from exc
    logger.info(f"Loaded topology document: {path}")
    return load_topology(text)
