"""Shared topology fixtures.

``branching_document`` describes three closures on a feeder chain with fibre
branches below them::

    C1 -FB1-> T1 -FB2-> T2 -FB3-> E1
    C2 -FB4-> T3 -FB5-> E2
    C3 -FB6-> T2

T2 (and E1 below it) is reachable from both C1 and C3. E1 and E2 have no tap
record and become fibre endpoints.
"""

from __future__ import annotations

from typing import Any, Dict

import pytest

from fibreview.builder import build_base_graph
from fibreview.expansion import ExpansionEngine
from fibreview.topology import Topology, topology_from_dict


@pytest.fixture
def branching_document() -> Dict[str, Any]:
    return {
        "splice_closures": [
            {"label": "C1", "enc_type": "5", "olt_name": "OLT-A"},
            {"label": "C2", "enc_type": "3", "olt_name": "OLT-A"},
            {"label": "C3", "enc_type": "3", "olt_name": "OLT-B"},
        ],
        "feeder_cables": [
            {"from": "C1", "to": "C2", "label": "F1"},
            {"from": "C2", "to": "C3", "label": "F2"},
        ],
        "optical_tap": [
            {"label": "T1", "olt_name": "OLT-A"},
            {"label": "T2", "olt_name": "OLT-A"},
            {"label": "T3", "olt_name": "OLT-B"},
        ],
        "fibre_cables": [
            {"from": "C1", "to": "T1", "label": "FB1"},
            {"from": "T1", "to": "T2", "label": "FB2"},
            {"from": "T2", "to": "E1", "label": "FB3"},
            {"from": "C2", "to": "T3", "label": "FB4"},
            {"from": "T3", "to": "E2", "label": "FB5"},
            {"from": "C3", "to": "T2", "label": "FB6"},
        ],
    }


@pytest.fixture
def self_loop_document() -> Dict[str, Any]:
    """Single OLT with a feeder self-loop and a fibre cycle through tap T1."""
    return {
        "splice_closures": [{"label": "C1", "enc_type": "5"}],
        "feeder_cables": [{"from": "C1", "to": "C1", "label": "F1"}],
        "fibre_cables": [
            {"from": "C1", "to": "T1", "label": "FB1"},
            {"from": "T1", "to": "C1", "label": "FB2"},
        ],
        "optical_tap": [{"label": "T1"}],
    }


@pytest.fixture
def branching_topology(branching_document) -> Topology:
    return topology_from_dict(branching_document)


@pytest.fixture
def branching_engine(branching_topology) -> ExpansionEngine:
    dataset = build_base_graph(branching_topology)
    return ExpansionEngine(branching_topology, dataset)
