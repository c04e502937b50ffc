from pathlib import Path

from fibreview.builder import build_base_graph
from fibreview.config import ViewConfig
from fibreview.controller import FocusRequest
from fibreview.model import Edge
from fibreview.render import build_network, render_html, write_html


def test_build_network_contains_nodes_and_styled_edges(branching_engine):
    branching_engine.expand("C1")

    net = build_network(branching_engine.dataset)

    assert set(net.get_nodes()) == {"C1", "C2", "C3", "T1", "T2", "E1"}
    edges = {e["label"]: e for e in net.get_edges()}
    assert edges["FB1"]["dashes"] is True
    assert edges["FB1"]["color"] == {"color": "#3498DB"}
    assert edges["F1"]["color"] == {"color": "#7F8C8D"}
    assert "dashes" not in edges["F1"]


def test_node_shape_follows_group(branching_engine):
    branching_engine.expand("C1")

    net = build_network(branching_engine.dataset)

    nodes = {n["id"]: n for n in net.nodes}
    assert nodes["C1"]["group"] == "OLT"
    assert nodes["C1"]["shape"] == "box"
    assert nodes["T1"]["shape"] == "triangle"
    assert nodes["E1"]["shape"] == "dot"


def test_dangling_edges_are_not_drawn(branching_topology):
    dataset = build_base_graph(branching_topology)
    dataset.edges.add(Edge(id="loose", source="C1", target="ghost"))

    net = build_network(dataset)

    assert len(net.get_edges()) == 2


def test_render_html_focuses_without_touching_the_url(branching_engine):
    branching_engine.expand("C1")

    html = render_html(branching_engine.dataset, focus=FocusRequest("C1", 0.15))

    assert "T1" in html
    assert 'network.focus("C1", { scale: 0.15 });' in html
    assert "history.pushState" not in html


def test_render_html_without_focus_is_plain_snapshot(branching_topology):
    dataset = build_base_graph(branching_topology)

    html = render_html(dataset, ViewConfig(url_param="device"))

    assert "C3" in html
    assert 'network.focus("C' not in html
    assert "history.pushState" not in html


def test_write_html_creates_parent_dirs(tmp_path: Path, branching_topology):
    dataset = build_base_graph(branching_topology)
    target = tmp_path / "out" / "view.html"

    assert write_html(dataset, target) == target
    assert "C2" in target.read_text(encoding="utf-8")
