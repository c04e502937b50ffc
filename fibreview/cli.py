"""Command-line interface for fibreview."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from fibreview.builder import build_base_graph
from fibreview.config import VIEW_CONFIG, ViewConfig, load_view_config
from fibreview.logging import configure_cli_logging, get_logger
from fibreview.session import FibreView
from fibreview.topology import TopologyLoadError, load_topology_file
from fibreview.url import ShareableUrl

logger = get_logger(__name__)


def _format_table(headers: List[str], rows: List[List[Any]], min_width: int = 6) -> str:
    """Format rows as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows

    Returns:
        Formatted table string, empty when there are no rows.
    """
    if not rows:
        return ""

    all_data = [headers] + [[str(item) for item in row] for row in rows]
    col_widths = [
        max(max(len(row[i]) for row in all_data), min_width)
        for i in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(all_data[0])]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in all_data[1:]:
        lines.append(format_row(row))
    return "\n".join(lines)


def _load_config(path: Optional[Path]) -> ViewConfig:
    if path is None:
        return VIEW_CONFIG
    config = load_view_config(path)
    logger.info(f"View config loaded from: {path}")
    return config


def _print_view(view: FibreView) -> None:
    state = view.controller.expansion
    print(f"State: {view.controller.state.name}")
    print(f"Root: {state.root_node_id or '-'}")

    rows = []
    for node_id in sorted(state.visible_node_ids):
        node = view.dataset.nodes.get(node_id)
        if node is not None:
            rows.append([node.id, node.kind.group, node.label])
    print(f"\nVisible nodes ({len(rows)}):")
    table = _format_table(["Id", "Group", "Label"], rows)
    if table:
        print(table)

    rows = []
    for edge_id in sorted(state.visible_edge_ids):
        edge = view.dataset.edges.get(edge_id)
        if edge is not None:
            rows.append([edge.id, edge.source, edge.target])
    print(f"\nVisible edges ({len(rows)}):")
    table = _format_table(["Id", "From", "To"], rows)
    if table:
        print(table)

    print(f"\nURL: {view.url}")


def _view_payload(view: FibreView) -> Dict[str, Any]:
    state = view.controller.expansion
    return {
        "state": view.controller.state.name,
        "root": state.root_node_id,
        "visible_nodes": sorted(state.visible_node_ids),
        "visible_edges": sorted(state.visible_edge_ids),
        "url": view.url,
        "graph": view.dataset.summary(),
        "dataset": view.dataset.to_dict(),
    }


def _inspect(path: Path, config: ViewConfig) -> None:
    logger.info(f"Inspecting topology from: {path}")
    topology = load_topology_file(path)
    dataset = build_base_graph(topology, config=config)

    rows = [
        ["Splice closures", len(topology.splice_closures)],
        ["Feeder cables", len(topology.feeder_cables)],
        ["Optical taps", len(topology.optical_taps)],
        ["Fibre cables", len(topology.fibre_cables)],
        ["Base nodes", len(dataset.nodes)],
        ["Base edges", len(dataset.edges)],
        ["Base components", dataset.summary()["components"]],
    ]
    print(_format_table(["Item", "Count"], rows))


def _start_url(
    url: Optional[str], from_device: Optional[str], config: ViewConfig
) -> str:
    if from_device is None:
        return url or ""
    return ShareableUrl(url or "").with_param(config.url_param, from_device)


def _expand(
    path: Path,
    config: ViewConfig,
    url: Optional[str],
    from_device: Optional[str],
    clicks: List[str],
) -> FibreView:
    start_url = _start_url(url, from_device, config)
    view = FibreView.from_file(path, url=start_url, config=config)
    view.replay(clicks)
    return view


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``fibreview`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="fibreview",
        description="Explore fibre network topologies branch by branch.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="YAML file with view settings"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{inspect,expand,render}",
        help="Available commands",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Summarize a topology document"
    )
    inspect_parser.add_argument(
        "document", type=Path, help="Path to JSON/YAML document"
    )

    expand_parser = subparsers.add_parser(
        "expand", help="Expand a branch and list what becomes visible"
    )
    render_parser = subparsers.add_parser(
        "render", help="Export the expanded view as an HTML page"
    )
    for p in (expand_parser, render_parser):
        p.add_argument("document", type=Path, help="Path to JSON/YAML document")
        p.add_argument(
            "--url",
            default=None,
            help="Start URL; its from_device parameter is applied",
        )
        p.add_argument(
            "--from-device", default=None, help="Device to auto-expand on start"
        )
        p.add_argument(
            "--click",
            action="append",
            default=[],
            metavar="NODE",
            help="Node click to replay after start (repeatable)",
        )
    expand_parser.add_argument(
        "--json", action="store_true", help="Print the view as JSON instead of tables"
    )
    render_parser.add_argument(
        "--output", "-o", type=Path, required=True, help="HTML file to write"
    )

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    configure_cli_logging(verbose=args.verbose, quiet=args.quiet)
    logger.debug("Debug logging enabled")

    try:
        config = _load_config(args.config)
        if args.command == "inspect":
            _inspect(args.document, config)
        elif args.command == "expand":
            view = _expand(
                args.document, config, args.url, args.from_device, args.click
            )
            if args.json:
                print(json.dumps(_view_payload(view), indent=2))
            else:
                _print_view(view)
        elif args.command == "render":
            view = _expand(
                args.document, config, args.url, args.from_device, args.click
            )
            view.write_html(args.output)
    except TopologyLoadError as e:
        logger.error(f"Failed to load topology: {e}")
        sys.exit(1)
    except (OSError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
