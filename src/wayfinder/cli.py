"""Command Line Interface for the wayfinder route planner.

This module provides a CLI for running shortest path searches over graphs
described in JSON. It supports the following commands:
    - route: Find the shortest path between two named nodes
    - info: Display the nodes and edges of a graph definition

JSON input can be provided either as a direct string or as a file path prefixed with '@'.
File paths may be absolute or relative to the current directory.

Example Usage:
    python -m wayfinder cli route @data/city.json A D
    python -m wayfinder cli route @data/city.json A D --modality bike --penalty 0.5
    python -m wayfinder cli info @data/city.json
"""

import argparse
import json
import logging
import os
from typing import List, Optional

from wayfinder.core.exceptions import (
    ConfigurationError,
    DuplicateResourceError,
    NodeNotFoundError,
)
from wayfinder.core.graph import Graph, build_graph
from wayfinder.core.paths import (
    DefaultRelaxer,
    EuclideanWeightCalculator,
    PathFinding,
    PenaltyRelaxer,
    StoredWeightCalculator,
)

logger = logging.getLogger(__name__)


def parse_json_input(json_str: str) -> dict:
    """Parse JSON input from either a string or file.

    Args:
        json_str (str): Either a JSON string or a file path prefixed with '@'.

    Returns:
        dict: Parsed JSON data.

    Raises:
        ConfigurationError: If the JSON is invalid or the specified file is not found.
    """
    if json_str.startswith("@"):
        file_path = json_str[1:]
        if not os.path.isabs(file_path):
            file_path = os.path.join(os.getcwd(), file_path)

        if not os.path.exists(file_path):
            raise ConfigurationError(f"File not found: {file_path}")

        with open(file_path, "r") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {file_path}: {e}")

    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON input: {e}")


def route(
    graph: Graph,
    points: dict,
    origin: str,
    destination: str,
    modality: Optional[str] = None,
    weights: str = "stored",
    penalty: float = 0.0,
    context: Optional[str] = None,
) -> int:
    """Run a search and print its outcome.

    Returns:
        int: Exit status, 0 when a path was found and 1 otherwise.
    """
    for name in (origin, destination):
        if name not in points:
            raise NodeNotFoundError(f"Node '{name}' not found in the graph")

    weight_calculator = (
        EuclideanWeightCalculator() if weights == "euclidean" else StoredWeightCalculator(graph)
    )
    relaxer = PenaltyRelaxer(penalty) if penalty else DefaultRelaxer()

    search = PathFinding.create_dijkstra(
        graph,
        points[origin],
        points[destination],
        relaxer=relaxer,
        modality=modality,
        weight_calculator=weight_calculator,
        context=context,
    )
    search.execute()
    path = search.get_result()

    if not path.valid:
        print(f"No path from {origin} to {destination}")
        return 1

    print(" -> ".join(str(node) for node in path))
    print(f"Total weight: {path.total_weight:g}")
    print(f"Nodes closed: {search.metrics.nodes_closed}")
    return 0


def show_info(graph: Graph) -> None:
    """Display all nodes and edges of a graph."""
    print(f"\nNodes ({graph.node_count()}):")
    for node in graph.get_internal_nodes():
        print(f"- {node.nodal} ({node.nodal.x}, {node.nodal.y})")

    print(f"\nEdges ({graph.edge_count()}):")
    for node in graph.get_internal_nodes():
        for target in graph.get_outgoing_edges(node):
            data = graph.get_edge(node, target)
            line = f"- {node.nodal} -> {target.nodal} ({data.weight:g})"
            if data.modality_weights:
                line += f" modalities={data.modality_weights}"
            if data.contexts is not None:
                line += f" contexts={sorted(data.contexts)}"
            print(line)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(description="Wayfinder route planner CLI")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    route_parser = subparsers.add_parser("route", help="Find the shortest path between two nodes")
    route_parser.add_argument("graph", help="JSON string or @filename containing the graph")
    route_parser.add_argument("origin", help="Name of the origin node")
    route_parser.add_argument("destination", help="Name of the destination node")
    route_parser.add_argument("--modality", default=None, help="Modality used to pick edge weights")
    route_parser.add_argument(
        "--weights",
        default="stored",
        choices=["stored", "euclidean"],
        help="Use stored edge weights or straight-line distances",
    )
    route_parser.add_argument(
        "--penalty", type=float, default=0.0, help="Extra weight added for every edge"
    )
    route_parser.add_argument(
        "--context", default=None, help="Only follow edges open in this traversal context"
    )

    info_parser = subparsers.add_parser("info", help="List the nodes and edges of a graph")
    info_parser.add_argument("graph", help="JSON string or @filename containing the graph")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application.

    Returns:
        int: Process exit status.
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        graph, points = build_graph(parse_json_input(args.graph))

        if args.command == "route":
            return route(
                graph,
                points,
                args.origin,
                args.destination,
                modality=args.modality,
                weights=args.weights,
                penalty=args.penalty,
                context=args.context,
            )

        elif args.command == "info":
            show_info(graph)
            return 0

    except (ConfigurationError, DuplicateResourceError, NodeNotFoundError, ValueError) as e:
        logger.error("%s", e)
        print(f"Error: {e}")
        return 2

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
