#!/usr/bin/env python3
"""CLI interface for sage-triples"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np

from .config import EmbeddingConfig
from .graph import Graph
from .triples import Triple
from .utils.env_loader import load_dotenv

logger = logging.getLogger(__name__)

EMBEDDINGS_HELP = "Embedding table (finalfusion .fifu, word2vec/GloVe text or .npz)"

SAMPLE_TRIPLES = [
    ("simon", "plays", "tennis"),
    ("simon", "lives", "melbourne"),
    ("tennis", "sport", "melbourne"),
    ("melbourne", "located", "australia"),
    ("tennis", "plays", "simon"),
    ("melbourne", "lives", "simon"),
    ("melbourne", "sport", "tennis"),
    ("australia", "located", "melbourne"),
]


def parse_triples(lines: Iterable[str]) -> List[Triple]:
    """Parse tab-separated `subject<TAB>relation<TAB>object` lines.

    Blank lines and lines starting with '#' are skipped.
    """
    triples = []
    for line_no, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        parts = [part.strip() for part in line.split("\t")]
        if len(parts) != 3:
            raise ValueError(
                f"line {line_no}: expected 3 tab-separated fields, got {len(parts)}"
            )
        triples.append(Triple.from_tuple(parts))
    return triples


def _read_triples(input_path: str) -> List[Triple]:
    if input_path == "-":
        return parse_triples(sys.stdin)
    with Path(input_path).open("r", encoding="utf-8") as f:
        return parse_triples(f)


def print_summary(graph: Graph, out=None) -> None:
    out = out or sys.stdout
    print(f"Graph: {graph.n_triples()} triples, {graph.n_nodes()} nodes, {graph.n_edges()} edges", file=out)
    print(f"Nodes: {list(graph.nodes)}", file=out)
    print(f"Edges: {list(graph.edges)}", file=out)
    with np.printoptions(linewidth=120):
        print(f"Adjacency matrix:\n{graph.adj_matrix()}", file=out)
        try:
            relations = graph.edge_features_dense()
        except IndexError as e:
            logger.warning(f"Edge-relation matrix unavailable: {e}")
        else:
            print(f"Edge-relation matrix (-1 = no relation):\n{relations}", file=out)


def print_feature_summary(graph: Graph, source, out=None) -> None:
    out = out or sys.stdout
    node_matrix = graph.node_features(source)
    edge_matrix = graph.edge_embeddings(source)
    node_hits = int(np.count_nonzero(np.any(node_matrix != 0, axis=1)))
    edge_hits = int(np.count_nonzero(np.any(edge_matrix != 0, axis=1)))
    print(f"Embedding source: {source.get_name()} ({source.get_dimension()} dims)", file=out)
    print(f"Node features: {node_matrix.shape}, {node_hits}/{graph.n_nodes()} labels found", file=out)
    print(f"Edge embeddings: {edge_matrix.shape}, {edge_hits}/{graph.n_edges()} labels found", file=out)


def _embedding_config(args) -> EmbeddingConfig:
    config = EmbeddingConfig.from_env()
    if args.embeddings:
        config.source = "static"
        config.path = args.embeddings
    return config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sage-triples",
        description="sage-triples - knowledge graph triples to matrices",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sage-triples demo
  sage-triples build triples.tsv --embeddings vectors.txt
  cat triples.tsv | sage-triples build -
  sage-triples embed melbourne --embeddings vectors.txt
        """
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    demo = subparsers.add_parser("demo", help="Build the bundled sample graph")
    demo.add_argument("--embeddings", type=str, help=EMBEDDINGS_HELP)

    build = subparsers.add_parser("build", help="Build a graph from a TSV file of triples")
    build.add_argument("input", type=str, help="Triples file or '-' for stdin")
    build.add_argument("--embeddings", type=str, help=EMBEDDINGS_HELP)

    embed = subparsers.add_parser("embed", help="Print the embedding of one label")
    embed.add_argument("label", type=str, help="Label to look up")
    embed.add_argument("--embeddings", type=str, help=EMBEDDINGS_HELP)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    # Load local .env if present
    load_dotenv(".env", override=False, prefix="SAGE_")

    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "embed":
            source = _embedding_config(args).create_source()
            vector = source.lookup(args.label)
            if vector is None:
                print(f"No embedding for {args.label!r}", file=sys.stderr)
                return 1
            print(f"Embedding: {vector.tolist()}")
            return 0

        triples = SAMPLE_TRIPLES if args.command == "demo" else _read_triples(args.input)
        graph = Graph.from_triples(triples)
        print_summary(graph)

        config = _embedding_config(args)
        if config.is_configured():
            print_feature_summary(graph, config.create_source())
        return 0
    except (ValueError, OSError, ImportError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
