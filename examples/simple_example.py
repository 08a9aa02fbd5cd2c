#!/usr/bin/env python3
"""
Simple sage-triples example - no embedding file required.

Builds the sample graph, prints its matrices and embeds the labels with a
small in-memory table. Set SAGE_EMBEDDINGS_PATH to use a real table instead.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sage_triples import Graph, StaticEmbeddings, EmbeddingConfig


def main():
    print("=" * 60)
    print("sage-triples simple example")
    print("=" * 60)

    graph = Graph.from_triples([
        ("simon", "plays", "tennis"),
        ("simon", "lives", "melbourne"),
        ("tennis", "sport", "melbourne"),
        ("melbourne", "located", "australia"),
        ("tennis", "plays", "simon"),
        ("melbourne", "lives", "simon"),
        ("melbourne", "sport", "tennis"),
        ("australia", "located", "melbourne"),
    ])

    print(f"\nGraph ({graph.n_triples()} triples):\n{graph}")
    print(f"\nNodes: {list(graph.nodes)}")
    print(f"Edges: {list(graph.edges)}")
    print(f"\nAdjacency matrix:\n{graph.adj_matrix()}")
    print(f"\nEdge-relation matrix (-1 = no relation):\n{graph.edge_features_dense()}")

    config = EmbeddingConfig.from_env()
    if config.is_configured():
        source = config.create_source()
    else:
        print("\nSAGE_EMBEDDINGS_PATH not set - using a toy 2-dim table")
        source = StaticEmbeddings({
            "simon": [1.0, 0.0],
            "melbourne": [0.0, 1.0],
            "australia": [0.2, 0.8],
            "plays": [0.7, 0.3],
        })

    print(f"\nNode features {graph.node_features(source).shape}:\n{graph.node_features(source)}")
    print(f"\nEdge embeddings {graph.edge_embeddings(source).shape}:\n{graph.edge_embeddings(source)}")


if __name__ == "__main__":
    main()
