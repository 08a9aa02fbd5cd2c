"""Feature matrices built by looking up graph labels in an embedding source."""

import logging
from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from .core import Graph
    from ..embedding.sources import EmbeddingSource

logger = logging.getLogger(__name__)


def _lookup_matrix(labels: Sequence[str], source: "EmbeddingSource") -> np.ndarray:
    dims = source.get_dimension()
    matrix = np.zeros((len(labels), dims), dtype=np.float32)
    hits = 0
    for i, label in enumerate(labels):
        embedding = source.lookup(label)
        if embedding is None:
            continue
        embedding = np.asarray(embedding, dtype=np.float32).reshape(-1)
        if embedding.shape[0] != dims:
            raise ValueError(
                f"Embedding for {label!r} has dimension {embedding.shape[0]}, expected {dims}"
            )
        matrix[i] = embedding
        hits += 1
    logger.debug(f"Embedded {hits}/{len(labels)} labels ({dims} dims)")
    return matrix


def node_features(graph: "Graph", source: "EmbeddingSource") -> np.ndarray:
    """Node features as a `(n_nodes, dims)` float32 array.

    Row `i` is the embedding of `graph.nodes[i]`, or zeros when the source
    has no vector for that label.
    """
    return _lookup_matrix(graph.nodes, source)


def edge_embeddings(graph: "Graph", source: "EmbeddingSource") -> np.ndarray:
    """Edge embeddings as a `(n_edges, dims)` float32 array, same rule over `graph.edges`."""
    return _lookup_matrix(graph.edges, source)
