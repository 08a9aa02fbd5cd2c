"""
Graph Module

This module provides:
- Graph core (triple registry with node/edge label indices)
- Matrix builders (dense adjacency, sparse edge-relation)
- Feature lookup (node/edge embedding matrices)
"""

from .core import EdgeMode, Graph
from .features import edge_embeddings, node_features
from .matrices import (
    EDGE_FILL_VALUE,
    adj_matrix,
    edge_features,
    edge_features_dense,
    to_dense_relations,
)

__all__ = [
    # Graph core
    "Graph",
    "EdgeMode",
    # Matrix builders
    "adj_matrix",
    "edge_features",
    "edge_features_dense",
    "to_dense_relations",
    "EDGE_FILL_VALUE",
    # Feature lookup
    "node_features",
    "edge_embeddings",
]
