"""
Graph Core

A Graph is a collection of triples and an abstraction for subgraphs of a
knowledge graph. It keeps two label registries next to the triples:

- nodes: every distinct subject/object label, indexed in first-seen order
- edges: relation labels, deduplicated only for directed graphs

Indices are assigned the first time a label is seen and never change, so
matrix rows/columns stay aligned with the registries.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np
from scipy import sparse

from ..triples import Triple
from .features import edge_embeddings, node_features
from .matrices import adj_matrix, edge_features, edge_features_dense

logger = logging.getLogger(__name__)

TripleLike = Union[Triple, Tuple[str, str, str]]


class EdgeMode(str, Enum):
    """Edge registration policy of a graph."""
    DIRECTED = "directed"      # relation labels are deduplicated
    UNDIRECTED = "undirected"  # one relation entry per triple


class Graph:
    """
    Triple-backed knowledge graph with node/edge label registries.

    Bulk constructors always produce undirected graphs; pass
    ``mode=EdgeMode.DIRECTED`` to start an empty directed graph.
    """

    def __init__(self, mode: EdgeMode = EdgeMode.UNDIRECTED):
        self._mode = EdgeMode(mode)
        self._triples: List[Triple] = []
        self._node_index: Dict[str, int] = {}
        self._edges: List[str] = []
        # label -> index of its first occurrence in _edges
        self._edge_index: Dict[str, int] = {}

    @classmethod
    def from_triples(cls, triples: Iterable[TripleLike]) -> "Graph":
        """Create an undirected graph by adding each triple in order.

        Args:
            triples: Triple values or raw (subject, relation, object) tuples
        """
        graph = cls()
        graph.extend(triples)
        logger.debug(
            f"Graph built: {graph.n_triples()} triples, "
            f"{graph.n_nodes()} nodes, {graph.n_edges()} edges"
        )
        return graph

    def add_triple(self, triple: TripleLike) -> None:
        """Add a triple, registering its nodes and relation first."""
        triple = self._coerce(triple)
        self._add_node(triple.subject)
        self._add_node(triple.object)
        self._add_edge(triple.relation)
        self._triples.append(triple)

    def extend(self, triples: Iterable[TripleLike]) -> None:
        """Add triples one at a time, in iteration order."""
        for triple in triples:
            self.add_triple(triple)

    @staticmethod
    def _coerce(triple: TripleLike) -> Triple:
        # validated up front so a rejected triple leaves the registries untouched
        if isinstance(triple, (tuple, list)):
            triple = Triple.from_tuple(triple)
        elif not isinstance(triple, Triple):
            raise TypeError(
                f"Expected Triple or (subject, relation, object) tuple, got {type(triple).__name__}"
            )
        for label in triple:
            if not isinstance(label, str):
                raise TypeError(f"Triple labels must be str, got {type(label).__name__} in {triple!r}")
        return triple

    def _add_node(self, label: str) -> None:
        if label not in self._node_index:
            self._node_index[label] = len(self._node_index)

    def _add_edge(self, label: str) -> None:
        if self._mode is EdgeMode.DIRECTED:
            if label in self._edge_index:
                return
        elif self._mode is not EdgeMode.UNDIRECTED:
            raise RuntimeError(f"Unhandled edge mode: {self._mode!r}")
        self._edge_index.setdefault(label, len(self._edges))
        self._edges.append(label)

    # Lookups

    def get_node_idx(self, label: str) -> Optional[int]:
        """Return the index of a node label, or None if it was never seen."""
        return self._node_index.get(label)

    def get_edge_idx(self, label: str) -> Optional[int]:
        """Return the index of a relation label, or None if it was never seen.

        For undirected graphs this is the index of the first occurrence.
        """
        return self._edge_index.get(label)

    # Accessors

    @property
    def mode(self) -> EdgeMode:
        return self._mode

    def is_directed(self) -> bool:
        return self._mode is EdgeMode.DIRECTED

    def is_undirected(self) -> bool:
        return self._mode is EdgeMode.UNDIRECTED

    @property
    def triples(self) -> Tuple[Triple, ...]:
        return tuple(self._triples)

    @property
    def nodes(self) -> Tuple[str, ...]:
        """Node labels in registration order."""
        return tuple(self._node_index)

    @property
    def edges(self) -> Tuple[str, ...]:
        """Relation labels in registration order."""
        return tuple(self._edges)

    def n_nodes(self) -> int:
        return len(self._node_index)

    def n_edges(self) -> int:
        return len(self._edges)

    def n_triples(self) -> int:
        return len(self._triples)

    def is_empty(self) -> bool:
        return not self._triples

    def __len__(self) -> int:
        return len(self._triples)

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._triples)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return (
            self._mode is other._mode
            and self._triples == other._triples
            and list(self._node_index) == list(other._node_index)
            and self._edges == other._edges
        )

    __hash__ = None  # mutable

    def __str__(self) -> str:
        """One `str(triple)` per line, in insertion order, without a trailing newline."""
        return "\n".join(str(triple) for triple in self._triples)

    def __repr__(self) -> str:
        """One `repr(triple)` per line, in insertion order, without a trailing newline."""
        return "\n".join(repr(triple) for triple in self._triples)

    # Matrix views

    def adj_matrix(self) -> np.ndarray:
        """Dense `(n_nodes, n_nodes)` adjacency matrix. See `matrices.adj_matrix`."""
        return adj_matrix(self)

    def edge_features(self, size_by_nodes: bool = False) -> sparse.csr_matrix:
        """Sparse edge-relation matrix. See `matrices.edge_features`."""
        return edge_features(self, size_by_nodes=size_by_nodes)

    def edge_features_dense(self, size_by_nodes: bool = False) -> np.ndarray:
        """Dense edge-relation matrix with -1 in unwritten cells."""
        return edge_features_dense(self, size_by_nodes=size_by_nodes)

    def node_features(self, source) -> np.ndarray:
        """`(n_nodes, dims)` embedding matrix. See `features.node_features`."""
        return node_features(self, source)

    def edge_embeddings(self, source) -> np.ndarray:
        """`(n_edges, dims)` embedding matrix. See `features.edge_embeddings`."""
        return edge_embeddings(self, source)
