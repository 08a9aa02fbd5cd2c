"""
Matrix builders over a Graph.

- adj_matrix: dense binary node adjacency (numpy)
- edge_features: sparse node-pair -> relation index matrix (scipy.sparse)

Both are single passes over `graph.triples` and never mutate the graph.
"""

import logging
from typing import TYPE_CHECKING, Dict, Tuple

import numpy as np
from scipy import sparse

if TYPE_CHECKING:
    from .core import Graph

logger = logging.getLogger(__name__)

# Semantic value of an unwritten cell in the edge-relation matrix.
# Relation indices are zero-based, so 0 is a real relation.
EDGE_FILL_VALUE = -1


def _resolve(graph: "Graph", triple) -> Tuple[int, int]:
    s = graph.get_node_idx(triple.subject)
    o = graph.get_node_idx(triple.object)
    if s is None or o is None:
        raise RuntimeError(
            f"Node registry is corrupted: {triple!r} references an unregistered node"
        )
    return s, o


def adj_matrix(graph: "Graph") -> np.ndarray:
    """Adjacency matrix of subject -> object connections.

    Returns a `(n_nodes, n_nodes)` uint8 array where `[s, o] == 1` iff some
    triple has subject index `s` and object index `o`. Parallel triples
    collapse into one cell, and the result is not symmetrized.
    """
    n = graph.n_nodes()
    matrix = np.zeros((n, n), dtype=np.uint8)
    for triple in graph.triples:
        s, o = _resolve(graph, triple)
        matrix[s, o] = 1
    logger.debug(f"Built {n}x{n} adjacency matrix from {graph.n_triples()} triples")
    return matrix


def _relation_cells(graph: "Graph") -> Dict[Tuple[int, int], int]:
    cells: Dict[Tuple[int, int], int] = {}
    for triple in graph.triples:
        s, o = _resolve(graph, triple)
        r = graph.get_edge_idx(triple.relation)
        if r is None:
            raise RuntimeError(
                f"Edge registry is corrupted: {triple!r} references an unregistered relation"
            )
        # last writer wins
        cells[(s, o)] = r
    return cells


def edge_features(graph: "Graph", size_by_nodes: bool = False) -> sparse.csr_matrix:
    """Sparse edge-relation matrix.

    Cell `[s, o]` holds the edge index of the relation of the last triple
    linking node `s` to node `o`. Only written cells are stored (explicit
    zeros included); an unstored cell means "no relation", whose semantic
    value is `EDGE_FILL_VALUE`. Use `edge_features_dense` for a dense view
    carrying that fill value.

    The matrix is `(n_edges, n_edges)` although it is indexed by node
    indices, so it only fits graphs with `n_nodes <= n_edges`.

    Args:
        graph: Graph to read
        size_by_nodes: Size the matrix `(n_nodes, n_nodes)` instead

    Returns:
        int32 CSR matrix

    Raises:
        IndexError: If a node index falls outside the edge-sized matrix
    """
    n = graph.n_nodes() if size_by_nodes else graph.n_edges()
    cells = _relation_cells(graph)

    for (s, o) in cells:
        if s >= n or o >= n:
            raise IndexError(
                f"Node index ({s}, {o}) is outside the {n}x{n} edge-relation matrix: "
                f"graph has {graph.n_nodes()} nodes but only {graph.n_edges()} edges "
                "(pass size_by_nodes=True to size by node count)"
            )

    # Build CSR arrays directly so explicit zero entries stay stored.
    ordered = sorted(cells.items())
    data = np.array([r for _, r in ordered], dtype=np.int32)
    indices = np.array([o for (_, o), _ in ordered], dtype=np.int32)
    row_counts = np.bincount(
        np.array([s for (s, _), _ in ordered], dtype=np.int64), minlength=n
    )
    indptr = np.concatenate(([0], np.cumsum(row_counts))).astype(np.int32)

    matrix = sparse.csr_matrix((data, indices, indptr), shape=(n, n), dtype=np.int32)
    logger.debug(f"Built {n}x{n} edge-relation matrix with {matrix.nnz} stored relations")
    return matrix


def edge_features_dense(graph: "Graph", size_by_nodes: bool = False) -> np.ndarray:
    """Dense edge-relation matrix with `EDGE_FILL_VALUE` in unwritten cells."""
    return to_dense_relations(edge_features(graph, size_by_nodes=size_by_nodes))


def to_dense_relations(matrix: sparse.spmatrix, fill_value: int = EDGE_FILL_VALUE) -> np.ndarray:
    """Densify an edge-relation matrix, filling unstored cells with `fill_value`."""
    coo = matrix.tocoo()
    dense = np.full(coo.shape, fill_value, dtype=np.int32)
    dense[coo.row, coo.col] = coo.data
    return dense
