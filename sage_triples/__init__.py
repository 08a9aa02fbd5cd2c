"""sage-triples - knowledge graph triples as matrices"""
__version__ = "0.1.0a0"

# Core data model (lightweight - import directly)
from .triples import Triple
from .graph import (
    Graph,
    EdgeMode,
    adj_matrix,
    edge_features,
    edge_features_dense,
    to_dense_relations,
    EDGE_FILL_VALUE,
    node_features,
    edge_embeddings,
)

__all__ = [
    # Core
    "Triple",
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
    # Embedding sources
    "EmbeddingSource",
    "StaticEmbeddings",
    "SentenceTransformerEmbeddings",
    "create_embedding_source",
    "load_embeddings",
    # Config
    "EmbeddingConfig",
]


def __getattr__(name: str):
    """Lazy loading for embedding sources and configuration.

    Keeps `import sage_triples` limited to the graph core.
    Imported objects are cached in globals() for subsequent access.
    """
    lazy_imports = {
        "EmbeddingSource": ".embedding",
        "StaticEmbeddings": ".embedding",
        "SentenceTransformerEmbeddings": ".embedding",
        "create_embedding_source": ".embedding",
        "load_embeddings": ".embedding",
        "EmbeddingConfig": ".config",
    }

    if name in lazy_imports:
        import importlib
        module = importlib.import_module(lazy_imports[name], __name__)
        attr = getattr(module, name)
        globals()[name] = attr
        return attr

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
