"""Embedding sources for node/edge feature lookup."""

from .sources import (
    EmbeddingSource,
    StaticEmbeddings,
    FinalfusionEmbeddings,
    SentenceTransformerEmbeddings,
    create_embedding_source,
)
from .loaders import (
    load_embeddings,
    load_finalfusion_embeddings,
    load_text_embeddings,
    load_npz_embeddings,
)

__all__ = [
    "EmbeddingSource",
    "StaticEmbeddings",
    "FinalfusionEmbeddings",
    "SentenceTransformerEmbeddings",
    "create_embedding_source",
    "load_embeddings",
    "load_finalfusion_embeddings",
    "load_text_embeddings",
    "load_npz_embeddings",
]
