"""Embedding source implementations."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import numpy as np

logger = logging.getLogger(__name__)


class EmbeddingSource(ABC):
    """Abstract label -> vector lookup."""

    @abstractmethod
    def lookup(self, label: str) -> Optional[np.ndarray]:
        """Look up the vector of a label.

        Args:
            label: Node or relation label

        Returns:
            float32 vector of length `get_dimension()`, or None if the
            source has no vector for the label
        """
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get embedding dimension.

        Returns:
            Embedding dimension
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get source name.

        Returns:
            Human-readable source name
        """
        pass

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and self.lookup(label) is not None


class StaticEmbeddings(EmbeddingSource):
    """In-memory embedding table (e.g. loaded from a word2vec/GloVe file)."""

    def __init__(
        self,
        vectors: Dict[str, Iterable[float]],
        dimension: Optional[int] = None,
        name: str = "static",
    ):
        """Initialize static embeddings.

        Args:
            vectors: Mapping of label to vector
            dimension: Expected dimension (inferred from the first vector if omitted)
            name: Source name, usually the file it was loaded from
        """
        self.name = name
        self._vectors: Dict[str, np.ndarray] = {}
        for label, vector in vectors.items():
            array = np.asarray(vector, dtype=np.float32).reshape(-1)
            if dimension is None:
                dimension = array.shape[0]
            elif array.shape[0] != dimension:
                raise ValueError(
                    f"Vector for {label!r} has dimension {array.shape[0]}, expected {dimension}"
                )
            self._vectors[label] = array

        if dimension is None:
            raise ValueError("Cannot infer embedding dimension from an empty table; pass dimension")
        self._dimension = int(dimension)

    def lookup(self, label: str) -> Optional[np.ndarray]:
        vector = self._vectors.get(label)
        if vector is None:
            return None
        return vector.copy()

    def get_dimension(self) -> int:
        return self._dimension

    def get_name(self) -> str:
        return f"static/{self.name}"

    def __len__(self) -> int:
        return len(self._vectors)

    def labels(self):
        """Labels in table order."""
        return list(self._vectors)


class SentenceTransformerEmbeddings(EmbeddingSource):
    """Embeds labels on demand with a sentence-transformers model."""

    def __init__(
        self,
        model_name: str = "sentence-transformers/all-MiniLM-L6-v2",
        model: Optional[Any] = None,
    ):
        """Initialize sentence-transformers embeddings.

        Args:
            model_name: HuggingFace model name
            model: Already loaded encoder with `encode()` and
                `get_sentence_embedding_dimension()` (skips loading)
        """
        self.model_name = model_name
        if model is None:
            try:
                from sentence_transformers import SentenceTransformer
            except ImportError:
                raise ImportError(
                    "sentence-transformers is required. Install with: pip install sage-triples[local]"
                )
            logger.info(f"Loading local embedding model: {model_name}")
            model = SentenceTransformer(model_name)

        self.model = model
        self._dimension = int(self.model.get_sentence_embedding_dimension())
        self._cache: Dict[str, np.ndarray] = {}

    def lookup(self, label: str) -> Optional[np.ndarray]:
        if not label.strip():
            return None
        if label not in self._cache:
            embedding = self.model.encode(label, convert_to_numpy=True)
            self._cache[label] = np.asarray(embedding, dtype=np.float32).reshape(-1)
        return self._cache[label].copy()

    def get_dimension(self) -> int:
        return self._dimension

    def get_name(self) -> str:
        return f"local/{self.model_name}"


class FinalfusionEmbeddings(EmbeddingSource):
    """Wraps a loaded `finalfusion.Embeddings` table.

    Tables with a subword vocabulary return vectors for unseen labels too;
    plain vocabularies return None for them.
    """

    def __init__(self, embeddings: Any, name: str = "finalfusion"):
        """Initialize finalfusion embeddings.

        Args:
            embeddings: Loaded table with `embedding(word)` and a 2-D `storage`
            name: Source name, usually the file it was loaded from
        """
        self.embeddings = embeddings
        self.name = name
        self._dimension = int(embeddings.storage.shape[1])

    def lookup(self, label: str) -> Optional[np.ndarray]:
        embedding = self.embeddings.embedding(label)
        if embedding is None:
            return None
        return np.asarray(embedding, dtype=np.float32).reshape(-1).copy()

    def get_dimension(self) -> int:
        return self._dimension

    def get_name(self) -> str:
        return f"finalfusion/{self.name}"


def create_embedding_source(
    kind: str = "static",
    **kwargs
) -> EmbeddingSource:
    """Factory function to create an embedding source.

    Args:
        kind: Source kind ("static", "sentence-transformers" or "local")
        **kwargs: Source-specific parameters (`path` for static,
            `model_name` / `model` for sentence-transformers)

    Returns:
        EmbeddingSource instance
    """
    kind_lower = kind.lower()

    if kind_lower == "static":
        path = kwargs.get("path")
        if not path:
            raise ValueError("Static embeddings require a path")
        from .loaders import load_embeddings
        return load_embeddings(Path(path))

    elif kind_lower in ("sentence-transformers", "local"):
        return SentenceTransformerEmbeddings(
            model_name=kwargs.get("model_name") or "sentence-transformers/all-MiniLM-L6-v2",
            model=kwargs.get("model"),
        )

    else:
        raise ValueError(f"Unknown embedding source: {kind}. Supported: static, sentence-transformers")
