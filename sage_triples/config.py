"""
Embedding Configuration Module

Reads the embedding source settings from environment variables:

- SAGE_EMBEDDING_SOURCE: "static" (default) or "sentence-transformers"
- SAGE_EMBEDDINGS_PATH: embedding table for the static source
- SAGE_EMBEDDING_MODEL: model name for the sentence-transformers source
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from .embedding.sources import EmbeddingSource, create_embedding_source

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"


@dataclass
class EmbeddingConfig:
    """Embedding source configuration. No global state."""
    source: str = "static"
    path: Optional[str] = None
    model: str = DEFAULT_MODEL

    @classmethod
    def from_env(cls) -> "EmbeddingConfig":
        """Create config from SAGE_* environment variables."""
        return cls(
            source=os.getenv("SAGE_EMBEDDING_SOURCE", "static").strip().lower() or "static",
            path=os.getenv("SAGE_EMBEDDINGS_PATH") or None,
            model=os.getenv("SAGE_EMBEDDING_MODEL", DEFAULT_MODEL),
        )

    def is_configured(self) -> bool:
        """Whether a source can be built without further input."""
        return self.source != "static" or bool(self.path)

    def create_source(self) -> EmbeddingSource:
        """Build the configured embedding source."""
        if self.source == "static":
            if not self.path:
                raise ValueError(
                    "Static embeddings need a path. Set SAGE_EMBEDDINGS_PATH or pass --embeddings."
                )
            source = create_embedding_source("static", path=self.path)
        else:
            source = create_embedding_source(self.source, model_name=self.model)
        logger.info(f"Embedding source configured: {source.get_name()}")
        return source
