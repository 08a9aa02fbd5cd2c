"""
Embedding table loaders.

Supported formats:
- finalfusion .fifu tables (optional `finalfusion` package)
- word2vec text (optional "<count> <dims>" header line) and GloVe text
- numpy .npz archives with `labels` and `vectors` arrays
"""

import logging
import os
from pathlib import Path
from typing import Dict, Union

import numpy as np

from .sources import EmbeddingSource, FinalfusionEmbeddings, StaticEmbeddings

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def load_text_embeddings(path: PathLike) -> StaticEmbeddings:
    """Load a word2vec or GloVe text file.

    Each line is `<label> <v1> <v2> ...`, split on any run of spaces or
    tabs. A first line of exactly two integers is treated as a word2vec
    header and must agree with the data.
    """
    path = Path(path)
    vectors: Dict[str, np.ndarray] = {}
    dimension = None
    expected_count = None

    with path.open("r", encoding="utf-8") as f:
        for line_no, raw_line in enumerate(f, start=1):
            parts = raw_line.split()
            if not parts:
                continue

            if line_no == 1 and len(parts) == 2 and all(p.isdigit() for p in parts):
                expected_count, dimension = int(parts[0]), int(parts[1])
                continue

            label, values = parts[0], parts[1:]
            if not values:
                raise ValueError(f"{path}:{line_no}: label {label!r} has no vector")
            try:
                vector = np.asarray(values, dtype=np.float32)
            except ValueError:
                raise ValueError(f"{path}:{line_no}: non-numeric vector component")

            if dimension is None:
                dimension = vector.shape[0]
            if vector.shape[0] != dimension:
                raise ValueError(
                    f"{path}:{line_no}: expected {dimension} components, got {vector.shape[0]}"
                )
            vectors[label] = vector

    if expected_count is not None and expected_count != len(vectors):
        logger.warning(
            f"{path}: header declares {expected_count} vectors but {len(vectors)} were read"
        )

    logger.info(f"Loaded {len(vectors)} embeddings ({dimension} dims) from {path}")
    return StaticEmbeddings(vectors, dimension=dimension, name=path.name)


def load_npz_embeddings(path: PathLike) -> StaticEmbeddings:
    """Load a numpy archive holding `labels` (N,) and `vectors` (N, dims)."""
    path = Path(path)
    with np.load(path, allow_pickle=False) as archive:
        missing = {"labels", "vectors"} - set(archive.files)
        if missing:
            raise ValueError(f"{path}: missing arrays {sorted(missing)}")
        labels = archive["labels"]
        vectors = archive["vectors"]

    if vectors.ndim != 2 or vectors.shape[0] != labels.shape[0]:
        raise ValueError(
            f"{path}: vectors shape {vectors.shape} does not match {labels.shape[0]} labels"
        )

    logger.info(f"Loaded {labels.shape[0]} embeddings ({vectors.shape[1]} dims) from {path}")
    return StaticEmbeddings(
        {str(label): vector for label, vector in zip(labels, vectors)},
        dimension=vectors.shape[1],
        name=path.name,
    )


def load_finalfusion_embeddings(path: PathLike, mmap: bool = False) -> FinalfusionEmbeddings:
    """Load a finalfusion table (e.g. a `.fifu` skipgram model)."""
    path = Path(path)
    try:
        import finalfusion
    except ImportError:
        raise ImportError(
            "finalfusion is required for .fifu tables. Install with: pip install sage-triples[finalfusion]"
        )

    embeddings = finalfusion.load_finalfusion(str(path), mmap=mmap)
    source = FinalfusionEmbeddings(embeddings, name=path.name)
    logger.info(f"Loaded finalfusion embeddings ({source.get_dimension()} dims) from {path}")
    return source


def load_embeddings(path: PathLike) -> EmbeddingSource:
    """Load an embedding table, choosing the format by file suffix."""
    path = Path(path)
    if path.suffix == ".fifu":
        return load_finalfusion_embeddings(path)
    if path.suffix == ".npz":
        return load_npz_embeddings(path)
    return load_text_embeddings(path)
