"""
Pytest configuration and shared fixtures for sage-triples tests.
"""
import pytest
import numpy as np

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


SRO = [
    ("simon", "plays", "tennis"),
    ("simon", "lives", "melbourne"),
    ("tennis", "sport", "melbourne"),
    ("melbourne", "located", "australia"),
    ("tennis", "plays", "simon"),
    ("melbourne", "lives", "simon"),
    ("melbourne", "sport", "tennis"),
    ("australia", "located", "melbourne"),
]


@pytest.fixture
def sample_triples():
    """Fixture providing the sample s-r-o triples."""
    return list(SRO)


@pytest.fixture
def sample_graph(sample_triples):
    """Fixture providing the sample graph (undirected)."""
    from sage_triples.graph import Graph

    return Graph.from_triples(sample_triples)


@pytest.fixture
def static_embeddings():
    """Fixture providing a 3-dim table that knows some of the sample labels."""
    from sage_triples.embedding import StaticEmbeddings

    return StaticEmbeddings(
        {
            "simon": [1.0, 0.0, 0.0],
            "melbourne": [0.0, 1.0, 0.0],
            "plays": [0.5, 0.5, 0.0],
            "located": [0.0, 0.0, 2.0],
        },
        name="test.txt",
    )


@pytest.fixture
def fake_encoder():
    """Fixture providing a stand-in for a SentenceTransformer model."""

    class FakeEncoder:
        def __init__(self):
            self.calls = []

        def get_sentence_embedding_dimension(self):
            return 4

        def encode(self, text, convert_to_numpy=True):
            self.calls.append(text)
            return np.full(4, float(len(text)), dtype=np.float32)

    return FakeEncoder()


@pytest.fixture(autouse=True)
def clean_sage_env(monkeypatch):
    """Keep SAGE_* settings from the developer's shell out of tests."""
    for key in ("SAGE_EMBEDDING_SOURCE", "SAGE_EMBEDDINGS_PATH", "SAGE_EMBEDDING_MODEL"):
        monkeypatch.delenv(key, raising=False)
