"""Embedding source and loader tests (no model downloads)."""
import sys
import types

import numpy as np
import pytest

from sage_triples.embedding import (
    FinalfusionEmbeddings,
    SentenceTransformerEmbeddings,
    StaticEmbeddings,
    create_embedding_source,
    load_embeddings,
    load_finalfusion_embeddings,
    load_npz_embeddings,
    load_text_embeddings,
)


class TestStaticEmbeddings:

    def test_lookup(self, static_embeddings):
        vector = static_embeddings.lookup("simon")
        assert vector.dtype == np.float32
        np.testing.assert_array_equal(vector, [1.0, 0.0, 0.0])
        assert static_embeddings.lookup("tennis") is None
        assert "melbourne" in static_embeddings
        assert "tennis" not in static_embeddings
        assert static_embeddings.get_dimension() == 3
        assert static_embeddings.get_name() == "static/test.txt"
        assert len(static_embeddings) == 4

    def test_lookup_returns_copy(self, static_embeddings):
        static_embeddings.lookup("simon")[0] = 99.0
        assert static_embeddings.lookup("simon")[0] == 1.0

    def test_mixed_dimensions_rejected(self):
        with pytest.raises(ValueError):
            StaticEmbeddings({"a": [1.0, 2.0], "b": [1.0]})

    def test_empty_table_needs_dimension(self):
        with pytest.raises(ValueError):
            StaticEmbeddings({})
        assert StaticEmbeddings({}, dimension=5).get_dimension() == 5


class TestSentenceTransformerEmbeddings:

    def test_lookup_with_injected_model(self, fake_encoder):
        source = SentenceTransformerEmbeddings(model_name="fake", model=fake_encoder)
        assert source.get_dimension() == 4
        assert source.get_name() == "local/fake"
        np.testing.assert_array_equal(source.lookup("simon"), [5.0] * 4)

    def test_lookups_are_cached(self, fake_encoder):
        source = SentenceTransformerEmbeddings(model=fake_encoder)
        source.lookup("tennis")
        source.lookup("tennis")
        assert fake_encoder.calls == ["tennis"]

    def test_blank_label_is_absent(self, fake_encoder):
        source = SentenceTransformerEmbeddings(model=fake_encoder)
        assert source.lookup("  ") is None
        assert fake_encoder.calls == []


class TestLoaders:

    def test_word2vec_text_with_header(self, tmp_path):
        path = tmp_path / "vectors.txt"
        path.write_text("2 3\nsimon 1 0 0\nmelbourne 0 1 0.5\n", encoding="utf-8")

        table = load_text_embeddings(path)
        assert table.get_dimension() == 3
        assert table.labels() == ["simon", "melbourne"]
        np.testing.assert_allclose(table.lookup("melbourne"), [0.0, 1.0, 0.5])

    def test_glove_text_without_header(self, tmp_path):
        path = tmp_path / "glove.txt"
        path.write_text("tennis 0.1 0.2\n\nsport 0.3 0.4\n", encoding="utf-8")

        table = load_embeddings(path)
        assert table.get_dimension() == 2
        assert len(table) == 2

    def test_text_with_repeated_spaces(self, tmp_path):
        path = tmp_path / "vectors.txt"
        path.write_text("simon  1   2 \nmelbourne 3 4\n", encoding="utf-8")

        table = load_text_embeddings(path)
        np.testing.assert_array_equal(table.lookup("simon"), [1.0, 2.0])
        np.testing.assert_array_equal(table.lookup("melbourne"), [3.0, 4.0])

    def test_tab_separated_text(self, tmp_path):
        path = tmp_path / "vectors.txt"
        path.write_text("1\t2\nsimon\t1\t2\n", encoding="utf-8")

        table = load_text_embeddings(path)
        assert table.labels() == ["simon"]
        np.testing.assert_array_equal(table.lookup("simon"), [1.0, 2.0])

    def test_ragged_text_rejected(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("a 1 2\nb 1\n", encoding="utf-8")
        with pytest.raises(ValueError, match=":2:"):
            load_text_embeddings(path)

    def test_non_numeric_text_rejected(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("a 1 x\n", encoding="utf-8")
        with pytest.raises(ValueError, match="non-numeric"):
            load_text_embeddings(path)

    def test_npz(self, tmp_path):
        path = tmp_path / "vectors.npz"
        np.savez(
            path,
            labels=np.array(["simon", "tennis"]),
            vectors=np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.float32),
        )

        table = load_embeddings(path)
        assert table.get_dimension() == 2
        np.testing.assert_array_equal(table.lookup("tennis"), [3.0, 4.0])

    def test_npz_missing_arrays(self, tmp_path):
        path = tmp_path / "vectors.npz"
        np.savez(path, vectors=np.zeros((1, 2)))
        with pytest.raises(ValueError, match="labels"):
            load_npz_embeddings(path)


class TestFactory:

    def test_static(self, tmp_path):
        path = tmp_path / "vectors.txt"
        path.write_text("simon 1 2\n", encoding="utf-8")
        source = create_embedding_source("static", path=str(path))
        assert isinstance(source, StaticEmbeddings)

    def test_static_requires_path(self):
        with pytest.raises(ValueError):
            create_embedding_source("static")

    def test_local(self, fake_encoder):
        source = create_embedding_source("local", model=fake_encoder)
        assert isinstance(source, SentenceTransformerEmbeddings)
        assert source.model_name == "sentence-transformers/all-MiniLM-L6-v2"

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown embedding source"):
            create_embedding_source("word2vec-server")


class FakeFinalfusionTable:
    """Stand-in for finalfusion.Embeddings (vocab lookup + 2-D storage)."""

    def __init__(self, vectors):
        self.vectors = vectors
        self.storage = np.array(list(vectors.values()), dtype=np.float32)

    def embedding(self, word):
        vector = self.vectors.get(word)
        return None if vector is None else np.array(vector, dtype=np.float32)


class TestFinalfusion:

    def test_lookup(self):
        source = FinalfusionEmbeddings(
            FakeFinalfusionTable({"melbourne": [0.5, 1.5, 2.5]}), name="skipgram.fifu"
        )
        assert source.get_dimension() == 3
        assert source.get_name() == "finalfusion/skipgram.fifu"
        np.testing.assert_array_equal(source.lookup("melbourne"), [0.5, 1.5, 2.5])
        assert source.lookup("tennis") is None

    def test_load_embeddings_dispatches_fifu(self, tmp_path, monkeypatch):
        calls = []

        def load_finalfusion(path, mmap=False):
            calls.append((path, mmap))
            return FakeFinalfusionTable({"simon": [1.0, 2.0]})

        monkeypatch.setitem(
            sys.modules, "finalfusion", types.SimpleNamespace(load_finalfusion=load_finalfusion)
        )
        path = tmp_path / "skipgram.fifu"

        source = load_embeddings(path)
        assert isinstance(source, FinalfusionEmbeddings)
        assert calls == [(str(path), False)]
        np.testing.assert_array_equal(source.lookup("simon"), [1.0, 2.0])

    def test_missing_package(self, tmp_path, monkeypatch):
        monkeypatch.setitem(sys.modules, "finalfusion", None)
        with pytest.raises(ImportError, match="sage-triples\\[finalfusion\\]"):
            load_finalfusion_embeddings(tmp_path / "skipgram.fifu")

    def test_node_features_from_finalfusion(self, sample_graph):
        source = FinalfusionEmbeddings(FakeFinalfusionTable({"tennis": [1.0, 1.0]}))
        matrix = sample_graph.node_features(source)
        assert matrix.shape == (4, 2)
        np.testing.assert_array_equal(matrix[1], [1.0, 1.0])
        assert matrix[[0, 2, 3]].sum() == 0
