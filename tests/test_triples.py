import pytest

from sage_triples.triples import Triple


def test_triple():
    triple = Triple("simon", "plays", "tennis")
    assert triple.subject == "simon"
    assert triple.relation == "plays"
    assert triple.object == "tennis"


def test_triple_equality_and_hash():
    a = Triple("simon", "plays", "tennis")
    b = Triple("simon", "plays", "tennis")
    c = Triple("tennis", "plays", "simon")

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert len({a, b, c}) == 2


def test_triple_is_immutable():
    triple = Triple("simon", "plays", "tennis")
    with pytest.raises(AttributeError):
        triple.subject = "melbourne"


def test_triple_rendering():
    triple = Triple("simon", "plays", "tennis")
    assert str(triple) == "(simon -- plays -- tennis)"
    assert repr(triple) == "('simon' -- 'plays' -- 'tennis')"


def test_triple_accepts_empty_labels():
    triple = Triple("", "", "")
    assert str(triple) == "( --  -- )"


def test_triple_tuple_conversion():
    triple = Triple.from_tuple(("simon", "lives", "melbourne"))
    assert triple.as_tuple() == ("simon", "lives", "melbourne")

    s, r, o = triple
    assert (s, r, o) == ("simon", "lives", "melbourne")


def test_triple_from_tuple_rejects_wrong_arity():
    with pytest.raises(ValueError):
        Triple.from_tuple(("simon", "plays"))
