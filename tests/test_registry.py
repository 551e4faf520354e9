import pytest

from algorithms import (
    REGISTRY,
    algorithms_by_family,
    algorithms_by_tag,
    get_algorithm,
    list_algorithms,
)
from errors import UnknownAlgorithm


def test_registry_keys_match_cards():
    for key, info in REGISTRY.items():
        assert info.key == key
        assert callable(info.init) and callable(info.step)


def test_get_algorithm():
    assert get_algorithm("kruskal").label == "Kruskal's MST"


def test_get_unknown_algorithm():
    with pytest.raises(UnknownAlgorithm) as exc:
        get_algorithm("bogo_sort")
    assert exc.value.kind == "unknown_algorithm"
    assert "bogo_sort" in str(exc.value)


def test_list_keeps_insertion_order():
    assert [a.key for a in list_algorithms()] == list(REGISTRY)


def test_families():
    assert {a.key for a in algorithms_by_family("graphs")} == {
        "dijkstra", "bellman_ford", "kruskal", "topological_sort",
    }
    assert len(algorithms_by_family("sorting")) == 9


def test_tags():
    assert {a.key for a in algorithms_by_tag("non-negative")} == {"count_sort", "radix_sort"}


def test_card_serialises_without_callables():
    card = get_algorithm("heap").to_dict()
    assert card["family"] == "heaps"
    assert "init" not in card and "step" not in card
    assert card["pseudocode"]
