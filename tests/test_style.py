"""Tests for style variants and the original style store."""

from choropleth.core.style import (
    ComputedStyle,
    PolygonSymbol,
    StaticStyle,
    StyleStateStore,
    normalize_style,
)


def test_normalize_static():
    assert normalize_style({"fill": "red"}) == StaticStyle({"fill": "red"})
    assert normalize_style(None) == StaticStyle(None)


def test_normalize_callable():
    def fn(feature):
        return "red"

    style = normalize_style(fn)
    assert isinstance(style, ComputedStyle)
    assert style("any feature") == "red"


def test_normalize_keeps_variants():
    style = StaticStyle("x")
    assert normalize_style(style) is style


def test_capture_only_once():
    store = StyleStateStore()
    assert store.capture("l", "first") is True
    assert store.capture("l", "second") is False
    assert store.get("l").original_style == StaticStyle("first")
    assert store.get("l").raw_style == "first"
    assert len(store) == 1
    assert list(store) == ["l"]


def test_pop_and_discard():
    store = StyleStateStore()
    store.capture("a", "x")
    store.capture("b", "y")
    assert store.pop("a").original_style == StaticStyle("x")
    assert store.pop("a") is None
    store.discard("b")
    store.discard("b")
    assert "b" not in store


def test_symbol_to_dict():
    symbol = PolygonSymbol("rgba(0, 0, 0, 0.7)", "#000000", class_index=2)
    assert symbol.to_dict() == {
        "fill": "rgba(0, 0, 0, 0.7)",
        "outline": "#000000",
        "outline_width": 1.0,
        "class_index": 2,
    }
