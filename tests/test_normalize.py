import math

import pytest

from neo4j_visualizer.charts import InputKind, normalize, tag_input
from neo4j_visualizer.models import Entity, Point


def _as_pairs(points):
    return [(p.label, p.value) for p in points]


def test_records_frequency_fallback():
    points = normalize({"records": [{"city": "NYC"}, {"city": "NYC"}, {"city": "LA"}]})
    assert sorted(_as_pairs(points)) == [("LA", 1.0), ("NYC", 2.0)]
    assert sum(p.value for p in points) == 3


def test_records_frequency_missing_values_count_as_unknown():
    points = normalize({"records": [{"city": "NYC"}, {"city": None}, {"other": 1}]})
    assert _as_pairs(points) == [("NYC", 1.0), ("Unknown", 2.0)]


def test_empty_records_is_empty():
    assert normalize({"records": []}) == []
    assert normalize({"records": [{}]}) == []


def test_records_numeric_field_labels_and_drops():
    records = [
        {"name": "a", "count": 3},
        {"title": "b", "count": 5},
        {"id": 7, "count": None},
        {"count": 2},
        {"name": "e", "count": "lots"},
    ]
    assert _as_pairs(normalize({"records": records})) == [
        ("a", 3.0),
        ("b", 5.0),
        ("Record 4", 2.0),
    ]


def test_records_use_first_numeric_field():
    records = [{"label": "x", "total": 10, "avg": 2.5}, {"label": "y", "total": 4, "avg": 1.0}]
    assert [p.value for p in normalize({"records": records})] == [10.0, 4.0]


def test_bools_are_not_numeric():
    points = normalize({"records": [{"active": True}, {"active": False}, {"active": True}]})
    assert _as_pairs(points) == [("true", 2.0), ("false", 1.0)]


def test_records_keep_xy():
    points = normalize({"records": [{"name": "p", "x": 1, "y": 2}]})
    assert points == [Point(label="p", value=1.0, x=1.0, y=2.0)]


def test_nodes_count_first_label():
    nodes = [
        {"id": "1", "labels": ["Person"], "properties": {}},
        {"id": "2", "labels": ["Person", "Employee"], "properties": {}},
        {"id": "3", "labels": [], "properties": {}},
        Entity(id="4", labels=("Company",)),
    ]
    assert _as_pairs(normalize({"nodes": nodes})) == [("Person", 2.0), ("Unknown", 1.0), ("Company", 1.0)]


def test_relationships_count_type():
    rels = [{"type": "KNOWS"}, {"type": "KNOWS"}, {"type": ""}, {"id": "r"}]
    assert _as_pairs(normalize({"relationships": rels})) == [("KNOWS", 2.0), ("Unknown", 2.0)]


def test_array_of_primitives():
    assert _as_pairs(normalize(["a", "b", "a"])) == [("a", 2.0), ("b", 1.0)]
    assert _as_pairs(normalize([1, 1.0, 2])) == [("1", 2.0), ("2", 1.0)]


def test_array_of_objects():
    items = [{"label": "x", "v": 1}, {"v": 2}, {"name": "z", "v": None}]
    assert _as_pairs(normalize(items)) == [("x", 1.0), ("Item 2", 2.0)]


def test_array_of_objects_without_numbers():
    assert normalize([{"k": "v"}]) == []


def test_plain_object_numeric_properties():
    data = {"a": 1, "b": "s", "c": 2.5, "d": True, "e": math.nan}
    assert _as_pairs(normalize(data)) == [("a", 1.0), ("c", 2.5)]


@pytest.mark.parametrize("data", [None, 42, "text", b"bytes", [], {}, [None, object()]])
def test_unsupported_input_is_empty(data):
    assert normalize(data) == []


def test_malformed_records_do_not_raise():
    points = normalize({"records": [{"v": 1}, "junk", {"v": "bad"}, None]})
    assert _as_pairs(points) == [("Record 1", 1.0)]


def test_malformed_nodes_do_not_raise():
    nodes = [{"id": "1", "labels": 5}, "junk", {"id": "2", "labels": None, "properties": []}]
    assert _as_pairs(normalize({"nodes": nodes})) == [("Unknown", 2.0)]


def test_tag_precedence():
    data = {"relationships": [{"type": "R"}], "nodes": [{"labels": ["N"]}], "records": [{"k": 1}]}
    assert tag_input(data).kind is InputKind.RECORDS
    assert tag_input({"relationships": [], "nodes": []}).kind is InputKind.NODES
    assert tag_input({"nodes": "not a list"}).kind is InputKind.OBJECT
    assert tag_input(("a",)).kind is InputKind.ARRAY
    assert tag_input(3) is None


def test_tagged_input_is_accepted_directly():
    tagged = tag_input({"records": [{"city": "NYC"}]})
    assert _as_pairs(normalize(tagged)) == [("NYC", 1.0)]
