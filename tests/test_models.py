from neo4j_visualizer.models import Entity, Relation, coerce_value, stringify
from neo4j_visualizer.styles import edge_color, node_color, node_icon


class _Odd:
    def __str__(self):
        return "odd"


def test_entity_from_raw_copies_and_coerces():
    props = {"name": "n", "nested": {"k": (1, 2)}, "obj": _Odd()}
    e = Entity.from_raw({"id": 5, "labels": ["A", "B"], "properties": props})
    assert e.id == "5"
    assert e.labels == ("A", "B")
    assert e.properties == {"name": "n", "nested": {"k": [1, 2]}, "obj": "odd"}
    props["name"] = "changed"
    assert e.properties["name"] == "n"


def test_entity_fallbacks():
    e = Entity.from_raw({"id": "x"})
    assert e.labels == ()
    assert e.primary_label == "Unknown"
    assert e.display_name == "x"
    assert Entity(id="y", properties={"name": "", "title": "T"}).display_name == "T"


def test_relation_from_raw_accepts_both_endpoint_spellings():
    a = Relation.from_raw({"id": "r", "type": "T", "startId": "1", "endId": "2"})
    b = Relation.from_raw({"id": "r", "type": "T", "startNodeId": "1", "endNodeId": "2"})
    assert a == b
    assert Relation.from_raw({"id": "r"}).type == "Unknown"


def test_coerce_value_keeps_scalars():
    for v in ("s", 1, 1.5, True, None):
        assert coerce_value(v) == v


def test_styles():
    assert node_icon(["Unknown", "Column", "Table"]) == "columns"
    assert node_icon([]) == "circle"
    assert node_color("Group") == "#e9ecef"
    assert node_color("Whatever") == "#00B5AD"
    assert edge_color("CONTAINS") == "#21BA45"
    assert edge_color("LIKES") == "#999999"


def test_missing_ids_stay_empty():
    assert Entity.from_raw({"labels": ["A"]}).id == ""
    r = Relation.from_raw({"id": "r", "type": "T", "startId": "1"})
    assert r.start_id == "1"
    assert r.end_id == ""
    assert not r.has_endpoints
    assert Relation.from_raw({"source": 1, "target": 2.0}).has_endpoints


def test_stringify_folds_integral_floats():
    assert stringify(1) == stringify(1.0) == "1"
    assert stringify(1.5) == "1.5"
    assert stringify(True) == "true"
