import json

import pytest
from click.testing import CliRunner

from neo4j_visualizer import __version__
from neo4j_visualizer.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def graph_file(tmp_path):
    data = {
        "nodes": [
            {"id": "1", "labels": ["Table"], "properties": {"name": "orders", "schema": "sales"}},
            {"id": "2", "labels": ["Table"], "properties": {"name": "items", "schema": "sales"}},
            {"id": "3", "labels": ["View"], "properties": {"name": "kpis"}},
        ],
        "relationships": [
            {"id": "r1", "type": "FLOWS_TO", "startNodeId": "1", "endNodeId": "3", "properties": {}},
        ],
    }
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(data))
    return path


def test_version(runner):
    res = runner.invoke(cli, ["version"])
    assert res.exit_code == 0
    assert res.output.strip() == __version__


def test_chart_json(runner, tmp_path):
    path = tmp_path / "chart.json"
    path.write_text(json.dumps({"records": [{"city": "NYC"}, {"city": "NYC"}, {"city": "LA"}]}))
    res = runner.invoke(cli, ["chart", str(path), "--json"])
    assert res.exit_code == 0, res.output
    out = json.loads(res.output)
    assert out["chartType"] == "pie"
    assert out["points"] == [{"label": "NYC", "value": 2.0}, {"label": "LA", "value": 1.0}]


def test_chart_table_and_empty(runner, tmp_path):
    path = tmp_path / "chart.json"
    path.write_text(json.dumps({"a": 1, "b": 2}))
    res = runner.invoke(cli, ["chart", str(path)])
    assert res.exit_code == 0
    assert "pie" in res.output

    path.write_text(json.dumps({"records": []}))
    res = runner.invoke(cli, ["chart", str(path)])
    assert res.exit_code == 0
    assert "No chartable data" in res.output


def test_graph_json(runner, graph_file):
    res = runner.invoke(cli, ["graph", str(graph_file), "--group-by", "schema", "--seed", "3", "--json"])
    assert res.exit_code == 0, res.output
    out = json.loads(res.output)
    assert [g["id"] for g in out["groups"]] == ["group-sales"]
    assert [n["id"] for n in out["nodes"]] == ["group-sales", "1", "2", "3"]


def test_graph_table(runner, graph_file):
    res = runner.invoke(cli, ["graph", str(graph_file), "--layout", "grid"])
    assert res.exit_code == 0, res.output
    assert "3 nodes, 0 groups, 1 edges" in res.output


def test_graph_bad_config(runner, graph_file):
    res = runner.invoke(cli, ["graph", str(graph_file), "--width", "0"])
    assert res.exit_code == 1
    assert "invalid visualization options" in res.output


def test_bad_json(runner, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{nope")
    res = runner.invoke(cli, ["chart", str(path)])
    assert res.exit_code == 2


def test_table_json_and_rich(runner, tmp_path):
    path = tmp_path / "records.json"
    path.write_text(json.dumps([{"name": "orders", "rows": 10}, {"name": "items", "owner": "ops"}]))
    res = runner.invoke(cli, ["table", str(path), "--json"])
    assert res.exit_code == 0, res.output
    out = json.loads(res.output)
    assert out["headers"] == ["name", "rows", "owner"]
    assert out["columnTypes"] == {"name": "Text", "rows": "Number", "owner": "Text"}

    res = runner.invoke(cli, ["table", str(path)])
    assert res.exit_code == 0
    assert "orders" in res.output

    path.write_text(json.dumps({"records": []}))
    res = runner.invoke(cli, ["table", str(path)])
    assert "No records found" in res.output
