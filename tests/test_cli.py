"""Tests for the CLI entry points."""

import json
import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from roadmap_grid import __version__
from roadmap_grid.cli import cli

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"
PRODUCT_JSON = EXAMPLES_DIR / "product_roadmap.json"


@pytest.fixture
def roadmap_file(tmp_path):
    path = tmp_path / "roadmap.json"
    shutil.copy(PRODUCT_JSON, path)
    return path


def _rows(path, table):
    return {row["id"]: row for row in json.loads(path.read_text())[table]}


def test_render_produces_svg(roadmap_file, tmp_path):
    """render command produces an SVG file."""
    out = tmp_path / "output.svg"
    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(roadmap_file), "-o", str(out)])
    assert result.exit_code == 0, result.output
    content = out.read_text()
    assert "<svg" in content
    assert content.endswith("\n")
    assert "Rendered 6 nodes, 5 dependencies, 3 lanes" in result.output


def test_render_default_output(roadmap_file):
    """render command uses input stem + .svg when no -o given."""
    runner = CliRunner()
    result = runner.invoke(cli, ["render", str(roadmap_file), "--theme", "dark",
                                 "--compact", "--expand", "lane-ux"])
    assert result.exit_code == 0, result.output
    assert roadmap_file.with_suffix(".svg").exists()


def test_render_does_not_modify_file(roadmap_file):
    before = roadmap_file.read_text()
    CliRunner().invoke(cli, ["render", str(roadmap_file)])
    assert roadmap_file.read_text() == before


def test_render_nonexistent_file():
    runner = CliRunner()
    result = runner.invoke(cli, ["render", "/nonexistent/file.json"])
    assert result.exit_code != 0


def test_info_output(roadmap_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["info", str(roadmap_file)])
    assert result.exit_code == 0, result.output
    assert "Roadmap: Product roadmap 2025 (product)" in result.output
    assert "Core Features (#3b82f6): 2 nodes" in result.output
    assert "Columns: 6" in result.output
    assert "Critical path: 3 nodes" in result.output


def test_unknown_roadmap(roadmap_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["-r", "nope", "info", str(roadmap_file)])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_validate_success(roadmap_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(roadmap_file)])
    assert result.exit_code == 0, result.output
    assert "Valid: 6 nodes, 5 dependencies, 3 lanes, 6 columns" in result.output


def test_validate_reports_problems(roadmap_file):
    data = json.loads(roadmap_file.read_text())
    data["roadmap_nodes"][0]["position_x"] = 300
    data["node_dependencies"].append(
        {"id": "loop", "node_id": "auth", "depends_on_node_id": "search"}
    )
    roadmap_file.write_text(json.dumps(data))

    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(roadmap_file)])
    assert result.exit_code == 1
    assert "off-grid" in result.output
    assert "dependency cycle" in result.output


def test_validate_bad_record(roadmap_file):
    data = json.loads(roadmap_file.read_text())
    del data["roadmap_nodes"][2]["title"]
    roadmap_file.write_text(json.dumps(data))

    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(roadmap_file)])
    assert result.exit_code == 1
    assert "roadmap_nodes[2]" in result.output


def test_move_snaps_and_saves(roadmap_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["move", str(roadmap_file), "search", "600", "500"])
    assert result.exit_code == 0, result.output
    assert "row 1, column 1 (614, 436)" in result.output
    row = _rows(roadmap_file, "roadmap_nodes")["search"]
    assert (row["position_x"], row["position_y"]) == (614, 436)


def test_move_unknown_node(roadmap_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["move", str(roadmap_file), "ghost", "0", "0"])
    assert result.exit_code == 1
    assert "unknown node" in result.output


def test_add_and_delete_column(roadmap_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["add-column", str(roadmap_file), "--at", "0", "--name", "Q4 2024"])
    assert result.exit_code == 0, result.output
    assert "7 columns, 6 nodes shifted" in result.output
    assert _rows(roadmap_file, "roadmap_nodes")["auth"]["position_x"] == 614

    new_id = next(
        cid for cid, row in _rows(roadmap_file, "roadmap_columns").items()
        if row["name"] == "Q4 2024"
    )
    result = runner.invoke(cli, ["delete-column", str(roadmap_file), new_id])
    assert result.exit_code == 0, result.output
    assert _rows(roadmap_file, "roadmap_nodes")["auth"]["position_x"] == 254
    assert len(_rows(roadmap_file, "roadmap_columns")) == 6


def test_reorder_lane(roadmap_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["reorder-lane", str(roadmap_file), "lane-infra", "up"])
    assert result.exit_code == 0, result.output
    assert "Lane order: Infrastructure, Core Features, User Experience" in result.output
    assert _rows(roadmap_file, "roadmap_nodes")["ci"]["position_y"] == 76

    result = runner.invoke(cli, ["reorder-lane", str(roadmap_file), "lane-infra", "up"])
    assert "cannot move up" in result.output


def test_link(roadmap_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["link", str(roadmap_file), "ci", "dashboard"])
    assert result.exit_code == 0, result.output
    deps = _rows(roadmap_file, "node_dependencies").values()
    assert any(
        d["depends_on_node_id"] == "ci" and d["node_id"] == "dashboard" for d in deps
    )


def test_link_duplicate_fails(roadmap_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["link", str(roadmap_file), "api", "auth"])
    assert result.exit_code == 1
    assert "already exists" in result.output


def test_migrate(roadmap_file):
    data = json.loads(roadmap_file.read_text())
    data["roadmap_nodes"][3]["position_x"] = 255 + 2 * 361
    roadmap_file.write_text(json.dumps(data))

    runner = CliRunner()
    result = runner.invoke(cli, ["migrate", str(roadmap_file), "--dry-run"])
    assert result.exit_code == 0, result.output
    assert "Search: (977, 436) -> (974, 436)" in result.output
    assert "1 of 6 nodes would move" in result.output
    assert _rows(roadmap_file, "roadmap_nodes")["search"]["position_x"] == 977

    result = runner.invoke(cli, ["migrate", str(roadmap_file)])
    assert result.exit_code == 0, result.output
    assert "Migrated 1 of 6 nodes" in result.output
    assert _rows(roadmap_file, "roadmap_nodes")["search"]["position_x"] == 974


def test_seeds_empty_roadmap_on_edit(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({"roadmaps": [{"id": "rm", "title": "Empty"}]}))
    runner = CliRunner()
    result = runner.invoke(cli, ["add-column", str(path), "--name", "Extra"])
    assert result.exit_code == 0, result.output
    assert "9 columns" in result.output
    assert len(_rows(path, "roadmap_lanes")) == 3


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output
