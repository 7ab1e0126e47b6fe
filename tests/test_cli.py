"""Tests for the geomdist command line."""

import json

import pytest

from geomdist import __version__
from geomdist.cli import main


def test_text_output(capsys):
    assert main(["segment 0,0,0 10,0,0", "point -5,0,0"]) == 0
    out = capsys.readouterr().out
    assert "GEOMDIST" in out
    assert "5.000000" in out


def test_json_output(capsys):
    assert main(["--json", "line 0,0,0 1,0,0", "line 5,0,2 7,0,2"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["distance"] == pytest.approx(2.0)
    assert data["closest_point_on_self"] == pytest.approx([5.0, 0.0, 0.0])
    assert data["closest_point_on_other"] == pytest.approx([5.0, 0.0, 2.0])


def test_orientation(capsys):
    assert main(["--orientation", "--json", "line 0,0,0 1,0,0", "point 0,1,0"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["orientation"] == "POSITIVE"
    assert data["offset"] == pytest.approx(1.0)


def test_orientation_with_normal(capsys):
    assert main(["--orientation", "-n", "0,1,0", "line 0,0,0 1,0,0", "point 0,0,1"]) == 0
    assert "NEGATIVE" in capsys.readouterr().out


def test_orientation_requires_point():
    with pytest.raises(SystemExit):
        main(["--orientation", "line 0,0,0 1,0,0", "line 0,1,0 1,1,0"])


def test_degenerate_input_reports_error(capsys):
    assert main(["line 1,1,1 1,1,1", "point 0,0,0"]) == 1
    assert "Error" in capsys.readouterr().err


def test_parse_error_reports_error(capsys):
    assert main(["cube 0,0,0", "point 0,0,0"]) == 1
    assert "unknown primitive kind" in capsys.readouterr().err


def test_missing_file_reports_error(tmp_path, capsys):
    assert main(["--file", str(tmp_path / "absent.txt")]) == 1
    assert "Error" in capsys.readouterr().err


def test_missing_arguments():
    with pytest.raises(SystemExit):
        main(["point 0,0,0"])


def test_file_matrix(tmp_path, capsys):
    f = tmp_path / "prims.txt"
    f.write_text("point 0,0,0\npoint 3,4,0\n")
    assert main(["--json", "--file", str(f)]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["distances"] == [[0.0, 5.0], [5.0, 0.0]]


def test_version(capsys):
    assert main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out
