"""
Unit tests for scripts/analyze_matrix.py

Calls main() in-process with an argv list and inspects stdout.
"""

import json

import pytest

from scripts.analyze_matrix import format_report, main
from algebra.matrix import IDENTITY, Matrix
from visualizer.snapshot import compute_snapshot


class TestMain:

    def test_text_report_for_rotation(self, capsys):
        assert main(["0", "-1", "1", "0"]) == 0
        out = capsys.readouterr().out
        assert "Rotation" in out
        assert "complex eigenvalues" in out
        assert "P·D·P⁻¹  = not available" in out

    def test_json_output(self, capsys):
        main(["2", "0", "0", "3", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["eigen"]["values"] == [3.0, 2.0]

    def test_matrix_b_and_phase(self, capsys):
        main(["2", "0", "0", "3", "--b", "0", "-1", "1", "0", "--phase", "step_a", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["current"] == [[2.0, 0.0], [0.0, 3.0]]
        assert data["matrix_c"] == [[0.0, -3.0], [2.0, 0.0]]

    def test_preset_overrides_a(self, capsys):
        main(["5", "5", "5", "5", "--preset", "shear_x", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["classification"]["kind"] == "shear_x"

    def test_japanese(self, capsys):
        main(["1", "0", "0", "1", "--language", "ja"])
        assert "単位行列" in capsys.readouterr().out

    def test_bad_phase_exits(self):
        with pytest.raises(SystemExit):
            main(["1", "0", "0", "1", "--phase", "later"])


class TestFormatReport:

    def test_degenerate_eigenvector_flagged(self):
        report = format_report(compute_snapshot(Matrix(1, 1e-6, 0, 2), IDENTITY))
        assert "(degenerate)" in report

    def test_singular_a(self):
        report = format_report(compute_snapshot(Matrix(1, 0, 0, 0), IDENTITY))
        assert "A is singular" in report
        assert "Singular" in report

    def test_diagonalization_shown(self):
        report = format_report(compute_snapshot(Matrix(2, 0, 0, 3), IDENTITY))
        assert report.count("\nP") >= 2
