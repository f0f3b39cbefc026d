# tests/test_services.py

import pandas as pd
import pytest

from interface.batch_runner import BatchRunner
from services.bar_selector import BarSelector, bar_area


class TestBarSelector:

    def test_bar_area(self):
        assert bar_area(20) == pytest.approx(3.1416e-4, rel=1e-4)

    def test_select_options_for_scas_beam(self):
        selector = BarSelector()
        as_required = 5.207e-4
        options = selector.select_options(as_required, width=0.30)

        assert [opt.label for opt in options] == ["7Ø10", "5Ø12", "3Ø16"]
        assert all(opt.as_provided >= as_required for opt in options)
        assert all(opt.clear_spacing >= max(opt.diameter / 1000, 0.020) for opt in options)
        efficiencies = [opt.efficiency for opt in options]
        assert efficiencies == sorted(efficiencies)

    def test_restricted_diameters(self):
        options = BarSelector(available_diameters=[25, 20]).select_options(5.207e-4, width=0.30, top_n=5)
        assert [opt.diameter for opt in options] == [20, 25]
        assert all(opt.count >= 2 for opt in options)

    def test_nothing_fits_in_one_layer(self):
        assert BarSelector().select_options(1e-2, width=0.30) == []

    def test_no_requirement(self):
        assert BarSelector().select_options(0.0, width=0.30) == []


class TestBatchRunner:

    def test_runs_every_combination(self):
        params = {
            "fck": [25, 30],
            "grade": ["S400", "S500"],
            "width": [0.30], "height": [0.50], "ratio": [0.9],
            "moment": [100, 450],
        }
        results = BatchRunner(params, show_progress=False).run()
        assert len(results) == 8
        assert all(row["status"] == "OK" for row in results)
        assert {row["branch"] for row in results} == {"SCAS", "SAAS"}

    def test_exposure_combinations_and_errors(self):
        params = {
            "exposure": [("XC1", "XD1"), ()],
            "grade": ["S500"],
            "width": [0.30], "height": [0.50],
            "moment": [100],
        }
        results = BatchRunner(params, show_progress=False).run()
        ok, failed = results
        assert ok["status"] == "OK"
        assert ok["structural_class"] == "XD1"
        assert ok["exposure"] == "XC1+XD1"
        assert failed["status"] == "Error"
        assert "undetermined" in failed["message"]

    def test_save_to_csv_converts_areas(self, tmp_path):
        params = {"fck": [25], "grade": ["S500"], "width": [0.30], "height": [0.50], "moment": [100]}
        runner = BatchRunner(params, show_progress=False)
        results = runner.run()
        outfile = tmp_path / "result.csv"
        runner.save_to_csv(str(outfile))

        df = pd.read_csv(outfile, encoding="utf-8-sig")
        assert len(df) == 1
        assert df.loc[0, "as_th"] == pytest.approx(results[0]["as_th"] * 1e4)
        assert df.loc[0, "branch"] == "SCAS"
