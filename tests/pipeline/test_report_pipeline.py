import json
import logging
import math

import numpy as np
import pytest
from scipy import stats

pytestmark = pytest.mark.integration

from bonanza.contracts import LoadError, ParseError
from bonanza.contracts.invariants import STAGE_REQUIREMENTS
from bonanza.pipeline import ReportPipeline


def _welch_p(a, b):
    a, b = np.asarray(a, dtype=float), np.asarray(b, dtype=float)
    se_a, se_b = a.var(ddof=1) / len(a), b.var(ddof=1) / len(b)
    t = (a.mean() - b.mean()) / math.sqrt(se_a + se_b)
    df = (se_a + se_b) ** 2 / (se_a ** 2 / (len(a) - 1) + se_b ** 2 / (len(b) - 1))
    return 2 * stats.t.sf(abs(t), df)


class TestEndToEnd:
    """The 20-row synthetic table, checked against values computed by hand."""

    def test_comparison_matches_hand_calculation(
        self, run_report, hare_rows, male_juvenile_weights, female_juvenile_weights
    ):
        result = run_report(hare_rows)

        male_mean = sum(male_juvenile_weights) / len(male_juvenile_weights)
        female_mean = sum(female_juvenile_weights) / len(female_juvenile_weights)
        expected_percent = (male_mean - female_mean) / female_mean * 100

        assert result.comparison.labels == ("male", "female")
        assert result.comparison.percent_difference == pytest.approx(expected_percent, abs=1e-4)
        assert result.comparison.p_value == pytest.approx(
            _welch_p(male_juvenile_weights, female_juvenile_weights), abs=1e-4
        )
        assert round(result.comparison.percent_difference, 4) == 33.7808

    def test_balanced_table_matches_literals(self, run_report, balanced_hare_rows):
        # Equal variances and sizes: Welch df is exactly 18, and the even-df
        # t distribution series gives p = 0.048038 for t = 30 / sqrt(200).
        result = run_report(balanced_hare_rows)
        comparison = result.comparison

        assert comparison.sample_sizes == (10, 10)
        assert comparison.means == pytest.approx((780.0, 750.0))
        assert comparison.difference == pytest.approx(30.0)
        assert round(comparison.percent_difference, 4) == 4.0
        assert comparison.t_statistic == pytest.approx(2.121320, abs=1e-6)
        assert comparison.degrees_of_freedom == pytest.approx(18.0)
        assert round(comparison.p_value, 4) == 0.0480
        assert comparison.cohens_d == pytest.approx(0.948683, abs=1e-6)
        assert [(row.year, row.count) for row in result.year_counts] == [
            (1998, 5), (1999, 4), (2000, 5), (2001, 6),
        ]

    def test_all_sections_available(self, run_report, hare_rows):
        result = run_report(hare_rows)

        assert result.failures == []
        assert [(row.year, row.count) for row in result.year_counts] == [
            (1998, 3), (1999, 4), (2000, 3), (2001, 5),
        ]
        assert [row.sample_size for row in result.sex_summaries] == [6, 6]
        assert result.regression.n == 12
        assert len(result.observations) == 20
        assert len(result.juveniles) == 15

    def test_outputs_are_written(self, run_report, hare_rows, output_dirs):
        result = run_report(hare_rows)

        assert result.report_path == output_dirs["base"] / "report.md"
        text = result.report_path.read_text(encoding="utf-8")
        assert text.startswith("# Juvenile snowshoe hares")
        assert "Section unavailable" not in text
        assert "| Female | 745.00 |" in text
        assert "![" in text

        for name in ("annual_counts", "weight_by_sex_and_site", "weight_vs_hindfoot"):
            assert (output_dirs["figures"] / f"{name}.png").exists()

        summary = result.summary_table_path.read_text()
        assert summary.splitlines()[0] == "sex,mean_weight_g,median_weight_g,sd_weight_g,sample_size"

        saved = json.loads((output_dirs["base"] / "runtime_config.json").read_text())
        assert saved["analysis"]["confidence_level"] == 0.95
        assert "created_at" in saved


class TestSectionIsolation:
    """An InsufficientDataError disables only the section that needed it."""

    ROWS = [
        "6/1/2001,,bonrip,1A,f,j,700,115,",
        "6/2/2001,,bonbs,2B,f,j,760,119,",
        "6/3/2001,,bonmat,3C,f,j,820,121,",
        "6/4/2001,,bonrip,1A,m,j,900,126,",
        "6/5/2001,,bonbs,2B,m,a,1400,138,",
    ]

    def test_single_male_disables_comparison_only(self, run_report):
        result = run_report(self.ROWS)

        assert [f.section for f in result.failures] == ["comparison"]
        assert "at least 2" in result.failures[0].reason
        assert result.comparison is None
        assert result.year_counts is not None
        assert result.regression is not None
        assert [row.sex for row in result.sex_summaries] == ["female", "male"]

        text = result.report_path.read_text(encoding="utf-8")
        assert text.count("*Section unavailable:") == 1
        assert "Simple linear regression" in text

    def test_no_juveniles(self, run_report, output_dirs):
        rows = [
            "6/1/2001,,bonrip,1A,f,a,1300,135,",
            "6/2/2001,,bonbs,2B,m,a,1400,138,",
        ]
        result = run_report(rows)

        assert [f.section for f in result.failures] == [
            "annual_counts", "sex_summary", "comparison", "regression",
        ]
        assert len(result.juveniles) == 0
        text = result.report_path.read_text(encoding="utf-8")
        assert text.count("*Section unavailable:") == 4

        for name in ("annual_counts", "weight_by_sex_and_site", "weight_vs_hindfoot"):
            assert (output_dirs["figures"] / f"{name}.png").exists()
            assert f"](figures/{name}.png)" in text
        assert set(result.figures) == {
            "annual_counts", "weight_by_sex_and_site", "weight_vs_hindfoot",
        }

    def test_regression_failure_keeps_scatter(self, run_report, output_dirs):
        rows = [
            "6/1/2001,,bonrip,1A,f,j,700,115,",
            "6/2/2001,,bonbs,2B,m,j,900,NA,",
            "6/3/2001,,bonmat,3C,m,j,950,126,",
        ]
        result = run_report(rows)

        assert "regression" in [f.section for f in result.failures]
        assert result.regression is None
        assert (output_dirs["figures"] / "weight_vs_hindfoot.png").exists()
        text = result.report_path.read_text(encoding="utf-8")
        section = text.split("## Relationship between juvenile weight")[1]
        assert section.index("*Section unavailable:") < section.index(
            "](figures/weight_vs_hindfoot.png)"
        )

    def test_failed_sections_are_section_level(self, run_report):
        result = run_report(["6/1/2001,,bonrip,1A,f,a,1300,135,"])
        for failure in result.failures:
            assert STAGE_REQUIREMENTS[failure.section] == "SECTION"


class TestFatalErrors:

    def test_parse_error_aborts_run(self, run_report, output_dirs):
        with pytest.raises(ParseError):
            run_report(["6/1/2001,,bonxyz,1A,f,j,700,115,"])
        assert not (output_dirs["base"] / "report.md").exists()

    def test_bad_juvenile_date_aborts_run(self, run_report):
        with pytest.raises(ParseError, match="2001-06-01"):
            run_report(["2001-06-01,,bonrip,1A,f,j,700,115,"])

    def test_missing_file(self, make_config, output_dirs, temp_dir):
        config = make_config(input_path=str(temp_dir / "missing.csv"))
        with pytest.raises(LoadError):
            ReportPipeline(config, output_dirs, configure_logging=False).run()


def test_visualization_disabled(run_report, hare_rows, output_dirs):
    result = run_report(hare_rows, visualization={"enabled": False})

    assert result.figures == {}
    assert list(output_dirs["figures"].iterdir()) == []
    assert "![" not in result.report_path.read_text(encoding="utf-8")


def test_comparison_groups_follow_config(run_report, hare_rows):
    result = run_report(
        hare_rows, analysis={"comparison_group": "female", "reference_group": "male"}
    )
    assert result.comparison.labels == ("female", "male")
    assert result.comparison.difference < 0


def test_setup_logging_writes_log_file(make_config, output_dirs, restore_root_logging):
    config = make_config(base_dir=str(output_dirs["base"]), log_level="DEBUG")
    ReportPipeline(config, output_dirs)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
    assert (output_dirs["logs"] / "report.log").exists()
