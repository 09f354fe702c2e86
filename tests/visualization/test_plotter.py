import logging

import pytest

pytestmark = pytest.mark.unit

from bonanza.hares.aggregator import YearCounts, count_by_year, paired_measurements
from bonanza.stats import fit_linear_model
from bonanza.visualization import HarePlotter


@pytest.fixture
def plotter(internal_config):
    return HarePlotter(internal_config.visualization)


def test_plotter_init(internal_config):
    plotter = HarePlotter(internal_config.visualization)
    assert plotter.output_format == "png"
    assert plotter.style == "ggplot"
    assert plotter.figsize == (7.0, 5.0)


def test_unknown_style_falls_back(make_config, caplog):
    config = make_config(plot_style="no-such-style")
    with caplog.at_level(logging.WARNING):
        plotter = HarePlotter(config.visualization)
    assert plotter.style == "default"
    assert "no-such-style" in caplog.text


def test_annual_counts_chart(plotter, juveniles, temp_dir):
    path = plotter.plot_annual_counts(count_by_year(juveniles), temp_dir / "annual_counts")
    assert path == temp_dir / "annual_counts.png"
    assert path.exists() and path.stat().st_size > 0


def test_empty_chart_is_still_written(plotter, temp_dir):
    path = plotter.plot_annual_counts(YearCounts(rows=()), temp_dir / "empty")
    assert path.exists()


def test_weight_by_sex_and_site_chart(plotter, juveniles, internal_config, temp_dir):
    path = plotter.plot_weight_by_sex_and_site(
        juveniles, internal_config.codes.sites, temp_dir / "weights"
    )
    assert path.exists()


def test_weight_vs_hindfoot_chart(plotter, juveniles, temp_dir):
    weights, hindfeet = paired_measurements(juveniles)
    regression = fit_linear_model(weights, hindfeet)
    path = plotter.plot_weight_vs_hindfoot(weights, hindfeet, regression, temp_dir / "fit")
    assert path.exists()


def test_weight_vs_hindfoot_without_fit(plotter, temp_dir):
    path = plotter.plot_weight_vs_hindfoot([800.0, 900.0], [120.0, 125.0], None, temp_dir / "fit")
    assert path.exists()


def test_drawing_failure_writes_empty_chart(plotter, temp_dir, caplog):
    class BrokenFit:
        intercept = 0.0
        slope = 1.0

        def predict(self, x):
            raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR):
        path = plotter.plot_weight_vs_hindfoot(
            [800.0, 900.0, 950.0], [120.0, 125.0, 127.0], BrokenFit(), temp_dir / "broken"
        )
    assert path.exists()
    assert "weight vs hind foot" in caplog.text


def test_svg_output_format(make_config, juveniles, temp_dir):
    plotter = HarePlotter(make_config(plot_format="svg").visualization)
    path = plotter.plot_annual_counts(count_by_year(juveniles), temp_dir / "annual_counts")
    assert path.suffix == ".svg"
    assert path.exists()


def test_style_is_not_applied_globally(plotter, juveniles, temp_dir):
    import matplotlib.pyplot as plt

    before = plt.rcParams["axes.facecolor"]
    plotter.plot_annual_counts(count_by_year(juveniles), temp_dir / "annual_counts")
    assert plt.rcParams["axes.facecolor"] == before
