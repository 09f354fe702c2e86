"""Report pipeline orchestration.

Runs the report top to bottom: load, select juveniles, then the
independent analysis sections, then rendering. Manages logging setup,
section isolation, and the files the run writes.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from bonanza.contracts import InsufficientDataError, assert_juveniles, assert_observations
from bonanza.hares.aggregator import (
    YearCounts,
    count_by_year,
    paired_measurements,
    summarize_by_sex,
    weights_by_sex,
)
from bonanza.hares.loader import HareDataLoader
from bonanza.hares.records import ObservationTable
from bonanza.hares.transform import select_juveniles
from bonanza.report import (
    ReportDocument,
    ReportSection,
    describe_annual_counts,
    describe_regression,
    describe_weight_comparison,
    format_summary_table,
    summary_frame,
)
from bonanza.stats import MeanComparison, RegressionResult, compare_means, fit_linear_model
from bonanza.visualization import HarePlotter

if TYPE_CHECKING:
    from bonanza.schemas import InternalConfig

__all__ = ['ReportPipeline', 'ReportResult', 'SectionFailure']

logger = logging.getLogger(__name__)

REPORT_TITLE = "Juvenile snowshoe hares in the Bonanza Creek Experimental Forest"
REPORT_INTRO = (
    "This report explores counts and sizes of juvenile snowshoe hares "
    "(*Lepus americanus*) recorded in capture-recapture studies at three "
    "trapping grids in the Bonanza Creek Experimental Forest, Alaska: annual "
    "juvenile trap counts, juvenile weights by sex and site, and the relationship "
    "between juvenile weight and hind foot length."
)


@dataclass(frozen=True)
class SectionFailure:
    """A report section that could not be computed."""
    section: str
    reason: str


@dataclass
class ReportResult:
    """Everything one run computed. Values are unrounded."""
    observations: ObservationTable
    juveniles: ObservationTable
    year_counts: Optional[YearCounts] = None
    sex_summaries: tuple = ()
    comparison: Optional[MeanComparison] = None
    regression: Optional[RegressionResult] = None
    figures: Dict[str, Optional[Path]] = field(default_factory=dict)
    failures: List[SectionFailure] = field(default_factory=list)
    report_path: Optional[Path] = None
    summary_table_path: Optional[Path] = None


class ReportPipeline:
    """Runs the juvenile hare report.

    **Stages:**

    1. **Load**: read the capture CSV into typed records (fatal on error).
    2. **Select**: keep juveniles, parse dates, derive years (fatal on error).
    3. **Sections**: annual counts, weight summary by sex, male/female weight
       comparison, weight vs. hind foot regression. Each section depends only
       on the juvenile table. An ``InsufficientDataError`` in one section is
       recorded as a ``SectionFailure`` and the section is shown as
       unavailable; the rest of the report still renders.
    4. **Render**: charts, summary CSV, Markdown report.

    ``LoadError`` and ``ParseError`` propagate to the caller.

    **Logging:**

    Output goes to both console and ``logs/report.log``. Level from
    ``config.logging.level``.

    Example usage::

        config = resolve_config(ParamConfig(), None, CLIConfig(input_path="hares.csv"))
        output_dirs = setup_output_directories(config.base_dir)
        result = ReportPipeline(config, output_dirs).run()
        print(result.report_path)
    """

    def __init__(self, config: "InternalConfig", output_dirs: Dict[str, Path],
                 configure_logging: bool = True):
        """Initialize pipeline.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        output_dirs : dict
            Output directory paths (from setup_output_directories):
            base, figures, tables, logs.
        configure_logging : bool, optional
            If True (default), install file and console handlers on the
            root logger. Tests pass False to leave pytest's capture alone.
        """
        self.config = config
        self.output_dirs = {k: Path(v) for k, v in output_dirs.items()}
        self.loader = HareDataLoader(config)
        self.plotter = HarePlotter(config.visualization) if config.visualization.enabled else None
        self.decimals = config.analysis.decimals
        self.alpha = 1.0 - config.analysis.confidence_level

        if configure_logging:
            self._setup_logging()

    def _setup_logging(self):
        """Configure root logger with file and console handlers."""
        log_level = getattr(logging, self.config.logging.level, logging.INFO)

        log_dir = self.output_dirs["logs"]
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "report.log"

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        root = logging.getLogger()
        root.setLevel(log_level)
        for handler in root.handlers[:]:
            root.removeHandler(handler)

        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        logger.info("Logging: level=%s, file=%s", self.config.logging.level, log_path)

    def _run_section(self, name: str, compute: Callable, result: ReportResult):
        """Run one section's computation, isolating InsufficientDataError."""
        try:
            return compute()
        except InsufficientDataError as e:
            logger.warning("Section '%s' unavailable: %s", name, e)
            result.failures.append(SectionFailure(section=name, reason=str(e)))
            return None

    def _failure_reason(self, result: ReportResult, name: str) -> str:
        return next(f.reason for f in result.failures if f.section == name)

    def _persist_runtime_config(self) -> Path:
        """Save the resolved configuration next to the report."""
        config_dict = self.config.model_dump()
        config_dict["created_at"] = datetime.now(timezone.utc).isoformat()
        config_file = self.output_dirs["base"] / "runtime_config.json"
        with open(config_file, 'w') as f:
            json.dump(config_dict, f, indent=2, default=str)
        logger.info("Runtime config saved: %s", config_file)
        return config_file

    def _figure(self, name: str, render: Callable[[Path], Optional[Path]], result: ReportResult):
        if self.plotter is None:
            return None
        path = render(self.output_dirs["figures"] / name)
        result.figures[name] = path
        return path

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def load(self) -> tuple:
        """Load observations and select juveniles. Errors are fatal."""
        observations = self.loader.load(self.config.input_path)
        assert_observations(observations, self.config.codes.sites)
        juveniles = select_juveniles(observations, self.config.transform.date_formats)
        assert_juveniles(juveniles)
        return observations, juveniles

    def compute(self, observations: ObservationTable, juveniles: ObservationTable) -> ReportResult:
        """Run the analysis sections. No files are written."""
        result = ReportResult(observations=observations, juveniles=juveniles)
        analysis = self.config.analysis

        def annual_counts():
            counts = count_by_year(juveniles)
            if not len(counts):
                raise InsufficientDataError("No juvenile captures to count", required=1, available=0)
            return counts

        result.year_counts = self._run_section("annual_counts", annual_counts, result)

        def sex_summary():
            rows = summarize_by_sex(juveniles)
            if not rows:
                raise InsufficientDataError("No juveniles of known sex with a recorded weight")
            return rows

        result.sex_summaries = self._run_section("sex_summary", sex_summary, result) or ()

        def comparison():
            weights = weights_by_sex(juveniles)
            return compare_means(
                weights[analysis.comparison_group],
                weights[analysis.reference_group],
                labels=(analysis.comparison_group, analysis.reference_group),
                confidence_level=analysis.confidence_level,
            )

        result.comparison = self._run_section("comparison", comparison, result)

        def regression():
            return fit_linear_model(*paired_measurements(juveniles))

        result.regression = self._run_section("regression", regression, result)
        return result

    def render(self, result: ReportResult) -> ReportResult:
        """Write charts, the summary CSV, and the Markdown report."""
        juveniles = result.juveniles
        document = ReportDocument(title=REPORT_TITLE, intro=REPORT_INTRO)

        # Annual counts (chart is written even when the counts are unavailable)
        title = "Annual juvenile hare trap counts"
        figure = self._figure(
            "annual_counts",
            lambda p: self.plotter.plot_annual_counts(
                result.year_counts or YearCounts(rows=()), p
            ),
            result,
        )
        if result.year_counts is None:
            document.add_unavailable(
                title, self._failure_reason(result, "annual_counts"),
                figure=figure, figure_alt="Annual juvenile hare trap counts",
            )
        else:
            document.add(ReportSection(
                title=title,
                text=describe_annual_counts(result.year_counts, self.decimals),
                figure=figure,
                figure_alt="Annual juvenile hare trap counts",
            ))

        # Weights by sex and site (visual exploration, always shown)
        figure = self._figure(
            "weight_by_sex_and_site",
            lambda p: self.plotter.plot_weight_by_sex_and_site(
                juveniles, self.config.codes.sites, p
            ),
            result,
        )
        document.add(ReportSection(
            title="Juvenile hare weights by sex and site",
            text=(
                "Juvenile weights by sex at each trapping grid. Boxes show the median "
                "and interquartile range; points are individual hares. Hares of "
                "unrecorded sex are shown as their own group."
            ),
            figure=figure,
            figure_alt="Juvenile weight by sex and site",
        ))

        # Summary table
        title = "Juvenile weight summary by sex"
        if not result.sex_summaries:
            document.add_unavailable(title, self._failure_reason(result, "sex_summary"))
        else:
            table_path = self.output_dirs["tables"] / self.config.output.summary_table_filename
            summary_frame(result.sex_summaries).to_csv(table_path, index=False)
            result.summary_table_path = table_path
            logger.info("Summary table saved: %s", table_path)
            document.add(ReportSection(
                title=title,
                table=format_summary_table(result.sex_summaries, self.decimals),
            ))

        # Weight comparison
        title = "Juvenile weight comparison: male and female"
        if result.comparison is None:
            document.add_unavailable(title, self._failure_reason(result, "comparison"))
        else:
            document.add(ReportSection(
                title=title,
                text=describe_weight_comparison(result.comparison, self.alpha, self.decimals),
            ))

        # Regression (scatter without a fitted line when the fit is unavailable)
        title = "Relationship between juvenile weight and hind foot length"
        weights, hindfeet = paired_measurements(juveniles)
        figure = self._figure(
            "weight_vs_hindfoot",
            lambda p: self.plotter.plot_weight_vs_hindfoot(
                weights, hindfeet, result.regression, p
            ),
            result,
        )
        if result.regression is None:
            document.add_unavailable(
                title, self._failure_reason(result, "regression"),
                figure=figure, figure_alt="Juvenile hind foot length vs. weight",
            )
        else:
            document.add(ReportSection(
                title=title,
                text=describe_regression(result.regression, self.decimals),
                figure=figure,
                figure_alt="Juvenile hind foot length vs. weight",
            ))

        result.report_path = document.write(
            self.output_dirs["base"] / self.config.output.report_filename
        )
        return result

    def run(self) -> ReportResult:
        """Run the full report.

        Returns
        -------
        ReportResult

        Raises
        ------
        LoadError, ParseError
            The input could not be loaded; no report is written.
        """
        logger.info("=" * 60)
        logger.info("Starting juvenile hare report: %s", self.config.input_path)
        logger.info("=" * 60)

        if self.config.output.persist_config:
            self._persist_runtime_config()

        observations, juveniles = self.load()
        result = self.render(self.compute(observations, juveniles))

        if result.failures:
            logger.warning("Report finished with %d unavailable section(s): %s",
                           len(result.failures),
                           ", ".join(f.section for f in result.failures))
        else:
            logger.info("Report finished: %s", result.report_path)
        return result
