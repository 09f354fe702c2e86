"""Chart rendering for the juvenile hare report.

Renders three figures to files:

- annual juvenile trap counts (bar chart)
- juvenile weight by sex, grouped by site (box plot with jittered points)
- weight vs. hind foot length (scatter with the fitted regression line)

A chart with nothing to show is still written, with a "No data" note.
If drawing fails the error is logged and an empty chart is written in
its place, so one bad figure never aborts the report.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, Optional, Sequence

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Patch

if TYPE_CHECKING:
    from bonanza.hares.aggregator import YearCounts
    from bonanza.hares.records import ObservationTable
    from bonanza.schemas.internal import InternalVisualizationConfig
    from bonanza.stats.regression import RegressionResult

__all__ = ['HarePlotter']

logger = logging.getLogger(__name__)

SEX_ORDER = ("female", "male", "unknown")


class HarePlotter:
    """Generates the report's chart artifacts.

    **Configuration:**

    All appearance settings (DPI, figure size, style, colors) come from the
    ``visualization`` section of ``InternalConfig``. The matplotlib style is
    applied with ``plt.style.context`` around each figure, so nothing leaks
    into process-wide rcParams.

    Example usage::

        plotter = HarePlotter(config.visualization)
        path = plotter.plot_annual_counts(year_counts, Path("figures/annual_counts"))
    """

    def __init__(self, viz_config: "InternalVisualizationConfig"):
        """Initialize plotter.

        Parameters
        ----------
        viz_config : InternalVisualizationConfig
            Visualization section of the runtime config.
        """
        self.dpi = viz_config.dpi
        self.figsize = tuple(viz_config.figsize)
        self.output_format = viz_config.output_format
        self.bar_color = viz_config.bar_color
        self.sex_colors = dict(viz_config.sex_colors)
        self.line_color = viz_config.line_color
        self.point_alpha = viz_config.point_alpha
        self.jitter_width = viz_config.jitter_width
        self.jitter_seed = viz_config.jitter_seed

        self.style = viz_config.style
        if self.style != "default" and self.style not in plt.style.available:
            logger.warning("Unknown matplotlib style '%s'; using 'default'", self.style)
            self.style = "default"

        logger.debug("HarePlotter initialized (format=%s, dpi=%d, style=%s)",
                     self.output_format, self.dpi, self.style)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _color_for(self, sex: str) -> str:
        return self.sex_colors.get(sex, "#999999")

    @staticmethod
    def _draw_empty(ax: plt.Axes, message: str = "No data") -> None:
        ax.cla()
        ax.text(0.5, 0.5, message, transform=ax.transAxes,
                ha='center', va='center', fontsize=12, color='#666666')
        ax.set_xticks([])
        ax.set_yticks([])

    def _save_figure(self, fig: plt.Figure, output_path: Path) -> Optional[Path]:
        """Save figure in configured format. Returns None if the write fails."""
        output_file = Path(output_path).with_suffix(f'.{self.output_format}')
        try:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_file, dpi=self.dpi, bbox_inches='tight',
                        format=self.output_format)
        except OSError as e:
            logger.warning("Failed to save figure %s: %s", output_file, e)
            return None
        logger.info("Saved figure: %s", output_file)
        return output_file

    def _render(self, name: str, draw: Callable[[plt.Axes], bool], output_path: Path) -> Optional[Path]:
        """Create a figure, run ``draw`` on its axes, save, close.

        ``draw`` returns False when it had nothing to plot.
        """
        with plt.style.context(self.style):
            fig, ax = plt.subplots(figsize=self.figsize, dpi=self.dpi)
            try:
                if not draw(ax):
                    logger.info("No rows for %s chart; writing empty chart", name)
                    self._draw_empty(ax)
            except Exception:
                logger.exception("Failed to draw %s chart; writing empty chart", name)
                self._draw_empty(ax, "Chart unavailable")
            try:
                return self._save_figure(fig, output_path)
            finally:
                plt.close(fig)

    # ------------------------------------------------------------------
    # Charts
    # ------------------------------------------------------------------

    def plot_annual_counts(self, year_counts: "YearCounts", output_path: Path) -> Optional[Path]:
        """Bar chart of juvenile trap counts per year."""
        def draw(ax):
            if len(year_counts) == 0:
                return False
            years = [row.year for row in year_counts]
            counts = [row.count for row in year_counts]
            ax.bar(years, counts, color=self.bar_color, edgecolor='white', width=0.8)
            ax.set_xticks(years)
            ax.set_xticklabels([str(y) for y in years], rotation=45, ha='right')
            ax.set_xlabel('Year')
            ax.set_ylabel('Juvenile hares trapped')
            ax.set_title('Annual juvenile snowshoe hare trap counts')
            return True

        return self._render("annual counts", draw, output_path)

    def plot_weight_by_sex_and_site(
        self,
        observations: "ObservationTable",
        site_names: Dict[str, str],
        output_path: Path,
    ) -> Optional[Path]:
        """Box plot of juvenile weight by sex within each site, with jittered points.

        Records with missing weight are skipped. Unknown sex is drawn as
        its own group.
        """
        def draw(ax):
            weighed = observations.filter(lambda obs: obs.weight is not None)
            if len(weighed) == 0:
                return False

            rng = np.random.default_rng(self.jitter_seed)
            by_site = weighed.group_by(lambda obs: obs.site)
            sites = [code for code in site_names if code in by_site]
            present_sexes = [s for s in SEX_ORDER if any(o.sex == s for o in weighed)]
            box_width = 0.8 / max(len(present_sexes), 1)

            for i, site in enumerate(sites):
                by_sex = by_site[site].group_by(lambda obs: obs.sex)
                for j, sex in enumerate(present_sexes):
                    if sex not in by_sex:
                        continue
                    weights = np.array(by_sex[sex].column("weight"), dtype=float)
                    position = i - 0.4 + box_width * (j + 0.5)
                    color = self._color_for(sex)
                    jitter = rng.uniform(-self.jitter_width, self.jitter_width, len(weights))
                    ax.scatter(position + jitter * box_width, weights, s=12,
                               color=color, alpha=self.point_alpha, zorder=2)
                    ax.boxplot(
                        weights, positions=[position], widths=box_width * 0.8,
                        showfliers=False, patch_artist=True, zorder=3,
                        boxprops={'facecolor': 'none', 'edgecolor': color},
                        medianprops={'color': color},
                        whiskerprops={'color': color},
                        capprops={'color': color},
                    )

            ax.set_xticks(range(len(sites)))
            ax.set_xticklabels([site_names[s] for s in sites])
            ax.set_xlim(-0.6, len(sites) - 0.4)
            ax.set_xlabel('Site')
            ax.set_ylabel('Weight (g)')
            ax.set_title('Juvenile hare weight by sex and site')
            ax.legend(
                handles=[Patch(color=self._color_for(s), label=s.capitalize()) for s in present_sexes],
                loc='upper right', fontsize=9, framealpha=0.9,
            )
            return True

        return self._render("weight by sex and site", draw, output_path)

    def plot_weight_vs_hindfoot(
        self,
        weights: Sequence[float],
        hindfoot_lengths: Sequence[float],
        regression: Optional["RegressionResult"],
        output_path: Path,
    ) -> Optional[Path]:
        """Scatter of hind foot length against weight with the fitted line.

        The line is omitted when ``regression`` is None (fit unavailable).
        """
        def draw(ax):
            x = np.asarray(weights, dtype=float)
            y = np.asarray(hindfoot_lengths, dtype=float)
            if len(x) == 0:
                return False
            ax.scatter(x, y, s=14, color=self.bar_color, alpha=self.point_alpha,
                       label='Juvenile hares')
            if regression is not None:
                xs = np.linspace(x.min(), x.max(), 100)
                ax.plot(xs, regression.predict(xs), color=self.line_color, linewidth=1.5,
                        label=f'Fit: y = {regression.intercept:.2f} + {regression.slope:.3f}x')
                ax.legend(loc='lower right', fontsize=9, framealpha=0.9)
            ax.set_xlabel('Weight (g)')
            ax.set_ylabel('Hind foot length (mm)')
            ax.set_title('Juvenile hare hind foot length vs. weight')
            return True

        return self._render("weight vs hind foot", draw, output_path)
