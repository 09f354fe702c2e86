"""`Bonanza` - juvenile snowshoe hare report for the Bonanza Creek LTER.

Subpackages:
- hares: Data loading, juvenile selection, aggregation
- stats: Two-sample comparison and linear regression
- report: Narrative text, summary table, Markdown document
- visualization: Plotting
- pipeline: Report orchestration
"""

__version__ = "0.1.0"
