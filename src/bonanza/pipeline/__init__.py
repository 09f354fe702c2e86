"""Pipeline modules.

- orchestrator: Report pipeline controller
"""

from bonanza.pipeline.orchestrator import ReportPipeline, ReportResult, SectionFailure

__all__ = [
    "ReportPipeline",
    "ReportResult",
    "SectionFailure",
]
