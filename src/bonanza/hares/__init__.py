"""Hare capture data modules.

- records: Typed records and the observation table
- loader: Read the capture CSV
- transform: Juvenile selection and date parsing
- aggregator: Counts and weight summaries
"""

from bonanza.hares.records import Observation, JuvenileObservation, ObservationTable
from bonanza.hares.loader import HareDataLoader
from bonanza.hares.transform import select_juveniles
from bonanza.hares.aggregator import (
    count_by_year,
    paired_measurements,
    summarize_by_sex,
    weights_by_sex,
)

__all__ = [
    "Observation",
    "JuvenileObservation",
    "ObservationTable",
    "HareDataLoader",
    "select_juveniles",
    "count_by_year",
    "summarize_by_sex",
    "weights_by_sex",
    "paired_measurements",
]
