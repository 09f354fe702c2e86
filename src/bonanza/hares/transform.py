"""Juvenile selection and date parsing.

Produces the sub-population every analysis in the report is about:
juvenile hares, with the source month/day/year text parsed into a
calendar date and the capture year derived from it.
"""

import logging
from datetime import date, datetime
from typing import Sequence

from bonanza.contracts import ParseError
from bonanza.hares.records import JuvenileObservation, ObservationTable

__all__ = ['parse_capture_date', 'select_juveniles']

logger = logging.getLogger(__name__)


def parse_capture_date(text: str, formats: Sequence[str], row_id: int | None = None) -> date:
    """Parse a month/day/year date, trying ``formats`` in order.

    Raises
    ------
    ParseError
        If no format matches.
    """
    for fmt in formats:
        try:
            return datetime.strptime(text.strip(), fmt).date()
        except ValueError:
            continue
    raise ParseError(
        f"Row {row_id}: date {text!r} matches none of {list(formats)}",
        row_id=row_id, column="date",
    )


def select_juveniles(table: ObservationTable, date_formats: Sequence[str]) -> ObservationTable:
    """Keep juvenile records and attach their parsed date and year.

    Records with age "adult" or "unknown" are excluded. The output keeps
    source order and is a new table; ``table`` is untouched.

    Parameters
    ----------
    table : ObservationTable
        Loader output.
    date_formats : sequence of str
        ``strptime`` formats, tried in order (e.g. ``"%m/%d/%Y"``, ``"%m/%d/%y"``).

    Returns
    -------
    ObservationTable of JuvenileObservation

    Raises
    ------
    ParseError
        If any juvenile's date cannot be parsed. Failures are never dropped.
    """
    juveniles = []
    for obs in table.filter(lambda o: o.age == "juvenile"):
        observed_on = parse_capture_date(obs.date, date_formats, obs.row_id)
        juveniles.append(JuvenileObservation(
            row_id=obs.row_id,
            date=obs.date,
            site=obs.site,
            age=obs.age,
            sex=obs.sex,
            weight=obs.weight,
            hindfoot_length=obs.hindfoot_length,
            observed_on=observed_on,
            year=observed_on.year,
        ))

    logger.info("Selected %d juvenile records out of %d", len(juveniles), len(table))
    return ObservationTable(juveniles)
