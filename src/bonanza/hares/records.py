"""Typed capture records and the in-memory table that holds them.

Every stage receives and returns an ``ObservationTable``: an ordered,
immutable sequence of frozen records. Field access is by attribute,
never by column label, so a typo fails at attribute lookup instead of
silently producing an empty column.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

__all__ = ['Observation', 'JuvenileObservation', 'ObservationTable']


@dataclass(frozen=True)
class Observation:
    """One hare capture record as loaded from the source table.

    ``date`` is the untouched source text. ``weight`` (g) and
    ``hindfoot_length`` (mm) are None when the source field is missing.
    """
    row_id: int
    date: str
    site: str
    age: str
    sex: str
    weight: Optional[float]
    hindfoot_length: Optional[float]


@dataclass(frozen=True)
class JuvenileObservation(Observation):
    """A juvenile capture with its date parsed and the year derived."""
    observed_on: date
    year: int


R = TypeVar("R", bound=Observation)


class ObservationTable(Generic[R]):
    """Ordered, read-only collection of capture records.

    Operations return new tables; the underlying tuple is never modified.

    Examples
    --------
    >>> table = ObservationTable(records)
    >>> females = table.filter(lambda obs: obs.sex == "female")
    >>> by_site = table.group_by(lambda obs: obs.site)
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[R] = ()):
        self._records = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[R]:
        return iter(self._records)

    def __getitem__(self, index: int) -> R:
        return self._records[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ObservationTable):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"ObservationTable({len(self._records)} records)"

    @property
    def records(self) -> tuple:
        return self._records

    def filter(self, predicate: Callable[[R], bool]) -> "ObservationTable[R]":
        """Return the records for which ``predicate`` is true, in order."""
        return ObservationTable(obs for obs in self._records if predicate(obs))

    def group_by(self, key: Callable[[R], Any]) -> dict:
        """Group records by ``key``.

        Returns a dict of key -> ObservationTable. Groups appear in order of
        first occurrence and keep source order within each group.
        """
        groups: dict = {}
        for obs in self._records:
            groups.setdefault(key(obs), []).append(obs)
        return {k: ObservationTable(v) for k, v in groups.items()}

    def column(self, name: str) -> tuple:
        """Return one field of every record, missing values included."""
        return tuple(getattr(obs, name) for obs in self._records)
