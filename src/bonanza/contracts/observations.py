"""Load and transform stage contracts.

Enforces the guarantee that the loader produced canonical categorical
values and that the juvenile stage produced only dated juvenile records.
"""

import math

from bonanza.contracts.base import require

AGES = {"juvenile", "adult", "unknown"}
SEXES = {"female", "male", "unknown"}


def assert_observations(table, sites) -> None:
    """Enforce loader contract.

    Parameters
    ----------
    table : ObservationTable
        Output of ``HareDataLoader.load()``.
    sites : iterable of str
        Configured site codes.

    Raises
    ------
    ContractViolation
        If a record carries a non-canonical category or a negative measurement.
    """
    sites = set(sites)
    previous = -1
    for obs in table:
        require(
            obs.row_id > previous,
            f"Observation contract violated: row_id {obs.row_id} out of order"
        )
        previous = obs.row_id
        require(
            obs.age in AGES,
            f"Observation contract violated: row {obs.row_id} age '{obs.age}'"
        )
        require(
            obs.sex in SEXES,
            f"Observation contract violated: row {obs.row_id} sex '{obs.sex}'"
        )
        require(
            obs.site in sites,
            f"Observation contract violated: row {obs.row_id} site '{obs.site}'"
        )
        for name in ("weight", "hindfoot_length"):
            value = getattr(obs, name)
            require(
                value is None or math.isfinite(value),
                f"Observation contract violated: row {obs.row_id} {name} is {value!r}, "
                "missing values must be None"
            )
            require(
                value is None or value >= 0,
                f"Observation contract violated: row {obs.row_id} {name} is negative ({value!r})"
            )


def assert_juveniles(table) -> None:
    """Enforce juvenile selection contract.

    Every record must be a juvenile with a parsed date whose year matches
    the derived ``year`` field.
    """
    for obs in table:
        require(
            obs.age == "juvenile",
            f"Juvenile contract violated: row {obs.row_id} has age '{obs.age}'"
        )
        require(
            obs.observed_on.year == obs.year,
            f"Juvenile contract violated: row {obs.row_id} year {obs.year} "
            f"does not match date {obs.observed_on}"
        )
