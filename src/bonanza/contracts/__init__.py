"""Pipeline contracts and error taxonomy.

This package enforces semantic guarantees between report stages and
defines the exceptions the report raises.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- Loader, transform and statistics raise BonanzaError subclasses for data problems
"""

from bonanza.contracts.failure import (
    BonanzaError,
    ContractViolation,
    InsufficientDataError,
    LoadError,
    ParseError,
)
from bonanza.contracts.base import require
from bonanza.contracts.observations import assert_observations, assert_juveniles
from bonanza.contracts.analysis import (
    assert_finite_sample,
    assert_sex_summaries,
    assert_year_counts,
)

__all__ = [
    "BonanzaError",
    "ContractViolation",
    "InsufficientDataError",
    "LoadError",
    "ParseError",
    "require",
    "assert_observations",
    "assert_juveniles",
    "assert_year_counts",
    "assert_sex_summaries",
    "assert_finite_sample",
]
