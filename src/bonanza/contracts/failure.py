"""Centralized error taxonomy for the report pipeline.

Input problems (``LoadError``, ``ParseError``) are fatal to a run.
``InsufficientDataError`` is fatal only to the report section that needed
the missing computation. ``ContractViolation`` means a stage handed the
next one something it promised never to produce.
"""


class BonanzaError(Exception):
    """Base class for expected, user-facing report failures."""


class LoadError(BonanzaError):
    """Raised when the input table is missing, unreadable, or malformed.

    Malformed covers an empty file, a row with more or fewer fields than
    the header, and a missing required column.
    """


class ParseError(BonanzaError):
    """Raised when a field cannot be converted to its expected type.

    Examples are a non-numeric weight, an unrecognized site code, or a
    date that matches none of the configured formats.
    """

    def __init__(self, message: str, row_id: int | None = None, column: str | None = None):
        super().__init__(message)
        self.row_id = row_id
        self.column = column


class InsufficientDataError(BonanzaError):
    """Raised when a statistic's minimum sample-size precondition is not met."""

    def __init__(self, message: str, required: int | None = None, available: int | None = None):
        super().__init__(message)
        self.required = required
        self.available = available


class ContractViolation(RuntimeError):
    """Raised when a pipeline contract is violated.

    This indicates a bug in pipeline logic, not bad user input or a small
    sample. It means a stage did not produce the invariants it promised,
    or a caller skipped a precondition (e.g. passed NaN into a t-test).

    Key distinction:
    - ValueError: User/config error (handled by Pydantic)
    - BonanzaError: Bad input data or too little of it
    - ContractViolation: Pipeline bug (programmer error)
    """
    pass
