"""Read the Bonanza Creek hare capture table into typed records.

The source is a delimited text file with a header row, one row per
capture. This module handles the two-stage process of turning it into
an ``ObservationTable``:

1. **Read**: pandas reads every field as text, so nothing is coerced
   behind our back (``"NA"`` stays ``"NA"``, ``"007"`` stays ``"007"``).
2. **Convert**: each row becomes an ``Observation``. Numeric columns are
   parsed to float, categorical codes are normalized through the
   configured code maps, and missing markers become None.

Structural problems (missing file, ragged rows, missing columns) raise
``LoadError``. Field-level problems (non-numeric or negative weight, unknown site)
raise ``ParseError``. Both are fatal: there is no partial table.
"""

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import pandas as pd

from bonanza.contracts import LoadError, ParseError
from bonanza.hares.records import Observation, ObservationTable

if TYPE_CHECKING:
    from bonanza.schemas import InternalConfig

__all__ = ['HareDataLoader']

logger = logging.getLogger(__name__)

NUMERIC_COLUMNS = ("weight", "hindfoot_length")


class HareDataLoader:
    """Load a hare capture CSV into an ``ObservationTable``.

    Configuration
    =============
    Reads from ``config.reader``:

    - `delimiter` : field separator (default ",")
    - `encoding` : file encoding (default "utf-8")
    - `missing_markers` : field values treated as missing (default "", "NA", ".")
    - `column_aliases` : logical column -> accepted header names, matched
      case-insensitively (``site`` accepts ``grid``, ``hindfoot_length``
      accepts ``hindft``)

    and from ``config.codes`` the age, sex and site code maps.

    Notes
    -----
    - Age and sex codes outside the maps become "unknown"; unknown sex is
      kept as its own category and never merged into female or male.
    - Site codes outside the map are a ``ParseError``: sites are a fixed set.
    - Row ids are 0-based positions in the data rows (header excluded).

    Examples
    --------
    >>> loader = HareDataLoader(config)
    >>> table = loader.load("data/bonanza_hares.csv")
    >>> len(table)
    3197
    """

    def __init__(self, config: "InternalConfig"):
        """Initialize loader with validated configuration.

        Parameters
        ----------
        config : InternalConfig
            Fully validated runtime configuration.
        """
        self.delimiter = config.reader.delimiter
        self.encoding = config.reader.encoding
        self.missing_markers = {m.strip().lower() for m in config.reader.missing_markers}
        self.column_aliases = config.reader.column_aliases
        self.age_codes = config.codes.age
        self.sex_codes = config.codes.sex
        self.site_codes = config.codes.sites

    def read(self, filepath: Path | str) -> pd.DataFrame:
        """Read the delimited file into a text-only DataFrame.

        Parameters
        ----------
        filepath : Path or str
            Path to the capture table.

        Returns
        -------
        pd.DataFrame
            Raw frame, all columns ``str``, columns renamed to their logical
            names (``date``, ``site``, ``age``, ``sex``, ``weight``,
            ``hindfoot_length``). Extra source columns are dropped.

        Raises
        ------
        LoadError
            If the file is missing, unreadable, empty, has a row with a
            different number of fields than the header, or lacks a
            required column.
        """
        path = Path(filepath)
        if not path.is_file():
            raise LoadError(f"Input file not found: {path}")

        try:
            # keep_default_na=False keeps empty fields as "" so that only
            # fields absent from a short row come back as NaN. The python
            # engine does this on every pandas release; the C engine in
            # pandas 3 fills them with "".
            frame = pd.read_csv(
                path,
                sep=self.delimiter,
                engine="python",
                dtype=str,
                keep_default_na=False,
                encoding=self.encoding,
                skip_blank_lines=True,
            )
        except pd.errors.EmptyDataError as e:
            raise LoadError(f"Input file is empty: {path}") from e
        except pd.errors.ParserError as e:
            raise LoadError(f"Inconsistent column count in {path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Could not read {path}: {e}") from e

        if len(frame) and not isinstance(frame.index, pd.RangeIndex):
            # pandas turns the first column into the index when every data
            # row has one more field than the header
            raise LoadError(
                f"Inconsistent column count in {path}: data rows have more fields than the header"
            )

        short_rows = frame.index[frame.isna().any(axis=1)].tolist()
        if short_rows:
            raise LoadError(
                f"Inconsistent column count in {path}: {len(short_rows)} row(s) have "
                f"fewer fields than the header (first at data row {short_rows[0]})"
            )

        frame = frame.rename(columns=self._resolve_columns(frame.columns, path))
        logger.debug("Read %d rows x %d columns from %s", len(frame), len(frame.columns), path)
        return frame[list(self.column_aliases)]

    def _resolve_columns(self, columns, path: Path) -> dict:
        """Map source headers to logical column names."""
        lookup = {str(col).strip().lower(): col for col in columns}
        mapping = {}
        missing = []
        for logical, aliases in self.column_aliases.items():
            source = next((lookup[a.lower()] for a in aliases if a.lower() in lookup), None)
            if source is None:
                missing.append(f"{logical} ({'/'.join(aliases)})")
            else:
                mapping[source] = logical
        if missing:
            raise LoadError(f"Missing required column(s) in {path}: {', '.join(missing)}")
        return mapping

    def _is_missing(self, value: str) -> bool:
        return value.strip().lower() in self.missing_markers

    def _parse_number(self, value: str, row_id: int, column: str) -> Optional[float]:
        if self._is_missing(value):
            return None
        try:
            number = float(value)
        except ValueError:
            raise ParseError(
                f"Row {row_id}: {column} value {value!r} is not numeric",
                row_id=row_id, column=column,
            ) from None
        if math.isnan(number):
            return None
        if math.isinf(number):
            raise ParseError(
                f"Row {row_id}: {column} value {value!r} is not finite",
                row_id=row_id, column=column,
            )
        if number < 0:
            raise ParseError(
                f"Row {row_id}: {column} value {value!r} is negative",
                row_id=row_id, column=column,
            )
        return number

    def _parse_site(self, value: str, row_id: int) -> str:
        code = value.strip().lower()
        if code not in self.site_codes:
            raise ParseError(
                f"Row {row_id}: unknown site code {value!r} "
                f"(expected one of {sorted(self.site_codes)})",
                row_id=row_id, column="site",
            )
        return code

    def to_observations(self, frame: pd.DataFrame) -> ObservationTable:
        """Convert a raw text frame from ``read()`` into typed records.

        Raises
        ------
        ParseError
            If a numeric field is not a non-negative number or a site code is unknown.
        """
        records = []
        for row_id, row in enumerate(frame.itertuples(index=False)):
            records.append(Observation(
                row_id=row_id,
                date=row.date.strip(),
                site=self._parse_site(row.site, row_id),
                age=self.age_codes.get(row.age.strip().lower(), "unknown"),
                sex=self.sex_codes.get(row.sex.strip().lower(), "unknown"),
                weight=self._parse_number(row.weight, row_id, "weight"),
                hindfoot_length=self._parse_number(
                    row.hindfoot_length, row_id, "hindfoot_length"
                ),
            ))
        return ObservationTable(records)

    def load(self, filepath: Path | str) -> ObservationTable:
        """Read and convert a capture table in one call.

        This is the primary entry point.

        Parameters
        ----------
        filepath : Path or str
            Path to the capture table.

        Returns
        -------
        ObservationTable
            One ``Observation`` per data row, in file order.

        Raises
        ------
        LoadError
            Structural problem with the file (see ``read``).
        ParseError
            Field-level conversion failure (see ``to_observations``).
        """
        table = self.to_observations(self.read(filepath))
        logger.info("Loaded %d observations from %s", len(table), filepath)
        return table
