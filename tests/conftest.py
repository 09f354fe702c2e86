"""Root-level pytest fixtures for the Bonanza report test suite.

Provides shared configuration fixtures following Pydantic-based architecture
and small synthetic capture tables. All tests must use these fixtures instead
of creating raw dict configs.
"""

import logging
import pytest
from pathlib import Path
import tempfile
import shutil

from bonanza.schemas import ParamConfig, UserConfig, CLIConfig, InternalConfig, resolve_config


HEADER = "date,time,grid,trap,sex,age,weight,hindft,notes"

# 20 capture rows. 15 juveniles (6 weighed males, 6 weighed females,
# 2 of unknown sex, 1 female with missing weight) across 1998-2001.
HARE_ROWS = [
    "9/10/1998,,bonrip,1A,m,j,900,125,",
    "9/12/1998,,bonbs,2B,f,j,800,120,",
    "9/15/1998,,bonmat,3C,m,j,1000,130,",
    "8/20/1999,,bonrip,1A,f,j,700,115,",
    "8/21/1999,,bonbs,2B,m,j,1100,135,",
    "8/22/1999,,bonmat,3C,f,j,750,118,",
    "8/23/1999,,bonrip,1A,,j,600,NA,",
    "7/1/2000,,bonbs,2B,m,a,1500,140,",
    "7/2/2000,,bonmat,3C,f,a,1400,138,",
    "7/3/00,,bonrip,1A,m,j,950,128,",
    "7/4/2000,,bonbs,2B,f,j,NA,119,no weight",
    "7/5/2000,,bonmat,3C,f,j,850,122,",
    "7/6/2000,,bonrip,1A,m,,1200,NA,",
    "6/1/2001,,bonbs,2B,m,j,1050,NA,",
    "6/2/2001,,bonmat,3C,f,j,650,112,",
    "6/3/2001,,bonrip,1A,f,a,1300,136,",
    "6/4/2001,,bonbs,2B,m,A,1250,137,",
    "6/5/2001,,bonmat,3C,M,J,980,127,",
    "6/6/2001,,bonrip,1A,f,j,720,116,",
    "6/7/2001,,bonbs,2B,pf,j,800,121,",
]

MALE_JUVENILE_WEIGHTS = [900, 1000, 1100, 950, 1050, 980]
FEMALE_JUVENILE_WEIGHTS = [800, 700, 750, 850, 650, 720]

# 20 juvenile rows, 10 weighed females and 10 weighed males, both sexes
# with sample variance 1000. Male mean 780, female mean 750: percent
# difference 4.0, t = 30 / sqrt(200), Welch df = 18, two-sided p = 0.0480.
BALANCED_HARE_ROWS = [
    "9/10/1998,,bonrip,1A,f,j,750,118,",
    "9/11/1998,,bonbs,2B,f,j,750,120,",
    "9/12/1998,,bonmat,3C,f,j,730,117,",
    "8/20/1999,,bonrip,1A,f,j,770,121,",
    "8/21/1999,,bonbs,2B,f,j,720,116,",
    "7/1/2000,,bonmat,3C,f,j,780,123,",
    "7/2/2000,,bonrip,1A,f,j,710,115,",
    "6/1/2001,,bonbs,2B,f,j,790,124,",
    "6/2/2001,,bonmat,3C,f,j,710,114,",
    "6/3/2001,,bonrip,1A,f,j,790,122,",
    "9/13/1998,,bonbs,2B,m,j,780,125,",
    "9/14/1998,,bonmat,3C,m,j,780,123,",
    "8/22/1999,,bonrip,1A,m,j,760,122,",
    "8/23/1999,,bonbs,2B,m,j,800,127,",
    "7/3/2000,,bonmat,3C,m,j,750,120,",
    "7/4/2000,,bonrip,1A,m,j,810,128,",
    "7/5/2000,,bonbs,2B,m,j,740,119,",
    "6/4/2001,,bonmat,3C,m,j,820,129,",
    "6/5/2001,,bonrip,1A,m,j,740,121,",
    "6/6/2001,,bonbs,2B,m,j,820,126,",
]


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults.

    Use this as the base for all test configs. Override specific values
    using make_config or by creating custom UserConfig instances.
    """
    return ParamConfig()


@pytest.fixture
def internal_config(param_config, temp_dir):
    """Fully validated runtime configuration (no overrides).

    ``input_path`` points at a file that does not exist; use
    ``hare_csv`` when a test needs real data.

    Examples
    --------
    >>> def test_loader_init(internal_config):
    ...     loader = HareDataLoader(internal_config)
    ...     assert loader.delimiter == ","
    """
    cli = CLIConfig(input_path=str(temp_dir / "hares.csv"), base_dir=str(temp_dir / "out"))
    return resolve_config(param_config, None, cli)


@pytest.fixture
def make_config(param_config, temp_dir):
    """Factory fixture for creating custom test configs.

    Use this when you need to override specific values for a test.
    Returns a callable that accepts UserConfig-compatible kwargs.
    ``input_path`` and ``base_dir`` default to paths under ``temp_dir``.

    Examples
    --------
    >>> def test_custom_level(make_config):
    ...     config = make_config(confidence_level=0.99)
    ...     assert config.analysis.confidence_level == 0.99
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        user_overrides.setdefault("input_path", str(temp_dir / "hares.csv"))
        user_overrides.setdefault("base_dir", str(temp_dir / "out"))
        user = UserConfig(**user_overrides)
        return resolve_config(param_config, user, None)

    return _make


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def output_dirs(temp_dir):
    """Standard report output directory structure.

    Returns dict with keys: base, figures, tables, logs
    All directories are created and cleaned up automatically.
    """
    base = temp_dir / "out"
    dirs = {
        "base": base,
        "figures": base / "figures",
        "tables": base / "tables",
        "logs": base / "logs",
    }

    for d in dirs.values():
        d.mkdir(parents=True, exist_ok=True)

    return dirs


# =============================================================================
# Data Fixtures
# =============================================================================

@pytest.fixture
def write_csv(temp_dir):
    """Factory fixture writing capture rows under a header to a CSV file.

    Examples
    --------
    >>> path = write_csv(["9/10/1998,,bonrip,1A,m,j,900,125,"])
    """
    def _write(rows, header=HEADER, name="hares.csv"):
        path = temp_dir / name
        path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def hare_csv(write_csv):
    """The 20-row synthetic capture table, written to ``temp_dir/hares.csv``."""
    return write_csv(HARE_ROWS)


@pytest.fixture
def observations(internal_config, hare_csv):
    """The synthetic table loaded into an ObservationTable."""
    from bonanza.hares.loader import HareDataLoader
    return HareDataLoader(internal_config).load(hare_csv)


@pytest.fixture
def juveniles(internal_config, observations):
    """Juvenile subset of the synthetic table."""
    from bonanza.hares.transform import select_juveniles
    return select_juveniles(observations, internal_config.transform.date_formats)


@pytest.fixture
def hare_rows():
    return list(HARE_ROWS)


@pytest.fixture
def male_juvenile_weights():
    return list(MALE_JUVENILE_WEIGHTS)


@pytest.fixture
def female_juvenile_weights():
    return list(FEMALE_JUVENILE_WEIGHTS)


@pytest.fixture
def restore_root_logging():
    """Undo the root-logger handlers installed by ReportPipeline._setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            handler.close()
            root.removeHandler(handler)
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def balanced_hare_rows():
    return list(BALANCED_HARE_ROWS)
