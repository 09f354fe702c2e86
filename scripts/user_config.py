"""Bonanza hare report user configuration.

This is the user-facing configuration file. Modify settings here to customize
the report. Advanced settings are in src/bonanza/schemas/param.py

Usage:
    python scripts/run_hare_report.py --config scripts/user_config.py
    python scripts/run_hare_report.py other_hares.csv --config scripts/user_config.py
"""

CONFIG = {
    # ========================================================================
    # INPUT & OUTPUT
    # ========================================================================
    "INPUT_PATH": "data/bonanza_hares.csv",  # Capture-recapture CSV
    "BASE_DIR": "output/hare_report",        # All outputs go here

    # ========================================================================
    # READER SETTINGS
    # ========================================================================
    "DELIMITER": ",",
    "MISSING_MARKERS": ["", "NA", "."],       # Treated as missing values

    # ========================================================================
    # DATE PARSING
    # ========================================================================
    "DATE_FORMATS": ["%m/%d/%Y", "%m/%d/%y"],  # Tried in order

    # ========================================================================
    # ANALYSIS SETTINGS
    # ========================================================================
    "CONFIDENCE_LEVEL": 0.95,  # Welch interval level; alpha = 1 - level
    "DECIMALS": 2,             # Rounding in narrative text and tables

    # ========================================================================
    # PLOT SETTINGS
    # ========================================================================
    "DPI": 150,
    "FIGSIZE": (7, 5),
    "PLOT_STYLE": "ggplot",    # Any matplotlib style name
    "PLOT_FORMAT": "png",      # png, pdf or svg

    # ========================================================================
    # LOGGING
    # ========================================================================
    "LOG_LEVEL": "INFO",
}
