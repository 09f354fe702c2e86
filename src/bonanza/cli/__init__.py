"""Command-line entry points."""

from bonanza.cli.run_report import load_user_config_dict, main, run_hare_report

__all__ = ["load_user_config_dict", "main", "run_hare_report"]
