"""Command-line runner for the juvenile hare report.

Usage:
    bonanza-report data/bonanza_hares.csv
    bonanza-report data/bonanza_hares.csv --config scripts/user_config.py
    bonanza-report data/bonanza_hares.csv --output-dir /tmp/hares -v
"""

import argparse
import importlib.util
import json
import sys
from pathlib import Path
from typing import Optional

from bonanza.contracts import BonanzaError
from bonanza.pipeline import ReportPipeline, ReportResult
from bonanza.schemas import CLIConfig, ParamConfig, UserConfig, resolve_config
from bonanza.setup_directories import setup_output_directories


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.
    
    Returns the raw dict before Pydantic validation.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    
    spec = importlib.util.spec_from_file_location("config_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    
    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj
    
    raise ValueError(f"No CONFIG dict found in {path}")


def run_hare_report(
    input_path: Optional[str] = None,
    user_config_path: Optional[str] = None,
    output_dir: Optional[str] = None,
    verbose: bool = False,
    configure_logging: bool = True,
) -> ReportResult:
    """Resolve configuration and run the report once.

    Parameters
    ----------
    input_path : str, optional
        Capture CSV. Overrides ``INPUT_PATH`` from the user config.
    user_config_path : str, optional
        Python file holding a ``CONFIG`` dict.
    output_dir : str, optional
        Overrides ``BASE_DIR``.
    verbose : bool
        Debug logging and a dump of the resolved configuration.
    configure_logging : bool
        Passed to ``ReportPipeline``; False leaves the root logger alone.

    Returns
    -------
    ReportResult
    """
    param_cfg = ParamConfig()
    
    user_cfg = None
    if user_config_path is not None:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))
    
    cli_cfg = CLIConfig.model_validate({
        k: v
        for k, v in {
            "input_path": input_path,
            "base_dir": output_dir,
            "log_level": "DEBUG" if verbose else None,
        }.items()
        if v is not None
    })
    
    # Resolve to internal config (Param < User < CLI)
    config = resolve_config(param_cfg, user_cfg, cli_cfg)
    
    output_dirs = setup_output_directories(config.base_dir)
    
    print(f"\n{'='*60}")
    print("Bonanza Creek Juvenile Hare Report")
    print('='*60)
    print(f"Input:  {config.input_path}")
    print(f"Config: {user_config_path or '(defaults)'}")
    print(f"Output: {config.base_dir}")
    print('='*60)
    
    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2, default=str))
        print('='*60)
    
    pipeline = ReportPipeline(config, output_dirs, configure_logging=configure_logging)
    return pipeline.run()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Render the Bonanza Creek juvenile snowshoe hare report"
    )
    parser.add_argument("input", nargs="?", help="Path to the hare capture CSV")
    parser.add_argument("--config", help="Path to user config file (Python file with CONFIG dict)")
    parser.add_argument("--output-dir", help="Output directory")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)
    
    try:
        result = run_hare_report(
            input_path=args.input,
            user_config_path=args.config,
            output_dir=args.output_dir,
            verbose=args.verbose,
        )
    except (BonanzaError, FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    
    print(f"\nReport written: {result.report_path}")
    for failure in result.failures:
        print(f"  section unavailable: {failure.section} ({failure.reason})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
