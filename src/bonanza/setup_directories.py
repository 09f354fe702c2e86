"""
Directory setup for the hare report.

Layout under the base directory:
- report.md and runtime_config.json at the top level
- figures/ for chart images
- tables/ for CSV exports
- logs/ for the run log
"""

from pathlib import Path
from typing import Dict


def setup_output_directories(base_output_dir) -> Dict[str, Path]:
    """
    Set up organized output directory structure.
    
    Parameters
    ----------
    base_output_dir : str or Path
        Base output directory. Created if it does not exist.
    
    Returns
    -------
    dict
        Dictionary with paths: 'base', 'figures', 'tables', 'logs'
    """
    base_output_dir = Path(base_output_dir).expanduser().resolve()
    
    directories = {
        "base": base_output_dir,
        "figures": base_output_dir / "figures",
        "tables": base_output_dir / "tables",
        "logs": base_output_dir / "logs",
    }
    
    for path in directories.values():
        path.mkdir(parents=True, exist_ok=True)
    
    print("\nOutput directories created:")
    for key, path in directories.items():
        print(f"  {key:12s}: {path}")
    print("=" * 70 + "\n")
    
    return directories
