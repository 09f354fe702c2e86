"""Pydantic configuration schemas for the Bonanza hare report.

This module provides strictly typed configuration models for the report
pipeline. All configuration validation, coercion, and normalization
happens at schema validation time via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from bonanza.schemas.resolve import resolve_config
from bonanza.schemas.internal import InternalConfig
from bonanza.schemas.param import ParamConfig
from bonanza.schemas.user import UserConfig
from bonanza.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
