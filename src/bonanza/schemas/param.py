"""ParamConfig: Expert defaults for the Bonanza hare report.

This module defines the complete default configuration. ALL report
parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from bonanza.schemas.base import BonanzaBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class ReaderConfig(BonanzaBaseModel):
    """Delimited file reader configuration."""
    delimiter: str = ","
    encoding: str = "utf-8"
    missing_markers: list[str] = Field(default_factory=lambda: ["", "NA", "."])
    column_aliases: dict[str, list[str]] = Field(
        default_factory=lambda: {
            "date": ["date"],
            "site": ["site", "grid"],
            "age": ["age"],
            "sex": ["sex"],
            "weight": ["weight"],
            "hindfoot_length": ["hindft", "hindfoot_length"],
        }
    )

    @field_validator("delimiter")
    @classmethod
    def single_character_delimiter(cls, v):
        """Delimiter must be one character."""
        if len(v) != 1:
            raise ValueError(f"delimiter must be a single character, got {v!r}")
        return v


class CodesConfig(BonanzaBaseModel):
    """Categorical code mappings (source code -> canonical value)."""
    age: dict[str, Literal["juvenile", "adult"]] = Field(
        default_factory=lambda: {"j": "juvenile", "a": "adult"}
    )
    sex: dict[str, Literal["female", "male"]] = Field(
        default_factory=lambda: {"f": "female", "m": "male"}
    )
    sites: dict[str, str] = Field(
        default_factory=lambda: {
            "bonbs": "Black Spruce",
            "bonmat": "Mature",
            "bonrip": "Riparian",
        }
    )

    @field_validator("age", "sex", "sites", mode="before")
    @classmethod
    def normalize_code_keys(cls, v):
        """Codes are matched case-insensitively."""
        if isinstance(v, dict):
            return {str(k).strip().lower(): val for k, val in v.items()}
        return v


class TransformConfig(BonanzaBaseModel):
    """Juvenile selection and date parsing."""
    date_formats: list[str] = Field(default_factory=lambda: ["%m/%d/%Y", "%m/%d/%y"])


class AnalysisConfig(BonanzaBaseModel):
    """Statistical analysis settings."""
    confidence_level: float = Field(0.95, gt=0, lt=1)
    comparison_group: Literal["female", "male"] = "male"
    reference_group: Literal["female", "male"] = "female"
    decimals: int = Field(2, ge=0, le=6)


class VisualizationConfig(BonanzaBaseModel):
    """Visualization settings."""
    enabled: bool = True
    dpi: int = Field(150, ge=50)
    figsize: tuple[float, float] = (7.0, 5.0)
    output_format: Literal["png", "pdf", "svg"] = "png"
    style: str = "ggplot"
    bar_color: str = "#4c72b0"
    sex_colors: dict[str, str] = Field(
        default_factory=lambda: {
            "female": "#d95f02",
            "male": "#1b9e77",
            "unknown": "#7570b3",
        }
    )
    line_color: str = "#222222"
    point_alpha: float = Field(0.6, ge=0, le=1.0)
    jitter_width: float = Field(0.15, ge=0, le=0.5)
    jitter_seed: int = 0


class OutputConfig(BonanzaBaseModel):
    """Output file configuration."""
    report_filename: str = "report.md"
    summary_table_filename: str = "sex_summary.csv"
    persist_config: bool = True


class LoggingConfig(BonanzaBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(BonanzaBaseModel):
    """Complete expert configuration with all defaults.
    
    This is the single source of truth for all report parameters.
    Every tunable parameter MUST have a default here.
    
    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:
    
        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)
    
    Runtime code only sees InternalConfig.
    """
    
    input_path: Optional[str] = None
    base_dir: str = "output"
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    codes: CodesConfig = Field(default_factory=CodesConfig)
    transform: TransformConfig = Field(default_factory=TransformConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    visualization: VisualizationConfig = Field(default_factory=VisualizationConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
