"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that report code depends on.

All .get() calls, fallback defaults, and validation logic are FORBIDDEN in
runtime code - everything is explicit here.
"""

from typing import Literal
from pydantic import ConfigDict, field_validator, model_validator
from bonanza.schemas.base import BonanzaBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalReaderConfig(BonanzaBaseModel):
    """Runtime reader configuration."""
    delimiter: str
    encoding: str
    missing_markers: list[str]
    column_aliases: dict[str, list[str]]


class InternalCodesConfig(BonanzaBaseModel):
    """Runtime categorical code mappings."""
    age: dict[str, Literal["juvenile", "adult"]]
    sex: dict[str, Literal["female", "male"]]
    sites: dict[str, str]

    @field_validator("age", "sex", "sites", mode="before")
    @classmethod
    def normalize_code_keys(cls, v):
        """Codes are matched case-insensitively."""
        if isinstance(v, dict):
            return {str(k).strip().lower(): val for k, val in v.items()}
        return v


class InternalTransformConfig(BonanzaBaseModel):
    """Runtime transform configuration."""
    date_formats: list[str]


class InternalAnalysisConfig(BonanzaBaseModel):
    """Runtime analysis configuration."""
    confidence_level: float
    comparison_group: Literal["female", "male"]
    reference_group: Literal["female", "male"]
    decimals: int

    @model_validator(mode="after")
    def groups_must_differ(self):
        """The two compared groups must be distinct."""
        if self.comparison_group == self.reference_group:
            raise ValueError(
                "comparison_group and reference_group must differ, "
                f"both are '{self.comparison_group}'"
            )
        return self


class InternalVisualizationConfig(BonanzaBaseModel):
    """Runtime visualization settings."""
    enabled: bool
    dpi: int
    figsize: tuple[float, float]
    output_format: Literal["png", "pdf", "svg"]
    style: str
    bar_color: str
    sex_colors: dict[str, str]
    line_color: str
    point_alpha: float
    jitter_width: float
    jitter_seed: int


class InternalOutputConfig(BonanzaBaseModel):
    """Runtime output configuration."""
    report_filename: str
    summary_table_filename: str
    persist_config: bool


class InternalLoggingConfig(BonanzaBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(BonanzaBaseModel):
    """Authoritative runtime configuration.
    
    This is the ONLY configuration schema that report code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters.
    
    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:
    
        def __init__(self, config: InternalConfig):
            self.missing_markers = config.reader.missing_markers  # NOT .get()
            self.level = config.analysis.confidence_level
    
    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO type checking
    - NO validation
    
    All of that happens during config resolution, not in runtime code.
    """
    
    input_path: str
    base_dir: str
    reader: InternalReaderConfig
    codes: InternalCodesConfig
    transform: InternalTransformConfig
    analysis: InternalAnalysisConfig
    visualization: InternalVisualizationConfig
    output: InternalOutputConfig
    logging: InternalLoggingConfig
    
    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
