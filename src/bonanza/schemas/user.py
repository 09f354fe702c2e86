"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., INPUT_PATH → input_path, DPI → dpi).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient to accept
both uppercase and lowercase keys, integers where floats are expected, etc.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from bonanza.schemas.base import BonanzaBaseModel


class UserReaderConfig(BonanzaBaseModel):
    """User-facing reader config."""
    delimiter: Optional[str] = None
    encoding: Optional[str] = None
    missing_markers: Optional[list[str]] = None
    column_aliases: Optional[dict[str, list[str]]] = None


class UserCodesConfig(BonanzaBaseModel):
    """User-facing categorical code mappings."""
    age: Optional[dict[str, str]] = None
    sex: Optional[dict[str, str]] = None
    sites: Optional[dict[str, str]] = None


class UserAnalysisConfig(BonanzaBaseModel):
    """User-facing analysis config."""
    confidence_level: Optional[float] = None
    comparison_group: Optional[str] = None
    reference_group: Optional[str] = None
    decimals: Optional[int] = None

    @field_validator("comparison_group", "reference_group", mode="before")
    @classmethod
    def normalize_group(cls, v):
        """Normalize group names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserVisualizationConfig(BonanzaBaseModel):
    """User-facing visualization config."""
    enabled: Optional[bool] = None
    dpi: Optional[int] = None
    figsize: Optional[tuple[float, float]] = None
    output_format: Optional[str] = None
    style: Optional[str] = None
    bar_color: Optional[str] = None
    sex_colors: Optional[dict[str, str]] = None
    line_color: Optional[str] = None
    point_alpha: Optional[float] = None
    jitter_width: Optional[float] = None
    jitter_seed: Optional[int] = None


class UserConfig(BonanzaBaseModel):
    """User-facing configuration schema.
    
    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.
    
    This config is converted to internal overrides during resolution.
    
    Usage
    -----
        user_cfg = UserConfig(
            input_path="data/bonanza_hares.csv",
            base_dir="/tmp/hare_report",
            confidence_level=0.99,
        )
        
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """
    
    # Top-level settings
    input_path: Optional[str] = Field(None, alias="INPUT_PATH")
    base_dir: Optional[str] = Field(None, alias="BASE_DIR")
    
    # Reader settings (flat aliases)
    delimiter: Optional[str] = Field(None, alias="DELIMITER")
    missing_markers: Optional[list[str]] = Field(None, alias="MISSING_MARKERS")
    
    # Transform settings (flat aliases)
    date_formats: Optional[list[str]] = Field(None, alias="DATE_FORMATS")
    
    # Analysis settings (flat aliases)
    confidence_level: Optional[float] = Field(None, alias="CONFIDENCE_LEVEL")
    decimals: Optional[int] = Field(None, alias="DECIMALS")
    
    # Plot settings (flat aliases)
    dpi: Optional[int] = Field(None, alias="DPI")
    figsize: Optional[tuple[float, float]] = Field(None, alias="FIGSIZE")
    plot_style: Optional[str] = Field(None, alias="PLOT_STYLE")
    plot_format: Optional[str] = Field(None, alias="PLOT_FORMAT")
    
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )
    
    # Nested overrides (advanced users)
    reader: Optional[UserReaderConfig] = None
    codes: Optional[UserCodesConfig] = None
    analysis: Optional[UserAnalysisConfig] = None
    visualization: Optional[UserVisualizationConfig] = None
    
    model_config = BonanzaBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("confidence_level", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lowercase log levels."""
        if isinstance(v, str):
            return v.upper().strip()
        return v
    
    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.
        
        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}
        
        if self.input_path is not None:
            overrides["input_path"] = str(self.input_path)
        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)
        
        # Reader section
        reader = {}
        if self.delimiter is not None:
            reader["delimiter"] = self.delimiter
        if self.missing_markers is not None:
            reader["missing_markers"] = self.missing_markers
        if self.reader is not None:
            reader.update(self.reader.model_dump(exclude_none=True))
        if reader:
            overrides["reader"] = reader
        
        if self.codes is not None:
            codes = self.codes.model_dump(exclude_none=True)
            if codes:
                overrides["codes"] = codes
        
        if self.date_formats is not None:
            overrides["transform"] = {"date_formats": self.date_formats}
        
        # Analysis section
        analysis = {}
        if self.confidence_level is not None:
            analysis["confidence_level"] = self.confidence_level
        if self.decimals is not None:
            analysis["decimals"] = self.decimals
        if self.analysis is not None:
            analysis.update(self.analysis.model_dump(exclude_none=True))
        if analysis:
            overrides["analysis"] = analysis
        
        # Visualization section
        visualization = {}
        if self.dpi is not None:
            visualization["dpi"] = self.dpi
        if self.figsize is not None:
            visualization["figsize"] = self.figsize
        if self.plot_style is not None:
            visualization["style"] = self.plot_style
        if self.plot_format is not None:
            visualization["output_format"] = self.plot_format
        if self.visualization is not None:
            visualization.update(self.visualization.model_dump(exclude_none=True))
        if visualization:
            overrides["visualization"] = visualization
        
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}
        
        return overrides
