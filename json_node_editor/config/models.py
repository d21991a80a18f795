"""Configuration models for JSON Node Editor."""

from pydantic import BaseModel, Field, field_validator


class EditorConfig(BaseModel):
    """Settings shared by the path services and the edit session."""

    indent: int = Field(
        2,
        description="Indentation used when pretty-printing values and committed documents",
        ge=0,
        le=8
    )
    ensure_ascii: bool = Field(
        False,
        description="Escape non-ASCII characters in serialized output"
    )
    escape_path_keys: bool = Field(
        False,
        description="Escape quotes and backslashes inside keys when formatting paths"
    )
    log_level: str = Field(
        "INFO",
        description="Logging level"
    )
    json_logs: bool = Field(
        False,
        description="Render log records as JSON instead of console lines"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate that log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(sorted(valid_levels))}")
        return v.upper()

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",  # Forbid extra fields
    }
