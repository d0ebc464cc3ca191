import os
from typing import Optional, Tuple
from pathlib import Path
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv

from .constants import (
    TargetTable,
    DEFAULT_TABLE_PRIORITY,
    DEFAULT_MIN_PATTERN_LENGTH,
    DEFAULT_MAJORITY_THRESHOLD,
    DEFAULT_AMBIGUITY_PENALTY,
    DEFAULT_MIN_MAPPING_CONFIDENCE,
    DEFAULT_SUGGESTION_FLOOR,
    DEFAULT_MAX_SUGGESTIONS,
    DEFAULT_MAX_SAMPLE_RECORDS,
    DEFAULT_MAX_SAMPLE_VALUES,
    DEFAULT_CONFIDENCE_THRESHOLD,
)


class Settings(BaseModel):
    """
    Mapping engine settings with Pydantic validation.
    Every threshold the engine uses lives here so that components receive
    them by injection instead of reading module globals.
    """

    # Pattern matching
    min_pattern_length: int = Field(default=DEFAULT_MIN_PATTERN_LENGTH, ge=1, le=20)
    ambiguity_penalty: float = Field(default=DEFAULT_AMBIGUITY_PENALTY, gt=0.0, le=1.0)
    min_mapping_confidence: float = Field(default=DEFAULT_MIN_MAPPING_CONFIDENCE, ge=0.0, le=1.0)
    table_priority: Tuple[TargetTable, ...] = Field(default=DEFAULT_TABLE_PRIORITY)

    # Type inference
    majority_threshold: float = Field(default=DEFAULT_MAJORITY_THRESHOLD, ge=0.0, lt=1.0)

    # Suggestions
    suggestion_floor: float = Field(default=DEFAULT_SUGGESTION_FLOOR, gt=0.0, le=1.0)
    max_suggestions: int = Field(default=DEFAULT_MAX_SUGGESTIONS, ge=1, le=20)

    # Collection preview bounds
    max_sample_records: int = Field(default=DEFAULT_MAX_SAMPLE_RECORDS, ge=1, le=1000)
    max_sample_values: int = Field(default=DEFAULT_MAX_SAMPLE_VALUES, ge=1, le=1000)

    # Review
    review_confidence_threshold: float = Field(default=DEFAULT_CONFIDENCE_THRESHOLD, ge=0.0, le=1.0)

    # Logging
    log_level: str = Field(default="INFO")
    json_logs: bool = False
    log_file: Optional[str] = None

    model_config = {
        'frozen': True,
        'arbitrary_types_allowed': False
    }

    @field_validator('table_priority', mode='before')
    @classmethod
    def parse_table_priority(cls, v):
        """Accept a comma-separated string as well as a sequence"""
        if isinstance(v, str):
            v = [part.strip() for part in v.split(',') if part.strip()]
        return tuple(v)

    @field_validator('table_priority')
    @classmethod
    def validate_table_priority(cls, v):
        """Priority must name every target table exactly once"""
        if sorted(t.value for t in v) != sorted(t.value for t in TargetTable):
            raise ValueError(
                f"table_priority must be a permutation of {[t.value for t in TargetTable]}"
            )
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate logging level name"""
        allowed = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Must be one of {sorted(allowed)}")
        return v.upper()

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'Settings':
        """
        Load settings from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            Validated Settings instance

        Raises:
            ValueError: If a variable is set to an invalid value
        """
        if env_file and env_file.exists():
            load_dotenv(dotenv_path=env_file)
        else:
            default_env = Path(__file__).parent.parent / ".env"
            if default_env.exists():
                load_dotenv(dotenv_path=default_env)

        overrides = {}
        env_keys = {
            "min_pattern_length": "MAPPER_MIN_PATTERN_LENGTH",
            "ambiguity_penalty": "MAPPER_AMBIGUITY_PENALTY",
            "min_mapping_confidence": "MAPPER_MIN_MAPPING_CONFIDENCE",
            "table_priority": "MAPPER_TABLE_PRIORITY",
            "majority_threshold": "MAPPER_MAJORITY_THRESHOLD",
            "suggestion_floor": "MAPPER_SUGGESTION_FLOOR",
            "max_suggestions": "MAPPER_MAX_SUGGESTIONS",
            "max_sample_records": "MAPPER_MAX_SAMPLE_RECORDS",
            "max_sample_values": "MAPPER_MAX_SAMPLE_VALUES",
            "review_confidence_threshold": "MAPPER_REVIEW_CONFIDENCE_THRESHOLD",
            "log_level": "MAPPER_LOG_LEVEL",
            "log_file": "MAPPER_LOG_FILE",
        }
        for key, env_name in env_keys.items():
            value = os.getenv(env_name)
            if value is not None and value != "":
                overrides[key] = value

        json_logs = os.getenv("MAPPER_JSON_LOGS")
        if json_logs is not None:
            overrides["json_logs"] = json_logs.strip().lower() in ("1", "true", "yes")

        return cls(**overrides)


_settings_instance: Optional[Settings] = None


def get_settings(env_file: Optional[Path] = None) -> Settings:
    """
    Get settings instance (singleton pattern).

    Args:
        env_file: Optional path to .env file

    Returns:
        Validated Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings.from_env(env_file=env_file)
    return _settings_instance
