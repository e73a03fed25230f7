"""
Application settings management.

Settings are loaded from environment variables with .env file support.
Normalizer tuning lives in config/normalizer_config.yaml.
All configuration is validated using Pydantic.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from reflection_guidance.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment.

    Environment variables take precedence over .env file values.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # ==========================================================================
    # Paths
    # ==========================================================================

    config_dir: Path = Field(
        default=Path("config"),
        description="Directory containing YAML configuration files",
    )
    log_dir: Path = Field(
        default=Path("logs"), description="Directory for session log files"
    )

    # ==========================================================================
    # Logging
    # ==========================================================================

    log_sessions_to_keep: int = Field(
        default=5, ge=1, le=100, description="Number of session log files to retain"
    )
    debug: bool = Field(default=False, description="Enable debug mode")


# ============================================================================
# Normalizer Configuration (from YAML)
# ============================================================================


class SessionDefaultsConfig(BaseModel):
    """Defaults applied when a payload carries no usable session block."""

    default_max_turns: int = Field(
        default=3, ge=1, le=50, description="Turn budget when the backend sends none"
    )


class HelperConfig(BaseModel):
    """Answer-helper harvesting configuration."""

    limit: int = Field(
        default=3, ge=1, le=3, description="Maximum answer helpers kept per turn"
    )


class NormalizerConfig(BaseModel):
    """
    Complete normalizer configuration loaded from normalizer_config.yaml.

    Every section is optional; missing sections fall back to model defaults.
    """

    session: SessionDefaultsConfig = Field(default_factory=SessionDefaultsConfig)
    helpers: HelperConfig = Field(default_factory=HelperConfig)


def load_normalizer_config(config_path: Optional[Path] = None) -> NormalizerConfig:
    """
    Load normalizer configuration from YAML file.

    Args:
        config_path: Path to normalizer_config.yaml. If None, looks in the
            project config directory, then the working directory.

    Returns:
        NormalizerConfig with validated settings

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation
    """
    if config_path is None:
        project_root = Path(__file__).resolve().parent.parent.parent
        for candidate in (
            project_root / "config" / "normalizer_config.yaml",
            Path.cwd() / "config" / "normalizer_config.yaml",
        ):
            if candidate.exists():
                config_path = candidate
                break
        else:
            return NormalizerConfig()

    config_path = Path(config_path).resolve()

    if not config_path.exists():
        # Return default config if file not found
        return NormalizerConfig()

    try:
        with open(str(config_path)) as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not config_data:
        return NormalizerConfig()

    if not isinstance(config_data, dict):
        raise ConfigurationError(
            f"{config_path} must contain a mapping, got {type(config_data).__name__}"
        )

    try:
        return NormalizerConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid normalizer config {config_path}: {e}") from e


# Global settings instance
settings = Settings()
