"""Configuration management - Centralized configuration for CopilotRM.

Provides environment-aware configuration with sensible defaults.
All configuration is loaded from environment variables with fallbacks.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from copilotrm.common.constants import ExecutionConstants
from copilotrm.common.exceptions import ConfigurationError


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be a number, got {raw!r}",
            details={"variable": name},
        ) from e


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}",
            details={"variable": name},
        ) from e


def _get_project_root() -> Path:
    """Get the project root directory."""
    # settings.py -> config -> common -> copilotrm -> src -> project_root
    return Path(__file__).resolve().parents[4]


@dataclass
class Config:
    """Central configuration object for CopilotRM.
    
    All settings can be overridden via environment variables prefixed with COPILOTRM_.
    
    Example:
        COPILOTRM_ENVIRONMENT=production
        COPILOTRM_LOG_LEVEL=INFO
        COPILOTRM_PARALLEL_AGENTS=false
    """
    
    # Core settings
    environment: Environment = field(
        default_factory=lambda: Environment(
            os.getenv("COPILOTRM_ENVIRONMENT", "development")
        )
    )
    debug: bool = field(
        default_factory=lambda: _env_bool("COPILOTRM_DEBUG", "false")
    )
    log_level: LogLevel = field(
        default_factory=lambda: LogLevel(os.getenv("COPILOTRM_LOG_LEVEL", "INFO").upper())
    )
    
    # Paths
    project_root: Path = field(default_factory=_get_project_root)
    agents_file: Path = field(
        default_factory=lambda: Path(
            os.getenv("COPILOTRM_AGENTS_FILE", "./config/agents.yaml")
        )
    )
    audit_log_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("COPILOTRM_AUDIT_LOG_DIR", "./logs/audit")
        )
    )
    
    # Agent execution
    agent_max_workers: int = field(
        default_factory=lambda: _env_int(
            "COPILOTRM_AGENT_MAX_WORKERS", ExecutionConstants.DEFAULT_MAX_WORKERS
        )
    )
    parallel_agents: bool = field(
        default_factory=lambda: _env_bool("COPILOTRM_PARALLEL_AGENTS", "true")
    )
    isolate_agent_failures: bool = field(
        default_factory=lambda: _env_bool("COPILOTRM_ISOLATE_AGENT_FAILURES", "true")
    )
    run_timeout_seconds: Optional[float] = field(
        default_factory=lambda: _env_optional_float("COPILOTRM_RUN_TIMEOUT_SECONDS")
    )
    
    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.agent_max_workers < 1:
            raise ConfigurationError(
                "COPILOTRM_AGENT_MAX_WORKERS must be at least 1",
                details={"agent_max_workers": self.agent_max_workers},
            )
        
        if self.run_timeout_seconds is not None and self.run_timeout_seconds <= 0:
            raise ConfigurationError(
                "COPILOTRM_RUN_TIMEOUT_SECONDS must be positive",
                details={"run_timeout_seconds": self.run_timeout_seconds},
            )
        
        # Warn about debug in production
        if self.environment == Environment.PRODUCTION and self.debug:
            import warnings
            warnings.warn(
                "Debug mode is enabled in production environment",
                RuntimeWarning,
                stacklevel=2
            )
    
    @property
    def resolved_agents_file(self) -> Path:
        """Agents file path, relative paths resolved against the project root."""
        if self.agents_file.is_absolute():
            return self.agents_file
        return self.project_root / self.agents_file
    
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION
    
    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.
    
    Returns:
        Config: The global configuration singleton.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
