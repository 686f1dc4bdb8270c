"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field


class ConfigurationError(ValueError):
    """Raised when a game setting is out of its valid range."""


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class GameConfig:
    """Fixed game constants, validated on construction."""

    target_total: int = 21
    dealer_target: int = 17
    twenty_one_max_wins: int = 5
    rps_max_wins: int = 10
    rps_probability_step: int = 5
    tic_tac_toe_max_wins: int = 5
    pause_seconds: float = field(
        default_factory=lambda: float(os.getenv("GAME_PAUSE_SECONDS", "1.0"))
    )

    def __post_init__(self) -> None:
        for name in (
            "target_total",
            "dealer_target",
            "twenty_one_max_wins",
            "rps_max_wins",
            "rps_probability_step",
            "tic_tac_toe_max_wins",
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

        if self.dealer_target > self.target_total:
            raise ConfigurationError("dealer_target cannot exceed target_total")
        if self.rps_probability_step > 100:
            raise ConfigurationError("rps_probability_step cannot exceed 100")
        if self.pause_seconds < 0:
            raise ConfigurationError("pause_seconds cannot be negative")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())
    session_ttl: int = 3600  # Session timeout in seconds

    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
