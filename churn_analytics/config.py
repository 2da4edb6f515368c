"""Configuration management for churn-analytics."""

from dataclasses import dataclass, field
from pathlib import Path

from churn_analytics.exceptions import ConfigurationError


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "churn"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class OutputConfig:
    """Output configuration."""

    output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class AnalysisConfig:
    """Configuration for an analysis run."""

    source_path: Path | None = None
    rate_places: int = 2


@dataclass
class ChurnAnalyticsConfig:
    """Main configuration for churn-analytics."""

    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "ChurnAnalyticsConfig":
        """Create config from environment variables."""
        import os

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_env_int("POSTGRES_PORT", "5432"),
            database=os.getenv("POSTGRES_DB", "churn"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
        )

        output = OutputConfig(
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        source = os.getenv("SOURCE_PATH")
        analysis = AnalysisConfig(
            source_path=Path(source) if source else None,
            rate_places=_env_int("RATE_PLACES", "2"),
        )

        return cls(
            postgres=postgres,
            output=output,
            analysis=analysis,
            seed=_env_int("SEED", None),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard").lower(),
        )


def _env_int(name: str, default: str | None) -> int | None:
    """Read an integer environment variable."""
    import os

    raw = os.getenv(name, default)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e
