"""Configuration management for the Library Ledger server.

Settings are loaded from the environment (``LIBRARY_LEDGER_`` prefix) or a
local ``.env`` file and validated with Pydantic v2. Three groups matter:

1. Server metadata for the MCP handshake
2. Lending policy (the loan period used to derive due dates)
3. Snapshot persistence and logging
"""

from datetime import timedelta
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerConfig(BaseSettings):
    """Library Ledger configuration.

    Every field can be overridden with an environment variable, e.g.
    ``LIBRARY_LEDGER_LOAN_PERIOD_DAYS=21``.
    """

    model_config = SettingsConfigDict(
        env_prefix="LIBRARY_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="library-ledger",
        description="MCP server name used in protocol handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    server_version: str = Field(
        default="0.1.0",
        description="Server version for capability negotiation",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    transport: str = Field(
        default="stdio",
        description="Transport mechanism for the MCP server",
        pattern=r"^stdio$",
    )

    # === Lending Policy ===

    loan_period_days: int = Field(
        default=14,
        description="Days between a borrow and its due date",
        ge=1,
        le=365,
    )

    # === Snapshot Persistence ===

    snapshot_path: Path | None = Field(
        default=None,
        description="SQLite file used to snapshot the ledger; None keeps it in memory only",
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("snapshot_path")
    @classmethod
    def validate_snapshot_path(cls, v: Path | None) -> Path | None:
        """Make the snapshot path absolute and ensure its directory exists."""
        if v is None:
            return None

        abs_path = v.absolute()
        abs_path.parent.mkdir(parents=True, exist_ok=True)

        if not abs_path.parent.is_dir():
            raise ValueError(f"Snapshot directory {abs_path.parent} is not accessible")

        return abs_path

    @field_validator("server_name")
    @classmethod
    def validate_server_name(cls, v: str) -> str:
        """Keep server names readable in client UIs."""
        if len(v) < 3:
            raise ValueError("Server name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("Server name must not exceed 50 characters")
        return v

    @property
    def loan_period(self) -> timedelta:
        """Loan period as a timedelta (14 days is 1,209,600 seconds)."""
        return timedelta(days=self.loan_period_days)

    @property
    def persistence_enabled(self) -> bool:
        return self.snapshot_path is not None

    @property
    def server_info(self) -> dict[str, str]:
        """Server information sent during the MCP handshake."""
        return {
            "name": self.server_name,
            "version": self.server_version,
            "transport": self.transport,
        }

    def get_database_url(self) -> str | None:
        """SQLAlchemy URL for the snapshot database, if persistence is enabled."""
        if self.snapshot_path is None:
            return None
        return f"sqlite:///{self.snapshot_path}"


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: LedgerConfig | None = None


def get_config() -> LedgerConfig:
    """Get or create the process-wide configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = LedgerConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration so the next ``get_config()`` reloads it (used by tests)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
