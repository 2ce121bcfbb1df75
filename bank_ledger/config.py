"""Configuration management for bank-ledger."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path

from bank_ledger.exceptions import ConfigurationError


@dataclass
class LedgerConfig:
    """Account store and ledger behaviour."""

    default_user_id: str = "1"
    paired_transfers: bool = False
    simulated_latency: float = 0.0  # seconds slept before each ledger operation
    currency_places: int = 2

    def __post_init__(self) -> None:
        if self.simulated_latency < 0:
            raise ConfigurationError("simulated_latency must be >= 0")
        if self.currency_places < 0:
            raise ConfigurationError("currency_places must be >= 0")

    @property
    def quantum(self) -> Decimal:
        """Smallest representable currency unit."""
        return Decimal(1).scaleb(-self.currency_places)


@dataclass
class SeedConfig:
    """Demo data population settings."""

    seed: int | None = None
    locale: str = "en_US"
    payments_per_account: int = 5
    opening_deposit: Decimal = field(default_factory=lambda: Decimal("2500.00"))

    def __post_init__(self) -> None:
        if self.payments_per_account < 0:
            raise ConfigurationError("payments_per_account must be >= 0")
        if not self.opening_deposit.is_finite() or self.opening_deposit <= 0:
            raise ConfigurationError("opening_deposit must be a positive amount")


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class BankLedgerConfig:
    """Main configuration for bank-ledger."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    seed: SeedConfig = field(default_factory=SeedConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "BankLedgerConfig":
        """Create config from environment variables."""
        import os

        try:
            ledger = LedgerConfig(
                default_user_id=os.getenv("DEFAULT_USER_ID", "1"),
                paired_transfers=os.getenv("PAIRED_TRANSFERS", "false").lower() == "true",
                simulated_latency=float(os.getenv("SIMULATED_LATENCY", "0")),
            )
            seed = SeedConfig(
                seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
                locale=os.getenv("FAKER_LOCALE", "en_US"),
                payments_per_account=int(os.getenv("PAYMENTS_PER_ACCOUNT", "5")),
                opening_deposit=Decimal(os.getenv("OPENING_DEPOSIT", "2500.00")),
            )
        except (ValueError, InvalidOperation) as exc:
            raise ConfigurationError(f"Invalid environment configuration: {exc}") from exc

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            ledger=ledger,
            seed=seed,
            output=output,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
