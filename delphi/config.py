"""Configuration management for delphi."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from delphi.exceptions import ConfigurationError

SINK_TYPES = ("memory", "console", "json", "kafka")


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration for file-based sinks."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class WireConfig:
    """Delimiters used by the byte-string listings."""

    field_delimiter: bytes = b"\x1f"
    record_delimiter: bytes = b"\x1e"

    def __post_init__(self) -> None:
        if not self.field_delimiter or not self.record_delimiter:
            raise ConfigurationError("Wire delimiters must be non-empty")
        if self.field_delimiter == self.record_delimiter:
            raise ConfigurationError("Field and record delimiters must differ")


@dataclass
class PolicyConfig:
    """Opt-in tightening of the registry's permissive defaults.

    With every flag off the registry behaves as the deployed ledger does:
    duplicate type ids accumulate, a signer that owns no types is let
    through, and anyone may transfer a property.
    """

    require_authority_to_sign: bool = False
    reject_duplicate_type_ids: bool = False
    require_claimer_to_transfer: bool = False


@dataclass
class DelphiConfig:
    """Main configuration for delphi."""

    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    wire: WireConfig = field(default_factory=WireConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    sink: str = "memory"
    topic_prefix: str = "dev.delphi"
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    def __post_init__(self) -> None:
        if self.sink not in SINK_TYPES:
            raise ConfigurationError(
                f"Unknown sink {self.sink!r}, expected one of {', '.join(SINK_TYPES)}"
            )

    @classmethod
    def from_env(cls) -> "DelphiConfig":
        """Create config from environment variables."""
        import os

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=_env_flag("PRETTY_JSON"),
        )

        wire = WireConfig(
            field_delimiter=_env_bytes("FIELD_DELIMITER", b"\x1f"),
            record_delimiter=_env_bytes("RECORD_DELIMITER", b"\x1e"),
        )

        policy = PolicyConfig(
            require_authority_to_sign=_env_flag("REQUIRE_AUTHORITY_TO_SIGN"),
            reject_duplicate_type_ids=_env_flag("REJECT_DUPLICATE_TYPE_IDS"),
            require_claimer_to_transfer=_env_flag("REQUIRE_CLAIMER_TO_TRANSFER"),
        )

        seed = os.getenv("SEED")
        try:
            seed_value = int(seed) if seed else None
        except ValueError as e:
            raise ConfigurationError(f"SEED must be an integer, got {seed!r}") from e

        return cls(
            kafka=kafka,
            output=output,
            wire=wire,
            policy=policy,
            sink=os.getenv("NOTIFICATION_SINK", "memory"),
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.delphi"),
            seed=seed_value,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _env_flag(name: str) -> bool:
    import os

    return os.getenv(name, "false").lower() == "true"


def _env_bytes(name: str, default: bytes) -> bytes:
    """Read a delimiter given as hex (e.g. ``1f``)."""
    import os

    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return bytes.fromhex(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be hex encoded, got {raw!r}") from e
