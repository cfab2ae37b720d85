"""
Runtime Configuration

Central configuration for commitment building, the contract stand-in and
logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from porpoise.schemas.errors import ConfigurationException

load_dotenv()


DEFAULT_DOMAIN = "porpoise.network"


@dataclass
class MerkleConfig:
    """Configuration for survey commitment building."""
    padding_value: str = ""
    hex_position: int = 1
    default_tracked_index: int = 1


@dataclass
class ContractConfig:
    """Configuration for the contract collaborator."""
    domains: list[str] = field(default_factory=lambda: [DEFAULT_DOMAIN])


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationException(
            f"{name} must be an integer, got {raw!r}",
            details={"variable": name},
        ) from e


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    contract: ContractConfig = field(default_factory=ContractConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the single place env vars are read.

        Supported variables:
        - PORPOISE_PADDING_VALUE: Placeholder used to pad field lists
        - PORPOISE_HEX_POSITION: Field position decoded as a hex timestamp
        - PORPOISE_TRACKED_INDEX: Leaf proven when none is given
        - PORPOISE_DOMAIN: Domain registered with the contract
        - PORPOISE_LOG_LEVEL: Log level
        - PORPOISE_LOG_FILE: Optional log file path
        """
        overrides: dict[str, Any] = {}

        # empty string is a valid padding value
        padding_value = os.getenv("PORPOISE_PADDING_VALUE")
        if padding_value is not None:
            overrides.setdefault("merkle", {})["padding_value"] = padding_value
        if os.getenv("PORPOISE_HEX_POSITION"):
            overrides.setdefault("merkle", {})["hex_position"] = _parse_int(
                "PORPOISE_HEX_POSITION", os.environ["PORPOISE_HEX_POSITION"]
            )
        if os.getenv("PORPOISE_TRACKED_INDEX"):
            overrides.setdefault("merkle", {})["default_tracked_index"] = _parse_int(
                "PORPOISE_TRACKED_INDEX", os.environ["PORPOISE_TRACKED_INDEX"]
            )

        if os.getenv("PORPOISE_DOMAIN"):
            overrides.setdefault("contract", {})["domains"] = [os.environ["PORPOISE_DOMAIN"]]

        if os.getenv("PORPOISE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.environ["PORPOISE_LOG_LEVEL"]
        if os.getenv("PORPOISE_LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.environ["PORPOISE_LOG_FILE"]

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        merkle_data = data.get("merkle", {}) or {}
        contract_data = data.get("contract", {}) or {}
        logging_data = data.get("logging", {}) or {}

        try:
            merkle = MerkleConfig(**merkle_data)
            contract = ContractConfig(**contract_data)
            logging_config = LoggingConfig(**logging_data)
        except TypeError as e:
            raise ConfigurationException(f"Unknown configuration key: {e}") from e

        if merkle.hex_position < 0 or merkle.default_tracked_index < 0:
            raise ConfigurationException(
                "merkle.hex_position and merkle.default_tracked_index must be non-negative",
                details={
                    "hex_position": merkle.hex_position,
                    "default_tracked_index": merkle.default_tracked_index,
                },
            )

        return cls(
            merkle=merkle,
            contract=contract,
            logging=logging_config,
            extra=data.get("extra", {}) or {},
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for section in ("merkle", "contract", "logging"):
            if section in overrides:
                target = getattr(new_config, section)
                for key, value in overrides[section].items():
                    setattr(target, key, value)

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "merkle": {
                "padding_value": self.merkle.padding_value,
                "hex_position": self.merkle.hex_position,
                "default_tracked_index": self.merkle.default_tracked_index,
            },
            "contract": {
                "domains": list(self.contract.domains),
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets it)."""
    global _default_config
    _default_config = config
