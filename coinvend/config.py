"""Configuration models for coinvend."""

from __future__ import annotations

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Mapping

DisplayBackend = Literal["logging", "console"]

_TRUTHY = {"1", "true", "yes"}


@dataclass(slots=True)
class DisplayConfig:
    """Where operator notices go."""

    backend: DisplayBackend = "logging"
    log_level: str = "INFO"


@dataclass(slots=True)
class MachineConfig:
    """How the machine is stocked and started."""

    stock_path: Path | None = None
    bank: Mapping[int, int] | None = None
    serialize_access: bool = False
    auto_start: bool = False


@dataclass(slots=True)
class CoinVendConfig:
    """Top-level configuration container."""

    machine: MachineConfig = field(default_factory=MachineConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    rng_seed: int | None = None

    @classmethod
    def from_env(cls) -> "CoinVendConfig":
        """Create config from environment variables prefixed with COINVEND_."""
        prefix = "COINVEND_"
        stock_path = os.getenv(f"{prefix}STOCK_PATH")
        backend = os.getenv(f"{prefix}DISPLAY", "logging").lower()
        if backend not in {"logging", "console"}:
            raise ValueError(f"Unsupported display backend {backend}")

        machine = MachineConfig(
            stock_path=Path(stock_path) if stock_path else None,
            bank=_parse_bank(os.getenv(f"{prefix}BANK")),
            serialize_access=os.getenv(f"{prefix}SERIALIZE", "false").lower() in _TRUTHY,
            auto_start=os.getenv(f"{prefix}AUTO_START", "false").lower() in _TRUTHY,
        )
        display = DisplayConfig(
            backend=backend,  # type: ignore[arg-type]
            log_level=os.getenv(f"{prefix}LOG_LEVEL", "INFO").upper(),
        )
        return cls(
            machine=machine,
            display=display,
            rng_seed=(
                int(os.getenv(f"{prefix}RNG_SEED")) if os.getenv(f"{prefix}RNG_SEED") else None
            ),
        )


def _parse_bank(raw: str | None) -> Mapping[int, int] | None:
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON for COINVEND_BANK") from exc
    if not isinstance(data, dict):
        raise ValueError("COINVEND_BANK must be a JSON object")
    return {int(k): int(v) for k, v in data.items()}
