"""
rvdisasm Configuration Management
==================================

Centralized configuration for the rvdisasm toolkit using Python
dataclasses and TOML-based persistence.

Configuration is kept out of code: every tunable (log sinks, label
naming, input size limits) lives in an optional ``rvdisasm.toml`` file
whose sections map one-to-one onto the dataclasses below.

Example ``rvdisasm.toml``::

    [global]
    log_level = "DEBUG"
    log_file = "logs/rvdisasm.log"
    log_json = true

    [rvdisasm]
    label_prefix = "LOC_"
    label_digits = 5

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "rvdisasm.toml"


# ========================== Tool-Specific Config ===========================


@dataclass(frozen=False, slots=True)
class DisassemblerConfig:
    """Configuration for the RISC-V disassembler.

    Controls synthetic label naming, input size limits and the console
    preview produced by ``--show``.
    """

    label_prefix: str = "LOC_"
    label_digits: int = 5
    max_file_size: int = 52_428_800  # 50 MiB
    show_max_rows: int = 200
    output_encoding: str = "utf-8"


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity and log file sinks."""

    log_level: str = "WARNING"
    log_file: str | None = None
    log_json: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class RvConfig:
    """Master configuration aggregating global and disassembler settings.

    Usage:
        >>> config = RvConfig.load()                  # from default path
        >>> config = RvConfig.load("custom.toml")     # from custom path
        >>> config.disassembler.label_prefix
        'LOC_'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    disassembler: DisassemblerConfig = field(default_factory=DisassemblerConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> RvConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``rvdisasm.toml`` in the
        project root.  Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`RvConfig` instance.

        Raises:
            FileNotFoundError: If *path* was given explicitly and does
                not exist.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            disassembler=cls._build_section(DisassemblerConfig, raw.get("rvdisasm", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)
