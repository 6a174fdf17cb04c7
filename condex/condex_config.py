"""
Configuration for the condition engine's internal diagnostics.

Config is plain YAML:

    internal_log_level: INFO
    internal_log_file: /var/log/condex-internal.log
    log_parse_errors: true
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

# Diagnostics for condition compilation. Handlers are only attached by
# configure_internal_logging; otherwise records go wherever the host app sends them.
internal_logger = logging.getLogger("condex.internal")

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class CondexConfig:
    internal_log_level: str = "WARNING"
    internal_log_file: Optional[str] = None
    log_parse_errors: bool = True

    def __post_init__(self):
        level = str(self.internal_log_level).upper()
        if level not in _LEVELS:
            raise ValueError(f"internal_log_level must be one of {', '.join(_LEVELS)}, not {self.internal_log_level!r}")
        self.internal_log_level = level
        if not isinstance(self.log_parse_errors, bool):
            raise ValueError(f"log_parse_errors must be a boolean, not {self.log_parse_errors!r}")

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'CondexConfig':
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, not {type(data).__name__}")
        unknown = set(data) - {"internal_log_level", "internal_log_file", "log_parse_errors"}
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return cls(**data)


def load_config(source: Union[str, Path]) -> CondexConfig:
    """Load config from a YAML file path or a YAML string."""
    if isinstance(source, Path) or (isinstance(source, str) and "\n" not in source and Path(source).is_file()):
        text = Path(source).read_text(encoding="utf-8")
    else:
        text = source
    return CondexConfig.from_dict(yaml.safe_load(text))


def configure_internal_logging(config: CondexConfig) -> logging.Logger:
    """Apply the level and, when set, attach a file handler to the internal logger."""
    internal_logger.setLevel(config.internal_log_level)
    if config.internal_log_file:
        target = str(Path(config.internal_log_file).resolve())
        already = any(isinstance(h, logging.FileHandler) and h.baseFilename == target
                      for h in internal_logger.handlers)
        if not already:
            handler = logging.FileHandler(target, encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
            internal_logger.addHandler(handler)
    return internal_logger


def diagnostics_sink(config: CondexConfig) -> Optional[logging.Logger]:
    """The sink call expressions should report parse errors to, or None."""
    return internal_logger if config.log_parse_errors else None
