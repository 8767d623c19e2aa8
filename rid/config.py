import json
import os
from pathlib import Path

from rid import identifier
from rid.logging import LogLevel, StructuredLogger

_DEFAULT_CONFIG = Path(__file__).parent / "rid.json"
CONFIG_ENV = "RID_CONFIG"

_LEVEL_ALIASES = {"WARNING": "WARN"}


class LoggingConfig:
    __slots__ = ("level",)

    def __init__(self, level="INFO"):
        self.level = level


class ParseConfig:
    __slots__ = ("skew_ns",)

    def __init__(self, skew_ns=0):
        if skew_ns < 0:
            raise ValueError("skew_ns must be >= 0")
        self.skew_ns = skew_ns


class Config:
    __slots__ = ("logging", "parse")

    def __init__(self, logging=None, parse=None):
        self.logging = logging or LoggingConfig()
        self.parse = parse or ParseConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            LoggingConfig(**d.get("logging", {})),
            ParseConfig(**d.get("parse", {})),
        )


def load_config(path=None):
    if path:
        config_path = Path(path)
    elif os.environ.get(CONFIG_ENV):
        config_path = Path(os.environ[CONFIG_ENV])
    else:
        config_path = _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))


def parse_level(name):
    """Map a level name to LogLevel, accepting WARNING for WARN."""
    key = name.upper()
    key = _LEVEL_ALIASES.get(key, key)
    try:
        return LogLevel[key]
    except KeyError:
        accepted = ", ".join(level.name for level in LogLevel)
        raise ValueError(f"unknown log level {name!r}, expected one of {accepted}") from None


def configure(config=None):
    """Apply logging level and parse tolerance; loads config if not given."""
    config = config or load_config()
    StructuredLogger.configure(min_level=parse_level(config.logging.level))
    identifier.configure(skew_ns=config.parse.skew_ns)
    return config
