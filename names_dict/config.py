"""Run settings layered from defaults, a JSON config file, environment and flags."""

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

from names_dict.extract import DEFAULT_TEMPLATE
from names_dict.variants import DEFAULT_DIGITS, SPECIAL_CHARS


DEFAULT_DUMP_URL = "https://dumps.wikimedia.org/dewiki/latest/dewiki-latest-pages-articles.xml.bz2"
DEFAULT_CAPACITY = 100
MAX_DIGITS = 9
ENV_PREFIX = "NAMES_DICT_"
CONFIG_NAME = "config.json"
CONFIG_DIRS = ("/etc/names-dict", "~/.config/names-dict", ".")


class ConfigError(ValueError):
    """Invalid setting, rejected before the pipeline starts."""


@dataclass(frozen=True)
class Settings:
    threshold: int = 1
    digits: int = DEFAULT_DIGITS
    special_chars: str = SPECIAL_CHARS
    capacity: int = DEFAULT_CAPACITY
    count: int = 0
    template: str = DEFAULT_TEMPLATE
    dump_url: str = DEFAULT_DUMP_URL
    input_path: Optional[str] = None
    output: Optional[str] = None
    fold_case: bool = False
    exact_dedupe: bool = False
    verbose: bool = False
    quiet: bool = False

    @property
    def source(self) -> str:
        return self.input_path or self.dump_url

    def validate(self) -> "Settings":
        if self.threshold < 1:
            raise ConfigError(f"threshold must be at least 1 (got {self.threshold}).")
        if not 0 <= self.digits <= MAX_DIGITS:
            raise ConfigError(f"digits must be between 0 and {MAX_DIGITS} (got {self.digits}).")
        if self.capacity < 1:
            raise ConfigError(f"capacity must be at least 1 (got {self.capacity}).")
        if self.count < 0:
            raise ConfigError(f"count cannot be negative (got {self.count}).")
        if not self.template.strip():
            raise ConfigError("template name cannot be empty.")
        unique = "".join(dict.fromkeys(self.special_chars))
        return replace(self, special_chars=unique, template=self.template.strip())

    def merged(self, overrides: Mapping[str, Any]) -> "Settings":
        """Return a copy with every non-None override applied, coercing types."""
        known = {f.name: f for f in fields(self)}
        changes: Dict[str, Any] = {}
        for raw_key, value in overrides.items():
            key = raw_key.replace("-", "_").lower()
            if key not in known or value is None:
                continue
            changes[key] = coerce(key, value, getattr(self, key))
        return replace(self, **changes)


def coerce(key: str, value: Any, current: Any) -> Any:
    if isinstance(current, bool) or key in ("fold_case", "exact_dedupe", "verbose", "quiet"):
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("1", "true", "yes", "on")
    if isinstance(current, int):
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{key} must be an integer (got {value!r}).") from exc
    return str(value)


def find_config_file(dirs: Iterable[str] = CONFIG_DIRS) -> Optional[Path]:
    for directory in dirs:
        candidate = Path(directory).expanduser() / CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None


def load_config_file(path: Path) -> Dict[str, Any]:
    try:
        loaded = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path} must contain a JSON object.")
    return loaded


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    environ = os.environ if environ is None else environ
    return {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX)
    }


def load_settings(
    cli_overrides: Mapping[str, Any],
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    config_dirs: Iterable[str] = CONFIG_DIRS,
) -> Settings:
    """Defaults < config file < NAMES_DICT_* environment < command-line flags."""
    settings = Settings()
    path = config_path or find_config_file(config_dirs)
    if path is not None:
        settings = settings.merged(load_config_file(path))
    settings = settings.merged(env_overrides(environ))
    settings = settings.merged(cli_overrides)
    return settings.validate()
