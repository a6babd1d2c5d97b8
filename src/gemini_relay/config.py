from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union
import os
import logging

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parents[2] / "config" / "config.yaml"

# env var -> (settings field, converter)
_ENV_OVERRIDES = {
    "GEMINI_API_KEY": ("api_key", str),
    "GEMINI_MODEL": ("model", str),
    "HOST": ("host", str),
    "PORT": ("port", int),
    "UPLOAD_DIR": ("upload_dir", Path),
    "MAX_UPLOAD_BYTES": ("max_upload_bytes", int),
    "LOG_LEVEL": ("log_level", str),
}


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup and passed down explicitly."""
    api_key: str = ""
    model: str = "models/gemini-1.5-flash"
    host: str = "0.0.0.0"
    port: int = 3000
    upload_dir: Path = Path("uploads")
    max_upload_bytes: Optional[int] = 20 * 1024 * 1024 #0 or None disables the cap
    request_timeout_s: float = 60.0
    generation_params: Dict[str, Any] = field(default_factory=dict)
    cors_origins: Tuple[str, ...] = ("http://localhost:3000", "http://localhost:5173")
    log_level: str = "info"

    def validate(self) -> "Settings":
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY is not set")
        if not self.model:
            raise ValueError("Config missing 'model'")
        if self.max_upload_bytes is not None and self.max_upload_bytes < 0:
            raise ValueError(f"max_upload_bytes must be >= 0, got {self.max_upload_bytes}")
        return self

    @property
    def upload_limit(self) -> Optional[int]:
        return self.max_upload_bytes or None


def _load_yaml(config_path: Path) -> Dict[str, Any]:
    with open(config_path) as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Config must be a mapping: {config_path}")

    known = {f.name for f in fields(Settings)} - {"api_key"} #credential comes from the environment only
    unknown = set(config) - known
    if unknown:
        raise ValueError(f"Unknown config keys in {config_path}: {sorted(unknown)}")

    if "upload_dir" in config:
        config["upload_dir"] = Path(config["upload_dir"])
    if "cors_origins" in config:
        config["cors_origins"] = tuple(config["cors_origins"] or ())
    if config.get("generation_params") is None:
        config.pop("generation_params", None)
    return config


def load_settings(config_path: Optional[Union[Path, str]] = None, env: Optional[Mapping[str, str]] = None, validate: bool = True) -> Settings:
    """
    Build Settings from defaults, an optional YAML file and the environment.

    Later sources win: defaults < YAML < environment. A ``.env`` file in the
    working directory is loaded first when reading the real process environment.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    if config_path is None:
        config_path = env.get("GEMINI_RELAY_CONFIG") or DEFAULT_CONFIG_PATH
    config_path = Path(config_path)

    settings = Settings()
    if config_path.exists():
        settings = replace(settings, **_load_yaml(config_path))
        logger.info(f"loaded config from {config_path}")

    overrides = {}
    for var, (name, convert) in _ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            try:
                overrides[name] = convert(value)
            except ValueError as e:
                raise ValueError(f"Invalid value for {var}: {value!r}") from e
    settings = replace(settings, **overrides)

    return settings.validate() if validate else settings
