from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml
from dotenv import load_dotenv

from darksky_client.models import API_URL, DEFAULT_TIMEOUT

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "defaults.yaml"
load_dotenv()


def _bool_from_env(value: str | None) -> Optional[bool]:
    if value is None:
        return None
    value = value.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return None


def _merge_dicts(base: Dict, overrides: Mapping) -> Dict:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), Mapping):
            merged[key] = _merge_dicts(base[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text()) or {}


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    json: bool = True


@dataclass
class ClientSettings:
    """Connection settings used by :meth:`ForecastClient.from_config`."""

    api_key: str = ""
    base_url: str = API_URL
    timeout: float = DEFAULT_TIMEOUT
    verify_tls: bool = True
    parameters: Dict[str, str] = field(default_factory=dict)


@dataclass
class AppConfig:
    client: ClientSettings = field(default_factory=ClientSettings)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(*, config_path: str | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    env = dict(os.environ if env is None else env)
    data = _load_yaml(_DEFAULT_CONFIG_PATH)

    explicit_path = config_path or env.get("DARKSKY_CONFIG_PATH")
    if explicit_path:
        data = _merge_dicts(data, _load_yaml(Path(explicit_path)))

    client_data = dict(data.get("client") or {})
    api_key = env.get("DARKSKY_API_KEY")
    if api_key:
        client_data["api_key"] = api_key
    base_url = env.get("DARKSKY_BASE_URL")
    if base_url:
        client_data["base_url"] = base_url
    timeout = env.get("DARKSKY_TIMEOUT")
    if timeout:
        try:
            client_data["timeout"] = float(timeout)
        except ValueError:
            pass
    verify_override = _bool_from_env(env.get("DARKSKY_VERIFY_TLS"))
    if verify_override is not None:
        client_data["verify_tls"] = verify_override

    parameters: Dict[str, str] = dict(client_data.get("parameters") or {})
    prefix = "DARKSKY_PARAM_"
    for key, value in env.items():
        if key.startswith(prefix):
            parameters[key.removeprefix(prefix).lower()] = value
    client_data["parameters"] = parameters

    logging_data = dict(data.get("logging") or {})
    level_override = env.get("DARKSKY_LOG_LEVEL")
    if level_override:
        logging_data["level"] = level_override
    json_override = _bool_from_env(env.get("DARKSKY_LOG_JSON"))
    if json_override is not None:
        logging_data["json"] = json_override

    return AppConfig(
        client=ClientSettings(**client_data),
        logging=LoggingConfig(**logging_data) if logging_data else LoggingConfig(),
    )


app_config = load_config()
