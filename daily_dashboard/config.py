"""Configuration loading for the dashboard."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
from xml.etree import ElementTree as ET

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "daily-dashboard/0.1"


@dataclass
class ProxyConfig:
    name: str
    base_url: str
    encode: bool = False


def default_proxies() -> List[ProxyConfig]:
    return [
        ProxyConfig(name="cors-anywhere", base_url="https://cors-anywhere.herokuapp.com/"),
        ProxyConfig(
            name="codetabs", base_url="https://api.codetabs.com/v1/proxy/?quest=", encode=True
        ),
    ]


@dataclass
class WeatherConfig:
    forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    latitude: float = 47.8333
    longitude: float = 13.1667
    location_name: str = "Obertrum am See, Austria"


@dataclass
class CoffeeSyncConfig:
    enabled: bool = False
    base_url: str = "https://api.jsonbin.io/v3"


@dataclass
class FixturesConfig:
    api_url: str = "https://api.sportradar.com/rugby/trial/v3/en"
    competitions: List[str] = field(
        default_factory=lambda: ["six-nations", "rugby-championship", "world-cup"]
    )


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    env_file: Optional[str] = None
    limit: int = 10
    concurrency: int = 4
    request_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    direct: bool = False
    proxies: List[ProxyConfig] = field(default_factory=default_proxies)
    weather: WeatherConfig = field(default_factory=WeatherConfig)
    coffee_sync: CoffeeSyncConfig = field(default_factory=CoffeeSyncConfig)
    fixtures: FixturesConfig = field(default_factory=FixturesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass
class Secrets:
    jsonbin_api_key: Optional[str] = None
    jsonbin_bin_id: Optional[str] = None
    sportradar_api_key: Optional[str] = None


# attribute name -> environment variable
SECRET_NAMES = {
    "jsonbin_api_key": "JSONBIN_API_KEY",
    "jsonbin_bin_id": "JSONBIN_BIN_ID",
    "sportradar_api_key": "SPORTRADAR_API_KEY",
}
COFFEE_SYNC_SECRETS = ("jsonbin_api_key", "jsonbin_bin_id")


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base config file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def _flag(node: Optional[ET.Element], name: str, default: str = "false") -> bool:
    if node is None:
        return default == "true"
    return node.findtext(name, default).strip().lower() == "true"


def parse_env_config(path: Optional[str]) -> Dict[str, str]:
    """Parse environment variables from XML."""
    env_vars: Dict[str, str] = {}
    if not path:
        return env_vars

    logger.info("Loading environment configuration from %s", path)
    try:
        tree = ET.parse(path)
    except (ET.ParseError, OSError) as exc:
        logger.warning("Failed to load environment config: %s", exc)
        raise

    for var in tree.getroot().findall("variable"):
        name = var.attrib.get("name")
        value = var.text
        if name and value:
            env_vars[name] = value.strip()
    return env_vars


def load_secrets(env_file: Optional[str] = None, require_coffee_sync: bool = False) -> Secrets:
    """Collect secrets from the process environment and an optional XML file.

    A secret set in both places must agree. When coffee sync is enabled the
    bin id and API key are mandatory.
    """
    file_vars = parse_env_config(env_file)
    secrets = Secrets()
    for attribute, env_name in SECRET_NAMES.items():
        from_env = os.environ.get(env_name)
        from_file = file_vars.get(env_name)
        if from_env and from_file and from_env != from_file:
            raise ValueError(f"Secret conflict for '{attribute}'")
        setattr(secrets, attribute, from_env or from_file)

    if require_coffee_sync:
        missing = [
            SECRET_NAMES[attribute]
            for attribute in COFFEE_SYNC_SECRETS
            if not getattr(secrets, attribute)
        ]
        if missing:
            raise ValueError(f"Missing required secrets: {', '.join(missing)}")

    logger.debug(
        "Loaded secrets: %s",
        ", ".join(name for name in SECRET_NAMES if getattr(secrets, name)) or "none",
    )
    return secrets


def _parse_proxies(node: Optional[ET.Element]) -> List[ProxyConfig]:
    if node is None:
        return default_proxies()

    proxies = []
    for proxy in node.findall("proxy"):
        base_url = (proxy.text or "").strip()
        if not base_url:
            raise ValueError("Proxy element must contain a base URL.")
        proxies.append(
            ProxyConfig(
                name=proxy.attrib.get("name") or base_url,
                base_url=base_url,
                encode=proxy.attrib.get("encode", "false").lower() == "true",
            )
        )
    return proxies


def parse_app_config(path: str) -> AppConfig:
    """Parse the main application configuration XML."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading application configuration from %s", config_path)
    tree = ET.parse(config_path)
    root = tree.getroot()

    # Env
    env_node = root.find("env")
    env_file = (
        _resolve_path(config_path, env_node.text.strip())
        if env_node is not None and env_node.text
        else None
    )

    # Simple values
    try:
        limit = int(root.findtext("limit", "10"))
        concurrency = int(root.findtext("concurrency", "4"))
        request_timeout = float(root.findtext("request-timeout", "10"))
    except ValueError as exc:
        raise ValueError(f"Invalid numeric value in {path}: {exc}") from exc
    if limit < 1:
        raise ValueError("<limit> must be a positive integer")
    user_agent = root.findtext("user-agent", DEFAULT_USER_AGENT).strip()

    # Transport
    transport_node = root.find("transport")
    direct = _flag(transport_node, "direct")
    proxies = _parse_proxies(
        transport_node.find("proxies") if transport_node is not None else None
    )

    # Weather
    weather_node = root.find("weather")
    weather = WeatherConfig()
    if weather_node is not None:
        weather.forecast_url = weather_node.findtext("forecast-url", weather.forecast_url)
        weather.latitude = float(weather_node.findtext("latitude", str(weather.latitude)))
        weather.longitude = float(weather_node.findtext("longitude", str(weather.longitude)))
        weather.location_name = weather_node.findtext("location-name", weather.location_name)

    # Coffee sync
    coffee_node = root.find("coffee-sync")
    coffee_sync = CoffeeSyncConfig()
    if coffee_node is not None:
        coffee_sync.enabled = _flag(coffee_node, "enabled")
        coffee_sync.base_url = coffee_node.findtext("base-url", coffee_sync.base_url)

    # Fixtures
    fixtures_node = root.find("fixtures")
    fixtures = FixturesConfig()
    if fixtures_node is not None:
        fixtures.api_url = fixtures_node.findtext("api-url", fixtures.api_url)
        competitions = [
            node.text.strip()
            for node in fixtures_node.findall("competition")
            if node.text and node.text.strip()
        ]
        if competitions:
            fixtures.competitions = competitions

    # Logging
    log_node = root.find("logging")
    logging_config = LoggingConfig()
    if log_node is not None:
        logging_config.level = log_node.findtext("level", "INFO")
        log_file = log_node.findtext("file")
        if log_file:
            logging_config.file = _resolve_path(config_path, log_file)

    logger.info(
        "Configured %d proxies (direct=%s), limit=%d, concurrency=%d",
        len(proxies),
        direct,
        limit,
        concurrency,
    )
    return AppConfig(
        env_file=env_file,
        limit=limit,
        concurrency=concurrency,
        request_timeout=request_timeout,
        user_agent=user_agent,
        direct=direct,
        proxies=proxies,
        weather=weather,
        coffee_sync=coffee_sync,
        fixtures=fixtures,
        logging=logging_config,
    )
