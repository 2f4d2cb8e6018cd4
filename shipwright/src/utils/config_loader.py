import os
from pathlib import Path
import toml
from typing import Dict, Any

from shipwright.src.errors import CommandError

DEFAULT_SERVICE_URL = "https://builds.shipwright.dev/v1"
DEFAULT_WEB_BUNDLER_COMMAND = "npx webpack --mode production"


def get_home_dir() -> Path:
    """Return the shipwright state directory, honouring SHIPWRIGHT_HOME."""
    env_home = os.environ.get("SHIPWRIGHT_HOME")
    if env_home:
        return Path(env_home)
    return Path.home() / ".shipwright"


def get_config_path() -> Path:
    """Return the path to the configuration file."""
    return get_home_dir() / "config.toml"


def load_config() -> Dict[str, Any]:
    """Load configuration from TOML file."""
    config_path = get_config_path()
    if not config_path.exists():
        return {}

    try:
        return toml.load(config_path)
    except Exception as e:
        raise ValueError(f"Failed to load config: {e}")


def get_service_config() -> Dict[str, str]:
    """Get build service URL and access token from environment or config."""
    config = load_config()
    service_config = config.get("service", {})

    url = os.environ.get("SHIPWRIGHT_SERVICE_URL") or service_config.get(
        "url", DEFAULT_SERVICE_URL
    )
    token = os.environ.get("SHIPWRIGHT_ACCESS_TOKEN") or service_config.get(
        "access_token"
    )

    if not token:
        raise CommandError(
            "NOT_LOGGED_IN",
            "No access token found. Set SHIPWRIGHT_ACCESS_TOKEN or add "
            f"[service] access_token to {get_config_path()}",
        )

    return {"url": url.rstrip("/"), "access_token": token}


def get_web_config() -> Dict[str, Any]:
    """Get the web bundler settings, falling back to defaults."""
    config = load_config()
    web_config = dict(config.get("web", {}))
    web_config.setdefault("bundler_command", DEFAULT_WEB_BUNDLER_COMMAND)
    return web_config
