"""Configuration loader for the OAuth provider plugin.

The host server configuration is a YAML document. The plugin reads the
server's canonical URL and its own section under ``plugin``::

    gerrit:
      canonicalWebUrl: https://review.example.com/
    plugin:
      gerrit-oauth-provider-google-oauth:
        client-id: "..."
        client-secret: "..."
        link-to-existing-openid-accounts: true
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import GoogleOAuthConfigModel, ServerConfigModel

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "REVIEW_OAUTH_CONFIG"
DEFAULT_CONFIG_FILE = "review.yaml"
CONFIG_SUFFIX = "-google-oauth"


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load the raw server configuration.

    Args:
        config_path: Optional path to the YAML file.
                    If not provided, looks for:
                    1. REVIEW_OAUTH_CONFIG environment variable
                    2. ./review.yaml

    Returns:
        The parsed document, or an empty dict for an empty file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is not valid YAML
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        config_path = Path(env_path) if env_path else Path.cwd() / DEFAULT_CONFIG_FILE

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    logger.debug("Loading config from: %s", config_path)

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML config file {config_path}: {e}") from e

    if not raw_config:
        logger.info("Empty config file, using empty configuration")
        return {}

    if not isinstance(raw_config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    return raw_config


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return section


def load_server_config(raw_config: dict[str, Any]) -> ServerConfigModel:
    """Extract the host server settings the plugin depends on."""
    server_section = _section(raw_config, "gerrit")
    canonical_web_url = server_section.get("canonicalWebUrl")
    if not canonical_web_url:
        raise ValueError("gerrit.canonicalWebUrl must be configured")
    return ServerConfigModel(canonicalWebUrl=canonical_web_url)


def load_plugin_config(raw_config: dict[str, Any], plugin_name: str) -> GoogleOAuthConfigModel:
    """Read the ``plugin.<plugin_name>-google-oauth`` section.

    Raises:
        ValueError: If the section is missing or invalid
    """
    section_name = plugin_name + CONFIG_SUFFIX
    section = _section(raw_config, "plugin").get(section_name)
    if section is None:
        raise ValueError(f"Missing plugin configuration section '{section_name}'")

    try:
        return GoogleOAuthConfigModel.model_validate(section)
    except ValidationError as e:
        # Input values are left out so the client secret never reaches the logs
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors(include_input=False)
        )
        raise ValueError(f"Invalid configuration in section '{section_name}': {problems}") from None
