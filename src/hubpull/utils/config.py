"""Configuration file support for hubpull."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from hubpull.utils.errors import ConfigurationError


class RegistryConfig(BaseModel):
    """Registry endpoint configuration."""

    hub_url: str = Field(default="https://hub.docker.com", description="Hub REST API base URL")
    index_url: str = Field(default="https://index.docker.io", description="Search index base URL")
    default_namespace: str = Field(
        default="library", description="Namespace implied for unqualified repositories"
    )
    search_limit: int = Field(default=20, ge=1, le=100, description="Maximum search results")
    tag_page_size: int = Field(default=20, ge=1, le=100, description="Tags fetched per lookup")
    repository_page_size: int = Field(
        default=100, ge=1, le=100, description="Repositories fetched per listing"
    )
    default_search_term: str = Field(
        default="nginx", description="Search term used when none is entered"
    )


class CredentialsConfig(BaseModel):
    """Credential file configuration."""

    path: str | None = Field(default=None, description="Credential file path")
    placeholder_token: str = Field(
        default="your-token-here", description="Token value treated as unset"
    )

    def resolve_path(self) -> Path:
        """Get the effective credential file path.

        HUBPULL_CREDENTIALS wins over the configured path, which wins
        over ``.docker-credentials`` in the working directory.
        """
        env_path = os.environ.get("HUBPULL_CREDENTIALS")
        if env_path:
            return Path(env_path).expanduser()
        if self.path:
            return Path(self.path).expanduser()
        return Path.cwd() / ".docker-credentials"


class ScanConfig(BaseModel):
    """Vulnerability scanner configuration."""

    command: list[str] = Field(
        default_factory=lambda: ["docker", "scout", "cves"],
        description="Scanner command; the image reference is appended",
    )


class HubPullConfig(BaseModel):
    """Main configuration for hubpull."""

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files
    """
    paths = []

    paths.append(Path.cwd() / ".hubpull.yaml")
    paths.append(Path.cwd() / ".hubpull.yml")

    home = Path.home()
    paths.append(home / ".hubpull.yaml")
    paths.append(home / ".config" / "hubpull" / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "hubpull" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> HubPullConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return HubPullConfig()


def _load_config_file(path: Path) -> HubPullConfig:
    """Load configuration from a specific file."""
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}")

    if data is None:
        return HubPullConfig()
    try:
        return HubPullConfig.model_validate(data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}")


# Global config instance
_config: HubPullConfig | None = None


def get_config() -> HubPullConfig:
    """Get the global configuration instance.

    Loads from file on first call.

    Returns:
        Global configuration
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: HubPullConfig | None) -> None:
    """Set the global configuration instance.

    Args:
        config: Configuration to set, or None to reload on next access
    """
    global _config
    _config = config
