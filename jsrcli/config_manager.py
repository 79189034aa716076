"""
Configuration management for jsr-cli.

Settings come from the environment and are overridden by command line
flags. The resulting ``Settings`` object is passed explicitly to everything
that needs it.
"""
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlsplit

DEFAULT_JSR_URL = "https://jsr.io"
JSR_NPM_REGISTRY_URL = "https://npm.jsr.io"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Resolved runtime configuration."""
    jsr_url: str = DEFAULT_JSR_URL
    npm_registry_url: str = JSR_NPM_REGISTRY_URL
    deno_bin_path: Optional[str] = None
    user_agent: Optional[str] = None
    debug: bool = False
    cache_dir: str = str(Path.home() / ".cache" / "jsr-cli")

    @property
    def npm_compat_url(self) -> str:
        """npm compatible registry derived from ``jsr_url`` (``npm.<host>``)."""
        parts = urlsplit(self.jsr_url)
        return f"{parts.scheme}://npm.{parts.netloc}"


class ConfigManager:
    """Builds ``Settings`` from the environment and CLI arguments."""

    def load_from_env(self, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Read settings from environment variables."""
        env = os.environ if environ is None else environ

        cache_root = env.get("XDG_CACHE_HOME")
        cache_dir = (
            str(Path(cache_root) / "jsr-cli")
            if cache_root
            else str(Path.home() / ".cache" / "jsr-cli")
        )

        return Settings(
            jsr_url=(env.get("JSR_URL") or DEFAULT_JSR_URL).rstrip("/"),
            deno_bin_path=env.get("DENO_BIN_PATH") or None,
            user_agent=env.get("npm_config_user_agent") or None,
            debug=env.get("DEBUG", "").strip().lower() in _TRUTHY,
            cache_dir=cache_dir,
        )

    def merge_config_and_args(self, settings: Settings, debug: bool = False) -> Settings:
        """Apply command line overrides on top of environment settings."""
        if debug and not settings.debug:
            return replace(settings, debug=True)
        return settings

    def load(self, debug: bool = False, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Environment settings with CLI overrides applied."""
        return self.merge_config_and_args(self.load_from_env(environ), debug=debug)
