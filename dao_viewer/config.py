"""
DAO Viewer - Configuration.

============================================================
PURPOSE
============================================================
All runtime configuration, read from the environment.

Only the default network changes adapter behavior; everything
else tunes the HTTP client, the web layer and its caches.
============================================================
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from stacks_api.models import Network, get_network_config


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    try:
        return int(env.get(key, default))
    except (TypeError, ValueError):
        return default


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    try:
        return float(env.get(key, default))
    except (TypeError, ValueError):
        return default


# ============================================================
# CACHE HORIZONS
# ============================================================

@dataclass(frozen=True)
class CacheConfig:
    """
    Response cache horizons per data kind, in seconds.
    """

    treasury_seconds: int = 60
    """Treasury snapshots."""

    proposals_seconds: int = 30
    """Proposal lists."""

    proposal_details_seconds: int = 120
    """Single proposal details (more stable)."""

    max_entries: int = 1000
    """Entries kept before expired ones are purged."""


# ============================================================
# VIEWER CONFIGURATION
# ============================================================

@dataclass(frozen=True)
class ViewerConfig:
    """
    Top-level configuration for the DAO viewer.
    """

    default_network: Network = Network.MAINNET
    """Network used when a caller does not name one."""

    api_urls: dict[Network, str] = field(default_factory=lambda: {
        network: get_network_config(network).url for network in Network
    })
    """Stacks API base URL per network."""

    api_timeout_seconds: float = 30.0
    """Total timeout for one HTTP request."""

    proposal_concurrency: int = 1
    """Proposal indices read at once (1 = strictly sequential)."""

    sender_address: Optional[str] = None
    """Caller principal for read-only calls (defaults to the DAO's deployer)."""

    cache: CacheConfig = field(default_factory=CacheConfig)

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    environment: str = "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ViewerConfig":
        """
        Build configuration from environment variables.

        ``DEFAULT_NETWORK`` must be ``mainnet`` or ``testnet``; any other
        value falls back to mainnet.
        """
        env = os.environ if env is None else env

        network_setting = env.get("DEFAULT_NETWORK") or env.get("NEXT_PUBLIC_DEFAULT_NETWORK")
        default_network = Network.parse(network_setting)

        api_urls = {network: get_network_config(network).url for network in Network}
        if env.get("STACKS_API_MAINNET_URL"):
            api_urls[Network.MAINNET] = env["STACKS_API_MAINNET_URL"]
        if env.get("STACKS_API_TESTNET_URL"):
            api_urls[Network.TESTNET] = env["STACKS_API_TESTNET_URL"]

        return cls(
            default_network=default_network,
            api_urls=api_urls,
            api_timeout_seconds=_env_float(env, "STACKS_API_TIMEOUT", 30.0),
            proposal_concurrency=max(1, _env_int(env, "DAO_PROPOSAL_CONCURRENCY", 1)),
            sender_address=env.get("DAO_SENDER_ADDRESS") or None,
            cache=CacheConfig(
                treasury_seconds=_env_int(env, "TREASURY_CACHE_SECONDS", 60),
                proposals_seconds=_env_int(env, "PROPOSALS_CACHE_SECONDS", 30),
                proposal_details_seconds=_env_int(env, "PROPOSAL_DETAILS_CACHE_SECONDS", 120),
            ),
            host=env.get("VIEWER_HOST", "0.0.0.0"),
            port=_env_int(env, "VIEWER_PORT", _env_int(env, "PORT", 8000)),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
            environment=env.get("ENVIRONMENT", "production"),
        )
