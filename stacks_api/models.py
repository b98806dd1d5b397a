"""
Stacks API Models - Networks and raw account data.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Network(Enum):
    """Supported Stacks networks."""
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @classmethod
    def parse(
        cls,
        value: Optional[str],
        default: Optional["Network"] = None,
    ) -> "Network":
        """
        Parse a network name, falling back to ``default`` (mainnet) on
        anything unrecognized.
        """
        fallback = default or cls.MAINNET
        if value is None:
            return fallback
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return fallback


@dataclass(frozen=True)
class NetworkConfig:
    """Endpoint and address rules for one network."""
    network: Network
    url: str
    # c32 version bytes accepted for standard principals
    address_versions: frozenset[int]

    def accepts_version(self, version: int) -> bool:
        """Check if an address version belongs to this network."""
        return version in self.address_versions


NETWORKS: dict[Network, NetworkConfig] = {
    Network.MAINNET: NetworkConfig(
        network=Network.MAINNET,
        url="https://api.mainnet.hiro.so",
        address_versions=frozenset({22, 20}),  # SP single-sig, SM multi-sig
    ),
    Network.TESTNET: NetworkConfig(
        network=Network.TESTNET,
        url="https://api.testnet.hiro.so",
        address_versions=frozenset({26, 21}),  # ST single-sig, SN multi-sig
    ),
}


def get_network_config(network: Network) -> NetworkConfig:
    """Get endpoint configuration for a network."""
    return NETWORKS[network]


@dataclass(frozen=True)
class AccountBalance:
    """
    Account balances as reported by the API.

    ``stx_balance`` is in micro-STX, kept as the decimal string the API
    returns. ``fungible_tokens`` maps asset identifiers
    (``<contract>::<token>``) to raw balance strings.
    """
    stx_balance: str
    fungible_tokens: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "AccountBalance":
        """Create from a ``/extended/v1/address/{principal}/balances`` payload."""
        stx = data.get("stx") or {}
        tokens = data.get("fungible_tokens") or {}
        return cls(
            stx_balance=str(stx.get("balance", "0")),
            fungible_tokens={
                asset_id: str((entry or {}).get("balance", "0"))
                for asset_id, entry in tokens.items()
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "stx_balance": self.stx_balance,
            "fungible_tokens": dict(self.fungible_tokens),
        }
