"""
DAO Adapter Registry - Ordered adapter selection by capability probe.

Features:
- Specialized adapters in priority order (lower = tried first)
- A fallback adapter that is always tried last and always matches
- Probes that raise count as "cannot handle"
- No caching: every selection re-probes
"""

import logging
from typing import Any, Optional

from dao_adapters.base import BaseDaoAdapter
from dao_adapters.exceptions import NoAdapterMatchedError
from dao_adapters.models import AdapterMetadata
from stacks_api.base import BaseStacksApi
from stacks_api.models import Network


logger = logging.getLogger(__name__)


class AdapterRegistry:
    """
    Central registry for DAO adapters.

    Usage:
        registry = AdapterRegistry(GenericDaoAdapter(api))
        registry.register(SomeFamilyAdapter(api), priority=10)

        adapter = await registry.select_adapter(address, Network.MAINNET)
        treasury = await adapter.get_treasury(address, Network.MAINNET)

    Callers that want to avoid repeated probe round trips should keep the
    returned adapter (or its name) themselves.
    """

    def __init__(self, fallback: BaseDaoAdapter) -> None:
        self._fallback = fallback
        self._adapters: dict[str, BaseDaoAdapter] = {}
        self._priorities: dict[str, int] = {}
        self._adapter_order: list[str] = []

    @property
    def fallback(self) -> BaseDaoAdapter:
        return self._fallback

    def register(
        self,
        adapter: BaseDaoAdapter,
        priority: Optional[int] = None,
    ) -> None:
        """
        Register a specialized adapter.

        Args:
            adapter: Adapter instance
            priority: Lower = higher priority; ties keep registration order
        """
        name = adapter.name
        if name == self._fallback.name:
            raise ValueError(f"Adapter name '{name}' is reserved for the fallback adapter")

        if name in self._adapters:
            logger.warning(f"Adapter '{name}' already registered, replacing")
            self._adapter_order.remove(name)

        if priority is None:
            priority = adapter.metadata().priority

        self._adapters[name] = adapter
        self._priorities[name] = priority

        # Insert in priority order
        insert_idx = len(self._adapter_order)
        for i, existing_name in enumerate(self._adapter_order):
            if priority < self._priorities[existing_name]:
                insert_idx = i
                break
        self._adapter_order.insert(insert_idx, name)

        logger.info(f"Registered DAO adapter '{name}' with priority {priority}")

    def unregister(self, name: str) -> Optional[BaseDaoAdapter]:
        """Unregister a specialized adapter. The fallback cannot be removed."""
        if name in self._adapters:
            adapter = self._adapters.pop(name)
            self._priorities.pop(name, None)
            self._adapter_order.remove(name)
            logger.info(f"Unregistered adapter '{name}'")
            return adapter
        return None

    def get_adapter(self, name: str) -> Optional[BaseDaoAdapter]:
        """Get an adapter (including the fallback) by name."""
        if name == self._fallback.name:
            return self._fallback
        return self._adapters.get(name)

    def list_adapters(self) -> list[str]:
        """List adapter names in the order they are probed."""
        return self._adapter_order + [self._fallback.name]

    def _ordered(self) -> list[BaseDaoAdapter]:
        return [self._adapters[name] for name in self._adapter_order] + [self._fallback]

    async def select_adapter(self, contract_address: str, network: Network) -> BaseDaoAdapter:
        """
        Return the first adapter whose ``can_handle`` probe succeeds.

        Raises:
            NoAdapterMatchedError: Only if the fallback itself declines,
                which breaks the registry invariant
        """
        attempted: list[str] = []

        for adapter in self._ordered():
            attempted.append(adapter.name)
            try:
                if await adapter.can_handle(contract_address, network):
                    logger.debug(f"Selected adapter '{adapter.name}' for {contract_address}")
                    return adapter
            except Exception as e:
                logger.warning(f"[{adapter.name}] can_handle failed for {contract_address}: {e}")

        raise NoAdapterMatchedError(
            message=f"No adapter accepted {contract_address}",
            attempted_adapters=attempted,
            contract_address=contract_address,
            network=network.value,
        )

    def get_all_metadata(self) -> dict[str, AdapterMetadata]:
        """Get metadata for all adapters."""
        return {adapter.name: adapter.metadata() for adapter in self._ordered()}

    def get_stats(self) -> dict[str, Any]:
        """Get registry statistics."""
        return {
            "total_adapters": len(self._adapters) + 1,
            "adapter_order": self.list_adapters(),
            "fallback": self._fallback.name,
            "adapters": {
                name: metadata.to_dict()
                for name, metadata in self.get_all_metadata().items()
            },
        }

    def __contains__(self, name: str) -> bool:
        return self.get_adapter(name) is not None

    def __len__(self) -> int:
        return len(self._adapters) + 1


def create_default_registry(
    api: BaseStacksApi,
    sender_address: Optional[str] = None,
    proposal_concurrency: int = 1,
) -> AdapterRegistry:
    """
    Build a registry with the standard adapters.

    Returns a registry whose fallback is the generic probing adapter.
    """
    from dao_adapters.providers.generic import GenericDaoAdapter

    return AdapterRegistry(
        GenericDaoAdapter(
            api,
            sender_address=sender_address,
            proposal_concurrency=proposal_concurrency,
        )
    )


# Singleton instance
_default_registry: Optional[AdapterRegistry] = None


def get_default_registry(api: Optional[BaseStacksApi] = None) -> AdapterRegistry:
    """
    Get or create the default registry.

    The first call creates it around ``api`` (a ``StacksApiClient`` if
    omitted); later calls return the same instance.
    """
    global _default_registry
    if _default_registry is None:
        if api is None:
            from stacks_api.client import StacksApiClient
            api = StacksApiClient()
        _default_registry = create_default_registry(api)
    return _default_registry


def reset_default_registry() -> None:
    global _default_registry
    _default_registry = None
