"""
Shared test fixtures.
"""

import pytest

from dao_adapters import AdapterMetadata, BaseDaoAdapter


class StubAdapter(BaseDaoAdapter):
    """Adapter with a scripted can_handle answer."""

    def __init__(self, api, name, handles=True, error=None, priority=100):
        super().__init__(api)
        self._name = name
        self._handles = handles
        self._error = error
        self._priority = priority
        self.probes = 0

    @property
    def name(self) -> str:
        return self._name

    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name=self._name,
            display_name=f"Stub {self._name}",
            version="0.1.0",
            priority=self._priority,
        )

    async def can_handle(self, contract_address, network):
        self.probes += 1
        if self._error:
            raise self._error
        return self._handles

    async def get_treasury(self, contract_address, network):
        raise NotImplementedError

    async def get_proposals(self, contract_address, network):
        return []

    async def get_proposal_details(self, proposal_id, network, contract_address=None):
        return None


@pytest.fixture
def make_stub(api):
    """Build stub adapters bound to the test's ``api`` fixture."""
    def _make(name, **kwargs):
        return StubAdapter(api, name, **kwargs)
    return _make
