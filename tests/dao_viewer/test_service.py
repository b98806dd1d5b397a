"""
DAO Service Tests.

============================================================
PURPOSE
============================================================
Facade behavior: address gating, adapter selection and
graceful degradation.

TEST CATEGORIES:
- Address validation
- Treasury / proposals / details
- Contract validation
- Known DAOs

============================================================
"""

from decimal import Decimal

import pytest

from dao_adapters import InvalidAddressFormatError, KnownDao
from dao_adapters.registry import AdapterRegistry
from dao_viewer import DaoService, KnownDaoRegistry, ViewerConfig
from dao_viewer.service import CONTRACT_UNAVAILABLE_MESSAGE, INVALID_ADDRESS_MESSAGE
from stacks_api import MockStacksApi, Network, TaggedValue, indexed


PRINCIPAL = "SP000000000000000000002Q6VF78"
DAO = f"{PRINCIPAL}.my-awesome-dao"
TESTNET_DAO = "ST000000000000000000002AMW42H.sample-dao"


@pytest.fixture
def api():
    api = MockStacksApi(block_height=123456)
    api.set_balance(DAO, 500000000)
    api.set_function(DAO, "get-proposal-count", TaggedValue("uint", 3))
    api.set_function(DAO, "get-proposal", indexed({
        0: {"title": "Upgrade", "status": "passed"},
        2: TaggedValue("bool", True),
    }))
    return api


@pytest.fixture
def service(api):
    return DaoService(api, known_daos=KnownDaoRegistry(seed=()))


# ============================================================
# ADDRESS VALIDATION TESTS
# ============================================================

class TestAddressValidation:
    """Tests for address gating."""

    def test_check_address(self, service):
        parsed = service.check_address(DAO)

        assert parsed.contract_name == "my-awesome-dao"

    def test_check_address_raises(self, service):
        with pytest.raises(InvalidAddressFormatError) as exc_info:
            service.check_address("SP123.dao")

        assert INVALID_ADDRESS_MESSAGE in exc_info.value.message
        assert exc_info.value.network == "mainnet"

    def test_network_mismatch(self, service):
        assert service.is_valid_address(TESTNET_DAO, Network.TESTNET)
        assert not service.is_valid_address(TESTNET_DAO)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("address", [
        "",
        "not-a-dao",
        PRINCIPAL,
        f"{PRINCIPAL}.",
        f"{PRINCIPAL[:-1]}9.my-awesome-dao",
        TESTNET_DAO,
    ])
    async def test_malformed_addresses_make_no_calls(self, service, api, address):
        assert await service.get_dao_treasury(address) is None
        assert await service.get_dao_proposals(address) == []
        assert await service.get_proposal_details("0", address) is None
        assert api.calls == []


# ============================================================
# DATA TESTS
# ============================================================

class TestDaoData:
    """Tests for treasury, proposals and details."""

    @pytest.mark.asyncio
    async def test_treasury(self, service):
        treasury = await service.get_dao_treasury(DAO)

        assert treasury.name == "My Awesome Dao"
        assert treasury.stx_balance == Decimal(500)
        assert treasury.last_updated_block == 123456

    @pytest.mark.asyncio
    async def test_treasury_failure_is_absent(self, service, api):
        api.unreachable = True

        assert await service.get_dao_treasury(DAO) is None

    @pytest.mark.asyncio
    async def test_proposals(self, service):
        proposals = await service.get_dao_proposals(DAO)

        assert [(p.id, p.title, p.status.value) for p in proposals] == [
            ("0", "Upgrade", "Passed"),
            ("2", "Proposal 2", "Active"),
        ]

    @pytest.mark.asyncio
    async def test_proposal_details(self, service):
        details = await service.get_proposal_details("0", DAO)

        assert details.title == "Upgrade"
        assert details.status.value == "Passed"

    @pytest.mark.asyncio
    async def test_details_without_address(self, service, api):
        assert await service.get_proposal_details("0") is None
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_explicit_network(self, api):
        api.set_balance(TESTNET_DAO, 2000000, network=Network.TESTNET)
        service = DaoService(api, known_daos=KnownDaoRegistry(seed=()))

        treasury = await service.get_dao_treasury(TESTNET_DAO, Network.TESTNET)

        assert treasury.stx_balance == Decimal(2)

    @pytest.mark.asyncio
    async def test_default_network_from_config(self, api):
        api.set_balance(TESTNET_DAO, 1000000, network=Network.TESTNET)
        config = ViewerConfig(default_network=Network.TESTNET)
        service = DaoService(api, known_daos=KnownDaoRegistry(seed=()), config=config)

        assert await service.get_dao_treasury(DAO) is None
        assert (await service.get_dao_treasury(TESTNET_DAO)).stx_balance == Decimal(1)

    @pytest.mark.asyncio
    async def test_adapter_errors_degrade(self, api, make_stub):
        """Test unexpected adapter failures become empty results."""
        service = DaoService(api, known_daos=KnownDaoRegistry(seed=()))
        service.registry.register(make_stub("broken-family"))

        # Stub get_treasury raises NotImplementedError
        assert await service.get_dao_treasury(DAO) is None
        assert await service.get_dao_proposals(DAO) == []


# ============================================================
# ADAPTER PINNING TESTS
# ============================================================

class TestAdapterPinning:
    """Tests for known DAOs that name their adapter."""

    @pytest.mark.asyncio
    async def test_pinned_adapter_skips_probe(self, api, make_stub):
        family = make_stub("family", handles=False)
        known = KnownDaoRegistry(seed=(
            KnownDao("Family DAO", DAO, Network.MAINNET, adapter_type="family"),
        ))
        service = DaoService(api, known_daos=known)
        service.registry.register(family)

        proposals = await service.get_dao_proposals(DAO)

        assert proposals == []
        assert family.probes == 0
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_unknown_pin_falls_back_to_probe(self, api):
        known = KnownDaoRegistry(seed=(
            KnownDao("Lost DAO", DAO, Network.MAINNET, adapter_type="retired"),
        ))
        service = DaoService(api, known_daos=known)

        proposals = await service.get_dao_proposals(DAO)

        assert len(proposals) == 2


# ============================================================
# VALIDATION TESTS
# ============================================================

class TestValidateContract:
    """Tests for validate_dao_contract."""

    @pytest.mark.asyncio
    async def test_valid(self, service):
        result = await service.validate_dao_contract(DAO)

        assert result.is_valid
        assert result.error is None

    @pytest.mark.asyncio
    async def test_invalid_format(self, service, api):
        result = await service.validate_dao_contract("nope")

        assert result.to_dict() == {"is_valid": False, "error": INVALID_ADDRESS_MESSAGE}
        assert api.calls == []

    @pytest.mark.asyncio
    async def test_unreachable_contract(self, service):
        result = await service.validate_dao_contract(f"{PRINCIPAL}.missing-dao")

        assert not result.is_valid
        assert result.error == CONTRACT_UNAVAILABLE_MESSAGE


# ============================================================
# KNOWN DAO TESTS
# ============================================================

class TestKnownDaos:
    """Tests for listing and registering known DAOs."""

    @pytest.mark.asyncio
    async def test_seeded_list_filtered_by_network(self, api):
        service = DaoService(api)

        mainnet = await service.list_known_daos()
        testnet = await service.list_known_daos(Network.TESTNET)

        assert [d.name for d in mainnet] == ["ALEX Lab DAO"]
        assert [d.name for d in testnet] == ["Devnet Sample DAO"]

    @pytest.mark.asyncio
    async def test_register(self, service):
        dao = service.register_known_dao("  My DAO ", DAO)

        assert dao.name == "My DAO"
        assert dao.network == Network.MAINNET
        assert await service.list_known_daos() == [dao]

    @pytest.mark.asyncio
    async def test_empty_injected_registry_is_kept(self, api):
        mine = KnownDaoRegistry(seed=())
        service = DaoService(api, known_daos=mine)

        assert await service.list_known_daos() == []

        service.register_known_dao("My DAO", DAO)

        assert len(mine) == 1
        assert [d.name for d in await service.list_known_daos()] == ["My DAO"]

    def test_injected_adapter_registry_is_kept(self, api, make_stub):
        registry = AdapterRegistry(make_stub("fallback"))

        service = DaoService(api, registry=registry)

        assert service.registry is registry

    @pytest.mark.asyncio
    async def test_register_replaces(self, service):
        service.register_known_dao("First", DAO)
        service.register_known_dao("Second", DAO)

        assert [d.name for d in await service.list_known_daos()] == ["Second"]

    def test_register_short_name(self, service):
        with pytest.raises(ValueError, match="at least 3"):
            service.register_known_dao("ab", DAO)

    def test_register_invalid_address(self, service):
        with pytest.raises(InvalidAddressFormatError):
            service.register_known_dao("My DAO", TESTNET_DAO)

    def test_register_unknown_adapter(self, service):
        with pytest.raises(ValueError, match="Unknown adapter"):
            service.register_known_dao("My DAO", DAO, adapter_type="nope")

    def test_known_registry_network_agnostic_entries(self):
        registry = KnownDaoRegistry(seed=(KnownDao("Anywhere", DAO),))

        assert len(registry.list_daos(Network.TESTNET)) == 1
        assert registry.find(DAO, Network.MAINNET).name == "Anywhere"
