"""
Viewer Configuration Tests.
"""

from dao_viewer import CacheConfig, ViewerConfig
from stacks_api import Network


class TestViewerConfig:
    """Tests for ViewerConfig.from_env."""

    def test_defaults(self):
        config = ViewerConfig.from_env({})

        assert config.default_network == Network.MAINNET
        assert config.api_urls[Network.MAINNET] == "https://api.mainnet.hiro.so"
        assert config.api_urls[Network.TESTNET] == "https://api.testnet.hiro.so"
        assert config.proposal_concurrency == 1
        assert config.sender_address is None
        assert config.cache == CacheConfig()
        assert config.port == 8000
        assert not config.is_development

    def test_testnet(self):
        assert ViewerConfig.from_env({"DEFAULT_NETWORK": "testnet"}).default_network == Network.TESTNET
        assert ViewerConfig.from_env({"DEFAULT_NETWORK": " TestNet "}).default_network == Network.TESTNET

    def test_unknown_network_falls_back_to_mainnet(self):
        assert ViewerConfig.from_env({"DEFAULT_NETWORK": "devnet"}).default_network == Network.MAINNET

    def test_frontend_variable_name(self):
        config = ViewerConfig.from_env({"NEXT_PUBLIC_DEFAULT_NETWORK": "testnet"})

        assert config.default_network == Network.TESTNET

    def test_overrides(self):
        config = ViewerConfig.from_env({
            "STACKS_API_TESTNET_URL": "http://localhost:3999",
            "STACKS_API_TIMEOUT": "5.5",
            "DAO_PROPOSAL_CONCURRENCY": "8",
            "DAO_SENDER_ADDRESS": "SP000000000000000000002Q6VF78",
            "TREASURY_CACHE_SECONDS": "15",
            "PORT": "9000",
            "LOG_LEVEL": "debug",
            "ENVIRONMENT": "development",
        })

        assert config.api_urls[Network.TESTNET] == "http://localhost:3999"
        assert config.api_urls[Network.MAINNET] == "https://api.mainnet.hiro.so"
        assert config.api_timeout_seconds == 5.5
        assert config.proposal_concurrency == 8
        assert config.sender_address == "SP000000000000000000002Q6VF78"
        assert config.cache.treasury_seconds == 15
        assert config.cache.proposals_seconds == 30
        assert config.port == 9000
        assert config.log_level == "DEBUG"
        assert config.is_development

    def test_viewer_port_wins(self):
        assert ViewerConfig.from_env({"PORT": "9000", "VIEWER_PORT": "9100"}).port == 9100

    def test_invalid_numbers_use_defaults(self):
        config = ViewerConfig.from_env({
            "STACKS_API_TIMEOUT": "soon",
            "DAO_PROPOSAL_CONCURRENCY": "0",
            "PROPOSALS_CACHE_SECONDS": "half a minute",
        })

        assert config.api_timeout_seconds == 30.0
        assert config.proposal_concurrency == 1
        assert config.cache.proposals_seconds == 30
