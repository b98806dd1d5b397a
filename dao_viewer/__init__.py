"""
DAO Viewer Package - Facade, configuration and web API for DAO data.
"""

from dao_viewer.cache import ResponseCache
from dao_viewer.config import CacheConfig, ViewerConfig
from dao_viewer.known_daos import SEED_DAOS, KnownDaoRegistry
from dao_viewer.service import DaoService, get_default_service


__all__ = [
    "CacheConfig",
    "DaoService",
    "KnownDaoRegistry",
    "ResponseCache",
    "SEED_DAOS",
    "ViewerConfig",
    "get_default_service",
]
