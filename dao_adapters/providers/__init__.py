"""
Providers package - DAO adapter strategies.
"""

from dao_adapters.providers.generic import GenericDaoAdapter


__all__ = [
    "GenericDaoAdapter",
]
