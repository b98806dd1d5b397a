"""
DAO Adapter Exceptions - Custom exception hierarchy.

Probe failures never surface as these; only baseline failures and
invariant violations do.
"""

from datetime import datetime
from typing import Any, Optional


class DaoAdapterError(Exception):
    """Base exception for all DAO adapter errors."""

    def __init__(
        self,
        message: str,
        adapter_name: Optional[str] = None,
        contract_address: Optional[str] = None,
        network: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.adapter_name = adapter_name
        self.contract_address = contract_address
        self.network = network
        self.original_error = original_error
        self.context = context or {}
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "adapter_name": self.adapter_name,
            "contract_address": self.contract_address,
            "network": self.network,
            "original_error": str(self.original_error) if self.original_error else None,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        parts = [f"{self.__class__.__name__}: {self.message}"]
        if self.adapter_name:
            parts.append(f"[adapter={self.adapter_name}]")
        if self.network:
            parts.append(f"[network={self.network}]")
        if self.original_error:
            parts.append(f"(caused by: {self.original_error})")
        return " ".join(parts)


class InvalidAddressFormatError(DaoAdapterError):
    """Contract address is malformed or belongs to another network."""


class TreasuryFetchError(DaoAdapterError):
    """Baseline treasury data could not be fetched."""


class NoAdapterMatchedError(DaoAdapterError):
    """No registered adapter accepted the contract."""

    def __init__(
        self,
        message: str,
        attempted_adapters: Optional[list[str]] = None,
        contract_address: Optional[str] = None,
        network: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            contract_address=contract_address,
            network=network,
            context=context,
        )
        self.attempted_adapters = attempted_adapters or []

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["attempted_adapters"] = self.attempted_adapters
        return data
