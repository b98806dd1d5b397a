"""
Stacks API Exceptions - Errors raised by the remote read interface.

Callers inside the adapter layer treat every one of these as terminal for
the current probe attempt only.
"""

from datetime import datetime
from typing import Any, Optional


class StacksApiError(Exception):
    """Base exception for all remote read interface errors."""

    def __init__(
        self,
        message: str,
        network: Optional[str] = None,
        status_code: Optional[int] = None,
        request_url: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.network = network
        self.status_code = status_code
        self.request_url = request_url
        self.original_error = original_error
        self.context = context or {}
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "network": self.network,
            "status_code": self.status_code,
            "request_url": self.request_url,
            "original_error": str(self.original_error) if self.original_error else None,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        parts = [f"{self.__class__.__name__}: {self.message}"]
        if self.network:
            parts.append(f"[network={self.network}]")
        if self.status_code:
            parts.append(f"[status={self.status_code}]")
        if self.original_error:
            parts.append(f"(caused by: {self.original_error})")
        return " ".join(parts)


class ContractNotFoundError(StacksApiError):
    """The contract or account does not exist on the network."""


class NetworkUnreachableError(StacksApiError):
    """The API endpoint could not be reached or timed out."""


class FunctionNotAvailableError(StacksApiError):
    """A read-only call was rejected, usually because the function is missing."""

    def __init__(
        self,
        message: str,
        function_name: Optional[str] = None,
        contract_id: Optional[str] = None,
        cause: Optional[str] = None,
        network: Optional[str] = None,
        original_error: Optional[Exception] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            network=network,
            original_error=original_error,
            context=context,
        )
        self.function_name = function_name
        self.contract_id = contract_id
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data.update({
            "function_name": self.function_name,
            "contract_id": self.contract_id,
            "cause": self.cause,
        })
        return data


class RateLimitError(StacksApiError):
    """Rate limit exceeded on the API endpoint."""

    def __init__(
        self,
        message: str,
        network: Optional[str] = None,
        retry_after_seconds: Optional[int] = None,
        request_url: Optional[str] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            network=network,
            status_code=429,
            request_url=request_url,
            context=context,
        )
        self.retry_after_seconds = retry_after_seconds

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data["retry_after_seconds"] = self.retry_after_seconds
        return data


class ClarityDecodeError(StacksApiError):
    """A hex-encoded Clarity value could not be decoded."""

    def __init__(
        self,
        message: str,
        raw_hex: Optional[str] = None,
        offset: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, original_error=original_error)
        self.raw_hex = raw_hex
        self.offset = offset

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = super().to_dict()
        data.update({
            "raw_hex": self.raw_hex[:500] if self.raw_hex else None,
            "offset": self.offset,
        })
        return data
