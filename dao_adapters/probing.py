"""
Capability Probing - Ordered candidate lists with first-success selection.

A contract exposes no interface discovery, so adapters guess function
names. Each guess is a ``ProbeCandidate``; ``try_candidates`` runs them in
order, records every attempt and stops at the first accepted value.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence

from stacks_api.clarity import ClarityValue, encode_uint
from stacks_api.exceptions import FunctionNotAvailableError, StacksApiError


logger = logging.getLogger(__name__)


ArgBuilder = Callable[..., list[str]]
ReadOnlyCall = Callable[[str, list[str]], Awaitable[ClarityValue]]
Acceptor = Callable[[ClarityValue], bool]


def no_args(*_context: Any) -> list[str]:
    return []


def uint_arg(index: int, *_context: Any) -> list[str]:
    """Single ``uint`` argument built from the first context item."""
    return [encode_uint(index)]


def is_present(value: ClarityValue) -> bool:
    return value is not None


@dataclass(frozen=True)
class ProbeCandidate:
    """One guessed function and how to build its arguments."""
    function_name: str
    build_args: ArgBuilder = no_args


@dataclass(frozen=True)
class ProbeAttempt:
    """Ledger entry for one candidate call."""
    function_name: str
    args: tuple[str, ...]
    outcome: str  # accepted, rejected, unavailable, error
    error: Optional[str] = None


@dataclass
class ProbeResult:
    """Outcome of a probe run: the winning candidate (if any) and the ledger."""
    value: ClarityValue = None
    candidate: Optional[ProbeCandidate] = None
    attempts: list[ProbeAttempt] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.candidate is not None

    @property
    def tried(self) -> list[str]:
        return [a.function_name for a in self.attempts]


def candidates(*names: str, build_args: ArgBuilder = no_args) -> tuple[ProbeCandidate, ...]:
    """Build an ordered candidate list sharing one argument builder."""
    return tuple(ProbeCandidate(name, build_args) for name in names)


async def try_candidates(
    call: ReadOnlyCall,
    probe_candidates: Sequence[ProbeCandidate],
    accept: Acceptor = is_present,
    context: Sequence[Any] = (),
    label: str = "probe",
) -> ProbeResult:
    """
    Try each candidate in order until one yields an accepted value.

    A rejected or failed call only advances to the next candidate; nothing
    is retried and no error escapes.

    Args:
        call: Coroutine function ``(function_name, args) -> value``
        probe_candidates: Candidates in priority order
        accept: Predicate a value must satisfy to stop the search
        context: Positional values passed to each argument builder
        label: Prefix for diagnostic log lines

    Returns:
        ProbeResult with the accepted value, or ``found == False``
    """
    result = ProbeResult()

    for candidate in probe_candidates:
        try:
            args = candidate.build_args(*context)
        except ValueError as e:
            logger.debug(f"[{label}] {candidate.function_name} arguments rejected: {e}")
            result.attempts.append(ProbeAttempt(candidate.function_name, (), "error", str(e)))
            continue

        try:
            value = await call(candidate.function_name, args)
        except FunctionNotAvailableError as e:
            logger.debug(f"[{label}] {candidate.function_name} not available: {e.cause or e}")
            result.attempts.append(ProbeAttempt(
                candidate.function_name, tuple(args), "unavailable", str(e),
            ))
            continue
        except StacksApiError as e:
            logger.debug(f"[{label}] {candidate.function_name} failed: {e}")
            result.attempts.append(ProbeAttempt(
                candidate.function_name, tuple(args), "error", str(e),
            ))
            continue

        if accept(value):
            result.attempts.append(ProbeAttempt(candidate.function_name, tuple(args), "accepted"))
            result.value = value
            result.candidate = candidate
            return result

        result.attempts.append(ProbeAttempt(candidate.function_name, tuple(args), "rejected"))

    return result
