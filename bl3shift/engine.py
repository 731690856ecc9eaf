"""Decides which (code, platform) pairs to redeem and records the outcomes"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Set, Tuple

from .logs import Colors
from .models import RedemptionHistory, RedemptionResult, RedemptionStatus, ShiftCode

logger = logging.getLogger(__name__)

# Anything with redeem(code, platform) -> RedemptionResult, e.g. ShiftClient
Redeem = Callable[[str, str], RedemptionResult]


@dataclass
class ReconcileResult:
    history: RedemptionHistory
    attempted: bool = False
    results: List[RedemptionResult] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.status == RedemptionStatus.SUCCESS)


def effective_platforms(code: ShiftCode, owned_platforms: List[str]) -> List[str]:
    """Platforms a code should be tried on for this user"""
    if code.is_universal:
        return list(owned_platforms)
    return [p for p in code.platforms if p in owned_platforms]


def print_result(result: RedemptionResult):
    """One status line per attempt"""
    platform_display = result.platform.capitalize().ljust(10)
    code_display = f"{Colors.BOLD}{result.code}{Colors.END}"

    if result.status == RedemptionStatus.SUCCESS:
        print(f"  {Colors.GREEN}{platform_display}{Colors.END} {code_display} {Colors.GREEN}success!{Colors.END}")
    elif result.status == RedemptionStatus.ALREADY_REDEEMED:
        print(f"  {Colors.YELLOW}{platform_display}{Colors.END} {code_display} {Colors.GRAY}already redeemed{Colors.END}")
    else:
        print(f"  {Colors.RED}{platform_display}{Colors.END} {code_display} {Colors.RED}{result.message}{Colors.END}")


def reconcile(codes: Iterable[ShiftCode], owned_platforms: Iterable[str], history: RedemptionHistory,
              redeem: Redeem, on_result: Optional[Callable[[RedemptionResult], None]] = print_result) -> ReconcileResult:
    """Redeem every (code, platform) pair that is owned and not redeemed yet.

    Codes are processed in the given order, universal codes on every owned
    platform, the others only on the listed platforms the user owns. Pairs
    already in the history are skipped without a call. A pair is attempted at
    most once, even when the code list repeats a code.

    Successful and already redeemed outcomes are added to the returned
    history; any other failure leaves the pair eligible for the next run.
    The history passed in is not modified.
    """
    owned = list(dict.fromkeys(owned_platforms))
    outcome = ReconcileResult(history=history.copy())
    tried: Set[Tuple[str, str]] = set()

    for code in codes:
        for platform in effective_platforms(code, owned):
            if outcome.history.contains(code.code, platform):
                logger.debug("Skipping %s on %s: already redeemed", code.code, platform)
                continue
            if (code.code, platform) in tried:
                continue

            tried.add((code.code, platform))
            outcome.attempted = True
            result = redeem(code.code, platform)

            if result.status.is_redeemed:
                outcome.history.add(code.code, platform)
            else:
                logger.debug("Redemption of %s on %s failed: %s", code.code, platform, result.message)

            outcome.results.append(result)
            if on_result is not None:
                on_result(result)

    return outcome
