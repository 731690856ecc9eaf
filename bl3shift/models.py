"""Data classes shared by the catalog, the client and the reconciliation engine"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Set


class RedemptionStatus(Enum):
    """Enumeration of possible redemption statuses"""
    SUCCESS = "success"
    ALREADY_REDEEMED = "already_redeemed"
    FAILED = "failed"

    @property
    def is_redeemed(self) -> bool:
        return self in (RedemptionStatus.SUCCESS, RedemptionStatus.ALREADY_REDEEMED)


def unique_platforms(platforms: Iterable[str]) -> List[str]:
    """Lowercase platform ids and drop duplicates, keeping the first occurrence"""
    return list(dict.fromkeys(p.strip().lower() for p in platforms if p and p.strip()))


@dataclass
class ShiftCode:
    """Represents a SHiFT code with its platform applicability"""
    code: str
    reward: str = ""
    platforms: List[str] = field(default_factory=list)
    is_universal: bool = False

    def __post_init__(self):
        self.platforms = unique_platforms(self.platforms)


@dataclass
class RedemptionResult:
    """Result of a code redemption attempt"""
    code: str
    platform: str
    status: RedemptionStatus
    message: str = ""


class RedemptionHistory:
    """Code -> platforms on which the code is known to be redeemed.

    Entries are only ever added, never removed.
    """

    def __init__(self, entries: Dict[str, Iterable[str]] = None):
        self._entries: Dict[str, Set[str]] = {}
        for code, platforms in (entries or {}).items():
            for platform in platforms:
                self.add(code, platform)

    def contains(self, code: str, platform: str) -> bool:
        return platform.strip().lower() in self._entries.get(code, ())

    def add(self, code: str, platform: str):
        self._entries.setdefault(code, set()).add(platform.strip().lower())

    def copy(self) -> "RedemptionHistory":
        return RedemptionHistory(self._entries)

    def to_dict(self) -> Dict[str, List[str]]:
        """JSON-friendly form with sorted platform lists"""
        return {code: sorted(platforms) for code, platforms in self._entries.items()}

    def __len__(self):
        return len(self._entries)

    def __eq__(self, other):
        if isinstance(other, RedemptionHistory):
            return self._entries == other._entries
        if isinstance(other, dict):
            return self._entries == {code: set(platforms) for code, platforms in other.items()}
        return NotImplemented

    def __repr__(self):
        return f"RedemptionHistory({self.to_dict()!r})"
