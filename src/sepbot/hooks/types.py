"""Hook interfaces and run summary types."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional, Protocol

from sepbot.sep.models import PingTarget, SEPItem, SEPState


@dataclass(frozen=True)
class TransitionEntry:
    item: SEPItem
    from_state: Optional[SEPState]
    to_state: SEPState
    sponsor: str


@dataclass(frozen=True)
class PingEntry:
    item: SEPItem
    ping_target: PingTarget
    target_user: str
    days_since_activity: int


@dataclass(frozen=True)
class NeedsSponsorEntry:
    item: SEPItem
    days_since_activity: int


@dataclass(frozen=True)
class DormantEntry:
    item: SEPItem
    days_since_activity: int
    was_closed: bool


@dataclass
class SummaryData:
    """Summary rows collected while processing SEPs."""

    transitions: list[TransitionEntry] = field(default_factory=list)
    pings: list[PingEntry] = field(default_factory=list)
    needs_sponsor: list[NeedsSponsorEntry] = field(default_factory=list)
    dormant: list[DormantEntry] = field(default_factory=list)

    def extend(self, other: "SummaryData") -> None:
        self.transitions.extend(other.transitions)
        self.pings.extend(other.pings)
        self.needs_sponsor.extend(other.needs_sponsor)
        self.dormant.extend(other.dormant)

    @property
    def has_activity(self) -> bool:
        return bool(self.transitions or self.pings or self.needs_sponsor or self.dormant)


@dataclass(frozen=True)
class SummaryEvent:
    """Sent once at the end of a full sweep."""

    timestamp: datetime
    dry_run: bool
    summary: SummaryData
    total_processed: int
    failed: int
    type: Literal["summary"] = "summary"


class SEPHook(Protocol):
    """A notification sink for run events."""

    name: str
    enabled: bool

    async def on_event(self, event: SummaryEvent) -> None: ...
