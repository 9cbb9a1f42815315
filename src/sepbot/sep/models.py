"""Pydantic models for SEP items and analysis results."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

# Marker embedded in every bot comment, used for cooldown tracking
BOT_COMMENT_MARKER = "<!-- sep-automation-bot -->"


class SEPState(str, Enum):
    """Lifecycle states, each backed by a GitHub label of the same name."""

    PROPOSAL = "proposal"
    DRAFT = "draft"
    IN_REVIEW = "in-review"
    ACCEPTED = "accepted"
    FINAL = "final"
    DORMANT = "dormant"


class ItemType(str, Enum):
    ISSUE = "issue"
    PR = "pr"


class PingTarget(str, Enum):
    AUTHOR = "author"
    SPONSOR = "sponsor"
    MAINTAINER = "maintainer"


class ActionType(str, Enum):
    TRANSITION = "transition"
    PING_AUTHOR = "ping-author"
    PING_SPONSOR = "ping-sponsor"
    PING_MAINTAINER = "ping-maintainer"
    NEEDS_SPONSOR = "needs-sponsor"
    MARK_DORMANT = "mark-dormant"
    CLOSE = "close"


def state_name(state: Optional[SEPState]) -> str:
    """Render a state for comments and logs, using "none" for no state."""
    return state.value if state else "none"


class SEPItem(BaseModel):
    """Snapshot of an issue or pull request recognized as a SEP."""

    model_config = ConfigDict(frozen=True)

    id: int
    number: int
    title: str
    type: ItemType
    state: Optional[SEPState] = None
    labels: tuple[str, ...] = ()
    author: str
    assignees: tuple[str, ...] = ()
    created_at: datetime
    updated_at: datetime
    url: str
    is_closed: bool = False
    # Every state label present when more than one is set
    conflicting_states: tuple[SEPState, ...] = ()


class StaleAnalysis(BaseModel):
    """Staleness verdict for one item at one point in time."""

    model_config = ConfigDict(frozen=True)

    item: SEPItem
    days_since_activity: int
    should_ping: bool = False
    should_mark_dormant: bool = False
    should_close: bool = False
    ping_target: Optional[PingTarget] = None
    reason: Optional[str] = None

    @property
    def needs_action(self) -> bool:
        return self.should_ping or self.should_mark_dormant


class Comment(BaseModel):
    """The parts of an issue comment the analyzer looks at."""

    model_config = ConfigDict(frozen=True)

    id: int
    body: str
    author: Optional[str] = None
    created_at: datetime


class TimelineEvent(BaseModel):
    """The parts of an issue event the analyzer looks at."""

    model_config = ConfigDict(frozen=True)

    id: int
    event: str
    actor: Optional[str] = None
    created_at: datetime


class MaintainerActivity(BaseModel):
    """Result of checking one maintainer's activity on a SEP."""

    days_since_activity: int
    should_ping: bool
