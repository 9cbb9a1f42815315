"""Action and result types shared by the action handlers."""

from dataclasses import dataclass
from typing import Optional

from sepbot.sep.models import ActionType, SEPItem, SEPState


@dataclass(frozen=True)
class SEPAction:
    """An action the bot attempted (or would attempt in dry-run)."""

    type: ActionType
    item: SEPItem
    reason: str
    dry_run: bool
    target_user: Optional[str] = None
    from_state: Optional[SEPState] = None
    to_state: Optional[SEPState] = None
    days_since_activity: Optional[int] = None
    closed: bool = False


@dataclass(frozen=True)
class ActionResult:
    """Outcome of executing an action."""

    action: SEPAction
    success: bool
    error: Optional[str] = None
    comment_url: Optional[str] = None


def error_message(error: BaseException) -> str:
    """Short, non-empty message for an exception."""
    return str(error)[:200] if str(error) else "Unknown error"
