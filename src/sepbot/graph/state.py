"""ProcessState schema for the per-SEP LangGraph workflow."""

import operator
from typing import Annotated, Optional, TypedDict

from sepbot.actions.result import ActionResult
from sepbot.hooks.types import DormantEntry, NeedsSponsorEntry, PingEntry, TransitionEntry
from sepbot.sep.models import SEPItem


class ProcessState(TypedDict, total=False):
    """State for processing one SEP."""

    # === Input ===
    item: SEPItem

    # === Intake ===
    skipped: bool
    skip_reason: Optional[str]

    # === Auto-transition ===
    transitioned: bool

    # === Accumulated across nodes ===
    results: Annotated[list[ActionResult], operator.add]
    transitions: Annotated[list[TransitionEntry], operator.add]
    pings: Annotated[list[PingEntry], operator.add]
    needs_sponsor: Annotated[list[NeedsSponsorEntry], operator.add]
    dormant: Annotated[list[DormantEntry], operator.add]
