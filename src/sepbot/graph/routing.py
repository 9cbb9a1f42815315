"""Conditional routing functions for the processing workflow."""

from sepbot.graph.state import ProcessState
from sepbot.sep.models import SEPState


def route_after_intake(state: ProcessState) -> str:
    """Skip closed or ambiguous items entirely."""
    if state.get("skipped"):
        return "skip"
    return "continue"


def route_after_transition(state: ProcessState) -> str:
    """An auto-transition ends processing for this run."""
    if state.get("transitioned"):
        return "end"
    return "staleness"


def route_after_staleness(state: ProcessState) -> str:
    """Only drafts and items in review get the maintainer accountability pass."""
    item = state.get("item")
    match item.state if item else None:
        case SEPState.DRAFT | SEPState.IN_REVIEW:
            return "accountability"
        case _:
            return "end"
