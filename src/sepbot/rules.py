"""SEP lifecycle rules.

State transitions, staleness thresholds and auto-transition rules live here
so the rest of the bot only reads them. Configuration defaults are derived
from this module and can be overridden via environment variables.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from sepbot.sep.models import PingTarget, SEPState

# Valid transitions per state. Anything not listed is rejected.
STATE_TRANSITIONS: dict[SEPState, tuple[SEPState, ...]] = {
    # Becomes draft once a maintainer sponsors it
    SEPState.PROPOSAL: (SEPState.DRAFT, SEPState.DORMANT),
    SEPState.DRAFT: (SEPState.IN_REVIEW, SEPState.DORMANT),
    # Can go back to draft if it needs more work
    SEPState.IN_REVIEW: (SEPState.ACCEPTED, SEPState.DRAFT, SEPState.DORMANT),
    # Awaiting reference implementation
    SEPState.ACCEPTED: (SEPState.FINAL, SEPState.DORMANT),
    # Terminal
    SEPState.FINAL: (),
    # Revivable
    SEPState.DORMANT: (SEPState.PROPOSAL, SEPState.DRAFT),
}

# Labels that represent SEP states, in canonical order
STATE_LABELS: tuple[str, ...] = tuple(state.value for state in SEPState)


@dataclass(frozen=True)
class StalenessRule:
    """When to ping or mark a SEP in a given state as dormant."""

    state: SEPState
    ping_after_days: int
    ping_target: PingTarget
    dormant_after_days: Optional[int] = None
    close_on_dormant: bool = False


STALENESS_RULES: tuple[StalenessRule, ...] = (
    # Unsponsored proposals: ping at 90 days, dormant and closed at 180
    StalenessRule(
        state=SEPState.PROPOSAL,
        ping_after_days=90,
        ping_target=PingTarget.AUTHOR,
        dormant_after_days=180,
        close_on_dormant=True,
    ),
    StalenessRule(
        state=SEPState.DRAFT,
        ping_after_days=90,
        ping_target=PingTarget.SPONSOR,
    ),
    # Accepted SEPs awaiting a reference implementation
    StalenessRule(
        state=SEPState.ACCEPTED,
        ping_after_days=30,
        ping_target=PingTarget.AUTHOR,
    ),
)

# Days without activity before an assigned maintainer is pinged
MAINTAINER_INACTIVITY_DAYS = 14

# Days after a bot ping during which the same SEP is not pinged again
PING_COOLDOWN_DAYS = 14


@dataclass(frozen=True)
class AutoTransitionRule:
    from_state: SEPState
    to_state: SEPState
    trigger: str
    description: str


PROPOSAL_TO_DRAFT_ON_MAINTAINER_ASSIGN = AutoTransitionRule(
    from_state=SEPState.PROPOSAL,
    to_state=SEPState.DRAFT,
    trigger="maintainer_assigned",
    description="Auto-transition proposal to draft when a core maintainer assigns themselves",
)


def is_state_label(label: str) -> bool:
    """Check if a label names a SEP state."""
    return label in STATE_LABELS


def extract_states(labels: Iterable[str]) -> list[SEPState]:
    """Return every state label present, in label order."""
    return [SEPState(label) for label in labels if is_state_label(label)]


def extract_state(labels: Iterable[str]) -> Optional[SEPState]:
    """Return the first state label present, or None."""
    states = extract_states(labels)
    return states[0] if states else None


def is_valid_transition(from_state: Optional[SEPState], to_state: SEPState) -> bool:
    """Check a transition against the state graph.

    Initial state assignment (no current state) is always valid.
    """
    if from_state is None:
        return True
    return to_state in STATE_TRANSITIONS[from_state]


def get_staleness_rule(state: SEPState) -> Optional[StalenessRule]:
    """Get the staleness rule for a state, if it has one."""
    for rule in STALENESS_RULES:
        if rule.state == state:
            return rule
    return None
