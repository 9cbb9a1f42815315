"""State transition handling."""

from typing import NamedTuple, Optional

from sepbot.actions.comments import create_transition_comment
from sepbot.actions.result import ActionResult, SEPAction, error_message
from sepbot.integrations.github import GitHubClient
from sepbot.observability import log_event
from sepbot.rules import STATE_TRANSITIONS, is_valid_transition
from sepbot.sep.models import ActionType, SEPItem, SEPState, state_name


class TransitionCheck(NamedTuple):
    valid: bool
    reason: str


def invalid_transition_reason(from_state: Optional[SEPState], to_state: SEPState) -> str:
    targets = STATE_TRANSITIONS[from_state] if from_state else ()
    return (
        f"Invalid transition: {state_name(from_state)} → {to_state.value}. "
        f"Valid targets: {', '.join(t.value for t in targets)}"
    )


class TransitionHandler:
    """Moves a SEP from one state label to another."""

    def __init__(self, github: GitHubClient):
        self._github = github

    def validate_transition(
        self, from_state: Optional[SEPState], to_state: SEPState
    ) -> TransitionCheck:
        """Check a transition against the state graph."""
        if is_valid_transition(from_state, to_state):
            reason = "Valid transition" if from_state else "Initial state assignment"
            return TransitionCheck(True, reason)
        return TransitionCheck(False, invalid_transition_reason(from_state, to_state))

    def execute_transition(
        self,
        item: SEPItem,
        to_state: SEPState,
        sponsor: str,
        dry_run: bool,
    ) -> ActionResult:
        """Swap the state label and announce the transition in a comment."""
        from_state = item.state
        action = SEPAction(
            type=ActionType.TRANSITION,
            item=item,
            reason=f"Transitioning from {state_name(from_state)} to {to_state.value}",
            dry_run=dry_run,
            target_user=sponsor,
            from_state=from_state,
            to_state=to_state,
        )

        if from_state:
            check = self.validate_transition(from_state, to_state)
            if not check.valid:
                log_event(
                    "transition",
                    check.reason,
                    "warning",
                    item=item.number,
                    from_state=from_state.value,
                    to_state=to_state.value,
                )
                return ActionResult(action=action, success=False, error=check.reason)

        if dry_run:
            log_event(
                "transition",
                "DRY RUN: Would transition state",
                item=item.number,
                from_state=state_name(from_state),
                to_state=to_state.value,
                sponsor=sponsor,
            )
            return ActionResult(action=action, success=True)

        try:
            # Remove the old label first so the item never carries two states
            if from_state:
                self._github.remove_label(item.number, from_state.value)
            self._github.add_labels(item.number, [to_state.value])

            comment = create_transition_comment(
                item, state_name(from_state), to_state.value, sponsor
            )
            url = self._github.add_comment(item.number, comment)
        except Exception as e:
            message = error_message(e)
            log_event(
                "transition", "Failed to transition state", "error", item=item.number, error=message
            )
            return ActionResult(action=action, success=False, error=message)

        log_event(
            "transition",
            "Transitioned state",
            "success",
            item=item.number,
            from_state=state_name(from_state),
            to_state=to_state.value,
            sponsor=sponsor,
            comment_url=url,
        )
        return ActionResult(action=action, success=True, comment_url=url)
