"""Stale pinging and dormancy handling."""

from typing import Any, Optional, assert_never

from sepbot.actions.comments import (
    create_accepted_reminder_comment,
    create_author_ping_comment,
    create_dormant_comment,
    create_maintainer_ping_comment,
    create_needs_sponsor_comment,
    create_sponsor_ping_comment,
)
from sepbot.actions.result import ActionResult, SEPAction, error_message
from sepbot.actions.transition import invalid_transition_reason
from sepbot.integrations.github import GitHubClient
from sepbot.maintainers import MaintainerResolver
from sepbot.observability import log_event
from sepbot.rules import is_valid_transition
from sepbot.sep.models import ActionType, PingTarget, SEPItem, SEPState, StaleAnalysis


class PingHandler:
    """Executes the action a staleness analysis calls for."""

    def __init__(self, github: GitHubClient, maintainers: MaintainerResolver):
        self._github = github
        self._maintainers = maintainers

    def execute_ping(self, analysis: StaleAnalysis, dry_run: bool) -> ActionResult:
        """Mark dormant, or ping whoever the analysis names."""
        item = analysis.item
        days = analysis.days_since_activity

        if analysis.should_mark_dormant:
            return self._mark_dormant(item, days, analysis.should_close, dry_run)

        target = analysis.ping_target
        match target:
            case None:
                action = _action(ActionType.PING_AUTHOR, item, dry_run, "No ping target")
                return ActionResult(action=action, success=True)
            case PingTarget.AUTHOR:
                return self._ping_author(item, days, dry_run)
            case PingTarget.SPONSOR:
                return self._ping_sponsor(item, days, dry_run)
            case PingTarget.MAINTAINER:
                return self._ping_maintainer(item, days, dry_run)
            case _:
                assert_never(target)

    def ping_maintainer_directly(
        self,
        item: SEPItem,
        maintainer: str,
        days_since_activity: int,
        dry_run: bool,
    ) -> ActionResult:
        """Ping a specific maintainer about their own inactivity."""
        action = _action(
            ActionType.PING_MAINTAINER,
            item,
            dry_run,
            f"Maintainer ping after {days_since_activity} days of inactivity",
            target_user=maintainer,
            days_since_activity=days_since_activity,
        )
        return self._post(
            action,
            create_maintainer_ping_comment(item, maintainer, days_since_activity),
            "ping maintainer",
            "Pinged maintainer",
            maintainer=maintainer,
        )

    def _ping_author(self, item: SEPItem, days: int, dry_run: bool) -> ActionResult:
        action = _action(
            ActionType.PING_AUTHOR,
            item,
            dry_run,
            f"Author ping after {days} days of inactivity",
            target_user=item.author,
            days_since_activity=days,
        )
        if item.state == SEPState.ACCEPTED:
            body = create_accepted_reminder_comment(item, days)
        else:
            body = create_author_ping_comment(item, days)
        return self._post(action, body, "ping author", "Pinged author", author=item.author)

    def _ping_sponsor(self, item: SEPItem, days: int, dry_run: bool) -> ActionResult:
        sponsor = self._maintainers.get_sponsor(item.assignees)
        if not sponsor:
            return self._post_needs_sponsor(item, days, dry_run)

        action = _action(
            ActionType.PING_SPONSOR,
            item,
            dry_run,
            f"Sponsor ping after {days} days of inactivity",
            target_user=sponsor,
            days_since_activity=days,
        )
        return self._post(
            action,
            create_sponsor_ping_comment(item, sponsor, days),
            "ping sponsor",
            "Pinged sponsor",
            sponsor=sponsor,
        )

    def _ping_maintainer(self, item: SEPItem, days: int, dry_run: bool) -> ActionResult:
        sponsor = self._maintainers.get_sponsor(item.assignees)
        if not sponsor:
            action = _action(ActionType.PING_MAINTAINER, item, dry_run, "No maintainer found")
            return ActionResult(action=action, success=False, error="No maintainer assigned")
        return self.ping_maintainer_directly(item, sponsor, days, dry_run)

    def _post_needs_sponsor(self, item: SEPItem, days: int, dry_run: bool) -> ActionResult:
        action = _action(
            ActionType.NEEDS_SPONSOR,
            item,
            dry_run,
            f"Draft SEP needs core maintainer sponsor ({days} days inactive)",
            days_since_activity=days,
        )
        return self._post(
            action,
            create_needs_sponsor_comment(item, days),
            "post needs-sponsor comment",
            "Posted needs-sponsor comment",
            assignees=list(item.assignees),
        )

    def _mark_dormant(
        self, item: SEPItem, days: int, should_close: bool, dry_run: bool
    ) -> ActionResult:
        action = _action(
            ActionType.MARK_DORMANT,
            item,
            dry_run,
            f"Marking dormant after {days} days of inactivity",
            from_state=item.state,
            to_state=SEPState.DORMANT,
            days_since_activity=days,
            closed=should_close,
        )

        # Re-check the graph, the analysis may be stale
        if not is_valid_transition(item.state, SEPState.DORMANT):
            error = invalid_transition_reason(item.state, SEPState.DORMANT)
            log_event(
                "ping", error, "warning", item=item.number, from_state=item.state.value
            )
            return ActionResult(action=action, success=False, error=error)

        if dry_run:
            log_event(
                "ping",
                "DRY RUN: Would mark as dormant",
                item=item.number,
                days_since_activity=days,
                should_close=should_close,
            )
            return ActionResult(action=action, success=True)

        # Label before closing: a partial failure leaves a dormant open item
        try:
            if item.state and item.state != SEPState.DORMANT:
                self._github.remove_label(item.number, item.state.value)
            self._github.add_labels(item.number, [SEPState.DORMANT.value])
            url = self._github.add_comment(item.number, create_dormant_comment(item, days))
            if should_close:
                self._github.close_issue(item.number)
        except Exception as e:
            message = error_message(e)
            log_event("ping", "Failed to mark as dormant", "error", item=item.number, error=message)
            return ActionResult(action=action, success=False, error=message)

        log_event(
            "ping",
            "Marked as dormant",
            "success",
            item=item.number,
            days_since_activity=days,
            closed=should_close,
            comment_url=url,
        )
        return ActionResult(action=action, success=True, comment_url=url)

    def _post(
        self, action: SEPAction, body: str, verb: str, done: str, **context: Any
    ) -> ActionResult:
        """Post a comment for an action, or log it in dry-run."""
        item = action.item
        if action.dry_run:
            log_event(
                "ping",
                f"DRY RUN: Would {verb}",
                item=item.number,
                days_since_activity=action.days_since_activity,
                **context,
            )
            return ActionResult(action=action, success=True)

        try:
            url = self._github.add_comment(item.number, body)
        except Exception as e:
            message = error_message(e)
            log_event("ping", f"Failed to {verb}", "error", item=item.number, error=message)
            return ActionResult(action=action, success=False, error=message)

        log_event("ping", done, "success", item=item.number, comment_url=url, **context)
        return ActionResult(action=action, success=True, comment_url=url)


def _action(
    type_: ActionType,
    item: SEPItem,
    dry_run: bool,
    reason: str,
    target_user: Optional[str] = None,
    **extra: Any,
) -> SEPAction:
    return SEPAction(
        type=type_,
        item=item,
        reason=reason,
        dry_run=dry_run,
        target_user=target_user,
        **extra,
    )
