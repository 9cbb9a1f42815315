"""SEP staleness analysis."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sepbot.config import SEPBotConfig
from sepbot.integrations.github import GitHubClient
from sepbot.rules import get_staleness_rule
from sepbot.sep.models import (
    BOT_COMMENT_MARKER,
    MaintainerActivity,
    PingTarget,
    SEPItem,
    SEPState,
    StaleAnalysis,
)

ONE_DAY = timedelta(days=1)


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days elapsed between two datetimes, rounded down."""
    return (later - earlier) // ONE_DAY


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SEPAnalyzer:
    """Computes staleness verdicts and maintainer activity for SEPs."""

    def __init__(self, config: SEPBotConfig, github: GitHubClient):
        self._thresholds = config.thresholds
        self._github = github

    def analyze(self, item: SEPItem, now: Optional[datetime] = None) -> StaleAnalysis:
        """Decide whether a SEP should be pinged, marked dormant or closed."""
        now = now or _utcnow()
        days = days_between(item.updated_at, now)

        # Don't ping again within the cooldown window
        last_ping = self.last_bot_ping(item.number)
        if last_ping:
            days_since_ping = days_between(last_ping, now)
            cooldown = self._thresholds.ping_cooldown_days
            if days_since_ping < cooldown:
                return StaleAnalysis(
                    item=item,
                    days_since_activity=days,
                    reason=f"Recently pinged {days_since_ping} days ago (cooldown: {cooldown} days)",
                )

        match item.state:
            case SEPState.PROPOSAL:
                return self._analyze_proposal(item, days)
            case SEPState.DRAFT:
                return self._analyze_draft(item, days)
            case SEPState.ACCEPTED:
                return self._analyze_accepted(item, days)
            case _:
                return StaleAnalysis(item=item, days_since_activity=days)

    def _analyze_proposal(self, item: SEPItem, days: int) -> StaleAnalysis:
        rule = get_staleness_rule(SEPState.PROPOSAL)
        dormant_days = self._thresholds.proposal_dormant_days
        ping_days = self._thresholds.proposal_ping_days

        if days >= dormant_days:
            return StaleAnalysis(
                item=item,
                days_since_activity=days,
                should_mark_dormant=True,
                should_close=rule.close_on_dormant if rule else True,
                reason=f"Proposal inactive for {days} days (threshold: {dormant_days})",
            )

        if days >= ping_days:
            return StaleAnalysis(
                item=item,
                days_since_activity=days,
                should_ping=True,
                ping_target=PingTarget.AUTHOR,
                reason=f"Proposal inactive for {days} days (threshold: {ping_days})",
            )

        return StaleAnalysis(item=item, days_since_activity=days)

    def _analyze_draft(self, item: SEPItem, days: int) -> StaleAnalysis:
        ping_days = self._thresholds.draft_ping_days
        if days >= ping_days:
            return StaleAnalysis(
                item=item,
                days_since_activity=days,
                should_ping=True,
                ping_target=PingTarget.SPONSOR,
                reason=f"Draft inactive for {days} days (threshold: {ping_days})",
            )
        return StaleAnalysis(item=item, days_since_activity=days)

    def _analyze_accepted(self, item: SEPItem, days: int) -> StaleAnalysis:
        if days >= self._thresholds.accepted_ping_days:
            return StaleAnalysis(
                item=item,
                days_since_activity=days,
                should_ping=True,
                ping_target=PingTarget.AUTHOR,
                reason=f"Accepted SEP inactive for {days} days - awaiting reference implementation",
            )
        return StaleAnalysis(item=item, days_since_activity=days)

    def check_maintainer_activity(
        self,
        item: SEPItem,
        username: str,
        now: Optional[datetime] = None,
    ) -> MaintainerActivity:
        """Find the user's most recent event or comment on the SEP.

        Falls back to the SEP's own last update when the user has no activity.
        """
        now = now or _utcnow()
        last_activity: Optional[datetime] = None

        for event in self._github.get_events(item.number):
            if event.actor == username:
                if last_activity is None or event.created_at > last_activity:
                    last_activity = event.created_at

        for comment in self._github.get_comments(item.number):
            if comment.author == username:
                if last_activity is None or comment.created_at > last_activity:
                    last_activity = comment.created_at

        if last_activity is None:
            last_activity = item.updated_at

        days = days_between(last_activity, now)
        return MaintainerActivity(
            days_since_activity=days,
            should_ping=days >= self._thresholds.maintainer_inactivity_days,
        )

    def last_bot_ping(self, issue_number: int) -> Optional[datetime]:
        """Date of the most recent comment carrying the bot marker."""
        for comment in reversed(self._github.get_comments(issue_number)):
            if BOT_COMMENT_MARKER in comment.body:
                return comment.created_at
        return None
