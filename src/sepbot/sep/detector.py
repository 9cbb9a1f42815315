"""SEP detection - find issues and PRs that are SEPs."""

from typing import Any, Optional

from sepbot.integrations.github import SEP_LABEL_QUERY, SEP_TITLE_QUERY, GitHubClient
from sepbot.observability import log_event
from sepbot.rules import extract_states
from sepbot.sep.models import ItemType, SEPItem

SEP_LABEL = "SEP"
UNKNOWN_AUTHOR = "unknown"


def is_sep(issue: Any) -> bool:
    """An item is a SEP if it has the SEP label or "SEP" in its title."""
    if any(label.name.upper() == SEP_LABEL for label in issue.labels):
        return True
    return SEP_LABEL in issue.title.upper()


def to_sep_item(issue: Any) -> SEPItem:
    """Convert a PyGithub issue into a SEPItem snapshot."""
    labels = tuple(label.name for label in issue.labels)
    states = extract_states(labels)

    return SEPItem(
        id=issue.id,
        number=issue.number,
        title=issue.title,
        type=ItemType.PR if issue.pull_request else ItemType.ISSUE,
        state=states[0] if states else None,
        labels=labels,
        author=issue.user.login if issue.user else UNKNOWN_AUTHOR,
        assignees=tuple(assignee.login for assignee in issue.assignees),
        created_at=issue.created_at,
        updated_at=issue.updated_at,
        url=issue.html_url,
        is_closed=issue.state == "closed",
        conflicting_states=tuple(states) if len(states) > 1 else (),
    )


class SEPDetector:
    """Finds SEP issues and PRs in the target repository."""

    def __init__(self, github: GitHubClient):
        self._github = github

    def find_all_seps(self) -> list[SEPItem]:
        """Find all open SEPs by label or by title."""
        labeled = self._github.search_issues(SEP_LABEL_QUERY)
        titled = self._github.search_issues(SEP_TITLE_QUERY)

        # Dedupe by number, last one wins
        by_number = {}
        for issue in [*labeled, *titled]:
            by_number[issue.number] = issue

        return [to_sep_item(issue) for issue in by_number.values()]

    def find_seps_by_state(self, state: str) -> list[SEPItem]:
        """Find SEPs carrying a state label."""
        issues = self._github.get_issues_with_label(state)
        return [to_sep_item(issue) for issue in issues if is_sep(issue)]

    def get_sep(self, number: int) -> Optional[SEPItem]:
        """Get a single SEP; None if it is not a SEP or cannot be fetched."""
        try:
            issue = self._github.get_issue(number)
        except Exception as e:
            log_event("detector", "Failed to fetch item", "debug", item=number, error=e)
            return None
        if not is_sep(issue):
            return None
        return to_sep_item(issue)
