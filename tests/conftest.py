"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from sepbot.config import SEPBotConfig
from sepbot.integrations.github import GitHubClient
from sepbot.sep.models import Comment, ItemType, SEPItem, SEPState

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_item(
    number: int = 42,
    state: SEPState | None = SEPState.PROPOSAL,
    days_inactive: int = 0,
    assignees: tuple[str, ...] = (),
    author: str = "author-user",
    is_closed: bool = False,
    **overrides,
) -> SEPItem:
    """Build a SEPItem last updated ``days_inactive`` days before NOW."""
    labels = ("SEP", state.value) if state else ("SEP",)
    fields = dict(
        id=1000 + number,
        number=number,
        title=f"SEP-{number}: Test proposal",
        type=ItemType.ISSUE,
        state=state,
        labels=labels,
        author=author,
        assignees=assignees,
        created_at=NOW - timedelta(days=365),
        updated_at=NOW - timedelta(days=days_inactive),
        url=f"https://github.com/owner/repo/issues/{number}",
        is_closed=is_closed,
    )
    fields.update(overrides)
    return SEPItem(**fields)


def make_comment(body: str, days_ago: int, author: str = "someone", id: int = 1) -> Comment:
    return Comment(id=id, body=body, author=author, created_at=NOW - timedelta(days=days_ago))


def make_issue(
    number: int = 42,
    title: str = "SEP-42: Test proposal",
    labels: tuple[str, ...] = ("SEP", "proposal"),
    assignees: tuple[str, ...] = (),
    author: str | None = "author-user",
    state: str = "open",
    is_pr: bool = False,
):
    """Build an object shaped like a PyGithub Issue."""
    return SimpleNamespace(
        id=1000 + number,
        number=number,
        title=title,
        labels=[SimpleNamespace(name=name) for name in labels],
        assignees=[SimpleNamespace(login=login) for login in assignees],
        user=SimpleNamespace(login=author) if author else None,
        pull_request=object() if is_pr else None,
        created_at=NOW - timedelta(days=30),
        updated_at=NOW - timedelta(days=1),
        html_url=f"https://github.com/owner/repo/issues/{number}",
        state=state,
    )


@pytest.fixture
def config():
    config = SEPBotConfig()
    config.target_owner = "owner"
    config.target_repo = "repo"
    return config


@pytest.fixture
def github():
    """A GitHubClient mock with no comments or events."""
    client = MagicMock(spec=GitHubClient)
    client.get_comments.return_value = []
    client.get_events.return_value = []
    client.add_comment.return_value = "https://github.com/owner/repo/issues/42#issuecomment-1"
    return client
