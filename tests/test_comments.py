"""Tests for bot comment templates."""

import pytest

from sepbot.actions.comments import (
    FOOTER,
    create_accepted_reminder_comment,
    create_author_ping_comment,
    create_dormant_comment,
    create_maintainer_ping_comment,
    create_needs_sponsor_comment,
    create_sponsor_ping_comment,
    create_transition_comment,
)
from sepbot.sep.models import BOT_COMMENT_MARKER, SEPState

from conftest import make_item

ITEM = make_item(author="octocat", assignees=("alice", "bob"))


@pytest.mark.parametrize(
    "body",
    [
        create_transition_comment(ITEM, "proposal", "draft", "alice"),
        create_author_ping_comment(ITEM, 90),
        create_sponsor_ping_comment(ITEM, "alice", 90),
        create_maintainer_ping_comment(ITEM, "alice", 14),
        create_dormant_comment(ITEM, 180),
        create_needs_sponsor_comment(ITEM, 90),
        create_accepted_reminder_comment(ITEM, 30),
    ],
)
def test_every_comment_carries_marker_and_footer(body):
    assert body.startswith(BOT_COMMENT_MARKER)
    assert body.endswith(FOOTER)


class TestTransitionComment:
    """Tests for create_transition_comment."""

    def test_draft_names_sponsor(self):
        body = create_transition_comment(ITEM, "proposal", SEPState.DRAFT.value, "alice")

        assert "## State Transition: proposal → draft" in body
        assert "@alice has been assigned as the sponsor" in body

    def test_other_targets_omit_sponsor(self):
        body = create_transition_comment(ITEM, "draft", "in-review", "alice")

        assert "assigned as the sponsor" not in body


class TestPingComments:
    """Tests for ping templates."""

    def test_author_ping_mentions_author_and_days(self):
        body = create_author_ping_comment(ITEM, 123)

        assert "Hi @octocat!" in body
        assert "**123 days**" in body

    def test_needs_sponsor_lists_assignees(self):
        assert "**Current assignees**: @alice, @bob" in create_needs_sponsor_comment(ITEM, 90)

    def test_maintainer_ping_mentions_maintainer(self):
        body = create_maintainer_ping_comment(ITEM, "bob", 21)

        assert "Hi @bob!" in body
        assert "**21 days**" in body
