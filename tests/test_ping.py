"""Tests for staleness pings and dormancy."""

from unittest.mock import MagicMock, call

import pytest

from sepbot.actions.ping import PingHandler
from sepbot.maintainers import MaintainerResolver
from sepbot.sep.models import ActionType, PingTarget, SEPState, StaleAnalysis

from conftest import make_item


@pytest.fixture
def maintainers():
    resolver = MagicMock(spec=MaintainerResolver)
    resolver.get_sponsor.side_effect = lambda assignees: next(
        (a for a in assignees if a == "alice"), None
    )
    return resolver


@pytest.fixture
def handler(github, maintainers):
    return PingHandler(github, maintainers)


def _analysis(item, days, **flags):
    return StaleAnalysis(item=item, days_since_activity=days, **flags)


class TestPingAuthor:
    """Tests for author pings."""

    def test_proposal_author_ping(self, handler, github):
        item = make_item(state=SEPState.PROPOSAL, author="octocat")

        result = handler.execute_ping(
            _analysis(item, 95, should_ping=True, ping_target=PingTarget.AUTHOR), dry_run=False
        )

        assert result.success
        assert result.action.type == ActionType.PING_AUTHOR
        assert result.action.target_user == "octocat"
        assert result.action.days_since_activity == 95
        body = github.add_comment.call_args.args[1]
        assert "Hi @octocat!" in body
        assert "**95 days**" in body

    def test_accepted_gets_reference_implementation_reminder(self, handler, github):
        item = make_item(state=SEPState.ACCEPTED)

        handler.execute_ping(
            _analysis(item, 31, should_ping=True, ping_target=PingTarget.AUTHOR), dry_run=False
        )

        assert "Reference Implementation Reminder" in github.add_comment.call_args.args[1]

    def test_dry_run_posts_nothing(self, handler, github, capsys):
        item = make_item()

        result = handler.execute_ping(
            _analysis(item, 95, should_ping=True, ping_target=PingTarget.AUTHOR), dry_run=True
        )

        assert result.success
        assert result.action.dry_run
        github.add_comment.assert_not_called()
        assert "[ping] DRY RUN: Would ping author (item=42" in capsys.readouterr().err

    def test_comment_failure_is_captured(self, handler, github):
        github.add_comment.side_effect = RuntimeError("API rate limit exceeded")

        result = handler.execute_ping(
            _analysis(make_item(), 95, should_ping=True, ping_target=PingTarget.AUTHOR), False
        )

        assert not result.success
        assert result.error == "API rate limit exceeded"

    def test_no_target_is_a_successful_noop(self, handler, github):
        result = handler.execute_ping(_analysis(make_item(), 95, should_ping=True), False)

        assert result.success
        assert result.action.reason == "No ping target"
        github.add_comment.assert_not_called()


class TestPingSponsor:
    """Tests for sponsor pings and the needs-sponsor fallback."""

    def test_pings_eligible_sponsor(self, handler, github):
        item = make_item(state=SEPState.DRAFT, assignees=("mallory", "alice"))

        result = handler.execute_ping(
            _analysis(item, 100, should_ping=True, ping_target=PingTarget.SPONSOR), False
        )

        assert result.action.type == ActionType.PING_SPONSOR
        assert result.action.target_user == "alice"
        assert "Hi @alice!" in github.add_comment.call_args.args[1]

    def test_without_sponsor_posts_needs_sponsor(self, handler, github):
        item = make_item(state=SEPState.DRAFT, assignees=("mallory",))

        result = handler.execute_ping(
            _analysis(item, 100, should_ping=True, ping_target=PingTarget.SPONSOR), False
        )

        assert result.success
        assert result.action.type == ActionType.NEEDS_SPONSOR
        assert result.action.target_user is None
        body = github.add_comment.call_args.args[1]
        assert "Core Maintainer Sponsor Needed" in body
        assert "**Current assignees**: @mallory" in body

    def test_needs_sponsor_without_assignees(self, handler, github):
        item = make_item(state=SEPState.DRAFT)

        handler.execute_ping(
            _analysis(item, 100, should_ping=True, ping_target=PingTarget.SPONSOR), False
        )

        assert "**Current assignees**: None" in github.add_comment.call_args.args[1]


class TestPingMaintainer:
    """Tests for maintainer pings."""

    def test_maintainer_target_resolves_sponsor(self, handler, github):
        item = make_item(state=SEPState.IN_REVIEW, assignees=("alice",))

        result = handler.execute_ping(
            _analysis(item, 20, should_ping=True, ping_target=PingTarget.MAINTAINER), False
        )

        assert result.success
        assert result.action.type == ActionType.PING_MAINTAINER
        assert result.action.target_user == "alice"

    def test_maintainer_target_without_sponsor_fails(self, handler, github):
        item = make_item(state=SEPState.IN_REVIEW, assignees=("mallory",))

        result = handler.execute_ping(
            _analysis(item, 20, should_ping=True, ping_target=PingTarget.MAINTAINER), False
        )

        assert not result.success
        assert result.error == "No maintainer assigned"
        github.add_comment.assert_not_called()

    def test_ping_maintainer_directly(self, handler, github, maintainers):
        item = make_item(state=SEPState.DRAFT, assignees=("bob",))

        result = handler.ping_maintainer_directly(item, "bob", 15, dry_run=False)

        assert result.success
        assert result.action.target_user == "bob"
        assert "Maintainer Activity Check" in github.add_comment.call_args.args[1]
        maintainers.get_sponsor.assert_not_called()


class TestMarkDormant:
    """Tests for dormancy."""

    def test_label_order_then_close(self, handler, github):
        item = make_item(state=SEPState.PROPOSAL)

        result = handler.execute_ping(
            _analysis(item, 200, should_mark_dormant=True, should_close=True), False
        )

        assert result.success
        assert result.action.type == ActionType.MARK_DORMANT
        assert result.action.from_state == SEPState.PROPOSAL
        assert result.action.to_state == SEPState.DORMANT
        assert result.action.closed
        assert [c[0] for c in github.mock_calls] == [
            "remove_label",
            "add_labels",
            "add_comment",
            "close_issue",
        ]
        assert github.mock_calls[0] == call.remove_label(42, "proposal")
        assert github.mock_calls[1] == call.add_labels(42, ["dormant"])

    def test_without_close(self, handler, github):
        item = make_item(state=SEPState.DRAFT)

        result = handler.execute_ping(_analysis(item, 200, should_mark_dormant=True), False)

        assert result.success
        assert github.mock_calls[:2] == [
            call.remove_label(42, "draft"),
            call.add_labels(42, ["dormant"]),
        ]
        github.close_issue.assert_not_called()

    def test_no_state_label_skips_removal(self, handler, github):
        result = handler.execute_ping(
            _analysis(make_item(state=None), 200, should_mark_dormant=True), False
        )

        assert result.success
        github.remove_label.assert_not_called()

    def test_final_cannot_go_dormant(self, handler, github):
        item = make_item(state=SEPState.FINAL)

        result = handler.execute_ping(
            _analysis(item, 400, should_mark_dormant=True, should_close=True), False
        )

        assert not result.success
        assert result.error.startswith("Invalid transition: final → dormant")
        assert github.mock_calls == []

    def test_close_failure_leaves_item_labeled(self, handler, github):
        github.close_issue.side_effect = RuntimeError("Server Error")
        item = make_item(state=SEPState.PROPOSAL)

        result = handler.execute_ping(
            _analysis(item, 200, should_mark_dormant=True, should_close=True), False
        )

        assert not result.success
        assert result.error == "Server Error"
        github.add_labels.assert_called_once_with(42, ["dormant"])

    def test_dry_run(self, handler, github, capsys):
        result = handler.execute_ping(
            _analysis(make_item(), 200, should_mark_dormant=True, should_close=True), True
        )

        assert result.success
        assert result.action.dry_run
        assert github.mock_calls == []
        err = capsys.readouterr().err
        assert "[ping] DRY RUN: Would mark as dormant (item=42" in err
        assert "should_close=True" in err
