"""GitHub API integration."""

from typing import Optional

from github import Auth, Github, GithubIntegration
from github.GithubException import UnknownObjectException
from github.Issue import Issue

from sepbot.config import SEPBotConfig
from sepbot.sep.models import Comment, TimelineEvent

# Page size for every paginated call
PER_PAGE = 100

# Search queries for SEP detection
SEP_LABEL_QUERY = "label:SEP is:open"
SEP_TITLE_QUERY = "SEP in:title is:open"


class AuthenticationError(RuntimeError):
    """Raised when no usable GitHub credentials are configured."""


class GitHubClient:
    """Wrapper around the repository operations the bot needs.

    The client starts unauthenticated. ``ensure_authenticated()`` resolves
    credentials on first use: a token directly, or GitHub App credentials
    exchanged for an installation token scoped to the target repository.
    """

    def __init__(self, config: SEPBotConfig):
        self._config = config
        self.owner = config.target_owner
        self.repo = config.target_repo
        self._gh: Optional[Github] = None
        self._repo = None

    def ensure_authenticated(self) -> Github:
        """Return an authenticated client, creating it on first call."""
        if self._gh is not None:
            return self._gh

        auth = self._config.auth
        if auth.has_token:
            self._gh = Github(auth=Auth.Token(auth.github_token), per_page=PER_PAGE)
        elif auth.has_app_credentials:
            integration = GithubIntegration(
                auth=Auth.AppAuth(auth.app_id, auth.app_private_key),
                per_page=PER_PAGE,
            )
            installation = integration.get_repo_installation(self.owner, self.repo)
            self._gh = integration.get_github_for_installation(installation.id)
        else:
            raise AuthenticationError("No authentication configured")

        return self._gh

    def _repository(self):
        """The target Repository, fetched once per client."""
        if self._repo is None:
            self._repo = self.ensure_authenticated().get_repo(f"{self.owner}/{self.repo}")
        return self._repo

    def _issue(self, issue_number: int) -> Issue:
        return self._repository().get_issue(issue_number)

    def search_issues(self, query: str) -> list[Issue]:
        """Search issues and PRs in the target repo, most recently updated first."""
        gh = self.ensure_authenticated()
        full_query = f"repo:{self.owner}/{self.repo} {query}"
        return list(gh.search_issues(full_query, sort="updated", order="desc"))

    def get_issues_with_label(self, label: str) -> list[Issue]:
        """Get all issues and PRs (open and closed) carrying a label."""
        return list(self._repository().get_issues(state="all", labels=[label]))

    def get_issue(self, issue_number: int) -> Issue:
        """Get a single issue or PR by number."""
        return self._issue(issue_number)

    def get_comments(self, issue_number: int) -> list[Comment]:
        """Get all comments on an issue or PR, oldest first."""
        return [
            Comment(
                id=comment.id,
                body=comment.body or "",
                author=comment.user.login if comment.user else None,
                created_at=comment.created_at,
            )
            for comment in self._issue(issue_number).get_comments()
        ]

    def get_events(self, issue_number: int) -> list[TimelineEvent]:
        """Get all events on an issue or PR, oldest first."""
        return [
            TimelineEvent(
                id=event.id,
                event=event.event,
                actor=event.actor.login if event.actor else None,
                created_at=event.created_at,
            )
            for event in self._issue(issue_number).get_events()
        ]

    def add_comment(self, issue_number: int, body: str) -> str:
        """Post a comment and return its URL."""
        comment = self._issue(issue_number).create_comment(body)
        return comment.html_url

    def add_labels(self, issue_number: int, labels: list[str]) -> None:
        """Add labels to an issue or PR."""
        if not labels:
            return
        self._issue(issue_number).add_to_labels(*labels)

    def remove_label(self, issue_number: int, label: str) -> None:
        """Remove a label; a label that is not present is not an error."""
        try:
            self._issue(issue_number).remove_from_labels(label)
        except UnknownObjectException:
            pass

    def close_issue(self, issue_number: int) -> None:
        """Close an issue or PR."""
        self._issue(issue_number).edit(state="closed")

    def is_team_member(self, org: str, team_slug: str, username: str) -> bool:
        """Check for an active team membership; a 404 means not a member."""
        gh = self.ensure_authenticated()
        try:
            team = gh.get_organization(org).get_team_by_slug(team_slug)
            membership = team.get_team_membership(username)
        except UnknownObjectException:
            return False
        return membership.state == "active"

    def get_team_members(self, org: str, team_slug: str) -> list[str]:
        """Get the logins of all members of a team."""
        gh = self.ensure_authenticated()
        team = gh.get_organization(org).get_team_by_slug(team_slug)
        return [member.login for member in team.get_members()]
