"""Sponsor-eligible maintainer lookup."""

from typing import Callable, Iterable, Optional

from sepbot.config import SEPBotConfig
from sepbot.integrations.github import GitHubClient
from sepbot.observability import log_event

# Steering-committee subteams whose members can sponsor SEPs
SPONSOR_TEAMS = (
    "core-maintainers",
    "moderators",
    "working-groups",
    "interest-groups",
    "sdk-maintainers",
    "inspector-maintainers",
    "mcpb-maintainers",
    "docs-maintainers",
    "lead-maintainers",
)

# Snapshot of the subteam members, used when the Teams API is not accessible.
# Keep in sync with the steering-committee subteams (last updated 2026-01-16).
FALLBACK_SPONSORS = frozenset(
    {
        # core-maintainers
        "jspahrsummers", "pcarleton", "CaitieM20", "pwwpche", "kurtisvg",
        "localden", "nickcoai", "000-000-000-000-000", "dsp-ant", "bhosmer-ant",
        # moderators
        "jonathanhefner", "cliffhall", "evalstate", "tadasant", "maheshmurag",
        "olaservo", "jerome3o-anthropic",
        # working-groups
        "toby", "aaronpk", "felixweinberger", "domdomegg", "rdimitrov",
        "an-dustin", "LucaButBoring", "D-McAdams", "jenn-newton", "og-ant",
        "petery-ant",
        # interest-groups
        "sambhav", "PederHP",
        # sdk-maintainers
        "mattt", "koic", "michaelneale", "fabpot", "atesgoral", "halter73",
        "nicolas-grekas", "markpollack", "ochafik", "stallent", "ignatov",
        "alexhancock", "KKonstantinov", "ansaba", "pronskiy", "Nyholm",
        "tzolov", "kpavlov", "topherbullock", "movetz", "chemicL", "stephentoub",
        "eiriktsarpalis", "chr-hertel", "maciej-kisiel", "e5l", "jamadeo",
        # mcpb-maintainers
        "felixrieseberg", "MarshallOfSound", "asklar", "joan-anthropic",
        # docs-maintainers
        "ihrpr", "a-akimov",
    }
)


class SponsorCache:
    """Load-once sponsor set with a fallback snapshot.

    The first ``get()`` calls the loader. A non-empty result becomes the
    sponsor set until ``clear()``; an empty result selects the fallback.
    """

    def __init__(self, loader: Callable[[], set[str]], fallback: frozenset[str]):
        self._loader = loader
        self._fallback = fallback
        self._sponsors: Optional[frozenset[str]] = None

    @property
    def loaded(self) -> bool:
        return self._sponsors is not None

    def get(self) -> frozenset[str]:
        if self._sponsors is None:
            members = self._loader()
            if members:
                self._sponsors = frozenset(members)
                log_event("maintainers", "Loaded allowed sponsors from API", count=len(members))
            else:
                self._sponsors = self._fallback
                log_event(
                    "maintainers",
                    "No team members loaded from any team, using fallback list",
                    "warning",
                    count=len(self._fallback),
                )
        return self._sponsors

    def clear(self) -> None:
        self._sponsors = None


class MaintainerResolver:
    """Decides whether a user may sponsor SEPs."""

    def __init__(self, config: SEPBotConfig, github: GitHubClient):
        self._config = config
        self._github = github
        self._cache = SponsorCache(self._load_team_members, FALLBACK_SPONSORS)

    @property
    def teams(self) -> tuple[str, ...]:
        """Sponsor team slugs, starting with the configured maintainers team."""
        configured = self._config.maintainers_team
        return (configured,) + tuple(t for t in SPONSOR_TEAMS if t != configured)

    def _load_team_members(self) -> set[str]:
        members: set[str] = set()
        for team in self.teams:
            try:
                members.update(self._github.get_team_members(self._config.target_owner, team))
            except Exception as e:
                log_event(
                    "maintainers",
                    "Failed to load team, continuing with others",
                    "debug",
                    team=team,
                    error=e,
                )
        return members

    def can_sponsor(self, username: str) -> bool:
        """Check if a user belongs to any sponsor team."""
        return username in self._cache.get()

    def is_core_maintainer(self, username: str) -> bool:
        """Alias for can_sponsor."""
        return self.can_sponsor(username)

    def get_sponsor(self, assignees: Iterable[str]) -> Optional[str]:
        """Return the first assignee who can sponsor, or None."""
        for assignee in assignees:
            if self.can_sponsor(assignee):
                return assignee
        return None

    def clear_cache(self) -> None:
        """Forget the loaded sponsor set so the next lookup reloads it."""
        self._cache.clear()
