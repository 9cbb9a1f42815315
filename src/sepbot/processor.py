"""SEP processing - per-item lifecycle orchestration."""

from dataclasses import dataclass, field

from sepbot.actions.ping import PingHandler
from sepbot.actions.result import ActionResult
from sepbot.actions.transition import TransitionHandler
from sepbot.config import SEPBotConfig
from sepbot.graph.state import ProcessState
from sepbot.graph.workflow import create_process_workflow
from sepbot.hooks.types import (
    DormantEntry,
    NeedsSponsorEntry,
    PingEntry,
    SummaryData,
    TransitionEntry,
)
from sepbot.maintainers import MaintainerResolver
from sepbot.observability import log_event
from sepbot.rules import PROPOSAL_TO_DRAFT_ON_MAINTAINER_ASSIGN
from sepbot.sep.analyzer import SEPAnalyzer
from sepbot.sep.models import ActionType, PingTarget, SEPItem

_PING_TARGETS = {
    ActionType.PING_AUTHOR: PingTarget.AUTHOR,
    ActionType.PING_SPONSOR: PingTarget.SPONSOR,
    ActionType.PING_MAINTAINER: PingTarget.MAINTAINER,
}


@dataclass
class ProcessResult:
    """Action results and summary rows for one SEP."""

    results: list[ActionResult] = field(default_factory=list)
    summary: SummaryData = field(default_factory=SummaryData)


def summarize_staleness_result(result: ActionResult) -> dict:
    """Summary rows for a successful staleness action, as a state update."""
    if not result.success:
        return {}

    action = result.action
    item = action.item
    days = action.days_since_activity or 0

    match action.type:
        case ActionType.NEEDS_SPONSOR:
            return {"needs_sponsor": [NeedsSponsorEntry(item, days)]}
        case ActionType.MARK_DORMANT:
            return {"dormant": [DormantEntry(item, days, was_closed=action.closed)]}
        case ActionType.PING_AUTHOR | ActionType.PING_SPONSOR | ActionType.PING_MAINTAINER:
            if action.days_since_activity is None:
                # Nothing was posted
                return {}
            target_user = action.target_user or item.author
            return {"pings": [PingEntry(item, _PING_TARGETS[action.type], target_user, days)]}
        case _:
            return {}


class SEPProcessor:
    """Runs the per-SEP workflow and collects its results."""

    def __init__(
        self,
        config: SEPBotConfig,
        analyzer: SEPAnalyzer,
        maintainers: MaintainerResolver,
        transition_handler: TransitionHandler,
        ping_handler: PingHandler,
    ):
        self._dry_run = config.dry_run
        self._analyzer = analyzer
        self._maintainers = maintainers
        self._transitions = transition_handler
        self._pings = ping_handler
        self._graph = create_process_workflow(self)

    def process(self, item: SEPItem) -> ProcessResult:
        """Process a single SEP."""
        log_event(
            "processor",
            "Processing SEP",
            "debug",
            number=item.number,
            title=item.title,
            state=item.state.value if item.state else None,
        )
        state = self._graph.invoke({"item": item})

        return ProcessResult(
            results=list(state.get("results") or []),
            summary=SummaryData(
                transitions=list(state.get("transitions") or []),
                pings=list(state.get("pings") or []),
                needs_sponsor=list(state.get("needs_sponsor") or []),
                dormant=list(state.get("dormant") or []),
            ),
        )

    def intake_node(self, state: ProcessState) -> dict:
        """Skip closed SEPs and SEPs with more than one state label."""
        item = state["item"]

        if item.is_closed:
            log_event("processor", "Skipping closed SEP", "debug", number=item.number)
            return {"skipped": True, "skip_reason": "closed"}

        if item.conflicting_states:
            log_event(
                "processor",
                "Skipping SEP with conflicting state labels",
                "warning",
                number=item.number,
                states=[s.value for s in item.conflicting_states],
            )
            return {"skipped": True, "skip_reason": "conflicting state labels"}

        return {"skipped": False}

    def auto_transition_node(self, state: ProcessState) -> dict:
        """Move a proposal to draft once a sponsor-eligible maintainer is assigned."""
        item = state["item"]
        rule = PROPOSAL_TO_DRAFT_ON_MAINTAINER_ASSIGN

        if item.state != rule.from_state or not item.assignees:
            return {"transitioned": False}

        sponsor = self._maintainers.get_sponsor(item.assignees)
        if not sponsor:
            return {"transitioned": False}

        log_event(
            "processor",
            "Auto-transitioning proposal to draft",
            number=item.number,
            sponsor=sponsor,
        )
        result = self._transitions.execute_transition(item, rule.to_state, sponsor, self._dry_run)

        update: dict = {"transitioned": True, "results": [result]}
        if result.success:
            update["transitions"] = [TransitionEntry(item, item.state, rule.to_state, sponsor)]
        return update

    def staleness_node(self, state: ProcessState) -> dict:
        """Ping or mark dormant according to the staleness analysis."""
        item = state["item"]
        analysis = self._analyzer.analyze(item)

        if not analysis.needs_action:
            if analysis.reason:
                log_event("processor", analysis.reason, "debug", number=item.number)
            return {"results": []}

        result = self._pings.execute_ping(analysis, self._dry_run)
        return {"results": [result], **summarize_staleness_result(result)}

    def accountability_node(self, state: ProcessState) -> dict:
        """Ping assigned maintainers who have gone quiet on the SEP."""
        item = state["item"]
        results: list[ActionResult] = []
        pings: list[PingEntry] = []

        for assignee in item.assignees:
            # Only verified maintainers are held accountable
            if not self._maintainers.is_core_maintainer(assignee):
                log_event(
                    "processor",
                    "Skipping non-maintainer assignee for accountability check",
                    "debug",
                    number=item.number,
                    assignee=assignee,
                )
                continue

            activity = self._analyzer.check_maintainer_activity(item, assignee)
            if not activity.should_ping:
                continue

            log_event(
                "processor",
                "Maintainer inactive, pinging",
                number=item.number,
                maintainer=assignee,
                days_since_activity=activity.days_since_activity,
            )
            result = self._pings.ping_maintainer_directly(
                item, assignee, activity.days_since_activity, self._dry_run
            )
            results.append(result)
            if result.success:
                pings.append(
                    PingEntry(item, PingTarget.MAINTAINER, assignee, activity.days_since_activity)
                )

        return {"results": results, "pings": pings}
