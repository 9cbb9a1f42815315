"""LangGraph workflow definition."""

from typing import TYPE_CHECKING

from langgraph.graph import END, StateGraph

from sepbot.graph.routing import (
    route_after_intake,
    route_after_staleness,
    route_after_transition,
)
from sepbot.graph.state import ProcessState
from sepbot.observability import traced_node

if TYPE_CHECKING:
    from sepbot.processor import SEPProcessor


def _build_process_graph(processor: "SEPProcessor") -> StateGraph:
    """Build the per-SEP graph: intake → auto_transition → staleness → accountability."""
    workflow = StateGraph(ProcessState)

    workflow.add_node("intake", traced_node("intake")(processor.intake_node))
    workflow.add_node(
        "auto_transition", traced_node("auto_transition")(processor.auto_transition_node)
    )
    workflow.add_node("staleness", traced_node("staleness")(processor.staleness_node))
    workflow.add_node(
        "accountability", traced_node("accountability")(processor.accountability_node)
    )

    workflow.set_entry_point("intake")

    workflow.add_conditional_edges(
        "intake",
        route_after_intake,
        {
            "continue": "auto_transition",
            "skip": END,
        },
    )

    # A transition short-circuits the staleness check
    workflow.add_conditional_edges(
        "auto_transition",
        route_after_transition,
        {
            "staleness": "staleness",
            "end": END,
        },
    )

    workflow.add_conditional_edges(
        "staleness",
        route_after_staleness,
        {
            "accountability": "accountability",
            "end": END,
        },
    )

    workflow.add_edge("accountability", END)

    return workflow


def create_process_workflow(processor: "SEPProcessor"):
    """Compile the per-SEP workflow bound to a processor's handlers."""
    return _build_process_graph(processor).compile()
