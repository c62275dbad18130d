"""
LangGraph StateGraph: nodes, edges, and routing for LLM analysis, heuristic
resolution, intent, the parallel weather/places agents and the merge.
Compiled graph is the main entry for the orchestrator.
"""
from langgraph.graph import END, StateGraph

from graph.state import GraphState
from graph.nodes import (
    heuristic_node,
    intent_node,
    llm_node,
    merge_node,
    places_node,
    route_after_heuristic,
    route_after_llm,
    route_to_agents,
    weather_node,
)


def build_graph():
    """
    Build and compile the graph.
    LLM -> (Heuristic ->) Intent -> {Weather, Places} -> Merge -> END.
    Heuristic goes straight to END when the location cannot be found or recognized.
    """
    builder = StateGraph(GraphState)

    builder.add_node("llm", llm_node)
    builder.add_node("heuristic", heuristic_node)
    builder.add_node("intent", intent_node)
    builder.add_node("weather", weather_node)
    builder.add_node("places", places_node)
    builder.add_node("merge", merge_node)

    builder.set_entry_point("llm")
    builder.add_conditional_edges(
        "llm",
        route_after_llm,
        {
            "heuristic": "heuristic",
            "intent": "intent",
        }
    )
    builder.add_conditional_edges(
        "heuristic",
        route_after_heuristic,
        {
            "intent": "intent",
            "end": END,
        }
    )
    builder.add_conditional_edges("intent", route_to_agents, ["weather", "places"])
    builder.add_edge("weather", "merge")
    builder.add_edge("places", "merge")
    builder.add_edge("merge", END)

    return builder.compile()


# Singleton compiled graph for the app
_graph = None


def get_graph():
    global _graph
    if _graph is None:
        _graph = build_graph()
    return _graph
