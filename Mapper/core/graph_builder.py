"""
Graph Builder - Constructs the LangGraph mapping pipeline.
A single linear pass: every collection visits every node once.
"""
import logging
from langgraph.graph import StateGraph, START, END

from ..models.workflow_state import MappingState
from ..nodes.categorization_node import categorization_node
from ..nodes.classification_node import classification_node
from ..nodes.field_mapping_node import field_mapping_node
from ..nodes.suggestion_node import suggestion_node
from ..nodes.relationship_node import relationship_node
from ..nodes.assembly_node import assembly_node

logger = logging.getLogger(__name__)

PIPELINE_STEPS = (
    ("categorize_fields", categorization_node),
    ("classify_table", classification_node),
    ("map_fields", field_mapping_node),
    ("suggest_fields", suggestion_node),
    ("detect_relationships", relationship_node),
    ("assemble_result", assembly_node),
)


class MappingGraphBuilder:
    """
    Builds the LangGraph workflow for header classification and mapping.

    No checkpointer is attached: the pipeline holds no state across calls,
    so one compiled graph can serve concurrent invocations.
    """

    def build(self):
        """
        Build and compile the mapping graph.

        Returns:
            Compiled StateGraph ready for execution
        """
        logger.debug("Building mapping graph...")

        graph = StateGraph(MappingState)

        for name, node in PIPELINE_STEPS:
            graph.add_node(name, node)

        graph.add_edge(START, PIPELINE_STEPS[0][0])
        for (current, _), (following, _) in zip(PIPELINE_STEPS, PIPELINE_STEPS[1:]):
            graph.add_edge(current, following)
        graph.add_edge(PIPELINE_STEPS[-1][0], END)

        compiled_graph = graph.compile()
        logger.debug("Mapping graph compiled")
        return compiled_graph

    @staticmethod
    def step_names():
        return [name for name, _ in PIPELINE_STEPS]
