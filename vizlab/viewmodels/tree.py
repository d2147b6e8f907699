import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config import get_settings
from ..errors import ConversionFailure
from ..rdf.graph import RdfToGraph
from .base import BaseViewModel, Handler
from .formats import ModelFormat, ViewKind
from .graph import graph_from_json
from .models import GraphModel, JsonModel, TreeNode

logger = logging.getLogger(__name__)


class TreeParentPolicy(str, Enum):
    """What to do when a node has more than one incoming link"""
    LAST_WINS = "last_wins"
    FIRST_WINS = "first_wins"
    REJECT = "reject"


def graph_to_tree(graph: GraphModel, policy: TreeParentPolicy = TreeParentPolicy.LAST_WINS) -> List[TreeNode]:
    """
    Index the graph's nodes and resolve each link into a parent pointer.

    Nodes are indexed 0..N-1 in graph order. For every link, in graph order,
    the target's parent becomes the source's index. Links that mention
    unknown node ids are skipped. Cycles are left in place.

    Args:
        graph: Graph to derive from (not modified)
        policy: Multi-parent resolution

    Returns:
        Tree nodes, one per graph node, in graph order

    Raises:
        ConversionFailure: policy is REJECT and a node has two distinct parents
    """
    tree = [
        TreeNode(**node.model_dump(exclude={"index", "parent"}), index=i)
        for i, node in enumerate(graph.nodes)
    ]
    id_to_index = {node.id: node.index for node in tree}

    for link in graph.links:
        source = id_to_index.get(link.source)
        target = id_to_index.get(link.target)
        if source is None or target is None:
            logger.debug("Skipping link with unknown endpoint: %s -> %s", link.source, link.target)
            continue

        node = tree[target]
        if node.parent is None or node.parent == source:
            node.parent = source
        elif policy == TreeParentPolicy.LAST_WINS:
            node.parent = source
        elif policy == TreeParentPolicy.REJECT:
            raise ConversionFailure(
                f"Node {node.id} has several parents: "
                f"{tree[node.parent].id}, {tree[source].id}"
            )
        # FIRST_WINS keeps the existing parent

    return tree


class TreeViewModel(BaseViewModel):
    """Parent-indexed tree derived from a graph"""

    kind = ViewKind.TREE

    def __init__(self, parent_policy: Optional[TreeParentPolicy | str] = None):
        settings = get_settings().view_models
        self.parent_policy = TreeParentPolicy(parent_policy or settings.tree_parent_policy)
        self.literals_as_nodes = settings.graph_literals_as_nodes
        super().__init__()

    def _build_handlers(self) -> Dict[ModelFormat, Handler]:
        return {
            ModelFormat.RAW_RDF_DATASET: self._consume_rdf,
            ModelFormat.GRAPH_JSON: self._consume_graph_json,
        }

    def produced_format(self) -> ModelFormat:
        return ModelFormat.TREE_JSON

    def _consume_rdf(self, rdf_result: Any) -> JsonModel:
        # Start with the graph
        graph = RdfToGraph(
            rdf_result.get_rdf_dataset(),
            literals_as_nodes=self.literals_as_nodes
        ).to_graph()
        return self._from_graph(graph, rdf_result)

    def _consume_graph_json(self, json_result: Any) -> JsonModel:
        graph = graph_from_json(json_result.get_json_model_values())
        return self._from_graph(graph, json_result)

    def _from_graph(self, graph: GraphModel, source_result: Any) -> JsonModel:
        tree = graph_to_tree(graph, self.parent_policy)
        roots = sum(1 for node in tree if node.parent is None)
        logger.info("TreeViewModel: %d nodes, %d roots (%s)", len(tree), roots, self.parent_policy.value)
        return self._wrap(tree, source_result)
