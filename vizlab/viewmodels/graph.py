import logging
from pydantic import ValidationError
from typing import Any, Dict, Optional

from ..config import get_settings
from ..errors import ConversionFailure
from ..rdf.graph import RdfToGraph
from .base import BaseViewModel, Handler, plain_values
from .formats import ModelFormat, ViewKind
from .models import GraphModel, JsonModel

logger = logging.getLogger(__name__)


def graph_from_json(values: Any) -> GraphModel:
    """
    Structural copy of vm-graph-json values.

    Nodes and links are copied as they are, extra fields included. Nothing is
    re-derived or de-duplicated.
    """
    values = plain_values(values)
    if not isinstance(values, dict) or "nodes" not in values or "links" not in values:
        raise ConversionFailure("vm-graph-json values need 'nodes' and 'links'")
    try:
        return GraphModel(nodes=list(values["nodes"]), links=list(values["links"]))
    except (ValidationError, TypeError) as e:
        raise ConversionFailure(f"Malformed vm-graph-json values: {e}", e) from e


class GraphViewModel(BaseViewModel):
    """Node/link view, consumed from RDF or an existing graph model"""

    kind = ViewKind.GRAPH

    def __init__(
        self,
        include_predicates: Optional[bool] = None,
        literals_as_nodes: Optional[bool] = None
    ):
        settings = get_settings().view_models
        self.include_predicates = (
            settings.graph_include_predicates if include_predicates is None else include_predicates
        )
        self.literals_as_nodes = (
            settings.graph_literals_as_nodes if literals_as_nodes is None else literals_as_nodes
        )
        super().__init__()

    def _build_handlers(self) -> Dict[ModelFormat, Handler]:
        return {
            ModelFormat.RAW_RDF_DATASET: self._consume_rdf,
            ModelFormat.GRAPH_JSON: self._consume_graph_json,
        }

    def produced_format(self) -> ModelFormat:
        return ModelFormat.GRAPH_JSON

    def _consume_rdf(self, rdf_result: Any) -> JsonModel:
        rdf_to_graph = RdfToGraph(
            rdf_result.get_rdf_dataset(),
            include_predicates=self.include_predicates,
            literals_as_nodes=self.literals_as_nodes
        )
        graph = rdf_to_graph.to_graph()
        logger.info("GraphViewModel: %d nodes, %d links", len(graph.nodes), len(graph.links))
        return self._wrap(graph, rdf_result)

    def _consume_graph_json(self, json_result: Any) -> JsonModel:
        graph = graph_from_json(json_result.get_json_model_values())
        return self._wrap(graph, json_result)
