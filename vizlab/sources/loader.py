import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional

from rdflib import BNode, Dataset, Graph, Literal
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID

from ..config import LoaderSettings, get_settings
from ..rdf.models import Statement, Term
from ..viewmodels.sources import JsonSourceResult, RdfSourceResult

logger = logging.getLogger(__name__)


RDF_FORMATS_BY_SUFFIX = {
    ".ttl": "turtle",
    ".turtle": "turtle",
    ".nt": "nt",
    ".nq": "nquads",
    ".trig": "trig",
    ".n3": "n3",
    ".rdf": "xml",
    ".owl": "xml",
    ".xml": "xml",
    ".jsonld": "json-ld",
}

# Parsed into a Dataset so named graphs survive
QUAD_FORMATS = {"nquads", "trig"}


def to_term(node: Any) -> Term:
    """Convert an rdflib node to a Term"""
    if isinstance(node, Literal):
        return Term.literal(
            str(node),
            datatype=str(node.datatype) if node.datatype else None,
            language=node.language
        )
    if isinstance(node, BNode):
        return Term.blank(str(node))
    return Term.iri(str(node))


def statements_from_quads(quads: Iterable[tuple], default_graphs: set) -> List[Statement]:
    """Convert (s, p, o, g) tuples; graphs in default_graphs are dropped"""
    statements = []
    for s, p, o, g in quads:
        graph_id = getattr(g, "identifier", g)
        graph = None if graph_id is None or graph_id in default_graphs else to_term(graph_id)
        statements.append(
            Statement(subject=to_term(s), predicate=to_term(p), object=to_term(o), graph=graph)
        )
    return statements


class SourceLoader:
    """Build source results from RDF files, RDF text or saved view models"""

    def __init__(self, settings: Optional[LoaderSettings] = None):
        self.settings = settings or get_settings().loader

    def load_from_file(self, file_path: str | Path, rdf_format: Optional[str] = None) -> Any:
        """
        Load a file as a source result.

        .json files are read as saved view models ({format, values, header?}),
        anything else is parsed as RDF.

        Args:
            file_path: File to load
            rdf_format: rdflib parser name (default: guessed from the suffix)

        Returns:
            RdfSourceResult or JsonSourceResult
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Source file not found: {file_path}")

        logger.info("Loading source from %s", file_path)

        if file_path.suffix.lower() == ".json" and rdf_format is None:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self.load_json_model(data)

        fmt = rdf_format or self.guess_rdf_format(file_path)
        statements = self._parse(fmt, source=str(file_path))
        logger.info("Loaded %d statements from %s", len(statements), file_path.name)
        return RdfSourceResult(statements, source_id=file_path.name)

    def load_rdf_from_string(self, data: str, rdf_format: Optional[str] = None) -> RdfSourceResult:
        """Parse RDF text into a source result"""
        statements = self._parse(rdf_format or self.settings.default_rdf_format, data=data)
        logger.info("Loaded %d statements from string", len(statements))
        return RdfSourceResult(statements)

    def load_json_model(self, data: dict) -> JsonSourceResult:
        """Wrap a saved {format, values, header?} record"""
        if not isinstance(data, dict):
            raise ValueError("JSON view model must be an object")
        result = JsonSourceResult.from_dict(data)
        logger.info("Loaded JSON view model (%s)", getattr(result.model_format, "value", result.model_format))
        return result

    def guess_rdf_format(self, file_path: Path) -> str:
        return RDF_FORMATS_BY_SUFFIX.get(file_path.suffix.lower(), self.settings.default_rdf_format)

    @staticmethod
    def _parse(fmt: str, **kwargs: Any) -> List[Statement]:
        if fmt in QUAD_FORMATS:
            dataset = Dataset()
            context = dataset.parse(format=fmt, **kwargs)
            # Statements without a graph land in the parse context
            default_graphs = {DATASET_DEFAULT_GRAPH_ID, getattr(context, "identifier", None)}
            return statements_from_quads(dataset.quads((None, None, None, None)), default_graphs)

        graph = Graph()
        graph.parse(format=fmt, **kwargs)
        return statements_from_quads(((s, p, o, None) for s, p, o in graph), set())
