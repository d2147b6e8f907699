import logging
from typing import Any, Dict, Iterable, Tuple

from ..errors import ConversionFailure
from ..viewmodels.models import GraphModel, Link, Node

logger = logging.getLogger(__name__)


class RdfToGraph:
    """
    Convert RDF statements into a node/link graph.

    Every distinct subject or object value becomes one node. Statements
    between the same two values collapse into one link, so a graph built
    from duplicate-laden input is the same as one built from the set.

    Predicates are not part of the output unless include_predicates is set,
    in which case each link is labelled with the last predicate seen for it.
    With literals_as_nodes off, literal objects are dropped but their
    subjects keep a node.
    """

    DEFAULT_GROUP = 1
    DEFAULT_LINK_VALUE = 1

    def __init__(
        self,
        statements: Iterable[Any],
        include_predicates: bool = False,
        literals_as_nodes: bool = True
    ):
        self.statements = statements
        self.include_predicates = include_predicates
        self.literals_as_nodes = literals_as_nodes

    def to_graph(self) -> GraphModel:
        """
        Build the graph in a single pass over the statements.

        Returns:
            GraphModel with nodes and links in first-seen order
        """
        nodes: Dict[str, Node] = {}
        links: Dict[Tuple[str, str], Link] = {}
        count = 0

        for count, statement in enumerate(self.statements, start=1):
            subject, predicate, obj, is_literal = self._unpack(statement)

            if is_literal and not self.literals_as_nodes:
                # The subject still gets its node
                if subject not in nodes:
                    nodes[subject] = Node(id=subject, group=self.DEFAULT_GROUP)
                continue

            for value in (subject, obj):
                if value not in nodes:
                    nodes[value] = Node(id=value, group=self.DEFAULT_GROUP)

            # Re-inserting an existing key keeps its first-seen position
            links[(subject, obj)] = Link(
                source=subject,
                target=obj,
                value=self.DEFAULT_LINK_VALUE,
                label=predicate if self.include_predicates else None
            )

        logger.debug(
            "Graph built from %d statements: %d nodes, %d links",
            count, len(nodes), len(links)
        )
        return GraphModel(nodes=list(nodes.values()), links=list(links.values()))

    @staticmethod
    def _unpack(statement: Any) -> Tuple[str, str, str, bool]:
        try:
            subject = statement.subject.value
            predicate = statement.predicate.value
            obj = statement.object
            value = obj.value
        except AttributeError as e:
            raise ConversionFailure(f"Malformed RDF statement: {statement!r}", e) from e

        is_literal = bool(getattr(obj, "is_literal", False))
        return str(subject), str(predicate), str(value), is_literal
