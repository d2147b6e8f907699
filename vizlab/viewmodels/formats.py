"""
Model formats and the view kinds that can consume them.

The compatibility table is curated by hand: a new view kind only becomes
reachable once it is listed here.
"""

from enum import Enum
from typing import Dict, FrozenSet, Union


class ModelFormat(str, Enum):
    """Canonical shape of a source result or view model"""
    RAW_RDF_DATASET = "raw-rdfdataset"
    GRAPH_JSON = "vm-graph-json"
    TABULAR_JSON = "vm-tabular-json"
    TREE_JSON = "vm-tree-json"


class ViewKind(str, Enum):
    """Visualisation style a view model produces"""
    GRAPH = "graph"
    TABLE = "table"
    TREE = "tree"


COMPATIBLE_KINDS: Dict[ModelFormat, FrozenSet[ViewKind]] = {
    ModelFormat.RAW_RDF_DATASET: frozenset({ViewKind.GRAPH, ViewKind.TABLE, ViewKind.TREE}),
    ModelFormat.GRAPH_JSON: frozenset({ViewKind.GRAPH, ViewKind.TREE}),
    ModelFormat.TABULAR_JSON: frozenset({ViewKind.TABLE}),
}


def compatible_kinds(model_format: Union[ModelFormat, str, None]) -> FrozenSet[ViewKind]:
    """
    View kinds able to consume a format.

    Formats without an entry (including unknown strings) yield an empty set.
    """
    try:
        model_format = ModelFormat(model_format)
    except ValueError:
        return frozenset()
    return COMPATIBLE_KINDS.get(model_format, frozenset())
