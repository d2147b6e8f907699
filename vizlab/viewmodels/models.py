from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union

from .formats import ModelFormat


class Node(BaseModel):
    """Graph node, unique by id"""
    id: str = Field(..., description="Term value the node stands for")
    group: Union[int, float] = Field(default=1, description="Rendering group")

    # Nodes copied from JSON keep whatever extra fields they carried
    model_config = ConfigDict(extra="allow")


class Link(BaseModel):
    """Graph link, unique by (source, target)"""
    source: str
    target: str
    value: Union[int, float] = Field(default=1, description="Link weight")
    label: Optional[str] = Field(None, description="Predicate value, when requested")

    model_config = ConfigDict(extra="allow")

    @property
    def key(self) -> tuple:
        return (self.source, self.target)


class GraphModel(BaseModel):
    """vm-graph-json values"""
    nodes: List[Node] = Field(default_factory=list)
    links: List[Link] = Field(default_factory=list)


class TableModel(BaseModel):
    """vm-tabular-json values: one row per subject"""
    header: List[str] = Field(default_factory=list)
    rows: List[Dict[str, Any]] = Field(default_factory=list)


class TreeNode(Node):
    """vm-tree-json entry: a graph node with its position in the tree"""
    index: int
    parent: Optional[int] = None


class JsonModel(BaseModel):
    """
    The model a view model hands to rendering code.

    source_result is a non-owning back reference kept for provenance. It is
    never serialized and the model does not control its lifetime.
    """
    format: ModelFormat
    values: Any
    header: Optional[List[str]] = None
    source_result: Any = Field(default=None, exclude=True, repr=False)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable {format, values, header?} record"""
        return self.model_dump(mode="json", exclude_none=True)
