from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional


class TermKind(str, Enum):
    """Kind of RDF term"""
    IRI = "iri"
    BLANK_NODE = "blank_node"
    LITERAL = "literal"


class Term(BaseModel):
    """RDF term (IRI, blank node or literal)"""
    value: str = Field(..., description="The lexical value")
    kind: TermKind = Field(default=TermKind.IRI, description="Term kind")
    datatype: Optional[str] = Field(None, description="Literal datatype IRI")
    language: Optional[str] = Field(None, description="Literal language tag")

    model_config = {"frozen": True}

    @property
    def is_literal(self) -> bool:
        return self.kind == TermKind.LITERAL

    @classmethod
    def iri(cls, value: str) -> "Term":
        return cls(value=value, kind=TermKind.IRI)

    @classmethod
    def literal(cls, value: str, datatype: Optional[str] = None,
                language: Optional[str] = None) -> "Term":
        return cls(value=value, kind=TermKind.LITERAL, datatype=datatype, language=language)

    @classmethod
    def blank(cls, value: str) -> "Term":
        return cls(value=value, kind=TermKind.BLANK_NODE)


class Statement(BaseModel):
    """RDF statement: a triple, or a quad when graph is set"""
    subject: Term = Field(..., alias="s")
    predicate: Term = Field(..., alias="p")
    object: Term = Field(..., alias="o")
    graph: Optional[Term] = Field(None, alias="g")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def is_quad(self) -> bool:
        return self.graph is not None

    def __str__(self) -> str:
        text = f"<{self.subject.value}> <{self.predicate.value}> <{self.object.value}>"
        if self.graph is not None:
            text += f" <{self.graph.value}>"
        return text
