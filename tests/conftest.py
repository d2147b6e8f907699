import pytest

from vizlab.config import reset_settings
from vizlab.rdf.models import Statement, Term


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Every test starts from default settings"""
    for name in (
        "VIEWMODEL_TREE_PARENT_POLICY",
        "VIEWMODEL_GRAPH_INCLUDE_PREDICATES",
        "VIEWMODEL_GRAPH_LITERALS_AS_NODES",
        "VIEWMODEL_TABLE_FILL_MISSING",
        "VIEWMODEL_TABLE_SUBJECT_COLUMN",
        "LOADER_DEFAULT_RDF_FORMAT",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def make_statement(s: str, p: str, o: str, literal: bool = False) -> Statement:
    """Statement with IRI subject/predicate and an IRI or literal object"""
    obj = Term.literal(o) if literal else Term.iri(o)
    return Statement(subject=Term.iri(s), predicate=Term.iri(p), object=obj)
