"""
Test Suite for format registry and dispatcher

Tests:
1. Compatibility table contents
2. Registry agrees with what each view model declares
3. Format gate: incompatible pairs never reach consume()
4. View model creation and offered kinds
"""

import pytest
from unittest.mock import Mock, patch
from conftest import make_statement
from vizlab.errors import ConversionResult, IncompatibleFormat
from vizlab.viewmodels.dispatcher import VIEW_MODEL_CLASSES, Dispatcher
from vizlab.viewmodels.formats import ModelFormat, ViewKind, compatible_kinds
from vizlab.viewmodels.graph import GraphViewModel
from vizlab.viewmodels.sources import JsonSourceResult, RdfSourceResult
from vizlab.viewmodels.table import TableViewModel
from vizlab.viewmodels.tree import TreeParentPolicy, TreeViewModel


RDF_SOURCE = RdfSourceResult([make_statement("A", "p", "B")])
GRAPH_SOURCE = JsonSourceResult(
    ModelFormat.GRAPH_JSON,
    {"nodes": [{"id": "A"}, {"id": "B"}], "links": [{"source": "A", "target": "B"}]}
)
TABLE_SOURCE = JsonSourceResult(ModelFormat.TABULAR_JSON, {"rows": [{"a": 1}]})
TREE_SOURCE = JsonSourceResult(ModelFormat.TREE_JSON, [{"id": "A", "index": 0}])


def test_compatibility_table():
    """Hand-curated map of formats to kinds"""
    assert compatible_kinds(ModelFormat.RAW_RDF_DATASET) == {ViewKind.GRAPH, ViewKind.TABLE, ViewKind.TREE}
    assert compatible_kinds(ModelFormat.GRAPH_JSON) == {ViewKind.GRAPH, ViewKind.TREE}
    assert compatible_kinds(ModelFormat.TABULAR_JSON) == {ViewKind.TABLE}
    assert compatible_kinds(ModelFormat.TREE_JSON) == frozenset()
    assert compatible_kinds("vm-graph-json") == {ViewKind.GRAPH, ViewKind.TREE}
    assert compatible_kinds("no-such-format") == frozenset()
    assert compatible_kinds(None) == frozenset()


def test_registry_matches_declarations():
    """Every registered (format, kind) pair is declared by that kind"""
    for model_format in ModelFormat:
        for kind in compatible_kinds(model_format):
            view_model = VIEW_MODEL_CLASSES[kind]()
            assert model_format in view_model.declared_consumable_formats(), \
                f"{kind.value} is registered for {model_format.value} but does not declare it"


@pytest.mark.parametrize("kind", list(ViewKind))
def test_every_kind_is_reachable(kind):
    """Each kind consumes at least one format and produces exactly one"""
    view_model = VIEW_MODEL_CLASSES[kind]()

    assert view_model.kind == kind
    assert view_model.declared_consumable_formats()
    assert any(kind in compatible_kinds(f) for f in view_model.declared_consumable_formats())


@pytest.mark.parametrize("source, view_model_cls", [
    (GRAPH_SOURCE, TableViewModel),
    (TABLE_SOURCE, GraphViewModel),
    (TABLE_SOURCE, TreeViewModel),
    (TREE_SOURCE, GraphViewModel),
    (TREE_SOURCE, TreeViewModel),
])
def test_gate_blocks_incompatible(source, view_model_cls):
    """Incompatible pairs fail before consume() is called"""
    view_model = view_model_cls()

    with patch.object(view_model, "consume", wraps=view_model.consume) as spy:
        result = Dispatcher().render(source, view_model)

    assert isinstance(result.error, IncompatibleFormat)
    assert spy.call_count == 0, "consume() must not run for incompatible formats"
    assert view_model.current_model() is None


@pytest.mark.parametrize("source, view_model_cls, produced", [
    (RDF_SOURCE, GraphViewModel, ModelFormat.GRAPH_JSON),
    (RDF_SOURCE, TableViewModel, ModelFormat.TABULAR_JSON),
    (RDF_SOURCE, TreeViewModel, ModelFormat.TREE_JSON),
    (GRAPH_SOURCE, GraphViewModel, ModelFormat.GRAPH_JSON),
    (GRAPH_SOURCE, TreeViewModel, ModelFormat.TREE_JSON),
    (TABLE_SOURCE, TableViewModel, ModelFormat.TABULAR_JSON),
])
def test_gate_passes_compatible(source, view_model_cls, produced):
    """Compatible pairs are converted once"""
    view_model = view_model_cls()

    with patch.object(view_model, "consume", wraps=view_model.consume) as spy:
        result = Dispatcher().render(source, view_model)

    assert result.ok
    assert spy.call_count == 1
    assert result.model.format == produced
    assert view_model.current_model() is result.model


def test_render_with_mock_view_model():
    """Dispatcher only needs kind and consume()"""
    view_model = Mock()
    view_model.kind = ViewKind.TABLE
    view_model.consume.return_value = ConversionResult(model="sentinel")

    assert Dispatcher().render(RDF_SOURCE, view_model).model == "sentinel"
    view_model.consume.assert_called_once_with(RDF_SOURCE)

    view_model.consume.reset_mock()
    result = Dispatcher().render(GRAPH_SOURCE, view_model)
    assert isinstance(result.error, IncompatibleFormat)
    view_model.consume.assert_not_called()


def test_render_without_format():
    """Sources without a format fail without raising"""
    result = Dispatcher().render(object(), GraphViewModel())

    assert not result.ok


def test_compatible_view_kinds():
    dispatcher = Dispatcher()

    assert dispatcher.compatible_view_kinds(RDF_SOURCE) == [ViewKind.GRAPH, ViewKind.TABLE, ViewKind.TREE]
    assert dispatcher.compatible_view_kinds(GRAPH_SOURCE) == [ViewKind.GRAPH, ViewKind.TREE]
    assert dispatcher.compatible_view_kinds(TREE_SOURCE) == []


def test_create_view_model():
    dispatcher = Dispatcher()

    assert isinstance(dispatcher.create_view_model("graph"), GraphViewModel)
    assert isinstance(dispatcher.create_view_model(ViewKind.TABLE), TableViewModel)

    tree = dispatcher.create_view_model("tree", parent_policy="first_wins")
    assert tree.parent_policy == TreeParentPolicy.FIRST_WINS

    with pytest.raises(ValueError):
        dispatcher.create_view_model("pie-chart")

    with pytest.raises(ValueError):
        Dispatcher({ViewKind.GRAPH: GraphViewModel}).create_view_model("table")


def test_compatible_view_kinds_without_format():
    """Sources without a format offer no kinds, like render() refuses them"""
    assert Dispatcher().compatible_view_kinds(object()) == []
