import logging
from typing import Any, Dict, List, Type

from ..errors import ConversionFailure, ConversionResult, IncompatibleFormat
from .base import BaseViewModel, ViewModel
from .formats import ViewKind, compatible_kinds
from .graph import GraphViewModel
from .table import TableViewModel
from .tree import TreeViewModel

logger = logging.getLogger(__name__)

VIEW_MODEL_CLASSES: Dict[ViewKind, Type[BaseViewModel]] = {
    ViewKind.GRAPH: GraphViewModel,
    ViewKind.TABLE: TableViewModel,
    ViewKind.TREE: TreeViewModel,
}


class Dispatcher:
    """Route source results to view models that can consume them"""

    def __init__(self, view_model_classes: Dict[ViewKind, Type[BaseViewModel]] | None = None):
        self.view_model_classes = dict(view_model_classes or VIEW_MODEL_CLASSES)

    def compatible_view_kinds(self, source_result: Any) -> List[ViewKind]:
        """Kinds a UI could offer for this source, in declaration order"""
        try:
            kinds = compatible_kinds(source_result.get_model_format())
        except AttributeError:
            logger.error("Dispatcher.compatible_view_kinds() - source result has no model format: %r", source_result)
            return []
        return [kind for kind in ViewKind if kind in kinds]

    def create_view_model(self, kind: ViewKind | str, **options: Any) -> BaseViewModel:
        """Fresh, empty view model of the given kind"""
        cls = self.view_model_classes.get(ViewKind(kind))
        if cls is None:
            raise ValueError(f"No view model registered for kind: {kind}")
        return cls(**options)

    def render(self, source_result: Any, view_model: ViewModel) -> ConversionResult:
        """
        Convert source_result with view_model, if the format allows it.

        Incompatible pairs are refused before the view model is touched.

        Args:
            source_result: Format-tagged input
            view_model: Target view model (keeps the result as its current model)

        Returns:
            ConversionResult from view_model.consume(), or one carrying
            IncompatibleFormat
        """
        try:
            model_format = source_result.get_model_format()
        except AttributeError as e:
            logger.error("Dispatcher.render() - source result has no model format: %r", source_result)
            return ConversionResult(error=ConversionFailure("Source result has no model format", e))

        if view_model.kind not in compatible_kinds(model_format):
            error = IncompatibleFormat(model_format, view_model.kind)
            logger.warning("Dispatcher.render() - %s", error)
            return ConversionResult(error=error)

        return view_model.consume(source_result)
