import logging
from typing import Any, Dict, List, Optional

from ..config import get_settings
from ..errors import ConversionFailure
from ..rdf.tabulator import RdfTabulator, TabulatorOptions
from .base import BaseViewModel, Handler, plain_values
from .formats import ModelFormat, ViewKind
from .models import JsonModel, TableModel

logger = logging.getLogger(__name__)


class TableViewModel(BaseViewModel):
    """One row per subject, one column per predicate"""

    kind = ViewKind.TABLE

    def __init__(self, options: Optional[TabulatorOptions] = None):
        if options is None:
            settings = get_settings().view_models
            options = TabulatorOptions(
                fill_missing=settings.table_fill_missing,
                subject_column=settings.table_subject_column
            )
        self.options = options
        super().__init__()

    def _build_handlers(self) -> Dict[ModelFormat, Handler]:
        return {
            ModelFormat.RAW_RDF_DATASET: self._consume_rdf,
            ModelFormat.TABULAR_JSON: self._consume_tabular_json,
        }

    def produced_format(self) -> ModelFormat:
        return ModelFormat.TABULAR_JSON

    def fields(self) -> List[str]:
        """Header of the current model, or the keys of its first row"""
        json_model = self.current_model()
        if json_model is None:
            return []
        if json_model.header:
            return list(json_model.header)
        rows = json_model.values.rows
        return list(rows[0].keys()) if rows else []

    def _consume_rdf(self, rdf_result: Any) -> JsonModel:
        table = RdfTabulator(rdf_result.get_rdf_dataset()).to_table(self.options)
        logger.info("TableViewModel: %d rows, %d columns", len(table.rows), len(table.header))
        return self._wrap(table, rdf_result, header=list(table.header))

    def _consume_tabular_json(self, json_result: Any) -> JsonModel:
        values = plain_values(json_result.get_json_model_values())
        header = getattr(json_result, "header", None)

        # Accept {rows, header?} or a bare list of rows
        if isinstance(values, dict):
            if "rows" not in values:
                raise ConversionFailure("vm-tabular-json values need 'rows'")
            header = values.get("header") or header
            rows = values["rows"]
        else:
            rows = values

        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise ConversionFailure("vm-tabular-json rows must be a list of objects")

        table = TableModel(header=list(header or []), rows=[dict(row) for row in rows])
        return self._wrap(table, json_result, header=list(header) if header else None)
