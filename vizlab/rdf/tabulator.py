import logging
from pydantic import BaseModel, Field
from typing import Any, Dict, Iterable, List, Optional

from ..errors import ConversionFailure
from ..viewmodels.models import TableModel

logger = logging.getLogger(__name__)


class TabulatorOptions(BaseModel):
    """Options for RdfTabulator.to_table()"""
    fill_missing: bool = Field(
        default=False,
        description="Give every row every header column (missing cells are None)"
    )
    subject_column: Optional[str] = Field(
        default=None,
        description="When set, rows carry their subject under this column"
    )


class RdfTabulator:
    """Convert RDF statements into a table with one row per subject"""

    def __init__(self, statements: Iterable[Any]):
        self.statements = statements

    def to_table(self, options: Optional[TabulatorOptions] = None) -> TableModel:
        """
        Group statements by subject.

        Columns are predicate values. When a subject repeats a predicate the
        last object value wins the cell.

        Args:
            options: Row shape options (defaults: per-row columns, no subject column)

        Returns:
            TableModel with header and rows in first-seen order
        """
        options = options or TabulatorOptions()

        rows: Dict[str, Dict[str, Any]] = {}
        header: Dict[str, None] = {}

        for statement in self.statements:
            try:
                subject = str(statement.subject.value)
                predicate = str(statement.predicate.value)
                value = str(statement.object.value)
            except AttributeError as e:
                raise ConversionFailure(f"Malformed RDF statement: {statement!r}", e) from e

            row = rows.setdefault(subject, {})
            row[predicate] = value
            header.setdefault(predicate, None)

        columns: List[str] = list(header)
        if options.subject_column is not None:
            columns = [options.subject_column] + [c for c in columns if c != options.subject_column]

        table_rows = []
        for subject, cells in rows.items():
            if options.fill_missing:
                row = {column: cells.get(column) for column in columns}
            else:
                row = dict(cells)
            if options.subject_column is not None:
                row.pop(options.subject_column, None)
                row = {options.subject_column: subject, **row}
            table_rows.append(row)

        logger.debug("Tabulated %d subjects over %d columns", len(table_rows), len(columns))
        return TableModel(header=columns, rows=table_rows)
