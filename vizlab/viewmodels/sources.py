from typing import Any, Iterable, Optional, Protocol, Sequence, runtime_checkable
from uuid import uuid4

from .formats import ModelFormat
from .models import JsonModel


@runtime_checkable
class SourceResult(Protocol):
    """Format-tagged conversion input"""

    def get_model_format(self) -> ModelFormat:
        ...


class RdfSourceResult:
    """
    Raw RDF statements.

    Statements are materialised on construction so several view models can
    consume the same source.
    """

    def __init__(self, statements: Iterable[Any], source_id: Optional[str] = None):
        self.statements: Sequence[Any] = tuple(statements)
        self.source_id = source_id or uuid4().hex

    def get_model_format(self) -> ModelFormat:
        return ModelFormat.RAW_RDF_DATASET

    def get_rdf_dataset(self) -> Sequence[Any]:
        return self.statements

    def __len__(self) -> int:
        return len(self.statements)

    def __repr__(self) -> str:
        return f"RdfSourceResult(id={self.source_id}, statements={len(self.statements)})"


class JsonSourceResult:
    """A previously produced view model, as plain JSON values"""

    def __init__(
        self,
        model_format: ModelFormat | str,
        values: Any,
        header: Optional[list] = None,
        source_id: Optional[str] = None
    ):
        # Unknown format strings are kept as-is so consumers can report them
        try:
            model_format = ModelFormat(model_format)
        except ValueError:
            pass
        self.model_format = model_format
        self.values = values
        self.header = header
        self.source_id = source_id or uuid4().hex

    @classmethod
    def from_json_model(cls, model: JsonModel) -> "JsonSourceResult":
        """Wrap a produced model so another view model can consume it"""
        data = model.to_dict()
        return cls(model.format, data["values"], data.get("header"))

    @classmethod
    def from_dict(cls, data: dict) -> "JsonSourceResult":
        """Build from a saved {format, values, header?} record"""
        if "format" not in data or "values" not in data:
            raise ValueError("JSON view model needs 'format' and 'values' keys")
        return cls(data["format"], data["values"], data.get("header"))

    def get_model_format(self) -> ModelFormat | str:
        return self.model_format

    def get_json_model_values(self) -> Any:
        return self.values

    def __repr__(self) -> str:
        fmt = getattr(self.model_format, "value", self.model_format)
        return f"JsonSourceResult(id={self.source_id}, format={fmt})"
