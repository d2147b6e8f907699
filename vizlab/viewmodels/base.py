"""
ViewModel contract.

A view model consumes a format-tagged source result and turns it into its own
canonical JSON model, which it keeps as its current model until the next
successful consume(). Failed calls never touch the current model.

ViewModel is the protocol dispatch code relies on. BaseViewModel implements
the consume() plumbing: each subclass registers one handler per format it can
consume, and the handler table doubles as the declared set of formats.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel

from ..errors import ConversionFailure, ConversionResult, UnsupportedFormat, ViewModelError
from .formats import ModelFormat, ViewKind
from .models import JsonModel

logger = logging.getLogger(__name__)

Handler = Callable[[Any], JsonModel]


@runtime_checkable
class ViewModel(Protocol):
    """Surface shared by every view model kind"""

    kind: ViewKind

    def declared_consumable_formats(self) -> FrozenSet[ModelFormat]:
        ...

    def produced_format(self) -> ModelFormat:
        ...

    def consume(self, source_result: Any) -> ConversionResult:
        ...

    def current_model(self) -> Optional[JsonModel]:
        ...

    def current_values(self) -> Any:
        ...


class BaseViewModel(ABC):
    """Handler-table implementation of the ViewModel protocol"""

    kind: ViewKind

    def __init__(self):
        self._json_model: Optional[JsonModel] = None
        self._handlers: Dict[ModelFormat, Handler] = self._build_handlers()
        if not self._handlers:
            raise ValueError(f"{type(self).__name__} must consume at least one format")

    @abstractmethod
    def _build_handlers(self) -> Dict[ModelFormat, Handler]:
        """Map each consumable format to the method converting it"""

    @abstractmethod
    def produced_format(self) -> ModelFormat:
        """The single format this kind emits"""

    def declared_consumable_formats(self) -> FrozenSet[ModelFormat]:
        return frozenset(self._handlers)

    def consume(self, source_result: Any) -> ConversionResult:
        """
        Convert a source result and make it the current model.

        Args:
            source_result: Anything exposing get_model_format() plus
                get_rdf_dataset() or get_json_model_values()

        Returns:
            ConversionResult holding the new JsonModel, or the error. On error
            the current model is unchanged.
        """
        name = type(self).__name__
        try:
            model_format = source_result.get_model_format()
        except AttributeError as e:
            logger.exception("%s.consume() - source result has no model format", name)
            return ConversionResult(error=ConversionFailure("Source result has no model format", e))

        handler = self._lookup(model_format)
        if handler is None:
            logger.error("%s.consume() - does not accept ViewModel format: %s", name, model_format)
            return ConversionResult(error=UnsupportedFormat(model_format, self.kind))

        logger.debug("%s.consume() - converting %r", name, source_result)
        try:
            json_model = handler(source_result)
        except ViewModelError as e:
            logger.exception("%s.consume() - conversion failed", name)
            return ConversionResult(error=e)
        except Exception as e:
            logger.exception("%s.consume() - conversion failed", name)
            return ConversionResult(error=ConversionFailure(f"{name} conversion failed: {e}", e))

        self._json_model = json_model
        return ConversionResult(model=json_model)

    def current_model(self) -> Optional[JsonModel]:
        return self._json_model

    def current_values(self) -> Any:
        return self._json_model.values if self._json_model else None

    def fields(self) -> List[str]:
        """Field names for table-like presentation"""
        logger.warning("fields() not implemented for %s", type(self).__name__)
        return []

    def _lookup(self, model_format: Any) -> Optional[Handler]:
        try:
            return self._handlers.get(ModelFormat(model_format))
        except ValueError:
            return None

    def _wrap(self, values: Any, source_result: Any, header: Optional[List[str]] = None) -> JsonModel:
        return JsonModel(
            format=self.produced_format(),
            values=values,
            header=header,
            source_result=source_result
        )

    def __repr__(self) -> str:
        fmt = self._json_model.format.value if self._json_model else None
        return f"{type(self).__name__}(current={fmt})"


def plain_values(values: Any) -> Any:
    """JSON values as plain Python data, so copies never share model instances"""
    if isinstance(values, BaseModel):
        return values.model_dump(exclude_none=True)
    if isinstance(values, list):
        return [plain_values(item) for item in values]
    return values
