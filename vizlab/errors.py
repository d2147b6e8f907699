from dataclasses import dataclass
from typing import Any, Optional


class ViewModelError(Exception):
    """Base error for view model conversions"""


class UnsupportedFormat(ViewModelError):
    """A view model was asked to consume a format it does not declare"""

    def __init__(self, model_format: Any, view_kind: Any):
        self.model_format = model_format
        self.view_kind = view_kind
        super().__init__(f"{_name(view_kind)} view model does not accept format: {_name(model_format)}")


class IncompatibleFormat(ViewModelError):
    """The dispatcher refused a kind that cannot consume the source format"""

    def __init__(self, model_format: Any, view_kind: Any):
        self.model_format = model_format
        self.view_kind = view_kind
        super().__init__(f"Format {_name(model_format)} is not compatible with {_name(view_kind)} view")


class ConversionFailure(ViewModelError):
    """Unexpected error while walking RDF statements or JSON values"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


def _name(value: Any) -> str:
    return str(getattr(value, "value", value))


@dataclass
class ConversionResult:
    """Outcome of a consume() or render() call"""
    model: Optional[Any] = None
    error: Optional[ViewModelError] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.model is not None

    def unwrap(self) -> Any:
        """Return the model, or raise the carried error"""
        if self.error is not None:
            raise self.error
        return self.model
