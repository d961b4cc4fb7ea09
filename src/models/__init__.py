"""Domain models for the picture-list localizer."""

from .config_models import LocalizeConfig
from .error_record import ErrorRecord
from .errors import (
    DocumentIOError,
    EmptyLanguageSetError,
    LocalizationError,
    RunAbortedError,
    UnknownLanguageError,
    UnsupportedSourceError,
)
from .language_selection import LanguageSelection
from .layer_map import NO_MATCH, LayerMap
from .row import Row
from .variant_result import LocalizationResult, VariantResult, VariantStatus

__all__ = [
    # Configuration models
    "LocalizeConfig",
    # Domain models
    "Row",
    "LayerMap",
    "NO_MATCH",
    "LanguageSelection",
    "VariantResult",
    "VariantStatus",
    "LocalizationResult",
    "ErrorRecord",
    # Errors
    "LocalizationError",
    "UnsupportedSourceError",
    "EmptyLanguageSetError",
    "UnknownLanguageError",
    "DocumentIOError",
    "RunAbortedError",
]
