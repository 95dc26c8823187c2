"""Layer bindings: analysis on export, reconstruction on import."""

from .analysis import (
    NO_BINDINGS,
    BindingAnalysis,
    BindingKind,
    PropertyBinding,
    analyze_bindings,
    validate_bindings,
)
from .models import (
    IRBinding,
    LayerBinding,
    VariantExpressionBinding,
    parse_layer_bindings,
    serialize_layer_bindings,
)
from .reconstructor import extract_bindings_from_element

__all__ = [
    "LayerBinding",
    "VariantExpressionBinding",
    "IRBinding",
    "parse_layer_bindings",
    "serialize_layer_bindings",
    "BindingKind",
    "BindingAnalysis",
    "PropertyBinding",
    "NO_BINDINGS",
    "analyze_bindings",
    "validate_bindings",
    "extract_bindings_from_element",
]
