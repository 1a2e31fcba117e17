"""Lead capture core for a single vehicle listing: validation, state, analytics."""

from .analytics import AnalyticsSink, DataLayerSink, HttpCollectorSink, NullSink
from .config import WidgetConfig
from .controller import InteractionController
from .errors import (
    ConfigurationError,
    InvalidTransitionError,
    UnknownFieldError,
    ValidationError,
)
from .models import (
    ContactFormData,
    DealerIdentity,
    PreferredContact,
    VehicleContext,
    WidgetState,
)
from .store import FormStateStore
from .validation import validate

__all__ = [
    "AnalyticsSink",
    "DataLayerSink",
    "HttpCollectorSink",
    "NullSink",
    "WidgetConfig",
    "InteractionController",
    "ConfigurationError",
    "InvalidTransitionError",
    "UnknownFieldError",
    "ValidationError",
    "ContactFormData",
    "DealerIdentity",
    "PreferredContact",
    "VehicleContext",
    "WidgetState",
    "FormStateStore",
    "validate",
]
