class ValidationError(ValueError):
    """Raised when a field update carries a value outside its domain."""


class UnknownFieldError(KeyError):
    """Raised when a field name is not part of the contact form."""


class InvalidTransitionError(RuntimeError):
    """Raised when an action is not allowed in the widget's current state."""


class ConfigurationError(ValueError):
    """Raised when startup configuration is missing or malformed."""
