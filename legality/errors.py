"""
Encounter Legality - Errors

No-match and partial-match results are ordinary return values; these
exceptions cover requests that cannot be served at all.
"""


class LegalityError(Exception):
    """Base class for every error raised by this package."""


class PolicyUnsatisfiable(LegalityError):
    """No PID/IV tuple satisfying the template policy and criteria was found."""

    def __init__(self, message, attempts=0):
        super().__init__(message)
        self.attempts = attempts


class InvalidTemplateReference(LegalityError):
    """Synthesis was requested from a template the store does not hold."""

    def __init__(self, template_id):
        super().__init__(f"Template not in store: {template_id!r}")
        self.template_id = template_id


class MalformedCandidate(LegalityError):
    """An entity field is outside the valid range for its format."""

    def __init__(self, field, value, reason=""):
        message = f"Invalid {field}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.field = field
        self.value = value
