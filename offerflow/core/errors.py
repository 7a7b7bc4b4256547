"""Custom exceptions used across OfferFlow."""

from offerflow_io.mapping import MappingError


class OfferFlowError(Exception):
    """Base error for the application."""


class ConfigError(OfferFlowError):
    """Configuration related error."""


class MissingTemplateError(OfferFlowError):
    """Raised when generation is requested without any template text."""


class RenderError(OfferFlowError):
    """Raised when substitution, layout or output of a record fails."""


class IncompleteMappingError(MappingError, OfferFlowError):
    """Raised when template placeholders have no column assigned."""

    def __init__(self, unmapped: list[str]) -> None:
        self.unmapped = list(unmapped)
        super().__init__(f"Unmapped placeholders: {', '.join(self.unmapped)}")


class WizardError(OfferFlowError):
    """Raised when a wizard step is attempted out of order or with unknown fields."""
