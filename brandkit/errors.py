class BrandkitError(Exception):
    """Base class for every error the wizard reports to the user."""


class ValidationError(BrandkitError):
    """A required project field is missing or not supported."""


class GenerationError(BrandkitError):
    """A text, JSON or image generation call failed."""


class SchemaMismatchError(GenerationError):
    """A structured response could not be parsed against its schema."""


class ContentIncompleteError(BrandkitError):
    """Generated content needed for the requested operation is missing."""


class WorkflowStateError(BrandkitError):
    """An operation was requested in a step that does not allow it."""
