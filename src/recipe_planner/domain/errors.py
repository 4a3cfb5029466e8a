"""Domain exceptions."""


class RecipePlannerError(Exception):
    """Base class for recipe planner errors."""


class InvalidTargetError(RecipePlannerError, ValueError):
    """Raised when a protein target is zero or negative."""


class InvalidBodyWeightError(RecipePlannerError, ValueError):
    """Raised when a body weight is non-numeric or outside the allowed range."""


class GenerationError(RecipePlannerError):
    """Raised when no recipe could be produced at all."""


class BackendUnavailableError(GenerationError):
    """Raised when the generation backend is required but unusable."""


class MalformedGenerationResponseError(GenerationError):
    """Raised when backend output is not a recipe document."""


class ProfilePersistenceError(RecipePlannerError):
    """Raised when the remote profile store rejects a write."""


class ProfileNotFoundError(RecipePlannerError, LookupError):
    """Raised when no profile exists for a user."""


class NotAuthenticatedError(RecipePlannerError):
    """Raised when an operation needs a signed-in user."""


class AuthenticationError(RecipePlannerError):
    """Raised when the auth provider rejects credentials."""
