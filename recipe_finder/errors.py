class RecipeFinderError(Exception):
    pass


class UsageError(RecipeFinderError):
    """Bad or missing command-line input."""


class StoreUnavailable(RecipeFinderError):
    """The recipe store could not be read. Callers fall back to fetching."""


class PersistFailure(RecipeFinderError):
    """Writing fetched recipes to the store failed."""


class FetchFailure(RecipeFinderError):
    """The recipe API could not be reached or answered with an error."""


class Unauthorized(RecipeFinderError):
    """The recipe API rejected the API key."""


class MalformedResponse(RecipeFinderError):
    """The recipe API answered with something we cannot read."""
