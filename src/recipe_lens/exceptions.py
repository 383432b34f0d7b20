"""Custom exceptions for recipe_lens.

The core operations (conversion, rounding, extraction scanning) never raise for
bad page data: malformed blocks are skipped and a page without a recipe simply
yields ``None``. The exceptions here cover the edges around the core: invalid
arguments, configuration files and reading pages from disk.

Example:
    >>> try:
    ...     raise PageReadError("Could not read page", path="dinner.html")
    ... except RecipeLensError as e:
    ...     print(e)
    Could not read page (path='dinner.html')
"""


class RecipeLensError(Exception):
    """Base exception for all recipe_lens errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about where/when the error occurred
    """

    def __init__(self, message: str, **context: str | int | float | bool | None) -> None:
        """Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error description
            **context: Additional context (e.g., path="page.html", key="unit_system")
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """Format error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigurationError(RecipeLensError):
    """Error in configuration or settings.

    Raised when:
    - Configuration file is invalid or cannot be written
    - Settings have invalid values
    - An unknown configuration key is updated

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid unit system",
        ...     unit_system="imperial",
        ...     valid_unit_systems="US, Metric"
        ... )
    """

    pass


class ExtractionError(RecipeLensError):
    """Error in the arguments given to the recipe extractor.

    Bad page data is never an ExtractionError; it is skipped. This is raised
    only when the caller passes something the extractor cannot honour, such as
    an empty page address (the site URL must never be empty).
    """

    pass


class PageReadError(RecipeLensError):
    """Error reading an HTML page from disk or stdin.

    Example:
        >>> raise PageReadError(
        ...     "Could not read page",
        ...     path="/tmp/missing.html",
        ...     error="No such file or directory"
        ... )
    """

    pass
