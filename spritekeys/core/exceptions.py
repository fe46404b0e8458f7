"""Custom exceptions for the sprite key pixel matcher."""

class ApplicationError(Exception):
    """Base application error."""
    pass

class InvalidArgumentError(ApplicationError, ValueError):
    """Base exception for rejected input."""
    pass

class NullOrEmptyInputError(InvalidArgumentError):
    """A required collection or value is missing or empty."""
    pass

class DimensionMismatchError(InvalidArgumentError):
    """Width, height, key pixel or component counts disagree."""
    pass

class OutOfBoundsError(InvalidArgumentError):
    """A coordinate lies outside the sprite extent."""
    pass

class MalformedSetupStringError(InvalidArgumentError):
    """Setup string structure or numeric parsing errors."""
    pass

class ComponentCountMismatchError(InvalidArgumentError):
    """Color vectors with a different amount of components."""
    pass

class ImageLoadError(ApplicationError):
    """Image file could not be read."""
    pass

class ConfigError(ApplicationError):
    """Configuration-related errors."""
    pass
