"""Exception types raised by the transform."""


class GlobalsTransformError(Exception):
    """Base class for all transform failures."""


class ConfigurationError(GlobalsTransformError):
    """Raised when the options or configuration cannot drive a transform."""


class MissingFileIdentityError(ConfigurationError):
    """Raised when a construct needs the current filename and none was given."""

    def __init__(self, construct: str | None = None) -> None:
        """Build the message, naming the construct that needed the filename."""
        msg = "filename required to name module globals"
        if construct:
            msg = f"{msg} (while rewriting {construct})"
        super().__init__(msg)
        self.construct = construct


class SourceParseError(GlobalsTransformError):
    """Raised when a source file cannot be parsed as a module."""

    def __init__(self, filename: str | None, message: str) -> None:
        """Attach the offending filename to the parser message."""
        super().__init__(f"{filename or '<source>'}: {message}")
        self.filename = filename
