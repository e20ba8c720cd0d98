from pathlib import Path


class BattingAnalysisError(Exception):
    """Base class for errors raised by batting_analysis."""


class ParseError(BattingAnalysisError):
    """Raised when an input row is malformed or carries a non-numeric field."""

    def __init__(self, message: str, path: str | Path | None = None, line: int | None = None) -> None:
        self.path = None if path is None else Path(path)
        self.line = line
        location = ""
        if self.path is not None:
            location = f"{self.path}:{line}: " if line is not None else f"{self.path}: "
        super().__init__(f"{location}{message}")


class SingularMatrixError(BattingAnalysisError):
    """Raised when the normal equations of a regression cannot be solved."""


class MissingValueError(BattingAnalysisError):
    """Raised when an operation needs a value that is missing, such as an ineligible player's average."""


class ConfigError(BattingAnalysisError):
    """Raised when configuration values are invalid."""


class InsufficientGamesWarning(UserWarning):
    """A sample asked for more games than the player played, so games were drawn with replacement."""
