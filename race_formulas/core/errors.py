# Error taxonomy
# FORBIDDEN: logging, any I/O


class RaceFormulaError(Exception):
    """Base class for all race formula errors."""


class InvalidInputError(RaceFormulaError, ValueError):
    """A formula received inputs outside its domain.

    Raised instead of letting a division by zero, a NaN or a complex
    number leak out of a formula.
    """


class ParameterNotFoundError(RaceFormulaError, KeyError):
    """A race parameter name is absent from the parameter table."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Race parameter not found: {self.name!r}"


class DataLoadError(RaceFormulaError):
    """A CSV source is missing, malformed or holds an unconvertible cell."""
