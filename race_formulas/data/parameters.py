# Race parameter table

from collections.abc import Mapping
from typing import Dict, Iterable, Iterator

from ..core.errors import InvalidInputError, ParameterNotFoundError
from ..core.types import ParameterValue, RaceParameter


def parse_parameter_value(raw: str) -> ParameterValue:
    """Parse a parameter cell once: float if numeric, stripped text otherwise."""
    text = raw.strip()
    try:
        return float(text)
    except ValueError:
        return text


class RaceParameterTable(Mapping):
    """Read-only name -> RaceParameter mapping.

    Missing names raise ParameterNotFoundError rather than returning a
    default.
    """

    def __init__(self, parameters: Iterable[RaceParameter] = ()):
        self._parameters: Dict[str, RaceParameter] = {}
        for param in parameters:
            self._parameters[param.name] = param

    def __getitem__(self, name: str) -> RaceParameter:
        try:
            return self._parameters[name]
        except KeyError:
            raise ParameterNotFoundError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def value(self, name: str) -> float:
        """Numeric value of a parameter.

        Raises:
            ParameterNotFoundError: If the name is unknown
            InvalidInputError: If the parameter holds text
        """
        param = self[name]
        if not param.is_numeric:
            raise InvalidInputError(
                f"Race parameter {name!r} is not numeric: {param.value!r}"
            )
        return param.value

    def text(self, name: str) -> str:
        """Parameter value rendered as text."""
        return str(self[name].value)

    def describe(self, name: str) -> str:
        param = self[name]
        unit = f" {param.unit}" if param.unit else ""
        return f"{param.name} = {param.value}{unit} ({param.description})"

    def __repr__(self) -> str:
        return f"RaceParameterTable({list(self._parameters)})"
