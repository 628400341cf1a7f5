"""Parse ``name = value`` and ``name += value`` lines and apply them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import MutableMapping


class Operator(Enum):
    SET = "="
    APPEND = "+="

    def apply(self, settings: MutableMapping[str, str], name: str, value: str) -> None:
        """Store *value* under *name*, replacing or extending the old value."""
        previous = settings.get(name)
        match self:
            case Operator.APPEND if previous is not None:
                settings[name] = f"{previous} {value}"
            case _:
                settings[name] = value


@dataclass(frozen=True, slots=True)
class Assignment:
    name: str
    operator: Operator
    value: str

    def apply(self, settings: MutableMapping[str, str]) -> None:
        self.operator.apply(settings, self.name, self.value)


def parse_assignment(text: str) -> Assignment:
    """Parse a logical line into an assignment.

    Raises ``ValueError`` describing why the line is not one.
    """
    pos = text.find("=")
    if pos == -1:
        raise ValueError("expected '=' or '+='")

    operator = Operator.SET
    name_end = pos
    if pos > 0 and text[pos - 1] == "+":
        operator = Operator.APPEND
        name_end = pos - 1

    name = text[:name_end].strip()
    if not name:
        raise ValueError("missing setting name")
    if len(name.split()) != 1:
        raise ValueError("setting name contains whitespace")

    return Assignment(name=name, operator=operator, value=text[pos + 1 :].strip())
