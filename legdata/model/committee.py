"""Committee identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering


class Chamber(Enum):
    """Legislative chamber."""

    SENATE = "senate"
    ASSEMBLY = "assembly"

    def __str__(self) -> str:
        return self.name


@total_ordering
@dataclass(frozen=True, slots=True)
class CommitteeId:
    """Identifies a committee by chamber and its official name.

    Ordered by chamber name, then committee name.
    """

    chamber: Chamber
    name: str

    def __post_init__(self) -> None:
        if self.name is None:
            raise ValueError("Name cannot be None")
        if self.chamber is None:
            raise ValueError("Chamber cannot be None")

    def __str__(self) -> str:
        return f"{self.chamber}-{self.name}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, CommitteeId):
            return NotImplemented
        return (self.chamber.name, self.name) < (other.chamber.name, other.name)
