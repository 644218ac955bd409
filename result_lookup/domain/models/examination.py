from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class Examination:
    """
    An examination a result can be looked up for.

    Read-only reference data, loaded once per session.
    """
    id: str
    name: str
    year: int

    @property
    def label(self) -> str:
        return f"{self.name} ({self.year})"

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> "Examination":
        return Examination(
            id=str(row["id"]),
            name=str(row["name"]),
            year=int(row["year"]),
        )
