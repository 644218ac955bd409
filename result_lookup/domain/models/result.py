"""
DOMAIN MODELS: RESULT RECORD

A single examination result as held by the record store.
Never created or mutated here; fetched whole and displayed.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

PASS = "Pass"
FAIL = "Fail"

CONGRATULATIONS = "Congratulations!"
BETTER_LUCK = "Better luck next time"


@dataclass(frozen=True)
class ResultRecord:
    roll_number: str
    dob: date
    marks_obtained: Decimal
    outcome: str
    division: Optional[str] = None

    @property
    def is_pass(self) -> bool:
        return self.outcome == PASS

    @property
    def verdict(self) -> str:
        return CONGRATULATIONS if self.is_pass else BETTER_LUCK

    @property
    def marks_display(self) -> str:
        # 410 rather than 410.00 for whole marks
        if self.marks_obtained == self.marks_obtained.to_integral_value():
            return str(int(self.marks_obtained))
        return str(self.marks_obtained.normalize())

    @property
    def dob_display(self) -> str:
        return f"{self.dob.strftime('%b')} {self.dob.day}, {self.dob.year}"

    @staticmethod
    def from_row(row: Mapping[str, Any]) -> "ResultRecord":
        """
        Map a ``results`` row (``roll_no``, ``dob``, ``marks``, ``result``,
        ``division``) onto the domain record.
        """
        raw_dob = row["dob"]
        dob = raw_dob if isinstance(raw_dob, date) else date.fromisoformat(str(raw_dob)[:10])
        division = row.get("division")
        return ResultRecord(
            roll_number=str(row["roll_no"]),
            dob=dob,
            marks_obtained=Decimal(str(row["marks"])),
            outcome=str(row["result"]),
            division=str(division) if division not in (None, "") else None,
        )
