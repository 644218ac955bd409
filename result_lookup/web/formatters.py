"""
HTML rendering for the single-page lookup surface.
Pure functions of a LookupSnapshot; no state is read from anywhere else.
"""

from html import escape
from typing import Optional

from result_lookup.domain.models import LookupSnapshot, ResultRecord

PAGE_TITLE = "Examination Results"

_STYLE = """
body { font-family: system-ui, sans-serif; background: #f9fafb; margin: 0; padding: 24px; }
main { max-width: 28rem; margin: 0 auto; }
h1 { text-align: center; font-weight: 600; }
.card { background: #fff; border-radius: 12px; padding: 24px; box-shadow: 0 1px 2px rgba(0,0,0,.06); }
label { display: block; font-size: .875rem; color: #374151; margin: 12px 0 4px; }
input, select, button { width: 100%; height: 44px; box-sizing: border-box; }
.dob { display: grid; grid-template-columns: repeat(3, 1fr); gap: 8px; }
.error { color: #ef4444; font-size: .875rem; margin-top: 8px; }
.note { color: #6b7280; font-size: .875rem; margin-top: 8px; }
.row { display: flex; justify-content: space-between; border-bottom: 1px solid #f3f4f6; padding: 8px 0; }
.pass { color: #16a34a; } .fail { color: #dc2626; }
.verdict { text-align: center; margin-top: 24px; padding: 8px 16px; border-radius: 9999px; }
"""


def _value(number: Optional[int]) -> str:
    return "" if number is None else str(number)


def _error_block(message: Optional[str]) -> str:
    if not message:
        return ""
    return f'<div class="error" role="alert">{escape(message)}</div>'


def _dob_note(snapshot: LookupSnapshot) -> str:
    """Shown when the entered parts roll over (31/04 is searched as 1 May)."""
    parts = (snapshot.year, snapshot.month, snapshot.day)
    if snapshot.dob is None or None in parts:
        return ""
    entered = "%04d-%02d-%02d" % parts
    if entered == snapshot.dob:
        return ""
    return f'<div class="note" id="dob-note">Date of birth will be searched as {escape(snapshot.dob)}</div>'


def format_form(snapshot: LookupSnapshot) -> str:
    options = ['<option value="">Select examination</option>']
    for exam in snapshot.examinations:
        selected = " selected" if exam.id == snapshot.selected_examination_id else ""
        options.append(f'<option value="{escape(exam.id)}"{selected}>{escape(exam.label)}</option>')

    disabled = " disabled" if snapshot.loading else ""
    button_label = "Searching..." if snapshot.loading else "Find Results"

    return (
        '<section class="card" id="lookup-form">'
        '<form method="post" action="/search">'
        '<label for="examination_id">Select Examination</label>'
        f'<select id="examination_id" name="examination_id">{"".join(options)}</select>'
        f"{_error_block(snapshot.catalog_error)}"
        '<label for="roll_number">Roll Number</label>'
        '<input type="text" id="roll_number" name="roll_number" placeholder="Enter your roll number"'
        f' value="{escape(snapshot.roll_number)}">'
        "<label>Date of Birth</label>"
        '<div class="dob">'
        f'<input type="number" name="day" placeholder="DD" min="1" max="31" value="{_value(snapshot.day)}">'
        f'<input type="number" name="month" placeholder="MM" min="1" max="12" value="{_value(snapshot.month)}">'
        f'<input type="number" name="year" placeholder="YYYY" min="1900" max="2100" value="{_value(snapshot.year)}">'
        "</div>"
        f"{_dob_note(snapshot)}"
        f"{_error_block(snapshot.message)}"
        f'<button type="submit"{disabled}>{button_label}</button>'
        "</form>"
        "</section>"
    )


def format_result(record: ResultRecord, message: Optional[str] = None) -> str:
    outcome_class = "pass" if record.is_pass else "fail"
    division = ""
    if record.division:
        division = f'<div class="row"><span>Division</span><strong>{escape(record.division)}</strong></div>'

    return (
        '<section class="card" id="result">'
        '<div class="row"><h2>Result Details</h2>'
        '<form method="post" action="/reset"><button type="submit">Search Again</button></form></div>'
        f'<div class="row"><span>Roll Number</span><strong>{escape(record.roll_number)}</strong></div>'
        f'<div class="row"><span>Date of Birth</span><strong>{escape(record.dob_display)}</strong></div>'
        f'<div class="row"><span>Marks Obtained</span><strong>{escape(record.marks_display)}</strong></div>'
        f'<div class="row"><span>Result</span><strong class="{outcome_class}">{escape(record.outcome)}</strong></div>'
        f"{division}"
        f'<div class="verdict {outcome_class}">{escape(record.verdict)}</div>'
        f"{_error_block(message)}"
        "</section>"
    )


def format_page(snapshot: LookupSnapshot) -> str:
    """Whole document: exactly one of the form or the result is rendered."""
    if snapshot.view == "result" and snapshot.state.result is not None:
        body = format_result(snapshot.state.result, snapshot.message)
    else:
        body = format_form(snapshot)

    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1">'
        f"<title>{PAGE_TITLE}</title><style>{_STYLE}</style></head>"
        f"<body><main><h1>{PAGE_TITLE}</h1>{body}</main></body></html>"
    )
