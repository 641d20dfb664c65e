"""
Form Validation Module

Submitted forms arrive as flat sets of named string fields. Each field is
run through an ordered list of steps declared in a rule table:

    FieldRule("first_name", [
        trim,
        required("First name must be specified"),
        escape,
        alphanumeric("First name has non-alphanumeric characters"),
    ])

There are two kinds of step:
- Sanitizer: transforms the value and never fails (trim, escape)
- Check: a predicate plus the message reported when it does not hold,
  optionally converting the value once it passes (iso_date)

Evaluation of a field stops at its first failing check, so every field
yields at most one message. Validation failures are not errors: the
controllers re-render the form with the sanitized values and messages.

Usage:
    result = validate(await form_fields(request), AUTHOR_RULES)
    if not result.ok:
        ...re-render with result.values and result.errors
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Union

from markupsafe import escape as escape_markup
from starlette.requests import Request

from app.models import BookInstanceStatus
from app.utils import ID_LENGTH

FormValue = Union[str, list[str], None]


# =============================================================================
# Form Input
# =============================================================================
async def form_fields(request: Request) -> dict[str, FormValue]:
    """
    Read a submitted form into a plain dict.

    A field submitted once maps to its string; a field submitted several
    times (checkbox groups) maps to the list of its values in order.
    """
    form = await request.form()
    fields: dict[str, FormValue] = {}
    for key in form.keys():
        values = [v for v in form.getlist(key) if isinstance(v, str)]
        fields[key] = values[0] if len(values) == 1 else values
    return fields


def as_list(value: FormValue) -> list[str]:
    """
    Normalize a multi-valued field to an ordered list of strings.

    >>> as_list(None)
    []
    >>> as_list("fantasy")
    ['fantasy']
    >>> as_list(["fantasy", "poetry"])
    ['fantasy', 'poetry']
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def _as_single(value: FormValue) -> str | None:
    if isinstance(value, list):
        return value[0] if value else None
    return value


# =============================================================================
# Steps
# =============================================================================
@dataclass(frozen=True)
class Sanitizer:
    """A step that rewrites the value."""

    transform: Callable[[Any], Any]

    def run(self, value: Any) -> tuple[Any, str | None]:
        return self.transform(value), None


@dataclass(frozen=True)
class Check:
    """A predicate and the message reported when it fails."""

    predicate: Callable[[Any], bool]
    message: str
    convert: Callable[[Any], Any] | None = None

    def run(self, value: Any) -> tuple[Any, str | None]:
        if not self.predicate(value):
            return value, self.message
        if self.convert is not None:
            value = self.convert(value)
        return value, None


Step = Union[Sanitizer, Check]


def _trim(value: Any) -> str:
    return ("" if value is None else str(value)).strip()


def _escape(value: Any) -> str:
    return str(escape_markup("" if value is None else value))


def parse_date(value: str) -> date:
    """
    Parse an ISO 8601 date or date-time string into a date.

    Raises:
        ValueError: If the string is not a calendar date
    """
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def _is_date(value: Any) -> bool:
    try:
        parse_date(_trim(value))
    except ValueError:
        return False
    return True


trim = Sanitizer(_trim)
escape = Sanitizer(_escape)


def required(message: str) -> Check:
    """Reject empty values (apply after trim)."""
    return Check(lambda v: len(v) > 0, message)


def length(min_length: int, max_length: int, message: str) -> Check:
    return Check(lambda v: min_length <= len(v) <= max_length, message)


def alphanumeric(message: str) -> Check:
    """ASCII letters and digits only."""
    return Check(lambda v: v.isascii() and v.isalnum(), message)


def iso_date(message: str) -> Check:
    """Require a calendar date and convert the value to datetime.date."""
    return Check(_is_date, message, convert=lambda v: parse_date(_trim(v)))


def one_of(choices: Iterable[str], message: str) -> Check:
    allowed = frozenset(choices)
    return Check(lambda v: v in allowed, message)


def record_id(message: str) -> Check:
    """Reject values that cannot be a record identifier (apply after escape)."""
    return Check(lambda v: len(v) <= ID_LENGTH, message)


# =============================================================================
# Rule Evaluation
# =============================================================================
@dataclass(frozen=True)
class FieldRule:
    """
    The ordered steps for one form field.

    Attributes:
        name: Form field name
        steps: Sanitizers and checks, applied in order
        optional: Absent or empty values skip the steps and become `default`
        multiple: The field is multi-valued; steps apply to every entry and
            entries left empty by the steps are dropped
        default: Value used for an empty optional field
    """

    name: str
    steps: Sequence[Step]
    optional: bool = False
    multiple: bool = False
    default: Any = None

    def apply(self, raw: FormValue) -> tuple[Any, str | None]:
        if self.multiple:
            values = []
            for item in as_list(raw):
                value, message = self._run_steps(item)
                if message is not None:
                    return values, message
                if value != "":
                    values.append(value)
            return values, None

        value = _as_single(raw)
        if self.optional and (value is None or value.strip() == ""):
            return self.default, None
        return self._run_steps(value)

    def _run_steps(self, value: Any) -> tuple[Any, str | None]:
        for step in self.steps:
            value, message = step.run(value)
            if message is not None:
                return value, message
        return value, None


@dataclass(frozen=True)
class FieldError:
    """A user-facing validation message for one field."""

    field: str
    message: str


@dataclass
class ValidationResult:
    values: dict[str, Any] = field(default_factory=dict)
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field_name, message))


def validate(form: Mapping[str, FormValue], rules: Sequence[FieldRule]) -> ValidationResult:
    """
    Run every rule against the submitted form.

    Returns the sanitized values for all ruled fields (also when a check
    failed, so the form can be redisplayed) and the collected messages.
    """
    result = ValidationResult()
    for rule in rules:
        value, message = rule.apply(form.get(rule.name))
        result.values[rule.name] = value
        if message is not None:
            result.add_error(rule.name, message)
    return result


# =============================================================================
# Rule Tables
# =============================================================================
AUTHOR_RULES = (
    FieldRule("first_name", [
        trim,
        required("First name must be specified"),
        length(1, 100, "First name must be at most 100 characters"),
        escape,
        alphanumeric("First name has non-alphanumeric characters"),
    ]),
    FieldRule("family_name", [
        trim,
        required("Family name must be specified"),
        length(1, 100, "Family name must be at most 100 characters"),
        escape,
        alphanumeric("Family name has non-alphanumeric characters"),
    ]),
    FieldRule("date_of_birth", [iso_date("Invalid date of birth")], optional=True),
    FieldRule("date_of_death", [iso_date("Invalid date of death")], optional=True),
)

GENRE_RULES = (
    FieldRule("name", [
        trim,
        required("Genre name required"),
        length(3, 100, "Genre name must be between 3 and 100 characters"),
        escape,
    ]),
)

BOOK_RULES = (
    FieldRule("title", [trim, required("Title must not be empty."), escape]),
    FieldRule("author", [
        trim,
        required("Author must not be empty."),
        escape,
        record_id("Invalid author"),
    ]),
    FieldRule("summary", [trim, required("Summary must not be empty."), escape]),
    FieldRule("isbn", [trim, required("ISBN must not be empty."), escape]),
    FieldRule("genre", [trim, escape], multiple=True),
)

BOOK_INSTANCE_RULES = (
    FieldRule("book", [
        trim,
        required("Book must be specified"),
        escape,
        record_id("Invalid book"),
    ]),
    FieldRule("imprint", [trim, required("Imprint must be specified"), escape]),
    FieldRule(
        "status",
        [trim, one_of((s.value for s in BookInstanceStatus), "Invalid status")],
        optional=True,
        default=BookInstanceStatus.MAINTENANCE.value,
    ),
    FieldRule("due_back", [iso_date("Invalid date")], optional=True),
)
