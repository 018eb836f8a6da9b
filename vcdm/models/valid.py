"""Validators for model fields."""

import calendar
import re

from marshmallow.exceptions import ValidationError
from marshmallow.validate import Regexp, Validator


def as_list(value) -> list:
    """Return `value` as a list: lists unchanged, None empty, anything else wrapped."""
    if value is None:
        return []
    return value if isinstance(value, list) else [value]


class RFC3339DateTime(Regexp):
    """Validate value as an RFC3339 date-time with a time zone offset."""

    EXAMPLE = "2010-01-01T19:23:24Z"
    PATTERN = (
        r"^([0-9]{4})-(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])[Tt ]"
        r"([01][0-9]|2[0-3]):[0-5][0-9]:([0-5][0-9]|60)(\.[0-9]+)?"
        r"([Zz]|[+-]([01][0-9]|2[0-3]):[0-5][0-9])\Z"
    )

    def __init__(self):
        """Initializer."""

        super().__init__(
            RFC3339DateTime.PATTERN,
            error="Value {input} is not a date in valid format",
        )

    def __call__(self, value):
        """Validate input value."""
        if not isinstance(value, str):
            raise ValidationError(self._format_error(value))
        super().__call__(value)

        # the pattern bounds the day at 31; check it against the month
        groups = self.regex.match(value).groups()
        year, month, day = (int(part) for part in groups[:3])
        last_day = calendar.mdays[month] + (month == 2 and calendar.isleap(year))
        if day > last_day:
            raise ValidationError(self._format_error(value))

        return value


class Uri(Regexp):
    """Validate value against URI on any scheme."""

    EXAMPLE = "https://www.w3.org/ns/credentials/v2"
    PATTERN = r"^\w+:(\/?\/?)[^\s]+\Z"

    def __init__(self):
        """Initializer."""
        super().__init__(Uri.PATTERN, error="Value {input} is not URI")

    def __call__(self, value):
        """Validate input value."""
        if not isinstance(value, str):
            raise ValidationError(f"Value {value} is not URI")
        return super().__call__(value)


class DataUri(Regexp):
    """Validate value against the `data:<mimetype>,<data>` URI shape."""

    EXAMPLE = "data:application/vc+sd-jwt,eyJhbGciOiJFUzI1NiJ9.e30.c2ln~"
    PATTERN = r"^data:[^,]*,"

    def __init__(self):
        """Initializer."""
        super().__init__(
            DataUri.PATTERN,
            flags=re.DOTALL,
            error="Value {input} is not a data URI",
        )

    def __call__(self, value):
        """Validate input value."""
        if not isinstance(value, str):
            raise ValidationError(f"Value {value} is not a data URI")
        return super().__call__(value)


class CredentialContext(Validator):
    """JSON-LD context whose first entry is a fixed base context."""

    def __init__(self, first_context: str, allow_string: bool = True) -> None:
        """Initializer."""
        super().__init__()
        self.first_context = first_context
        self.allow_string = allow_string

    def __call__(self, value):
        """Validate input value."""
        if isinstance(value, str) and not self.allow_string:
            raise ValidationError("@context must be an array")

        contexts = as_list(value)
        if not contexts or contexts[0] != self.first_context:
            raise ValidationError(f"First context must be {self.first_context}")

        return value


class TypeIncludes(Validator):
    """JSON-LD type equal to, or an array including, a required type."""

    def __init__(self, required_type: str) -> None:
        """Initializer."""
        super().__init__()
        self.required_type = required_type

    def __call__(self, value):
        """Validate input value."""
        types = as_list(value)
        if not types:
            raise ValidationError("type must not be empty")
        if self.required_type not in types:
            raise ValidationError(f"type must include {self.required_type}")

        return value

