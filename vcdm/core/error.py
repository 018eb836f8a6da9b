"""Common exception classes."""

import re
from typing import Iterator


def _sentence(exc: BaseException) -> str:
    text = str(exc.args[0]).strip() if exc.args else exc.__class__.__name__
    return re.sub(r"\s*\n\s*", ". ", text).rstrip(".")


class BaseError(Exception):
    """Root of every exception raised while decoding or validating documents."""

    def __init__(self, *args, error_code: str = None, **kwargs):
        """Initialize a BaseError instance."""
        super().__init__(*args, **kwargs)
        self.error_code = error_code or None

    @property
    def message(self) -> str:
        """Accessor for the error message."""
        return str(self.args[0]).strip() if self.args else ""

    @property
    def causes(self) -> Iterator[BaseException]:
        """Walk this error and the chain of exceptions it was raised from."""
        err = self
        while err is not None:
            yield err
            err = err.__cause__

    @property
    def roll_up(self) -> str:
        """Accessor for this error and its causes as one line of sentences."""
        return ". ".join(_sentence(err) for err in self.causes) + "."
