from unittest import TestCase

from ...vc.error import (
    InvalidHeaderAssertionError,
    MalformedSdJwtError,
    UnsupportedEnvelopeFormatError,
    VcError,
)
from ..error import BaseError


class TestBaseError(TestCase):
    def test_base_error(self):
        err = BaseError()
        assert err.error_code is None
        assert not err.message
        assert err.roll_up == f"{err.__class__.__name__}."

        MESSAGE = "Disclosure rejected\nDigest mismatch\n\n"
        CODE = "-1"
        err = BaseError(MESSAGE, error_code=CODE)
        assert err.error_code == CODE
        assert err.message == MESSAGE.strip()
        assert err.roll_up == "Disclosure rejected. Digest mismatch."

    def test_roll_up_cause_chain(self):
        try:
            try:
                raise ValueError("Incorrect padding")
            except ValueError as err:
                raise MalformedSdJwtError("SD-JWT header is not JSON") from err
        except MalformedSdJwtError as err:
            assert err.roll_up == "SD-JWT header is not JSON. Incorrect padding."
            assert [type(e) for e in err.causes] == [MalformedSdJwtError, ValueError]

    def test_roll_up_trailing_period(self):
        assert BaseError("Digest mismatch.").roll_up == "Digest mismatch."


class TestVcErrors(TestCase):
    def test_messages(self):
        err = UnsupportedEnvelopeFormatError("text/plain")
        assert isinstance(err, VcError)
        assert err.mimetype == "text/plain"
        assert "text/plain" in err.message

        err = InvalidHeaderAssertionError("typ", "vc+sd-jwt", "jwt")
        assert err.header == "typ"
        assert err.message == "SD-JWT header 'typ' must be 'vc+sd-jwt', got 'jwt'"
