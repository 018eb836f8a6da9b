"""Verifiable credential envelope and SD-JWT errors."""

from ..core.error import BaseError


class VcError(BaseError):
    """Base class for envelope and SD-JWT decoding errors."""


class MalformedEnvelopeError(VcError):
    """A data URI, or the envelope carrying it, does not have the expected shape."""


class UnsupportedEnvelopeFormatError(VcError):
    """The media type of an envelope has no registered decoder."""

    def __init__(self, mimetype: str, *args, **kwargs):
        """Initialize an UnsupportedEnvelopeFormatError instance."""
        super().__init__(
            f"Unsupported enveloped format: {mimetype} not recognized", *args, **kwargs
        )
        self.mimetype = mimetype


class InvalidHeaderAssertionError(VcError):
    """An SD-JWT header claim does not hold the value required for its format."""

    def __init__(self, header: str, expected: str, actual, *args, **kwargs):
        """Initialize an InvalidHeaderAssertionError instance."""
        super().__init__(
            f"SD-JWT header '{header}' must be '{expected}', got {actual!r}",
            *args,
            **kwargs,
        )
        self.header = header


class MalformedSdJwtError(VcError):
    """An SD-JWT or one of its disclosures cannot be split, decoded or parsed."""


class DigestResolutionError(VcError):
    """Disclosure digests could not be resolved against the payload."""
