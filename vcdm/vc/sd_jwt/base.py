"""Common base for credentials and presentations secured as SD-JWTs."""

from typing import Any, List, Mapping, Optional

from ..constants import ClaimFormat
from ..error import MalformedEnvelopeError
from .decode import DecodedSdJwt, Disclosure, decode_sd_jwt
from .hasher import Hasher


class BaseSdJwtDocument:
    """A document secured as an SD-JWT, decoded but not verified.

    Subclasses name their media type, claim format and required header values,
    and turn the reconstructed claims into their document model.
    """

    MIMETYPE: str = None
    CLAIM_FORMAT: ClaimFormat = None
    TYP: str = None
    CYT: str = None

    def __init__(self, sd_jwt: DecodedSdJwt):
        """Initialize the document from a decoded SD-JWT."""
        self.sd_jwt = sd_jwt

    @classmethod
    def from_compact(
        cls,
        compact: str,
        *,
        hasher: Optional[Hasher] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ):
        """Decode a compact SD-JWT into this document type."""
        sd_jwt = decode_sd_jwt(
            compact, typ=cls.TYP, cyt=cls.CYT, hasher=hasher, settings=settings
        )
        return cls(sd_jwt)

    @classmethod
    def from_data_uri(
        cls,
        uri: str,
        *,
        hasher: Optional[Hasher] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ):
        """Decode a `data:<media type>,<compact SD-JWT>` URI into this document type.

        Raises:
            MalformedEnvelopeError: If the URI does not start with the exact prefix

        """
        prefix = cls.data_uri_prefix()
        if not isinstance(uri, str) or not uri.startswith(prefix):
            raise MalformedEnvelopeError(
                f'The provided string is not a valid {cls.MIMETYPE} data URI: "{uri}"'
            )
        return cls.from_compact(uri[len(prefix) :], hasher=hasher, settings=settings)

    @classmethod
    def data_uri_prefix(cls) -> str:
        """Data URI prefix of this document type."""
        return f"data:{cls.MIMETYPE},"

    @property
    def compact(self) -> str:
        """The compact serialization, exactly as decoded."""
        return self.sd_jwt.compact

    @property
    def data_uri(self) -> str:
        """The data URI representation of this document."""
        return f"{self.data_uri_prefix()}{self.compact}"

    @property
    def claim_format(self) -> ClaimFormat:
        """The claim format of this document."""
        return self.CLAIM_FORMAT

    @property
    def header(self) -> Mapping[str, Any]:
        """The unverified JWT header."""
        return self.sd_jwt.header

    @property
    def payload(self) -> Mapping[str, Any]:
        """The signed payload, digests unresolved."""
        return self.sd_jwt.payload

    @property
    def disclosures(self) -> List[Disclosure]:
        """The decoded disclosures."""
        return self.sd_jwt.disclosures

    @property
    def pretty_claims(self) -> Mapping[str, Any]:
        """The payload with every disclosed value in place."""
        return self.sd_jwt.pretty_claims

    def __repr__(self) -> str:
        """Return a human readable representation of this document."""
        return f"<{self.__class__.__name__}({self.compact!r})>"
