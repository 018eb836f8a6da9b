"""Decoding of compact SD-JWTs into their disclosed claims.

Signatures are neither checked nor required: the issuer-signed JWT is split and
parsed as is, each disclosure is matched against the digests referenced by the
payload, and the disclosed values are written back in place of their digests.
"""

import logging
from collections import namedtuple
from typing import Any, Dict, List, Mapping, Optional, Sequence

from marshmallow import fields
from sd_jwt.common import DIGEST_ALG_KEY, SD_DIGESTS_KEY, SD_LIST_PREFIX, SDJWTCommon

from ...config.base import BaseSettings
from ...config.settings import (
    DEFAULTS,
    SD_JWT_HASH_ALG,
    SD_JWT_STRICT_DISCLOSURES,
    as_settings,
)
from ...models.base import BaseModel, BaseModelSchema
from ...utils.encoding import b64_to_dict
from ..error import (
    DigestResolutionError,
    InvalidHeaderAssertionError,
    MalformedSdJwtError,
)
from .hasher import Hasher, default_hasher

LOGGER = logging.getLogger(__name__)


class Disclosure(namedtuple("Disclosure", "digest encoded salt key value")):
    """Decoded disclosure; `key` is None for an array element disclosure."""

    __slots__ = ()

    @property
    def is_array_element(self) -> bool:
        """Whether this disclosure reveals an array element rather than a claim."""
        return self.key is None

    def to_list(self) -> list:
        """Return the disclosure in its decoded JSON array form."""
        if self.is_array_element:
            return [self.salt, self.value]
        return [self.salt, self.key, self.value]


class DisclosureResolver(SDJWTCommon):
    """Match disclosures against the digests of an SD-JWT payload.

    Digests are computed with the given hasher instead of the library's own
    hash function; one resolver handles a single SD-JWT.
    """

    def __init__(self, hasher: Hasher, hash_alg: str):
        """Initialize a DisclosureResolver instance."""
        super().__init__(serialization_format="compact")
        self._hasher = hasher
        self._hash_alg = hash_alg
        self.disclosures: Dict[str, Disclosure] = {}
        self.used_digests = set()
        self.undisclosed_digests: List[str] = []

    def _b64hash(self, raw: bytes) -> str:
        return self._base64url_encode(self._hasher(raw, self._hash_alg))

    def load_disclosures(self, encoded: Sequence[str]) -> List[Disclosure]:
        """Decode disclosures and index them by digest.

        Raises:
            MalformedSdJwtError: If a disclosure cannot be decoded or has a bad shape
            DigestResolutionError: If a disclosure is repeated

        """
        if not all(encoded):
            raise MalformedSdJwtError("SD-JWT has an empty disclosure segment")
        if len(set(encoded)) != len(encoded):
            raise DigestResolutionError("SD-JWT repeats a disclosure")
        try:
            self._create_hash_mappings(list(encoded))
        except ValueError as err:
            raise MalformedSdJwtError(f"Invalid SD-JWT disclosure: {err}") from err

        for digest, decoded in self._hash_to_decoded_disclosure.items():
            self.disclosures[digest] = self._as_disclosure(
                digest, self._hash_to_disclosure[digest], decoded
            )
        return list(self.disclosures.values())

    @staticmethod
    def _as_disclosure(digest: str, encoded: str, decoded) -> Disclosure:
        if not isinstance(decoded, list) or len(decoded) not in (2, 3):
            raise MalformedSdJwtError(
                f"Disclosure {encoded} must be an array of 2 or 3 elements"
            )
        if not isinstance(decoded[0], str):
            raise MalformedSdJwtError(f"Disclosure {encoded} salt must be a string")
        if len(decoded) == 2:
            return Disclosure(digest, encoded, decoded[0], None, decoded[1])
        if not isinstance(decoded[1], str):
            raise MalformedSdJwtError(
                f"Disclosure {encoded} claim name must be a string"
            )
        if decoded[1] in (SD_DIGESTS_KEY, SD_LIST_PREFIX):
            raise MalformedSdJwtError(
                f"Disclosure {encoded} uses reserved claim name {decoded[1]}"
            )
        return Disclosure(digest, encoded, decoded[0], decoded[1], decoded[2])

    def _take(self, digest) -> Optional[Disclosure]:
        if not isinstance(digest, str):
            raise MalformedSdJwtError(f"Digest must be a string, got {digest!r}")
        disclosure = self.disclosures.get(digest)
        if disclosure is None:
            self.undisclosed_digests.append(digest)
            return None
        if digest in self.used_digests:
            raise DigestResolutionError(f"Digest {digest} is referenced more than once")
        self.used_digests.add(digest)
        return disclosure

    def unpack(self, value):
        """Return `value` with every resolvable digest replaced by its disclosure."""
        if isinstance(value, Mapping):
            return self._unpack_object(value)
        if isinstance(value, list):
            return self._unpack_array(value)
        return value

    def _unpack_object(self, obj: Mapping) -> dict:
        unpacked = {
            key: self.unpack(value)
            for key, value in obj.items()
            if key != SD_DIGESTS_KEY
        }
        digests = obj.get(SD_DIGESTS_KEY)
        if digests is None:
            return unpacked
        if not isinstance(digests, list):
            raise MalformedSdJwtError(f"{SD_DIGESTS_KEY} must be an array of digests")

        undisclosed = []
        for digest in digests:
            disclosure = self._take(digest)
            if disclosure is None:
                undisclosed.append(digest)
                continue
            if disclosure.is_array_element:
                raise DigestResolutionError(
                    f"Array element disclosure {disclosure.encoded} used for an object"
                )
            if disclosure.key in unpacked:
                raise DigestResolutionError(
                    f"Claim {disclosure.key} is disclosed more than once"
                )
            unpacked[disclosure.key] = self.unpack(disclosure.value)

        if undisclosed:
            unpacked[SD_DIGESTS_KEY] = undisclosed
        return unpacked

    def _unpack_array(self, array: list) -> list:
        unpacked = []
        for item in array:
            if isinstance(item, Mapping) and list(item.keys()) == [SD_LIST_PREFIX]:
                disclosure = self._take(item[SD_LIST_PREFIX])
                if disclosure is None:
                    unpacked.append(dict(item))
                    continue
                if not disclosure.is_array_element:
                    raise DigestResolutionError(
                        f"Claim disclosure {disclosure.encoded} used for an array"
                        " element"
                    )
                unpacked.append(self.unpack(disclosure.value))
            else:
                unpacked.append(self.unpack(item))
        return unpacked

    @property
    def unreferenced(self) -> List[Disclosure]:
        """Disclosures whose digest does not appear in the payload."""
        return [
            disclosure
            for digest, disclosure in self.disclosures.items()
            if digest not in self.used_digests
        ]


class DecodedSdJwt(BaseModel):
    """A compact SD-JWT split into its parts, with its claims reconstructed."""

    class Meta:
        """DecodedSdJwt metadata."""

        schema_class = "DecodedSdJwtSchema"

    def __init__(
        self,
        compact: str,
        header: Mapping[str, Any],
        payload: Mapping[str, Any],
        signature: str,
        disclosures: Sequence[Disclosure],
        pretty_claims: Mapping[str, Any],
        key_binding_jwt: Optional[str] = None,
    ):
        """Initialize a DecodedSdJwt instance."""
        self.compact = compact
        self.header = header
        self.payload = payload
        self.signature = signature
        self.disclosures = list(disclosures)
        self.pretty_claims = pretty_claims
        self.key_binding_jwt = key_binding_jwt


class DecodedSdJwtSchema(BaseModelSchema):
    """DecodedSdJwt schema, for diagnostics output."""

    class Meta:
        """DecodedSdJwtSchema metadata."""

        model_class = DecodedSdJwt

    compact = fields.Str(required=True, metadata={"description": "Compact SD-JWT"})
    header = fields.Dict(required=True, metadata={"description": "JWT header"})
    payload = fields.Dict(required=True, metadata={"description": "Signed payload"})
    signature = fields.Str(
        required=True, metadata={"description": "Unverified JWT signature"}
    )
    disclosures = fields.Function(
        lambda decoded: [disclosure.to_list() for disclosure in decoded.disclosures],
        metadata={"description": "Decoded disclosures as [salt, (name,) value]"},
    )
    pretty_claims = fields.Dict(
        required=True, metadata={"description": "Payload with disclosures applied"}
    )
    key_binding_jwt = fields.Str(
        required=False, metadata={"description": "Key binding JWT, if any"}
    )


def assert_header_claim(header: Mapping[str, Any], name: str, expected: Optional[str]):
    """Check that header claim `name` is absent or equal to `expected`.

    Raises:
        InvalidHeaderAssertionError: If the claim holds another value

    """
    if expected is not None and name in header and header[name] != expected:
        raise InvalidHeaderAssertionError(name, expected, header[name])


def _decode_segment(segment: str, name: str) -> dict:
    try:
        decoded = b64_to_dict(segment)
    except (ValueError, TypeError) as err:
        raise MalformedSdJwtError(
            f"SD-JWT {name} is not base64url JSON: {err}"
        ) from err
    if not isinstance(decoded, dict):
        raise MalformedSdJwtError(f"SD-JWT {name} must be a JSON object")
    return decoded


def decode_sd_jwt(
    compact: str,
    *,
    typ: Optional[str] = None,
    cyt: Optional[str] = None,
    hasher: Optional[Hasher] = None,
    settings: Optional[Mapping[str, Any]] = None,
) -> DecodedSdJwt:
    """Decode a compact SD-JWT and reconstruct its disclosed claims.

    Args:
        compact: `<jwt>~<disclosure>~...~<key binding jwt or empty>`
        typ: Required value of the `typ` header, when present
        cyt: Required value of the `cyt` header, when present
        hasher: Digest function, `default_hasher` when not given
        settings: Decoder settings, see `vcdm.config.settings`

    Returns:
        The decoded SD-JWT

    Raises:
        MalformedSdJwtError: If the token or a disclosure cannot be decoded
        DigestResolutionError: If disclosures cannot be matched against digests
        InvalidHeaderAssertionError: If `typ` or `cyt` have the wrong value

    """
    settings: BaseSettings = as_settings(settings)
    hasher = hasher or default_hasher

    if not isinstance(compact, str) or not compact:
        raise MalformedSdJwtError("SD-JWT must be a non-empty string")

    jwt, *encoded_disclosures = compact.split(
        SDJWTCommon.COMBINED_SERIALIZATION_FORMAT_SEPARATOR
    )
    key_binding_jwt = None
    if encoded_disclosures:
        key_binding_jwt = encoded_disclosures.pop() or None

    segments = jwt.split(".")
    if len(segments) != 3:
        raise MalformedSdJwtError(
            "SD-JWT must have header, payload and signature segments, "
            f"found {len(segments)}"
        )
    header = _decode_segment(segments[0], "header")
    payload = _decode_segment(segments[1], "payload")

    hash_alg = payload.get(
        DIGEST_ALG_KEY,
        settings.get_str(SD_JWT_HASH_ALG, default=DEFAULTS[SD_JWT_HASH_ALG]),
    )
    if not isinstance(hash_alg, str):
        raise MalformedSdJwtError(f"{DIGEST_ALG_KEY} must be a string")
    LOGGER.debug(
        "Decoding SD-JWT with %d disclosure(s), digest algorithm %s",
        len(encoded_disclosures),
        hash_alg,
    )

    resolver = DisclosureResolver(hasher, hash_alg)
    disclosures = resolver.load_disclosures(encoded_disclosures)
    pretty_claims = resolver.unpack(payload)
    pretty_claims.pop(DIGEST_ALG_KEY, None)

    if resolver.undisclosed_digests:
        LOGGER.debug("%d digest(s) left undisclosed", len(resolver.undisclosed_digests))
    unreferenced = resolver.unreferenced
    if unreferenced:
        if settings.get_bool(SD_JWT_STRICT_DISCLOSURES):
            raise DigestResolutionError(
                "Disclosures not referenced by the payload: "
                + ", ".join(disclosure.encoded for disclosure in unreferenced)
            )
        LOGGER.debug("Ignoring %d unreferenced disclosure(s)", len(unreferenced))

    assert_header_claim(header, "typ", typ)
    assert_header_claim(header, "cyt", cyt)

    return DecodedSdJwt(
        compact=compact,
        header=header,
        payload=payload,
        signature=segments[2],
        disclosures=disclosures,
        pretty_claims=pretty_claims,
        key_binding_jwt=key_binding_jwt,
    )
