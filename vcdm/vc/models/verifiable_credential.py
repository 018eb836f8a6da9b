"""Entry points for verifiable credentials in their two secured shapes.

A verifiable credential arrives either as an enveloped credential object or as
a bare compact SD-JWT. Neither shape is preferred, the caller picks the one it
received.
"""

from typing import Any, Mapping, Optional, Union

from ..sd_jwt.credential import SdJwtVerifiableCredential
from ..sd_jwt.hasher import Hasher
from .enveloped_credential import EnvelopedVerifiableCredential

VerifiableCredential = Union[EnvelopedVerifiableCredential, SdJwtVerifiableCredential]


def verifiable_credential_from_envelope(value) -> EnvelopedVerifiableCredential:
    """Decode an enveloped credential from a mapping or JSON text."""
    return EnvelopedVerifiableCredential.decode(value)


def verifiable_credential_from_compact(
    compact: str,
    *,
    hasher: Optional[Hasher] = None,
    settings: Optional[Mapping[str, Any]] = None,
) -> SdJwtVerifiableCredential:
    """Decode a credential from its compact SD-JWT serialization."""
    return SdJwtVerifiableCredential.from_compact(
        compact, hasher=hasher, settings=settings
    )
