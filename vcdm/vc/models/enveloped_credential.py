"""Enveloped Verifiable Credential model."""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from marshmallow import INCLUDE

from ..constants import ENVELOPED_VERIFIABLE_CREDENTIAL_TYPE, MIMETYPE_VC_SD_JWT
from ..sd_jwt.credential import SdJwtVerifiableCredential
from ..sd_jwt.hasher import Hasher
from .credential import Credential
from .envelope import BaseEnvelope, BaseEnvelopeSchema


class EnvelopedVerifiableCredential(BaseEnvelope):
    """A secured credential carried in the `id` data URI.

    See https://www.w3.org/TR/vc-data-model-2.0/#enveloped-verifiable-credentials
    """

    class Meta:
        """EnvelopedVerifiableCredential metadata."""

        schema_class = "EnvelopedVerifiableCredentialSchema"

    ENVELOPE_TYPE = ENVELOPED_VERIFIABLE_CREDENTIAL_TYPE
    DECODERS = MappingProxyType(
        {MIMETYPE_VC_SD_JWT: SdJwtVerifiableCredential.from_compact}
    )

    def resolve_credential(
        self,
        *,
        hasher: Optional[Hasher] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ) -> SdJwtVerifiableCredential:
        """Decode the secured credential carried by this envelope."""
        return self.resolve(hasher=hasher, settings=settings)

    @property
    def credential(self) -> Credential:
        """The enveloped credential, decoded with default settings."""
        return self.resolve_credential().credential


class EnvelopedVerifiableCredentialSchema(BaseEnvelopeSchema):
    """Enveloped Verifiable Credential schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = EnvelopedVerifiableCredential
