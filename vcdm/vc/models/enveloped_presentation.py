"""Enveloped Verifiable Presentation model."""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from marshmallow import INCLUDE

from ..constants import ENVELOPED_VERIFIABLE_PRESENTATION_TYPE, MIMETYPE_VP_SD_JWT
from ..sd_jwt.hasher import Hasher
from ..sd_jwt.presentation import SdJwtVerifiablePresentation
from .envelope import BaseEnvelope, BaseEnvelopeSchema
from .presentation import Presentation


class EnvelopedVerifiablePresentation(BaseEnvelope):
    """A secured presentation carried in the `id` data URI.

    See https://www.w3.org/TR/vc-data-model-2.0/#enveloped-verifiable-presentations
    """

    class Meta:
        """EnvelopedVerifiablePresentation metadata."""

        schema_class = "EnvelopedVerifiablePresentationSchema"

    ENVELOPE_TYPE = ENVELOPED_VERIFIABLE_PRESENTATION_TYPE
    DECODERS = MappingProxyType(
        {MIMETYPE_VP_SD_JWT: SdJwtVerifiablePresentation.from_compact}
    )

    def resolve_presentation(
        self,
        *,
        hasher: Optional[Hasher] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ) -> SdJwtVerifiablePresentation:
        """Decode the secured presentation carried by this envelope."""
        return self.resolve(hasher=hasher, settings=settings)

    @property
    def presentation(self) -> Presentation:
        """The enveloped presentation, decoded with default settings."""
        return self.resolve_presentation().presentation


class EnvelopedVerifiablePresentationSchema(BaseEnvelopeSchema):
    """Enveloped Verifiable Presentation schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = EnvelopedVerifiablePresentation
