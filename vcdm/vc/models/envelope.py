"""Enveloped documents: secured credentials or presentations inside a data URI."""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from marshmallow import INCLUDE

from ...models.base import BaseModel, BaseModelSchema, check
from ...models.fields import ContextField, StrField, StrOrStrListField
from ...models.valid import CredentialContext, DataUri, TypeIncludes
from ..constants import CREDENTIALS_CONTEXT_V2_URL, DATA_URI_SCHEME
from ..error import MalformedEnvelopeError, UnsupportedEnvelopeFormatError

LOGGER = logging.getLogger(__name__)


def parse_data_uri(uri: str) -> Tuple[str, str]:
    """Split `data:<media type>,<data>` at the scheme and the first comma.

    Returns:
        The media type and the data

    Raises:
        MalformedEnvelopeError: If `uri` is not a data URI or has no comma

    """
    if not isinstance(uri, str) or not uri.startswith(DATA_URI_SCHEME):
        raise MalformedEnvelopeError(f"Envelope id is not a data URI: {uri!r}")
    mimetype, comma, data = uri[len(DATA_URI_SCHEME) :].partition(",")
    if not comma:
        raise MalformedEnvelopeError(
            f"Envelope data URI has no comma after the media type: {uri!r}"
        )
    return mimetype, data


class BaseEnvelope(BaseModel):
    """A document whose `id` is a data URI carrying its secured content.

    Decoding an envelope only checks its shape. The content is decoded on
    demand by `resolve`, through the decoder registered for its media type.
    """

    class Meta:
        """BaseEnvelope metadata."""

        schema_class = None

    ENVELOPE_TYPE: str = None
    # media type -> decoder of the data part; read-only
    DECODERS: Mapping[str, Callable[..., Any]] = MappingProxyType({})

    def __init__(
        self,
        id: str,
        context: Optional[Union[str, List[Union[str, dict]]]] = None,
        type: Optional[Union[str, List[str]]] = None,
        properties: Optional[dict] = None,
    ) -> None:
        """Initialize the envelope."""
        self.context = CREDENTIALS_CONTEXT_V2_URL if context is None else context
        self.id = id
        self.type = self.ENVELOPE_TYPE if type is None else type
        self.properties = dict(properties or {})

    @classmethod
    def decode(cls, value):
        """Decode an envelope from a mapping, or JSON text, and check its shape.

        Raises:
            MalformedEnvelopeError: If `id` is not a data URI with a comma
            FieldError: If a field is missing or of the wrong type
            ModelValidationError: If the envelope is not valid

        """
        envelope = cls.deserialize(value)
        parse_data_uri(envelope.id)
        return envelope.validate()

    @property
    def mimetype(self) -> str:
        """Media type of the enveloped content."""
        return parse_data_uri(self.id)[0]

    @property
    def data(self) -> str:
        """Enveloped content, as found in the data URI."""
        return parse_data_uri(self.id)[1]

    def resolve(self, **kwargs):
        """Decode the enveloped content with the decoder for its media type.

        Keyword arguments are passed through to the decoder.

        Raises:
            MalformedEnvelopeError: If `id` is not a data URI with a comma
            UnsupportedEnvelopeFormatError: If no decoder handles the media type

        """
        mimetype, data = parse_data_uri(self.id)
        decoder = self.DECODERS.get(mimetype)
        if not decoder:
            raise UnsupportedEnvelopeFormatError(mimetype)
        LOGGER.debug("Resolving %s envelope of type %s", self.ENVELOPE_TYPE, mimetype)
        return decoder(data, **kwargs)

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by field."""
        errors = {}
        check(
            errors,
            "@context",
            CredentialContext(CREDENTIALS_CONTEXT_V2_URL, allow_string=True),
            self.context,
        )
        check(errors, "id", DataUri(), self.id)
        check(errors, "type", TypeIncludes(self.ENVELOPE_TYPE), self.type)
        return errors


class BaseEnvelopeSchema(BaseModelSchema):
    """Fields shared by envelope schemas."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = None

    context = ContextField(
        data_key="@context",
        required=False,
        metadata={
            "description": "The JSON-LD context of the envelope",
            "example": CREDENTIALS_CONTEXT_V2_URL,
        },
    )
    id = StrField(
        required=True,
        metadata={
            "description": "Data URI of the secured content",
            "example": DataUri.EXAMPLE,
        },
    )
    type = StrOrStrListField(
        required=False,
        metadata={"description": "The envelope type"},
    )
