"""Verifiable Presentation 2.0 model and schema."""

from typing import Dict, List, Optional, Union

from marshmallow import INCLUDE

from ...models.base import BaseModel, BaseModelSchema, check, collect_nested_errors
from ...models.fields import (
    ContextField,
    SingleOrArrayField,
    StrField,
    StrOrModelField,
    StrOrStrListField,
    coerce_single_or_array,
    coerce_str_or_model,
)
from ...models.valid import CredentialContext, TypeIncludes, Uri, as_list
from ..constants import CREDENTIALS_CONTEXT_V2_URL, VERIFIABLE_PRESENTATION_TYPE
from .enveloped_credential import EnvelopedVerifiableCredential
from .holder import Holder, holder_errors


class Presentation(BaseModel):
    """Verifiable Presentation 2.0, holding enveloped credentials.

    See https://www.w3.org/TR/vc-data-model-2.0/#presentations
    """

    class Meta:
        """Presentation metadata."""

        schema_class = "PresentationSchema"

    def __init__(
        self,
        context: Optional[Union[str, List[Union[str, dict]]]] = None,
        id: Optional[str] = None,
        type: Optional[Union[str, List[str]]] = None,
        holder: Optional[Union[str, dict, Holder]] = None,
        verifiable_credential=None,
        properties: Optional[dict] = None,
    ) -> None:
        """Initialize the Presentation instance."""
        self.context = [CREDENTIALS_CONTEXT_V2_URL] if context is None else context
        self.id = id
        self.type = [VERIFIABLE_PRESENTATION_TYPE] if type is None else type
        self.holder = (
            None
            if holder is None
            else coerce_str_or_model(
                holder, Holder, owner="Presentation", field="holder"
            )
        )
        self.verifiable_credential = (
            None
            if verifiable_credential is None
            else coerce_single_or_array(
                verifiable_credential,
                EnvelopedVerifiableCredential,
                allow_empty=True,
                owner="Presentation",
                field="verifiableCredential",
            )
        )
        self.properties = dict(properties or {})

    @property
    def contexts(self) -> List[Union[str, dict]]:
        """Getter for context, always as an array."""
        return as_list(self.context)

    @property
    def context_urls(self) -> List[str]:
        """Getter for context urls."""
        return [context for context in self.contexts if isinstance(context, str)]

    def add_context(self, context: Union[str, dict]):
        """Add a context to this presentation."""
        self.context = self.contexts + [context]

    def add_type(self, type: str):
        """Add a type to this presentation."""
        self.type = as_list(self.type) + [type]

    @property
    def holder_id(self) -> Optional[str]:
        """Getter for holder id."""
        if not self.holder:
            return None
        elif isinstance(self.holder, str):
            return self.holder

        return self.holder.id

    @property
    def credentials(self) -> List[EnvelopedVerifiableCredential]:
        """Getter for the enveloped credentials, always as an array."""
        return as_list(self.verifiable_credential)

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by document field path."""
        errors = {}
        check(
            errors,
            "@context",
            CredentialContext(CREDENTIALS_CONTEXT_V2_URL),
            self.context,
        )
        if self.id is not None:
            check(errors, "id", Uri(), self.id)
        check(errors, "type", TypeIncludes(VERIFIABLE_PRESENTATION_TYPE), self.type)
        if self.holder is not None:
            errors.update(holder_errors(self.holder))
        collect_nested_errors(
            errors, "verifiableCredential", self.verifiable_credential
        )
        return errors


class PresentationSchema(BaseModelSchema):
    """Verifiable Presentation 2.0 schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = Presentation

    context = ContextField(
        data_key="@context",
        required=False,
        metadata={
            "description": "The JSON-LD context of the presentation",
            "example": [CREDENTIALS_CONTEXT_V2_URL],
        },
    )
    id = StrField(
        required=False,
        metadata={
            "description": "The ID of the presentation",
            "example": "urn:uuid:3978344f-8596-4c3a-a978-8fcaba3903c5",
        },
    )
    type = StrOrStrListField(
        required=False,
        metadata={
            "description": "The type of the presentation",
            "example": [VERIFIABLE_PRESENTATION_TYPE],
        },
    )
    holder = StrOrModelField(
        Holder,
        required=False,
        metadata={
            "description": "The holder, either a URI or an object with an id",
            "example": "did:example:ebfeb1f712ebc6f1c276e12ec21",
        },
    )
    verifiable_credential = SingleOrArrayField(
        EnvelopedVerifiableCredential,
        data_key="verifiableCredential",
        allow_empty=True,
        required=False,
        metadata={"description": "Enveloped credentials, possibly none"},
    )
