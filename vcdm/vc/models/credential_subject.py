"""Credential subject model."""

from typing import Dict, List, Optional

from marshmallow import INCLUDE

from ...models.base import BaseModel, BaseModelSchema, check
from ...models.fields import StrField
from ...models.valid import Uri


class CredentialSubject(BaseModel):
    """Entity the claims of a credential are about.

    See https://www.w3.org/TR/vc-data-model-2.0/#credential-subject
    """

    class Meta:
        """CredentialSubject metadata."""

        schema_class = "CredentialSubjectSchema"

    def __init__(self, id: Optional[str] = None, properties: Optional[dict] = None):
        """Initialize the CredentialSubject instance."""
        self.id = id
        self.properties = dict(properties or {})

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by field."""
        errors = {}
        if self.id is not None:
            check(errors, "id", Uri(), self.id)
        return errors


class CredentialSubjectSchema(BaseModelSchema):
    """Credential subject schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = CredentialSubject

    id = StrField(
        required=False,
        metadata={
            "description": "Subject identifier",
            "example": "did:example:ebfeb1f712ebc6f1c276e12ec21",
        },
    )
