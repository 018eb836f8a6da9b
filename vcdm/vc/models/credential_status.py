"""Credential status model."""

from typing import Dict, List, Optional

from marshmallow import INCLUDE

from ...models.base import BaseModel, BaseModelSchema, check
from ...models.fields import StrField
from ...models.valid import Uri


class CredentialStatus(BaseModel):
    """Where and how to check whether a credential was suspended or revoked.

    See https://www.w3.org/TR/vc-data-model-2.0/#status
    """

    class Meta:
        """CredentialStatus metadata."""

        schema_class = "CredentialStatusSchema"

    def __init__(
        self,
        type: str,
        id: Optional[str] = None,
        properties: Optional[dict] = None,
    ) -> None:
        """Initialize the CredentialStatus instance."""
        self.id = id
        self.type = type
        self.properties = dict(properties or {})

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by field."""
        errors = {}
        if self.id is not None:
            check(errors, "id", Uri(), self.id)
        return errors


class CredentialStatusSchema(BaseModelSchema):
    """Credential status schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = CredentialStatus

    id = StrField(
        required=False,
        metadata={
            "description": "Status entry identifier",
            "example": "https://university.example/credentials/status/3#94567",
        },
    )
    type = StrField(
        required=True,
        metadata={"description": "Status type", "example": "BitstringStatusListEntry"},
    )
