"""Refresh service model."""

from typing import Dict, List, Optional

from marshmallow import INCLUDE

from ...models.base import BaseModel, BaseModelSchema, check
from ...models.fields import StrField
from ...models.valid import Uri


class RefreshService(BaseModel):
    """Service a holder can use to obtain a refreshed credential."""

    class Meta:
        """RefreshService metadata."""

        schema_class = "RefreshServiceSchema"

    def __init__(
        self,
        type: str,
        id: Optional[str] = None,
        properties: Optional[dict] = None,
    ) -> None:
        """Initialize the RefreshService instance."""
        self.id = id
        self.type = type
        self.properties = dict(properties or {})

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by field."""
        errors = {}
        if self.id is not None:
            check(errors, "id", Uri(), self.id)
        return errors


class RefreshServiceSchema(BaseModelSchema):
    """Refresh service schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = RefreshService

    id = StrField(required=False)
    type = StrField(
        required=True,
        metadata={
            "description": "Refresh service type",
            "example": "VerifiableCredentialRefreshService2021",
        },
    )
