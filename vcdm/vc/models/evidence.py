"""Evidence model."""

from typing import Dict, List, Optional

from marshmallow import INCLUDE

from ...models.base import BaseModel, BaseModelSchema, check
from ...models.fields import StrField
from ...models.valid import Uri


class Evidence(BaseModel):
    """Evidence supporting the claims of a credential.

    See https://www.w3.org/TR/vc-data-model-2.0/#evidence
    """

    class Meta:
        """Evidence metadata."""

        schema_class = "EvidenceSchema"

    def __init__(
        self,
        type: str,
        id: Optional[str] = None,
        properties: Optional[dict] = None,
    ) -> None:
        """Initialize the Evidence instance."""
        self.id = id
        self.type = type
        self.properties = dict(properties or {})

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by field."""
        errors = {}
        if self.id is not None:
            check(errors, "id", Uri(), self.id)
        return errors


class EvidenceSchema(BaseModelSchema):
    """Evidence schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = Evidence

    id = StrField(required=False)
    type = StrField(
        required=True,
        metadata={"description": "Evidence type", "example": "Evidence"},
    )
