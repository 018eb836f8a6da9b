"""Credential data schema model."""

from typing import Dict, List, Optional

from marshmallow import INCLUDE

from ...models.base import BaseModel, BaseModelSchema, check
from ...models.fields import StrField
from ...models.valid import Uri


class DataSchema(BaseModel):
    """Schema a credential's data can be checked against (`credentialSchema`).

    See https://www.w3.org/TR/vc-data-model-2.0/#data-schemas
    """

    class Meta:
        """DataSchema metadata."""

        schema_class = "DataSchemaSchema"

    def __init__(self, id: str, type: str, properties: Optional[dict] = None):
        """Initialize the DataSchema instance."""
        self.id = id
        self.type = type
        self.properties = dict(properties or {})

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by field."""
        errors = {}
        check(errors, "id", Uri(), self.id)
        return errors


class DataSchemaSchema(BaseModelSchema):
    """Data schema schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = DataSchema

    id = StrField(
        required=True,
        metadata={
            "description": "Data schema location",
            "example": "https://example.org/examples/degree.json",
        },
    )
    type = StrField(
        required=True,
        metadata={"description": "Data schema type", "example": "JsonSchema"},
    )
