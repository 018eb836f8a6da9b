"""Presentation holder model."""

from typing import Dict, List, Optional

from marshmallow import INCLUDE

from ...models.base import (
    BaseModel,
    BaseModelSchema,
    check,
    collect_uri_or_model_errors,
)
from ...models.fields import StrField
from ...models.valid import Uri


class Holder(BaseModel):
    """Holder of a presentation, in its object form.

    See https://www.w3.org/TR/vc-data-model-2.0/#holder
    """

    class Meta:
        """Holder metadata."""

        schema_class = "HolderSchema"

    def __init__(self, id: str, properties: Optional[dict] = None) -> None:
        """Initialize the Holder instance."""
        self.id = id
        self.properties = dict(properties or {})

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by field."""
        errors = {}
        check(errors, "id", Uri(), self.id)
        return errors


def holder_errors(value, field: str = "holder") -> Dict[str, List[str]]:
    """Validate a holder given either as a URI string or as a `Holder`."""
    errors = {}
    collect_uri_or_model_errors(errors, field, value, Holder)
    return errors


def is_valid_holder(value) -> bool:
    """Check whether `value` is a URI string or a valid `Holder`."""
    return not holder_errors(value)


class HolderSchema(BaseModelSchema):
    """Holder schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = Holder

    id = StrField(
        required=True,
        metadata={
            "description": "Holder identifier",
            "example": "did:example:ebfeb1f712ebc6f1c276e12ec21",
        },
    )
