"""Credential issuer model."""

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


class Issuer(BaseModel):
    """Issuer of a credential, in its object form.

    See https://www.w3.org/TR/vc-data-model-2.0/#issuer
    """

    class Meta:
        """Issuer metadata."""

        schema_class = "IssuerSchema"

    def __init__(self, id: str, properties: Optional[dict] = None) -> None:
        """Initialize the Issuer instance."""
        self.id = id
        self.properties = dict(properties or {})

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by field."""
        errors = {}
        check(errors, "id", Uri(), self.id)
        return errors


def issuer_errors(value, field: str = "issuer") -> Dict[str, List[str]]:
    """Validate an issuer given either as a URI string or as an `Issuer`."""
    errors = {}
    collect_uri_or_model_errors(errors, field, value, Issuer)
    return errors


def is_valid_issuer(value) -> bool:
    """Check whether `value` is a URI string or a valid `Issuer`."""
    return not issuer_errors(value)


class IssuerSchema(BaseModelSchema):
    """Issuer schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = Issuer

    id = StrField(
        required=True,
        metadata={
            "description": "Issuer identifier",
            "example": "did:example:76e12ec712ebc6f1c221ebfeb1f",
        },
    )
