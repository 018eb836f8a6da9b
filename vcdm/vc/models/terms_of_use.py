"""Terms of use model."""

from typing import Dict, List, Optional

from marshmallow import INCLUDE

from ...models.base import BaseModel, BaseModelSchema, check
from ...models.fields import StrField
from ...models.valid import Uri


class TermsOfUse(BaseModel):
    """Terms under which a credential was issued.

    See https://www.w3.org/TR/vc-data-model-2.0/#terms-of-use
    """

    class Meta:
        """TermsOfUse metadata."""

        schema_class = "TermsOfUseSchema"

    def __init__(
        self,
        type: str,
        id: Optional[str] = None,
        properties: Optional[dict] = None,
    ) -> None:
        """Initialize the TermsOfUse instance."""
        self.id = id
        self.type = type
        self.properties = dict(properties or {})

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return validation problems keyed by field."""
        errors = {}
        if self.id is not None:
            check(errors, "id", Uri(), self.id)
        return errors


class TermsOfUseSchema(BaseModelSchema):
    """Terms of use schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = TermsOfUse

    id = StrField(required=False)
    type = StrField(
        required=True,
        metadata={"description": "Policy type", "example": "TrustFrameworkPolicy"},
    )
