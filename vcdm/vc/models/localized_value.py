"""Language-tagged string value model."""

from typing import Optional

from marshmallow import INCLUDE

from ...models.base import BaseModel, BaseModelSchema
from ...models.fields import StrField


class LocalizedValue(BaseModel):
    """A `name` or `description` value tagged with its language and direction.

    See https://www.w3.org/TR/vc-data-model-2.0/#language-and-base-direction
    """

    class Meta:
        """LocalizedValue metadata."""

        schema_class = "LocalizedValueSchema"

    def __init__(
        self,
        value: str,
        language: Optional[str] = None,
        direction: Optional[str] = None,
        properties: Optional[dict] = None,
    ) -> None:
        """Initialize the LocalizedValue instance."""
        self.value = value
        self.language = language
        self.direction = direction
        self.properties = dict(properties or {})


class LocalizedValueSchema(BaseModelSchema):
    """Localized value schema."""

    class Meta:
        """Accept parameter overload."""

        unknown = INCLUDE
        model_class = LocalizedValue

    value = StrField(
        required=True,
        data_key="@value",
        metadata={"example": "Example University"},
    )
    language = StrField(
        required=False,
        data_key="@language",
        metadata={"example": "en"},
    )
    direction = StrField(
        required=False,
        data_key="@direction",
        metadata={"example": "ltr"},
    )
