"""Marshmallow fields for polymorphic JSON-LD values.

JSON-LD lets most properties hold a single value or an array of values, and some
hold either a URI string or an object. These fields normalize such input into
model instances while remembering the original shape, so that a dump gives back
a single value for a single value and an array of the same length and order for
an array.
"""

from typing import Callable, Mapping, Optional, Union

from marshmallow import fields

from .base import (
    BaseModel,
    EmptyCollectionError,
    WrongTypeError,
    resolve_class,
)


def map_single_or_array(value, fn: Callable):
    """Apply `fn` to a single value, or to each item of an array."""
    if isinstance(value, list):
        return [fn(item) for item in value]
    return fn(value)


def coerce_single_or_array(
    value,
    model: type,
    *,
    allow_empty: bool = False,
    allow_string: bool = False,
    owner: str = "",
    field: Optional[str] = None,
):
    """Decode a single-or-array value into `model` instances, keeping its shape.

    Instances of `model` pass through unchanged, so coercing twice is harmless.

    Raises:
        EmptyCollectionError: An empty array where one entry is required
        WrongTypeError: An entry is neither a mapping nor a `model` instance

    """
    if allow_string and isinstance(value, str):
        return value

    def coerce(item):
        if isinstance(item, model):
            return item
        if not isinstance(item, Mapping):
            raise WrongTypeError(
                owner or model.__name__, field, f"entries must be {model.__name__} objects"
            )
        return model.deserialize(item)

    if isinstance(value, list):
        if not value and not allow_empty:
            raise EmptyCollectionError(owner or model.__name__, field)
        return [coerce(item) for item in value]
    return coerce(value)


def coerce_str_or_model(value, model: type, *, owner: str = "", field: str = None):
    """Keep a string as is, decode a mapping into `model`; never promote strings."""
    if isinstance(value, (str, model)):
        return value
    if not isinstance(value, Mapping):
        raise WrongTypeError(
            owner or model.__name__, field, f"must be a URI or a {model.__name__} object"
        )
    return model.deserialize(value)


def _owner_name(field: fields.Field) -> str:
    schema = field.root
    model = getattr(schema, "Model", None)
    return model.__name__ if model else schema.__class__.__name__


def _field_name(field: fields.Field) -> Optional[str]:
    while field is not None and isinstance(field, fields.Field):
        name = field.data_key or field.name
        if name:
            return name
        field = field.parent
    return None


def _wrong_type(field: fields.Field, message: str) -> WrongTypeError:
    return WrongTypeError(_owner_name(field), _field_name(field), message)


class StrField(fields.String):
    """String field that rejects any other JSON type."""

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, str):
            raise _wrong_type(self, "must be a string")
        return value


class StrOrStrListField(fields.Field):
    """A string or an array of strings, shape preserved."""

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, str):
            return value
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return list(value)
        raise _wrong_type(self, "must be a string or an array of strings")


class ContextField(fields.Field):
    """JSON-LD `@context`: a string, an object or an array of those."""

    def _deserialize(self, value, attr, data, **kwargs):
        if isinstance(value, (str, dict)):
            return value
        if isinstance(value, list) and all(
            isinstance(item, (str, dict)) for item in value
        ):
            return list(value)
        raise _wrong_type(self, "must be a string, an object or an array of them")


class SingleOrArrayField(fields.Field):
    """One-or-many values decoded into instances of `model_class`.

    Arrays must hold at least one entry unless `allow_empty` is set. With
    `allow_string` a plain string is kept as is instead of being decoded.
    """

    def __init__(
        self,
        model_class: Union[str, type],
        *,
        allow_empty: bool = False,
        allow_string: bool = False,
        **kwargs,
    ):
        """Initialize a SingleOrArrayField instance."""
        super().__init__(**kwargs)
        self.model_class = model_class
        self.allow_empty = allow_empty
        self.allow_string = allow_string

    @property
    def model(self) -> type:
        """Resolved model class of the items."""
        return resolve_class(self.model_class, self.root.__class__)

    def _deserialize(self, value, attr, data, **kwargs):
        return coerce_single_or_array(
            value,
            self.model,
            allow_empty=self.allow_empty,
            allow_string=self.allow_string,
            owner=_owner_name(self),
            field=_field_name(self),
        )

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        if isinstance(value, str):
            return value
        return map_single_or_array(value, _serialize_item)


class StrOrModelField(fields.Field):
    """A URI string, or an object decoded into `model_class`; never promoted."""

    def __init__(self, model_class: Union[str, type], **kwargs):
        """Initialize a StrOrModelField instance."""
        super().__init__(**kwargs)
        self.model_class = model_class

    @property
    def model(self) -> type:
        """Resolved model class."""
        return resolve_class(self.model_class, self.root.__class__)

    def _deserialize(self, value, attr, data, **kwargs):
        return coerce_str_or_model(
            value, self.model, owner=_owner_name(self), field=_field_name(self)
        )

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        return _serialize_item(value)


def _serialize_item(item):
    if isinstance(item, BaseModel):
        return item.serialize()
    return item
