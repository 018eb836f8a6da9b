"""Base classes for Models and Schemas."""

import json
import logging
from abc import ABC
from importlib import import_module
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union, cast

from marshmallow import (
    EXCLUDE,
    INCLUDE,
    Schema,
    ValidationError,
    post_dump,
    post_load,
    pre_load,
)

from ..core.error import BaseError
from .property_bag import merge_properties, split_properties
from .valid import Uri

LOGGER = logging.getLogger(__name__)


class BaseModelError(BaseError):
    """Base exception class for base model errors."""


class ClassNotFoundError(BaseModelError):
    """Model or schema class could not be resolved."""


class FieldError(BaseModelError):
    """A single field of a document could not be decoded."""

    def __init__(self, model: str, field: Optional[str], message: str):
        """Initialize a FieldError instance."""
        location = f"{model}.{field}" if field else model
        super().__init__(f"{location} {message}")
        self.model = model
        self.field = field


class MissingFieldError(FieldError):
    """A required field is absent."""

    def __init__(self, model: str, field: str):
        """Initialize a MissingFieldError instance."""
        super().__init__(model, field, "is required")


class WrongTypeError(FieldError):
    """A field holds a JSON value of the wrong type."""


class EmptyCollectionError(FieldError):
    """A one-or-many field was given an empty array."""

    def __init__(self, model: str, field: str):
        """Initialize an EmptyCollectionError instance."""
        super().__init__(model, field, "must contain at least one entry")


class ModelValidationError(BaseModelError):
    """A constructed model failed validation; lists every failing field."""

    def __init__(self, model: str, errors: Mapping[str, List[str]]):
        """Initialize a ModelValidationError instance."""
        self.model = model
        self.errors = {field: list(messages) for field, messages in errors.items()}
        details = "; ".join(
            f"{field}: {' '.join(messages)}" for field, messages in self.errors.items()
        )
        super().__init__(f"{model} validation failed: {details}")


def resolve_class(the_cls, relative_cls: Optional[type] = None) -> type:
    """
    Resolve a class.

    Args:
        the_cls: The class, or its name (dotted path or bare name)
        relative_cls: Class whose module a bare name is looked up in

    Returns:
        The resolved class

    Raises:
        ClassNotFoundError: If the class could not be loaded

    """
    if isinstance(the_cls, type):
        return the_cls
    if not isinstance(the_cls, str):
        raise TypeError(
            f"Could not resolve class from {the_cls}; incorrect type {type(the_cls)}"
        )

    mod_path, _, class_name = the_cls.rpartition(".")
    if not mod_path:
        mod_path = relative_cls and relative_cls.__module__
    if not mod_path:
        raise ClassNotFoundError(f"No module to resolve class {the_cls} from")
    try:
        return getattr(import_module(mod_path), class_name)
    except (ImportError, AttributeError) as err:
        raise ClassNotFoundError(f"Could not resolve class {the_cls}") from err


def resolve_meta_property(obj, prop_name: str, defval=None):
    """
    Resolve a meta property.

    Args:
        prop_name: The property to resolve
        defval: The default value

    Returns:
        The meta property

    """
    if isinstance(obj, type):
        cls = obj
    else:
        cls = obj.__class__
    found = defval
    while cls:
        Meta = getattr(cls, "Meta", None)
        if Meta and hasattr(Meta, prop_name):
            found = getattr(Meta, prop_name)
            break
        cls = cls.__bases__[0]
        if cls is object:
            break
    return found


def flatten_messages(messages, prefix: str = "") -> Dict[str, List[str]]:
    """Flatten nested marshmallow error messages into {field path: messages}."""
    if isinstance(messages, Mapping):
        flat = {}
        for key, value in messages.items():
            if isinstance(key, int):
                path = f"{prefix}[{key}]"
            else:
                path = f"{prefix}.{key}" if prefix else str(key)
            flat.update(flatten_messages(value, path))
        return flat
    if isinstance(messages, list):
        return {prefix or "_schema": [str(message) for message in messages]}
    return {prefix or "_schema": [str(messages)]}


def check(errors: Dict[str, List[str]], field: str, validator, value) -> bool:
    """Run a marshmallow validator, recording its messages under `field`."""
    try:
        validator(value)
    except ValidationError as err:
        for messages in flatten_messages(err.messages).values():
            errors.setdefault(field, []).extend(messages)
        return False
    return True


def collect_nested_errors(errors: Dict[str, List[str]], field: str, value) -> None:
    """Add the errors of the model (or list of models) held by `field`."""
    if isinstance(value, list):
        for index, item in enumerate(value):
            collect_nested_errors(errors, f"{field}[{index}]", item)
    elif isinstance(value, BaseModel):
        for path, messages in value.collect_errors().items():
            errors.setdefault(f"{field}.{path}", []).extend(messages)


def collect_uri_or_model_errors(
    errors: Dict[str, List[str]], field: str, value, model_class: type
) -> None:
    """Check a value that must be a URI string or a valid `model_class` instance."""
    if isinstance(value, str):
        check(errors, field, Uri(), value)
    elif isinstance(value, model_class):
        collect_nested_errors(errors, field, value)
    else:
        errors.setdefault(field, []).append(
            f"{field} must be a URI or a valid {model_class.__name__}"
        )


ModelType = TypeVar("ModelType", bound="BaseModel")


class BaseModel(ABC):
    """Base model that provides convenience methods."""

    class Meta:
        """BaseModel meta data."""

        schema_class = None

    def __init__(self):
        """
        Initialize BaseModel.

        Raises:
            TypeError: If schema_class is not set on Meta

        """
        if not self.Meta.schema_class:
            raise TypeError(
                "Can't instantiate abstract class {} with no schema_class".format(
                    self.__class__.__name__
                )
            )

    @classmethod
    def _get_schema_class(cls) -> Type["BaseModelSchema"]:
        """
        Get the schema class.

        Returns:
            The resolved schema class

        """
        resolved = resolve_class(cls.Meta.schema_class, cls)
        if issubclass(resolved, BaseModelSchema):
            return resolved

        raise TypeError(
            f"Resolved class is not a subclass of BaseModelSchema: {resolved}"
        )

    @classmethod
    def deserialize(
        cls: Type[ModelType],
        obj,
        *,
        unknown: Optional[str] = None,
        none2none: bool = False,
        validate: bool = False,
    ) -> Optional[ModelType]:
        """
        Convert from JSON representation to a model instance.

        Args:
            obj: The dict (or JSON text) to load into a model instance; an
                instance of this model is returned as is
            unknown: Behaviour for unknown attributes
            none2none: Deserialize None to None
            validate: Also run the validation pass on the result

        Returns:
            A model instance for this data

        Raises:
            FieldError: A field is missing, empty or of the wrong type
            ModelValidationError: Validation of the decoded model failed

        """
        if obj is None and none2none:
            return None

        if isinstance(obj, cls):
            model = obj
        else:
            if isinstance(obj, (str, bytes)):
                obj = cls._parse_json(obj)

            schema_cls = cls._get_schema_class()
            schema = schema_cls(
                unknown=unknown or resolve_meta_property(schema_cls, "unknown", EXCLUDE)
            )
            try:
                model = cast(ModelType, schema.load(obj))
            except ValidationError as err:
                LOGGER.exception(f"{cls.__name__} schema validation error:")
                raise ModelValidationError(
                    cls.__name__, flatten_messages(err.normalized_messages())
                ) from err

        if validate:
            model.validate()
        return model

    def serialize(
        self,
        *,
        as_string: bool = False,
        unknown: Optional[str] = None,
    ) -> Union[str, dict]:
        """
        Create a JSON-compatible dict representation of the model instance.

        Args:
            as_string: Return a string of JSON instead of a dict

        Returns:
            A dict representation of this model, or a JSON string if as_string is True

        """
        schema_cls = self._get_schema_class()
        schema = schema_cls(
            unknown=unknown or resolve_meta_property(schema_cls, "unknown", EXCLUDE)
        )
        try:
            return (
                schema.dumps(self, separators=(",", ":"))
                if as_string
                else schema.dump(self)
            )
        except (AttributeError, ValidationError) as err:
            LOGGER.exception(f"{self.__class__.__name__} serialization error:")
            raise BaseModelError(
                f"{self.__class__.__name__} schema validation failed"
            ) from err

    def collect_errors(self) -> Dict[str, List[str]]:
        """Return every validation problem of this model, keyed by field path."""
        return {}

    def validate(self):
        """Validate a constructed model.

        Raises:
            ModelValidationError: Listing every field that failed

        """
        errors = self.collect_errors()
        if errors:
            raise ModelValidationError(self.__class__.__name__, errors)
        return self

    @classmethod
    def _parse_json(cls, json_repr: Union[str, bytes]) -> Any:
        try:
            return json.loads(json_repr)
        except ValueError as e:
            LOGGER.exception(f"{cls.__name__} JSON parse error:")
            raise BaseModelError(f"{cls.__name__} JSON parsing failed") from e

    @classmethod
    def from_json(
        cls,
        json_repr: Union[str, bytes],
        unknown: Optional[str] = None,
    ):
        """
        Parse a JSON string into a model instance.

        Args:
            json_repr: JSON string

        Returns:
            A model instance representation of this JSON

        """
        return cls.deserialize(cls._parse_json(json_repr), unknown=unknown)

    def to_json(self, unknown: str = None) -> str:
        """
        Create a JSON representation of the model instance.

        Returns:
            A JSON representation of this model

        """
        return json.dumps(self.serialize(unknown=unknown))

    def __eq__(self, other: object) -> bool:
        """Compare models by their serialized form."""
        if type(other) is not type(self):
            return False
        return self.serialize() == other.serialize()

    def __repr__(self) -> str:
        """
        Return a human readable representation of this class.

        Returns:
            A human readable string for this class

        """
        exclude = resolve_meta_property(self, "repr_exclude", [])
        items = (
            "{}={}".format(k, repr(v))
            for k, v in self.__dict__.items()
            if k not in exclude
        )
        return "<{}({})>".format(self.__class__.__name__, ", ".join(items))


class BaseModelSchema(Schema):
    """BaseModel schema.

    Schemas with `unknown = INCLUDE` set every key they do not declare aside as
    the model's opaque `properties`, and write them back underneath the declared
    fields on dump.
    """

    class Meta:
        """BaseModelSchema metadata."""

        model_class = None
        skip_values = [None]

    def __init__(self, *args, **kwargs):
        """
        Initialize BaseModelSchema.

        Raises:
            TypeError: If model_class is not set on Meta

        """
        super().__init__(*args, **kwargs)
        if not self.Meta.model_class:
            raise TypeError(
                "Can't instantiate abstract class {} with no model_class".format(
                    self.__class__.__name__
                )
            )
        self._properties = None

    @classmethod
    def _get_model_class(cls):
        """
        Get the model class.

        Returns:
            The model class

        """
        return resolve_class(cls.Meta.model_class, cls)

    @property
    def Model(self) -> type:
        """
        Accessor for the schema's model class.

        Returns:
            The model class

        """
        return self._get_model_class()

    @property
    def known_keys(self) -> set:
        """Document keys declared by this schema."""
        return {
            field_obj.data_key or field_name
            for field_name, field_obj in self.load_fields.items()
        }

    @pre_load
    def capture_properties(self, data, **kwargs):
        """
        Check required keys and set aside undeclared ones.

        Returns:
            The declared part of the incoming data

        """
        model_name = self.Model.__name__
        if not isinstance(data, Mapping):
            raise WrongTypeError(model_name, None, "must be a JSON object")

        if self.unknown == INCLUDE:
            data, self._properties = split_properties(data, self.known_keys)
        else:
            self._properties = None

        for field_name, field_obj in self.load_fields.items():
            key = field_obj.data_key or field_name
            if key not in data:
                if field_obj.required:
                    raise MissingFieldError(model_name, key)
            elif data[key] is None:
                raise WrongTypeError(model_name, key, "must not be null")
        return data

    @post_load
    def make_model(self, data: dict, **kwargs):
        """
        Return model instance after loading.

        Returns:
            A model instance

        """
        if self._properties is not None:
            data["properties"] = self._properties
        return self.Model(**data)

    @post_dump(pass_original=True)
    def restore_properties(self, data, original, **kwargs):
        """
        Remove values that are marked to skip and add back the properties.

        Returns:
            Returns this modified data

        """
        skip_vals = resolve_meta_property(self, "skip_values", [])
        data = {key: value for key, value in data.items() if value not in skip_vals}
        return merge_properties(getattr(original, "properties", None), data)
