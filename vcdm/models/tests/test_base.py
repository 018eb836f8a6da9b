import json
from unittest import TestCase

import pytest
from marshmallow import EXCLUDE, INCLUDE, fields

from ..base import (
    BaseModel,
    BaseModelError,
    BaseModelSchema,
    ClassNotFoundError,
    MissingFieldError,
    ModelValidationError,
    WrongTypeError,
    check,
    flatten_messages,
    resolve_class,
)
from ..fields import StrField
from ..valid import Uri


class Widget(BaseModel):
    class Meta:
        schema_class = "WidgetSchema"

    def __init__(self, id, size=None, properties=None):
        self.id = id
        self.size = size
        self.properties = dict(properties or {})

    def collect_errors(self):
        errors = {}
        check(errors, "id", Uri(), self.id)
        if self.size is not None and self.size < 0:
            errors["size"] = ["size must not be negative"]
        return errors


class WidgetSchema(BaseModelSchema):
    class Meta:
        unknown = INCLUDE
        model_class = Widget

    id = StrField(required=True)
    size = fields.Int(required=False)


class Gadget(BaseModel):
    class Meta:
        schema_class = "GadgetSchema"

    def __init__(self, name):
        self.name = name


class GadgetSchema(BaseModelSchema):
    class Meta:
        unknown = EXCLUDE
        model_class = Gadget

    name = fields.Str(required=True)


WIDGET = {"id": "urn:widget:1", "size": 3, "color": "red", "@id": "w"}


class TestBaseModel(TestCase):
    def test_serde(self):
        widget = Widget.deserialize(WIDGET)
        assert type(widget) == Widget
        assert widget.id == "urn:widget:1"
        assert widget.properties == {"color": "red", "@id": "w"}
        assert widget.serialize() == WIDGET

    def test_deserialize_idempotent(self):
        widget = Widget.deserialize(WIDGET)
        assert Widget.deserialize(widget) is widget

    def test_deserialize_json_text(self):
        assert Widget.deserialize(json.dumps(WIDGET)) == Widget.deserialize(WIDGET)
        assert Widget.from_json(json.dumps(WIDGET)).serialize() == WIDGET
        assert json.loads(Widget.deserialize(WIDGET).to_json()) == WIDGET
        with pytest.raises(BaseModelError):
            Widget.deserialize("{not json")

    def test_deserialize_none(self):
        assert Widget.deserialize(None, none2none=True) is None

    def test_missing_field(self):
        with pytest.raises(MissingFieldError) as excinfo:
            Widget.deserialize({"size": 1})
        assert excinfo.value.field == "id"
        assert "Widget.id" in str(excinfo.value)

    def test_wrong_type(self):
        with pytest.raises(WrongTypeError) as excinfo:
            Widget.deserialize({"id": 5})
        assert excinfo.value.field == "id"
        with pytest.raises(WrongTypeError):
            Widget.deserialize({"id": None})
        with pytest.raises(WrongTypeError):
            Widget.deserialize(["urn:widget:1"])

    def test_marshmallow_errors(self):
        with pytest.raises(ModelValidationError) as excinfo:
            Widget.deserialize({"id": "urn:widget:1", "size": "big"})
        assert "size" in excinfo.value.errors

    def test_exclude_drops_unknown(self):
        gadget = Gadget.deserialize({"name": "g", "extra": 1})
        assert not hasattr(gadget, "properties")
        assert gadget.serialize() == {"name": "g"}

    def test_validate(self):
        widget = Widget(id="not a uri", size=-1)
        with pytest.raises(ModelValidationError) as excinfo:
            widget.validate()
        assert set(excinfo.value.errors) == {"id", "size"}
        assert "id" in str(excinfo.value) and "size" in str(excinfo.value)

        with pytest.raises(ModelValidationError):
            Widget.deserialize({"id": "not a uri"}, validate=True)
        assert Widget(id="urn:widget:1").validate().id == "urn:widget:1"

    def test_skip_none(self):
        assert Widget(id="urn:widget:1").serialize() == {"id": "urn:widget:1"}

    def test_serialize_as_string(self):
        text = Widget(id="urn:widget:1", size=2).serialize(as_string=True)
        assert json.loads(text) == {"id": "urn:widget:1", "size": 2}

    def test_equality(self):
        assert Widget.deserialize(WIDGET) == Widget.deserialize(dict(WIDGET))
        assert Widget.deserialize(WIDGET) != Widget(id="urn:widget:1")
        assert Widget(id="urn:widget:1") != Gadget(name="urn:widget:1")

    def test_repr(self):
        assert "Widget" in repr(Widget(id="urn:widget:1"))


class TestHelpers(TestCase):
    def test_resolve_class(self):
        assert resolve_class("WidgetSchema", Widget) is WidgetSchema
        assert resolve_class(f"{__name__}.Gadget") is Gadget
        assert resolve_class(Gadget) is Gadget
        with pytest.raises(ClassNotFoundError):
            resolve_class("NoSuchSchema", Widget)
        with pytest.raises(ClassNotFoundError):
            resolve_class("NoSuchSchema")
        with pytest.raises(TypeError):
            resolve_class(5)

    def test_flatten_messages(self):
        assert flatten_messages(
            {"a": ["bad"], "b": {0: {"c": ["worse"]}}, "d": "plain"}
        ) == {"a": ["bad"], "b[0].c": ["worse"], "d": ["plain"]}
        assert flatten_messages(["bad"]) == {"_schema": ["bad"]}

    def test_check(self):
        errors = {}
        assert check(errors, "id", Uri(), "urn:ok")
        assert not check(errors, "id", Uri(), "not a uri")
        assert list(errors) == ["id"]
