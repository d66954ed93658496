"""Base pydantic classes used to define the models of the engine API types."""

from typing import Any, ClassVar, Dict, FrozenSet, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    RootModel,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .mixins import ModelCustomizationsMixin

RootModelRootType = TypeVar("RootModelRootType")


class EngineBaseModel(BaseModel, ModelCustomizationsMixin):
    """Base model for all models of the engine API types."""

    pass


class EngineRootModel(RootModel[RootModelRootType], ModelCustomizationsMixin):
    """Base root model for all models of the engine API types."""

    root: Any


class CamelModel(EngineBaseModel):
    """
    A base model that converts field names to camel case when serializing.

    For example, the field name `parent_hash` in a Python model will be represented
    as `parentHash` when it is serialized to json.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )


class FlatCamelModel(CamelModel):
    """
    A camel case model that can embed another model and render it flattened.

    When `embedded_field` names a field holding another `FlatCamelModel`, the
    embedded model's keys are written inline, ahead of this model's own keys,
    instead of as a nested object. On input the keys known to the embedded
    model are gathered back into the nested field before validation, so that
    the rest of the keys are checked against this model alone (and rejected
    if the model forbids extra keys). The embedded model itself is only
    accepted as an instance under the field name, a nested object in a
    document is rejected.

    Fields listed in `omit_if_none` are left out of the serialized output
    when their value is None; every other None is written as null.
    """

    embedded_field: ClassVar[str | None] = None
    omit_if_none: ClassVar[FrozenSet[str]] = frozenset()

    @classmethod
    def flat_field_names(cls) -> FrozenSet[str]:
        """Return every key, by name and by alias, accepted at this model's level."""
        names: set[str] = set()
        for name, field in cls.model_fields.items():
            if name == cls.embedded_field:
                names |= field.annotation.flat_field_names()  # type: ignore[union-attr]
                continue
            names.add(name)
            if field.alias is not None:
                names.add(field.alias)
        return frozenset(names)

    @model_validator(mode="before")
    @classmethod
    def nest_embedded_model(cls, data: Any) -> Any:
        """Gather the embedded model's keys into the embedded field."""
        if cls.embedded_field is None or not isinstance(data, dict):
            return data
        embedded_type = cls.model_fields[cls.embedded_field].annotation
        if isinstance(data.get(cls.embedded_field), embedded_type):  # type: ignore[arg-type]
            return data
        for key in (cls.embedded_field, to_camel(cls.embedded_field)):
            if key in data:
                raise ValueError(
                    f"unexpected key '{key}', the fields of "
                    f"{embedded_type.__name__} are written inline"  # type: ignore[union-attr]
                )
        embedded_names = embedded_type.flat_field_names()  # type: ignore[union-attr]
        embedded = {k: v for k, v in data.items() if k in embedded_names}
        rest = {k: v for k, v in data.items() if k not in embedded_names}
        return {cls.embedded_field: embedded, **rest}

    @model_serializer(mode="wrap")
    def flatten_embedded_model(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        """Write the embedded model's keys inline and drop omittable Nones."""
        data = handler(self)
        if self.embedded_field is not None:
            for key in (self.embedded_field, to_camel(self.embedded_field)):
                if key in data:
                    embedded = data.pop(key)
                    data = {**embedded, **data}
                    break
        for name in self.omit_if_none:
            for key in (name, to_camel(name)):
                if key in data and data[key] is None:
                    del data[key]
        return data
