"""
This module provides various mixins for Pydantic models.
"""

from pydantic import BaseModel


class ModelCustomizationsMixin:
    """
    A mixin that customizes the behavior of pydantic models. Any pydantic
    configuration override that must apply to all models
    should be placed here.

    This mixin is applied to both `EngineBaseModel` and `EngineRootModel`.
    """

    def __repr_args__(self):
        """
        Generate a list of attribute-value pairs for the object representation.

        Only the model's own fields are listed, so a model embedding another
        one shows the embedded model as a single nested value rather than its
        flattened keys. Attributes set to None are left out.

        Returns:
            List[Tuple[str, Any]]: A list of tuples where each tuple contains an attribute name
                                   and its corresponding non-None value.
        """
        repr_attrs = []
        for a in self.__class__.model_fields:  # type: ignore[attr-defined]
            v = getattr(self, a)
            match v:
                case None:
                    continue
                case list() | dict() | BaseModel():
                    repr_attrs.append((a, v))
                case _:
                    repr_attrs.append((a, str(v)))
        return repr_attrs
