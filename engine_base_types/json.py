"""
JSON encoding for the engine API types.
"""

from typing import Any, AnyStr, List

from .pydantic import EngineBaseModel, EngineRootModel


def to_json(
    input: EngineBaseModel | EngineRootModel | AnyStr | List[Any],
) -> Any:
    """
    Converts a model to its json data representation.
    """
    if isinstance(input, list):
        return [to_json(item) for item in input]
    elif isinstance(input, (EngineBaseModel, EngineRootModel)):
        return input.model_dump(mode="json", by_alias=True)
    else:
        return str(input)
