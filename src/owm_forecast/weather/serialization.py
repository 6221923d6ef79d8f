"""JSON, YAML and TOML output for the normalized models."""

from enum import Enum
from typing import Any, Dict, Union

import tomli_w
import yaml
from pydantic import BaseModel

from owm_forecast.weather.models import WeatherSnapshot


class OutputFormat(str, Enum):
    """Structured output formats."""
    JSON = "json"
    YAML = "yaml"
    TOML = "toml"


MEDIA_TYPES: Dict[OutputFormat, str] = {
    OutputFormat.JSON: "application/json",
    OutputFormat.YAML: "application/yaml",
    OutputFormat.TOML: "application/toml",
}


def to_json(model: BaseModel) -> bytes:
    """Serialize a model to JSON, keeping absent sections as null."""
    return model.model_dump_json().encode("utf-8")


def to_yaml(model: BaseModel) -> bytes:
    """Serialize a model to YAML with the same field names as JSON."""
    data = model.model_dump(mode="json")
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True).encode("utf-8")


def _strip_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _strip_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_strip_none(item) for item in value if item is not None]
    return value


def to_toml(model: BaseModel) -> bytes:
    """Serialize a model to TOML.

    TOML has no null, so absent values are left out of the document.
    """
    data = _strip_none(model.model_dump(mode="json"))
    return tomli_w.dumps(data).encode("utf-8")


_SERIALIZERS = {
    OutputFormat.JSON: to_json,
    OutputFormat.YAML: to_yaml,
    OutputFormat.TOML: to_toml,
}


def serialize(model: BaseModel, output_format: Union[OutputFormat, str]) -> bytes:
    """Serialize a model in the requested format.

    Args:
        model: Snapshot or lookup result
        output_format: json, yaml or toml

    Returns:
        Encoded document

    Raises:
        ValueError: If the format is not supported
    """
    return _SERIALIZERS[OutputFormat(output_format)](model)


def snapshot_from_json(data: Union[bytes, str]) -> WeatherSnapshot:
    """Decode a JSON serialization back into a WeatherSnapshot."""
    return WeatherSnapshot.model_validate_json(data)
