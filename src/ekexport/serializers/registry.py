"""Lookup of serializers by export format."""

from typing import Any

from ..utils.exceptions import ConfigurationError
from .base import Serializer
from .ics_serializer import ICSSerializer
from .json_serializer import JSONSerializer

SERIALIZERS: dict[str, type[Serializer]] = {
    ICSSerializer.format_name: ICSSerializer,
    JSONSerializer.format_name: JSONSerializer,
}


def get_serializer(fmt: str, **options: Any) -> Serializer:
    """
    Create the serializer for an export format.

    Args:
        fmt: Format name ("ics" or "json", case-insensitive)
        **options: Constructor arguments for the serializer

    Returns:
        Serializer instance

    Raises:
        ConfigurationError: If the format is unknown
    """
    try:
        serializer_cls = SERIALIZERS[fmt.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown export format '{fmt}'. Must be one of: {sorted(SERIALIZERS)}"
        ) from None
    return serializer_cls(**options)
