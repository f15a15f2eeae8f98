"""Converters from legacy input models to the canonical model."""

from openapigen.converters.swagger2 import Swagger2Converter, convert_schema_dict, convert_swagger

__all__ = ["Swagger2Converter", "convert_schema_dict", "convert_swagger"]
