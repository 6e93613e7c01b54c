"""
Line-oriented parsers rebuilding member trees from rendered class text.
"""

from __future__ import annotations

from ..errors import MalformedInputError
from .base import Parser, Signature
from .class_parser import ClassParser, parse_class
from .members import FieldParser, MethodParameterParser, MethodParser, PropertyParser

__all__ = [
    "ClassParser",
    "FieldParser",
    "MalformedInputError",
    "MethodParameterParser",
    "MethodParser",
    "Parser",
    "PropertyParser",
    "Signature",
    "parse_class",
]
