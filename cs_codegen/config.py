"""
Configuration for the code generator and its command line front end.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GeneratorConfig:
    """Configuration options for rendering and editing class files."""

    # Prefix of the backing field a property derives from its name
    backing_field_prefix: str = "m_"

    # Region the builder targets when inserting properties
    properties_region: str = "Properties"

    # Add a comment with the generating command line at the top of the file
    add_generation_comment: bool = True

    # Check brace balance and type definitions before writing a file
    validate_output: bool = True

    # Indentation level of the class header when the file has no namespace
    parse_indent: int = 0

    @staticmethod
    def from_dict(d: dict) -> GeneratorConfig:
        """Create a config from a dictionary."""
        config = GeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "backing_field_prefix": self.backing_field_prefix,
            "properties_region": self.properties_region,
            "add_generation_comment": self.add_generation_comment,
            "validate_output": self.validate_output,
            "parse_indent": self.parse_indent,
        }
