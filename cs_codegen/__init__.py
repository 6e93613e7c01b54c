"""C# Class Code Generator

A Python package for rendering C#-shaped class files from a member model,
parsing them back into that model, and splicing new members or statements
into already generated files.
"""

__version__ = "1.0.0"

from .builder import ClassBuilder, append_statements_to_method, insert_member
from .config import GeneratorConfig
from .errors import CodeGenError, InvalidMemberError, MalformedInputError, OutputValidationError
from .model import AccessLevel, Member, MemberKind, Parameter, member_from_dict, member_to_dict
from .parser import ClassParser, parse_class
from .writer import AtomicWriter, read_all_text

__all__ = [
    "AccessLevel",
    "AtomicWriter",
    "ClassBuilder",
    "ClassParser",
    "CodeGenError",
    "GeneratorConfig",
    "InvalidMemberError",
    "MalformedInputError",
    "Member",
    "MemberKind",
    "OutputValidationError",
    "Parameter",
    "append_statements_to_method",
    "insert_member",
    "member_from_dict",
    "member_to_dict",
    "parse_class",
    "read_all_text",
]
