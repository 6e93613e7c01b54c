"""
Exceptions raised by the code generator.
"""

from __future__ import annotations


class CodeGenError(Exception):
    """Base class for every error raised by cs_codegen."""

    pass


class InvalidMemberError(CodeGenError):
    """Raised when a member cannot be rendered or is used as the wrong kind.

    This can happen when:
    - A non-comment member has an empty name once sanitized
    - A kind-specific mutator is called on a member of another kind
    """

    pass


class MalformedInputError(CodeGenError):
    """Raised when a signature line does not have the tokens the parser expects.

    Attributes:
        line: The offending source line
    """

    def __init__(self, message: str, line: str = ""):
        super().__init__(f"{message}: {line.strip()!r}" if line else message)
        self.line = line


class OutputValidationError(CodeGenError):
    """Raised when generated text fails the structural checks before a write."""

    pass
