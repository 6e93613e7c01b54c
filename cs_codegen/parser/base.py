"""
Base class for the line-oriented parsers.

Provides the keyword tables, the line predicates the class parser's
classification cascade is built from, and the helpers shared by the
member parsers (brace closures, positional signature tokens).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..errors import MalformedInputError
from ..utils import split_top_level

SPACES_PER_INDENT = 4

ACCESS_KEYWORDS = ("public", "private", "protected", "internal")

MODIFIER_KEYWORDS = (
    "const",
    "sealed",
    "virtual",
    "abstract",
    "static",
    "override",
    "readonly",
    "delegate",
    "event",
    "partial",
    "new",
    "extern",
    "unsafe",
    "volatile",
    "async",
)

# Tokens that never name a base type in a class header
ALL_KEYWORDS = frozenset(ACCESS_KEYWORDS + MODIFIER_KEYWORDS + ("class", "get", "set", "where"))

_TYPE_DECLARATION_PATTERN = re.compile(r"\b(class|struct|interface|enum)\s+\w")
_DIRECTIVE_PATTERN = re.compile(r"^\s*using\s+([\w.]+)\s*;\s*$")


@dataclass
class Signature:
    """Access keyword, modifier(s), type and name read off a declaration line."""

    access: str
    prefix: str
    type_name: str
    name: str


class Parser:
    """Shared predicates and helpers. Indent arguments are nesting levels."""

    @staticmethod
    def indent_pattern(indent: int) -> str:
        """Regex prefix matching exactly ``indent`` levels of indentation."""
        if indent <= 0:
            return r"^(?=\S)"
        return rf"^ {{{indent * SPACES_PER_INDENT}}}(?=\S)"

    def _matches(self, pattern: str, line: str, indent: int) -> bool:
        return re.match(self.indent_pattern(indent) + pattern, line) is not None

    # Line predicates

    def is_method(self, line: str, indent: int = 0) -> bool:
        return self._matches(r"\w[^=;()]*\(.*\)\s*$", line, indent)

    def is_class(self, line: str, indent: int = 0) -> bool:
        return self._matches(r"(?:\w+\s+)*class\s+\w", line, indent)

    def is_attribute(self, line: str, indent: int = 0) -> bool:
        return self._matches(r"\[.*\]\s*$", line, indent)

    def is_auto_property(self, line: str, indent: int = 0) -> bool:
        return self._matches(r"\w.*\{\s*(?:get|set)\s*;", line, indent)

    def is_one_line_property(self, line: str, indent: int = 0) -> bool:
        return self._matches(r"\w.*\w\s+\{\s*get\s*\{.*\}\s*$", line, indent)

    def is_field(self, line: str, indent: int = 0) -> bool:
        if self.is_auto_property(line, indent) or self.is_one_line_property(line, indent):
            return False
        return self._matches(r"\w+\s.*;", line, indent)

    def is_property(self, line: str, indent: int = 0) -> bool:
        if self.is_class(line, indent) or _TYPE_DECLARATION_PATTERN.search(line):
            return False
        return self._matches(r"\w.*\w\s*$", line, indent)

    def is_comment(self, line: str, indent: int = 0) -> bool:
        return self._matches(r"//", line, indent)

    def region_open(self, line: str, indent: int) -> str | None:
        """Get the region name if the line opens a region at this indent."""
        match = re.match(self.indent_pattern(indent) + r"#region\s+(.*?)\s*$", line)
        return match.group(1) if match else None

    def region_close(self, line: str, indent: int) -> bool:
        return self._matches(r"#endregion\b", line, indent)

    # Keyword checks

    @staticmethod
    def is_access_keyword(word: str) -> bool:
        return word in ACCESS_KEYWORDS

    @staticmethod
    def is_modifier(word: str) -> bool:
        return word in MODIFIER_KEYWORDS

    @staticmethod
    def is_keyword(word: str) -> bool:
        return word in ALL_KEYWORDS

    # Helpers

    @staticmethod
    def filter(line: str, pattern: str, group: int = 1) -> str:
        """Get a capture group of the first match, or "" if nothing matches."""
        match = re.search(pattern, line)
        if match and match.lastindex and match.lastindex >= group:
            return match.group(group) or ""
        return ""

    @staticmethod
    def get_directives(source: str) -> list[str]:
        """Get the namespaces of every "using X;" line."""
        directives = []
        for line in source.split("\n"):
            match = _DIRECTIVE_PATTERN.match(line)
            if match:
                directives.append(match.group(1))
        return directives

    def closure(self, lines: list[str], start: int, indent: int) -> tuple[list[str], int]:
        """Get the lines between a declaration's braces.

        The opening brace must be the first non-blank line after ``start``
        and both braces must sit at exactly ``indent``. Returns the inner
        lines and the index of the closing brace line (``start`` when the
        declaration has no block).
        """
        open_pattern = re.compile(self.indent_pattern(indent) + r"\{")
        close_pattern = re.compile(self.indent_pattern(indent) + r"\}")

        i = start + 1
        while i < len(lines) and not lines[i].strip():
            i += 1
        if i >= len(lines) or not open_pattern.match(lines[i]):
            return [], start

        inner = []
        for j in range(i + 1, len(lines)):
            if close_pattern.match(lines[j]):
                return inner, j
            inner.append(lines[j])
        return inner, len(lines) - 1

    def span_start(self, lines: list[str], start: int, indent: int) -> int:
        """Walk back from a declaration over the attribute lines that decorate it."""
        while start > 0 and self.is_attribute(lines[start - 1], indent):
            start -= 1
        return start

    @staticmethod
    def dedent(line: str, base: str) -> str:
        """Strip a block's base indentation, keeping any deeper nesting."""
        if line.startswith(base):
            return line[len(base) :].rstrip()
        return line.strip()

    def parse_signature(self, line: str) -> Signature:
        """Read access, modifier, type and name by position.

        Only the first two tokens are checked for keywords; type and name are
        the two tokens after the leading keywords:
            0 keywords -> type=word[0], name=word[1]
            1 keyword  -> type=word[1], name=word[2]
            2 keywords -> type=word[2], name=word[3]

        Raises:
            MalformedInputError: If the line has no type or no name token
        """
        words = [w for w in split_top_level(line.strip(), " ") if w]
        access = ""
        modifiers = []
        keywords = 0
        for word in words[:2]:
            if self.is_access_keyword(word) and not access:
                access = word
            elif self.is_modifier(word):
                modifiers.append(word)
            else:
                break
            keywords += 1

        if len(words) < keywords + 2:
            raise MalformedInputError("Expected a type and a name", line)

        name = re.split(r"[=;{]", words[keywords + 1])[0]
        if not name:
            raise MalformedInputError("Expected a name", line)
        return Signature(access=access, prefix=" ".join(modifiers), type_name=words[keywords], name=name)
