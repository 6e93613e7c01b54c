"""
Text helpers shared by the renderer, the parser and the builder.
"""

import re

INDENT = "    "

# Explicitly supported nesting levels; anything else renders flush left
_INDENT_LEVELS = ("", INDENT, INDENT * 2, INDENT * 3)

_NAME_STRIP_PATTERN = re.compile(r"[\s*()\[\]-]")
_NEWLINE_PATTERN = re.compile(r"\t|\n|\r")

# Statements that open or continue a block and never take a terminator
_CONTROL_PATTERN = re.compile(r"^(if|else|for|foreach|while|switch|try|catch|finally|do|lock|using)\b")


def get_indent(level: int) -> str:
    """Map a nesting level to its whitespace prefix.

    Examples:
        0 -> ""
        2 -> "        "
        7 -> ""
    """
    if 0 <= level < len(_INDENT_LEVELS):
        return _INDENT_LEVELS[level]
    return ""


def sanitize_name(name: str) -> str:
    """Strip whitespace, brackets, parentheses, '*' and '-' from an identifier.

    Examples:
        "Foo Bar()" -> "FooBar"
        "items[]" -> "items"
    """
    if not name:
        return ""
    return _NAME_STRIP_PATTERN.sub("", name)


def remove_newlines(text: str) -> str:
    """Remove tabs and line breaks so a value fits on a single line."""
    return _NEWLINE_PATTERN.sub("", text)


def is_control_statement(line: str) -> bool:
    """Check if a body line opens, closes or labels a block."""
    stripped = line.strip()
    if stripped.startswith("//") or stripped.startswith("#"):
        return True
    if stripped.endswith("{") or stripped.endswith("}") or stripped.endswith(":"):
        return True
    return bool(_CONTROL_PATTERN.match(stripped))


def with_terminator(value: str) -> str:
    """Append a statement terminator unless the line does not need one.

    Lines that already contain ';', whitespace-only markers, lines shorter
    than two characters and control constructs are returned unchanged.

    Examples:
        "x=1" -> "x=1;"
        "x=1;" -> "x=1;"
        " " -> " "
        "if (ready)" -> "if (ready)"
    """
    if ";" in value or value == "\\n" or not value.strip() or len(value) < 2:
        return value
    if is_control_statement(value):
        return value
    return value + ";"


def bracket_attribute(attribute: str) -> str:
    """Wrap an attribute in [...] unless it is already bracketed."""
    text = remove_newlines(attribute).strip()
    if text.startswith("[") and text.endswith("]"):
        return text
    return f"[{text}]"


def unbracket_attribute(line: str) -> str:
    """Strip the outer brackets from an attribute line."""
    text = line.strip()
    if text.startswith("[") and text.endswith("]"):
        return text[1:-1].strip()
    return text


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split text on a separator that is not nested in <>, (), [] or {}.

    Separators and brackets inside "..." or '...' literals are ignored.

    Examples:
        "int a, Dictionary<string, int> b" -> ["int a", " Dictionary<string, int> b"]
        "public List<int> Items" (separator " ") -> ["public", "List<int>", "Items"]
        'string s = "a, (b", int n' -> ['string s = "a, (b"', " int n"]
    """
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    quote = None
    escaped = False
    for char in text:
        if quote:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == quote:
                quote = None
            continue
        if char in "\"'":
            quote = char
        elif char in "<([{":
            depth += 1
        elif char in ">)]}" and depth > 0:
            depth -= 1
        if char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts
