"""
In-place expansion of SERIALIZABLE(...) invocations in C++ source.

Replaces every invocation such as

    struct Car {
        SERIALIZABLE
        (
            (std::string) name,
            (int) age
        )
    };

with the declarations and serialize routine produced by the C++ backend,
indented to the column of the invocation line. Invocations on
preprocessor directive lines, inside comments and inside string or
character literals are left untouched. Comments between the parentheses
of an invocation are dropped before the field list is parsed.
"""

import logging
import re
from typing import List, Optional, Tuple

from fieldlist.backends.cpp_generator import generate_body
from fieldlist.compiler import compile_field_list
from fieldlist.config import GeneratorConfig
from fieldlist.errors import FieldListSyntaxError


LOGGER = logging.getLogger("fieldlist.expand")

DEFAULT_MACRO = "SERIALIZABLE"


COMMENT = "comment"
LITERAL = "literal"
DIRECTIVE = "directive"

Span = Tuple[int, int, str]

RAW_PREFIXES = {"R", "LR", "uR", "UR", "u8R"}
_IDENT_CHARS = re.compile(r"[A-Za-z0-9_]")
_PP_NUMBER_CHARS = re.compile(r"[A-Za-z0-9_.']")


def _token_before(text: str, pos: int, chars: "re.Pattern[str]") -> int:
    """Start of the run of ``chars`` that ends just before ``pos``."""
    start = pos
    while start > 0 and chars.match(text[start - 1]):
        start -= 1
    return start


def _end_of_directive(text: str, pos: int) -> int:
    end = pos
    # directives continue across backslash-newline
    while end < len(text):
        nl = text.find("\n", end)
        if nl == -1:
            return len(text)
        if text[nl - 1] == "\\":
            end = nl + 1
            continue
        return nl
    return end


def _end_of_quoted(text: str, pos: int, quote: str) -> int:
    """End of a '...' or "..." literal; an unescaped newline also closes it."""
    end = pos + 1
    while end < len(text) and text[end] not in (quote, "\n"):
        end += 2 if text[end] == "\\" else 1
    if end < len(text) and text[end] == quote:
        return end + 1
    return min(end, len(text))


def _raw_string_end(text: str, pos: int) -> int:
    """End of R"delim(...)delim" whose opening quote is at ``pos``; -1 if malformed."""
    open_paren = text.find("(", pos + 1)
    if open_paren == -1 or "\n" in text[pos + 1:open_paren]:
        return -1
    terminator = ")" + text[pos + 1:open_paren] + '"'
    close = text.find(terminator, open_paren + 1)
    return len(text) if close == -1 else close + len(terminator)


def _scan_spans(text: str) -> List[Span]:
    """Spans covered by comments, literals and directive lines, in order."""
    spans: List[Span] = []
    pos = 0
    line_start = True
    while pos < len(text):
        ch = text[pos]
        if line_start and ch == "#":
            end = _end_of_directive(text, pos)
            spans.append((pos, end, DIRECTIVE))
            pos = end
            continue
        if text.startswith("//", pos):
            end = text.find("\n", pos)
            end = len(text) if end == -1 else end
            spans.append((pos, end, COMMENT))
            pos = end
            continue
        if text.startswith("/*", pos):
            end = text.find("*/", pos + 2)
            end = len(text) if end == -1 else end + 2
            spans.append((pos, end, COMMENT))
            pos = end
            continue
        if ch == '"':
            prefix_start = _token_before(text, pos, _IDENT_CHARS)
            end = -1
            if text[prefix_start:pos] in RAW_PREFIXES:
                end = _raw_string_end(text, pos)
            if end == -1:
                prefix_start, end = pos, _end_of_quoted(text, pos, '"')
            spans.append((prefix_start, end, LITERAL))
            pos = end
            line_start = False
            continue
        if ch == "'":
            # digit separator inside a number such as 1'000'000
            number_start = _token_before(text, pos, _PP_NUMBER_CHARS)
            if number_start < pos and text[number_start].isdigit():
                pos += 1
                continue
            end = _end_of_quoted(text, pos, "'")
            spans.append((pos, end, LITERAL))
            pos = end
            line_start = False
            continue
        if ch == "\n":
            line_start = True
        elif not ch.isspace():
            line_start = False
        pos += 1
    return spans


def _span_at(offset: int, spans: List[Span]) -> Optional[Span]:
    for span in spans:
        if span[0] <= offset < span[1]:
            return span
    return None


def _find_close(text: str, open_pos: int, spans: List[Span]) -> int:
    """Matching ')' for the '(' at ``open_pos``, ignoring comments and literals."""
    depth = 0
    pos = open_pos
    while pos < len(text):
        span = _span_at(pos, spans)
        if span is not None:
            pos = span[1]
            continue
        if text[pos] == "(":
            depth += 1
        elif text[pos] == ")":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return -1


def _blank_comments(text: str, start: int, end: int, spans: List[Span]) -> str:
    """
    ``text[start:end]`` with comments replaced by spaces.

    Newlines are kept so offsets and line numbers still point at ``text``.
    """
    chars = list(text[start:end])
    for span_start, span_end, kind in spans:
        if kind != COMMENT or span_end <= start or span_start >= end:
            continue
        for pos in range(max(span_start, start), min(span_end, end)):
            if chars[pos - start] != "\n":
                chars[pos - start] = " "
    return "".join(chars)


def _line_indent(text: str, offset: int) -> str:
    line_start = text.rfind("\n", 0, offset) + 1
    match = re.match(r"[ \t]*", text[line_start:offset])
    return match.group(0) if match else ""


def _indent_continuation(block: str, indent: str) -> str:
    lines = block.split("\n")
    out = [lines[0]]
    for line in lines[1:]:
        out.append(indent + line if line else line)
    return "\n".join(out)


def expand_source(
    text: str,
    macro: str = DEFAULT_MACRO,
    config: Optional[GeneratorConfig] = None,
) -> str:
    """
    Expand every ``macro(...)`` invocation in C++ source text.

    Args:
        text: Source text
        macro: Invocation name to look for
        config: Generator settings

    Returns:
        Source text with invocations replaced

    Raises:
        FieldListSyntaxError: Malformed or unterminated invocation; offsets
            refer to ``text``
        FieldLimitError: An invocation holds more fields than allowed
    """
    config = config or GeneratorConfig()
    pattern = re.compile(rf"\b{re.escape(macro)}\s*\(")
    spans = _scan_spans(text)

    pieces: List[str] = []
    cursor = 0
    count = 0
    for match in pattern.finditer(text):
        if match.start() < cursor or _span_at(match.start(), spans) is not None:
            continue
        open_pos = match.end() - 1
        close_pos = _find_close(text, open_pos, spans)
        if close_pos == -1:
            raise FieldListSyntaxError(
                f"unterminated {macro}( invocation", offset=open_pos, source=text
            )

        args = _blank_comments(text, open_pos + 1, close_pos, spans)
        try:
            compiled = compile_field_list(args, config)
        except FieldListSyntaxError as e:
            offset = open_pos + 1 + e.offset if e.offset is not None else open_pos
            raise FieldListSyntaxError(e.message, e.entry_index, offset, text) from e

        expansion = generate_body(compiled, config)
        pieces.append(text[cursor:match.start()])
        pieces.append(_indent_continuation(expansion, _line_indent(text, match.start())))
        cursor = close_pos + 1
        count += 1

    pieces.append(text[cursor:])
    LOGGER.debug("expanded %d %s invocations", count, macro)
    return "".join(pieces)


def expand_file(
    path: str,
    output: Optional[str] = None,
    macro: str = DEFAULT_MACRO,
    config: Optional[GeneratorConfig] = None,
) -> str:
    """Expand a source file; write to ``output`` when given. Returns the expanded text."""
    with open(path, 'r', encoding='utf-8') as f:
        text = f.read()
    expanded = expand_source(text, macro=macro, config=config)
    if output is not None:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(expanded)
    return expanded


__all__ = ["DEFAULT_MACRO", "expand_source", "expand_file"]
