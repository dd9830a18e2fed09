"""Dart directive scanner: import/export directives with exact offsets, no parser dependency."""

import logging
import re

from feature_boundary_linter.domain.entities import Directive, DirectiveKind, SourceSpan
from feature_boundary_linter.domain.protocols import DirectiveScannerProtocol

logger = logging.getLogger(__name__)

# Matched against masked text, where comments and string bodies are blanked out.
_DIRECTIVE_KEYWORD = re.compile(r"(?<![\w$.])(import|export)(?=\s*r?['\"])")

_KINDS: dict[str, DirectiveKind] = {
    "import": DirectiveKind.IMPORT,
    "export": DirectiveKind.EXPORT,
}


class DartDirectiveScanner(DirectiveScannerProtocol):
    """
    Finds import/export directives in Dart source.

    Comments and string literals are masked first (nested block comments, raw and
    triple-quoted strings, ${...} interpolation) so directive keywords and
    terminating semicolons are only recognised in code. A URI literal containing
    interpolation yields uri=None.
    """

    def scan(self, source: str) -> list[Directive]:
        masked = self.mask(source)
        directives: list[Directive] = []
        for match in _DIRECTIVE_KEYWORD.finditer(masked):
            directive = self._directive_at(source, masked, match.start(), match.group(1))
            if directive is not None:
                directives.append(directive)
        return directives

    def _directive_at(
        self, source: str, masked: str, keyword_start: int, keyword: str
    ) -> Directive | None:
        literal_start = keyword_start + len(keyword)
        while source[literal_start].isspace():
            literal_start += 1
        literal = DartDirectiveScanner.read_string_literal(source, literal_start)
        if literal is None:
            return None
        literal_end, value, quote = literal
        semicolon = masked.find(";", literal_end)
        if semicolon == -1:
            logger.debug("Unterminated %s directive at offset %d", keyword, keyword_start)
            return None
        statement_end = semicolon + 1
        return Directive(
            kind=_KINDS[keyword],
            uri=value,
            uri_span=SourceSpan(offset=literal_start, length=literal_end - literal_start),
            statement_text=source[keyword_start:statement_end],
            statement_span=SourceSpan(offset=keyword_start, length=statement_end - keyword_start),
            quote=quote,
        )

    @staticmethod
    def read_string_literal(source: str, start: int) -> tuple[int, str | None, str] | None:
        """
        Read the string literal at start.

        Returns (end offset, value, quote). value is None when the literal
        interpolates. Returns None if there is no literal at start or it never closes.
        """
        index = start
        raw = source.startswith("r", index)
        if raw:
            index += 1
        if index >= len(source) or source[index] not in "'\"":
            return None
        quote = source[index] * 3 if source.startswith(source[index] * 3, index) else source[index]
        index += len(quote)
        chars: list[str] = []
        interpolated = False
        while index < len(source):
            if source.startswith(quote, index):
                value = None if interpolated else "".join(chars)
                return (index + len(quote), value, quote)
            char = source[index]
            if len(quote) == 1 and char == "\n":
                return None
            if not raw and char == "\\" and index + 1 < len(source):
                chars.append(source[index + 1])
                index += 2
                continue
            if not raw and char == "$":
                interpolated = True
            chars.append(char)
            index += 1
        return None

    @staticmethod
    def mask(source: str) -> str:
        """Blank comments and string bodies with spaces, keeping newlines, quotes and offsets."""
        out = list(source)
        length = len(source)
        index = 0

        def blank(begin: int, end: int) -> None:
            for position in range(begin, min(end, length)):
                if out[position] != "\n":
                    out[position] = " "

        while index < length:
            if source.startswith("//", index):
                end = source.find("\n", index)
                end = length if end == -1 else end
                blank(index, end)
                index = end
            elif source.startswith("/*", index):
                end = DartDirectiveScanner._block_comment_end(source, index)
                blank(index, end)
                index = end
            elif source[index] in "'\"":
                raw = index > 0 and source[index - 1] == "r" and not (
                    index > 1 and (source[index - 2].isalnum() or source[index - 2] in "_$")
                )
                end = DartDirectiveScanner._string_end(source, index, raw)
                quote_len = 3 if source.startswith(source[index] * 3, index) else 1
                blank(index + quote_len, end - quote_len)
                index = end
            else:
                index += 1
        return "".join(out)

    @staticmethod
    def _block_comment_end(source: str, start: int) -> int:
        depth = 0
        index = start
        while index < len(source):
            if source.startswith("/*", index):
                depth += 1
                index += 2
            elif source.startswith("*/", index):
                depth -= 1
                index += 2
                if depth == 0:
                    return index
            else:
                index += 1
        return len(source)

    @staticmethod
    def _string_end(source: str, start: int, raw: bool) -> int:
        """Offset just past the closing quote of the literal opening at start."""
        quote = source[start] * 3 if source.startswith(source[start] * 3, start) else source[start]
        index = start + len(quote)
        while index < len(source):
            if source.startswith(quote, index):
                return index + len(quote)
            char = source[index]
            if len(quote) == 1 and char == "\n":
                return index
            if not raw and char == "\\":
                index += 2
                continue
            if not raw and source.startswith("${", index):
                index = DartDirectiveScanner._interpolation_end(source, index + 2)
                continue
            index += 1
        return len(source)

    @staticmethod
    def _interpolation_end(source: str, start: int) -> int:
        depth = 1
        index = start
        while index < len(source) and depth:
            char = source[index]
            if char in "'\"":
                index = DartDirectiveScanner._string_end(source, index, raw=False)
                continue
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
            index += 1
        return index
