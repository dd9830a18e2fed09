"""Unit tests for DartDirectiveScanner."""

import unittest

from feature_boundary_linter.domain.entities import DirectiveKind, SourceSpan
from feature_boundary_linter.infrastructure.gateways.dart_directive_scanner import (
    DartDirectiveScanner,
)


class TestDartDirectiveScanner(unittest.TestCase):
    def setUp(self) -> None:
        self.scanner = DartDirectiveScanner()

    def test_imports_and_exports_with_spans(self) -> None:
        source = (
            "library auth;\n"
            "\n"
            "import 'package:flutter/material.dart';\n"
            'export "src/auth.dart" show Auth;\n'
        )
        directives = self.scanner.scan(source)
        self.assertEqual([d.kind for d in directives], [DirectiveKind.IMPORT, DirectiveKind.EXPORT])
        first, second = directives
        self.assertEqual(first.uri, "package:flutter/material.dart")
        self.assertEqual(source[first.uri_span.offset:first.uri_span.end], "'package:flutter/material.dart'")
        self.assertEqual(first.statement_text, "import 'package:flutter/material.dart';")
        self.assertEqual(first.statement_span, SourceSpan(15, len(first.statement_text)))
        self.assertEqual(second.uri, "src/auth.dart")
        self.assertEqual(second.quote, '"')
        self.assertEqual(second.statement_text, 'export "src/auth.dart" show Auth;')

    def test_directives_in_comments_are_ignored(self) -> None:
        source = (
            "// import 'package:a/feature_x/data/x.dart';\n"
            "/* import 'package:a/b.dart'; /* nested */ export 'c.dart'; */\n"
            "/// import 'doc.dart';\n"
            "import 'real.dart';\n"
        )
        self.assertEqual([d.uri for d in self.scanner.scan(source)], ["real.dart"])

    def test_directives_in_strings_are_ignored(self) -> None:
        source = (
            "const a = \"import 'fake.dart';\";\n"
            "const b = '''\nexport 'fake2.dart';\n''';\n"
            "import 'real.dart';\n"
        )
        self.assertEqual([d.uri for d in self.scanner.scan(source)], ["real.dart"])

    def test_semicolon_inside_uri(self) -> None:
        directives = self.scanner.scan("import 'odd;name.dart' as odd;\n")
        self.assertEqual(len(directives), 1)
        self.assertEqual(directives[0].uri, "odd;name.dart")
        self.assertEqual(directives[0].statement_text, "import 'odd;name.dart' as odd;")

    def test_multi_line_statement(self) -> None:
        source = "import 'package:a/a.dart'\n    show A,\n    B;\n"
        directive = self.scanner.scan(source)[0]
        self.assertEqual(directive.statement_span, SourceSpan(0, len(source) - 1))

    def test_interpolated_uri_is_unresolvable(self) -> None:
        directives = self.scanner.scan("import 'package:a/${name}.dart';\n")
        self.assertEqual(len(directives), 1)
        self.assertIsNone(directives[0].uri)

    def test_raw_string_dollar_is_literal(self) -> None:
        directives = self.scanner.scan("import r'package:a/$b.dart';\n")
        self.assertEqual(directives[0].uri, "package:a/$b.dart")

    def test_identifiers_are_not_keywords(self) -> None:
        source = "final reimport = 'x';\nvar x = obj.import('y');\nimport 'z.dart';\n"
        self.assertEqual([d.uri for d in self.scanner.scan(source)], ["z.dart"])

    def test_unterminated_directive_is_skipped(self) -> None:
        self.assertEqual(self.scanner.scan("import 'a.dart'"), [])

    def test_crlf_offsets(self) -> None:
        source = "// header\r\nimport 'a.dart';\r\n"
        directive = self.scanner.scan(source)[0]
        self.assertEqual(directive.statement_span.offset, 11)

    def test_read_string_literal(self) -> None:
        self.assertEqual(DartDirectiveScanner.read_string_literal("'a\\'b'", 0), (6, "a'b", "'"))
        self.assertIsNone(DartDirectiveScanner.read_string_literal("x", 0))
        self.assertIsNone(DartDirectiveScanner.read_string_literal("'open\n", 0))

    def test_mask_keeps_length_and_newlines(self) -> None:
        source = "a /* x\ny */ 'str' // c\nb"
        masked = DartDirectiveScanner.mask(source)
        self.assertEqual(len(masked), len(source))
        self.assertEqual(masked.count("\n"), 2)
        self.assertNotIn("str", masked)
        self.assertEqual(masked.count("'"), 2)
