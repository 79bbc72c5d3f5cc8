"""
Tests for the top-level driver.

Tests cover:
- Dispatch of definitions, externs and bare expressions
- Semicolon handling
- One-token error recovery
- Prompting and reporting
- parse_string / parse_file helpers

Author: xwest
"""

import io
import os
import sys
import tempfile
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from kaleidoscope.diagnostics import ListDiagnosticSink
from kaleidoscope.parser import (
    Parser, Number, Variable, Binary, Call, Prototype, Function, ANONYMOUS_FUNCTION_NAME
)
from kaleidoscope.driver import (
    TopLevelDriver, DriverState, TopLevelHandler, ReportingHandler, CollectingHandler,
    parse_string, parse_file
)


class RecordingHandler(TopLevelHandler):
    """Remembers which callback got which construct."""

    def __init__(self):
        self.calls = []

    def handle_definition(self, function):
        self.calls.append(("definition", function))

    def handle_extern(self, prototype):
        self.calls.append(("extern", prototype))

    def handle_top_level_expression(self, function):
        self.calls.append(("expression", function))


class TestTopLevelDriver(unittest.TestCase):

    def setUp(self):
        self.sink = ListDiagnosticSink()
        self.handler = RecordingHandler()

    def _run(self, code: str, **kwargs) -> TopLevelDriver:
        parser = Parser(code, diagnostics=self.sink)
        driver = TopLevelDriver(parser, self.handler, **kwargs)
        self.assertEqual(driver.run(), DriverState.DONE)
        return driver

    def test_dispatch_in_source_order(self):
        driver = self._run("def foo(x y) x+y; extern sin(x); 1+1")
        self.assertEqual([kind for kind, _ in self.handler.calls],
                         ["definition", "extern", "expression"])
        self.assertEqual(driver.handled, 3)
        self.assertEqual(driver.errors, [])

        _, definition = self.handler.calls[0]
        self.assertEqual(
            definition,
            Function(Prototype("foo", ["x", "y"]), Binary('+', Variable("x"), Variable("y"))),
        )
        _, extern = self.handler.calls[1]
        self.assertEqual(extern, Prototype("sin", ["x"]))
        _, expression = self.handler.calls[2]
        self.assertEqual(expression.proto, Prototype(ANONYMOUS_FUNCTION_NAME, []))
        self.assertEqual(expression.body, Binary('+', Number(1), Number(1)))

    def test_semicolons_are_optional(self):
        self._run("def f(x) x extern g() 3")
        self.assertEqual([kind for kind, _ in self.handler.calls],
                         ["definition", "extern", "expression"])

    def test_only_semicolons(self):
        driver = self._run(";;;")
        self.assertEqual(self.handler.calls, [])
        self.assertEqual(driver.errors, [])

    def test_empty_input(self):
        driver = self._run("")
        self.assertEqual(driver.handled, 0)
        self.assertEqual(driver.state, DriverState.DONE)

    def test_unterminated_call_recovers(self):
        driver = self._run("foo(1,2")
        self.assertEqual(len(driver.errors), 1)
        self.assertEqual(len(self.sink), 1)
        self.assertEqual(self.handler.calls, [])

    def test_recovery_continues_with_next_construct(self):
        driver = self._run(") 1+2")
        self.assertEqual(len(driver.errors), 1)
        self.assertEqual(driver.errors[0].code, "P001")
        self.assertEqual(len(self.handler.calls), 1)
        self.assertEqual(self.handler.calls[0][1].body, Binary('+', Number(1), Number(2)))

    def test_each_failure_skips_one_token(self):
        driver = self._run(") ) ;")
        # Both ')' fail, the ';' is simply discarded
        self.assertEqual(len(driver.errors), 2)
        self.assertEqual(len(self.sink), 2)

    def test_bad_definition_then_valid_extern(self):
        driver = self._run("def 1; extern cos(x);")
        self.assertEqual(len(driver.errors), 1)
        self.assertEqual(driver.errors[0].code, "P004")
        self.assertEqual(self.handler.calls, [("extern", Prototype("cos", ["x"]))])

    def test_error_at_end_of_input(self):
        driver = self._run("(")
        self.assertEqual(len(driver.errors), 1)

    def test_deep_nesting_recovers(self):
        depth = 1000
        driver = self._run("(" * depth + "1" + ")" * depth + "; 2")
        self.assertEqual(driver.state, DriverState.DONE)
        self.assertEqual(driver.errors[0].code, "P007")
        self.assertTrue(all(e.code in ("P007", "P001") for e in driver.errors))
        self.assertEqual(len(self.sink), len(driver.errors))
        self.assertEqual(self.handler.calls[-1][1].body, Number(2))

    def test_step(self):
        parser = Parser("1; 2", diagnostics=self.sink)
        driver = TopLevelDriver(parser, self.handler)
        self.assertEqual(driver.step(), DriverState.READY)
        self.assertEqual(len(self.handler.calls), 1)
        driver.step()  # ;
        driver.step()  # 2
        self.assertEqual(len(self.handler.calls), 2)
        self.assertEqual(driver.step(), DriverState.DONE)
        self.assertEqual(driver.step(), DriverState.DONE)

    def test_prompt_before_each_iteration(self):
        prompts = io.StringIO()
        self._run("1;2", prompt="ready> ", prompt_stream=prompts)
        # "1", ";", "2" and the final EOF
        self.assertEqual(prompts.getvalue(), "ready> " * 4)

    def test_no_prompt_by_default(self):
        driver = self._run("1")
        self.assertIsNone(driver.prompt)


class TestHandlers(unittest.TestCase):

    def _drive(self, code, handler):
        parser = Parser(code, diagnostics=ListDiagnosticSink())
        TopLevelDriver(parser, handler).run()

    def test_reporting_handler(self):
        out = io.StringIO()
        self._drive("def f(x) x; extern g(); 1", ReportingHandler(out))
        self.assertEqual(
            out.getvalue(),
            "Parsed a function definition.\nParsed an extern\nParsed a top-level expr\n",
        )

    def test_reporting_handler_dumps_ast(self):
        out = io.StringIO()
        self._drive("extern g(a)", ReportingHandler(out, dump_ast=True))
        self.assertEqual(out.getvalue(), "Parsed an extern\n(prototype g (a))\n")

    def test_collecting_handler(self):
        handler = CollectingHandler()
        self._drive("extern g(); g()", handler)
        self.assertEqual(len(handler.items), 2)
        self.assertEqual(handler.items[1].body, Call("g", []))


class TestParseHelpers(unittest.TestCase):

    def test_parse_string(self):
        session = parse_string("def add(a b) a+b; add(1, 2)")
        self.assertFalse(session.has_errors())
        self.assertEqual(len(session.items), 2)
        self.assertEqual(session.items[1].body, Call("add", [Number(1), Number(2)]))

    def test_parse_string_collects_diagnostics(self):
        session = parse_string("foo(1 2", filename="bad.kal")
        self.assertTrue(session.has_errors())
        self.assertEqual(len(session.diagnostics), len(session.errors))
        self.assertEqual(session.diagnostics[0].location.filename, "bad.kal")

    def test_parse_string_with_extra_operator(self):
        session = parse_string("a/b", precedence={'/': 30})
        self.assertEqual(session.items[0].body, Binary('/', Variable("a"), Variable("b")))

    def test_parse_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "prog.kal")
            with open(path, "w", encoding="utf-8") as f:
                f.write("# squares\ndef sq(x) x*x;\nsq(4);\n")
            session = parse_file(path)

        self.assertFalse(session.has_errors())
        self.assertEqual([item.name for item in session.items], ["sq", ANONYMOUS_FUNCTION_NAME])
        self.assertEqual(session.items[0].span.start.filename, path)


if __name__ == "__main__":
    unittest.main()
