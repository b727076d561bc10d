import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout

from arith.lang.error import ArithError, ErrorHandler
from arith.lang.session import Session
from arith.lang.shell import Shell


PROGRAM = """;; squares its argument
apply(func x => *(x, x),
      3)   ;; nine

+(1, 2)
"""


def write_program(text):
    handle, path = tempfile.mkstemp(suffix=".arith")
    with os.fdopen(handle, "w", encoding="utf-8") as file:
        file.write(text)
    return path


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.paths = []

    def tearDown(self):
        for path in self.paths:
            os.remove(path)

    def program(self, text):
        path = write_program(text)
        self.paths.append(path)
        return path

    def test_preprocess_line(self):
        cases = {
            "+(1, 2)": ("+(1, 2)", False),
            "  +(1, 2)  ;; three": ("+(1, 2)", False),
            ";; only a comment": ("", False),
            "apply(func x => x,": ("apply(func x => x,", True),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, Session.preprocess_line(case, 1, False), case)

    def test_file(self):
        sess = Session(ErrorHandler(), self.program(PROGRAM), cmd_line=False)
        self.assertEqual({2: "apply(func x => *(x, x), 3)", 5: "+(1, 2)"}, sess.to_exec)

        sess.run()
        self.assertEqual(["9", "3"], sess.results)
        self.assertEqual({}, sess.to_exec)

    def test_file_error_is_fatal(self):
        sess = Session(ErrorHandler(), self.program("*(2, 2)\n/(1, 0)\n+(1, 1)\n"), cmd_line=False)

        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit):
            with sess.error_handler:
                sess.run()

        self.assertEqual(["4"], sess.results)
        self.assertIn("line 2", out.getvalue())
        self.assertIn("division by zero", out.getvalue())

    def test_missing_file(self):
        self.assertRaises(ArithError, Session, ErrorHandler(), "/no/such/file.arith", False)

    def test_reserved_filename(self):
        self.assertRaises(ArithError, Session, ErrorHandler(), Session.SH_FILE, False)

    def test_command_line(self):
        error_handler = ErrorHandler()
        sess = Session(error_handler, Session.SH_FILE, cmd_line=True)
        self.assertFalse(error_handler.fatal)

        self.assertRaises(ValueError, sess.add, "", 1)

        sess.add("apply(func x => *(x, x), 2)", 1)
        sess.run()
        self.assertEqual("4", sess.pop())
        self.assertEqual([], sess.results)

    def test_max_depth(self):
        sess = Session(ErrorHandler(fatal=False), Session.SH_FILE, cmd_line=True, max_depth=2)
        sess.add("apply(func f => apply(f, f), func f => apply(f, f))", 1)

        out = io.StringIO()
        with redirect_stdout(out):
            with sess.error_handler:
                sess.run()
        self.assertIn("maximum application depth of 2 exceeded", out.getvalue())


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def onecmd(self, line):
        out = io.StringIO()
        with redirect_stdout(out):
            stop = self.shell.onecmd(line)
        return out.getvalue(), stop

    def test_program(self):
        self.assertEqual(("12\n", None), self.onecmd("*(3, 4)"))
        self.assertEqual(("F\n", None), self.onecmd("!T"))

    def test_continuation(self):
        self.assertEqual(("", None), self.onecmd("apply(func x => x,"))
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        self.assertEqual(("5\n", None), self.onecmd("5)"))
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)

    def test_error_does_not_exit(self):
        output, __ = self.onecmd("/(1, 0)")
        self.assertIn("division by zero", output)
        self.assertEqual(1, self.shell.sess.error_handler.errors)

        self.assertEqual(("3\n", None), self.onecmd("+(1, 2)"))

    def test_comment_only(self):
        self.assertEqual(("", None), self.onecmd(";; nothing to run"))

    def test_depth(self):
        self.assertEqual(("1000\n", None), self.onecmd("depth"))
        self.assertEqual(("2\n", None), self.onecmd("depth 2"))
        self.assertEqual(2, self.shell.sess.max_depth)

        output, __ = self.onecmd("apply(func f => apply(f, f), func f => apply(f, f))")
        self.assertIn("maximum application depth of 2 exceeded", output)

    def test_bad_depth(self):
        for case in ["depth zero", "depth 0", "depth -3"]:
            output, __ = self.onecmd(case)
            self.assertIn("depth must be a positive integer", output, case)
        self.assertEqual(3, self.shell.sess.error_handler.errors)
        self.assertIsNone(self.shell.sess.max_depth)

    def test_help_lists_grammar(self):
        output, __ = self.onecmd("help")
        for form in ["func x => body", "apply(f, arg)", "if c then a else b", "depth [N]"]:
            self.assertIn(form, output, form)

    def test_exit(self):
        self.assertTrue(self.onecmd("exit")[1])
        self.assertTrue(self.onecmd("EOF")[1])


if __name__ == '__main__':
    unittest.main()
