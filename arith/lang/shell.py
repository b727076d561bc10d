"""Handles interactive/command-line mode for the Arith interpreter. Uses cmd as backend."""

import cmd

from arith.lang.error import ArithError
from arith.pure.evaluator import Evaluator


class Shell(cmd.Cmd):
    """Arith interpreter shell."""
    intro = "Arith interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary Arith program."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(f"{self._tmp_line} {line}", self.line_num, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                try:
                    self.sess.add(line, self.line_num)
                except ValueError:
                    return  # if line is empty, terminate

                self.sess.run()

                if self.sess.results:
                    print(self.sess.pop())

    def do_depth(self, arg):
        """Shows the maximum application depth, or sets it for the programs that follow: 'depth 50'."""
        with self.sess.error_handler:
            arg = arg.strip()
            if arg:
                if not arg.isdecimal() or int(arg) < 1:
                    raise ArithError(f"depth must be a positive integer, found '{arg}'")
                self.sess.max_depth = int(arg)

            print(self.sess.max_depth if self.sess.max_depth is not None else Evaluator.MAX_DEPTH)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro and the language summary."""
        print("Welcome to the Arith interpreter!\n\n"
              "Every Arith program is a single expression, one per line (leave a '(' open to\n"
              "continue on the next line, ';;' starts a comment):\n\n"
              "  12   3.5   T   F                      numbers and booleans\n"
              "  x                                     variable\n"
              "  +(a, b)  -(a, b)  *(a, b)  /(a, b)    arithmetic\n"
              "  <(a, b)  ==(a, b)  &(a, b)  |(a, b)   comparison and logic\n"
              "  !a                                    negation\n"
              "  if c then a else b                    conditional\n"
              "  func x => body                        function\n"
              "  apply(f, arg)                         application\n\n"
              "Try it out by typing 'apply(func x => *(x, x), 2)'. This applies a squaring\n"
              "function to 2, giving 4 as the result.\n\n"
              "Commands: 'depth [N]' shows or sets the nested application limit, 'exit' quits.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
