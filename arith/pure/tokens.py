"""Lexical analysis for Arith: turns source text into a finite list of tokens, always terminated by an END token so the
parser never has to check for running off the end.

```
<number>     ::= <digit>+ ["." <digit>*]         ; a maximal run of digits, at most one "."
<identifier> ::= <letter>+                       ; maximal run of ASCII letters
<keyword>    ::= "func" | "if" | "then" | "else"
<boolean>    ::= "T" | "F"
<symbol>     ::= "(" | ")" | "," | "=>" | "==" | "+" | "-" | "*" | "/" | "<" | "&" | "|" | "!"
```

Whitespace is insignificant. `apply` is lexed as an ordinary identifier: the parser gives it its meaning.
"""

import string
from dataclasses import dataclass, field

from arith.lang.error import LexError


NUMBER = "number"
IDENTIFIER = "identifier"
KEYWORD = "keyword"
BOOLEAN = "boolean"
SYMBOL = "symbol"
END = "end of input"

KEYWORDS = ["func", "if", "then", "else"]
BOOLEANS = ["T", "F"]

DOUBLE_SYMBOLS = ["=>", "=="]  # must be matched before any single character
SINGLE_SYMBOLS = ["(", ")", ",", "+", "-", "*", "/", "<", "&", "|", "!"]

LETTERS = set(string.ascii_letters)
DIGITS = set(string.digits)


@dataclass(frozen=True)
class Token:
    """A single lexeme. position is the 0-based character offset of its first character in the source."""
    kind: str
    text: str
    position: int = field(default=0, compare=False)

    def is_symbol(self, text):
        return self.kind == SYMBOL and self.text == text

    def describe(self):
        """How the token reads in an error message."""
        if self.kind == END:
            return END
        return f"'{self.text}'"

    def __repr__(self):
        return f"Token({self.kind}, {self.text!r}, {self.position})"


def tokenize(source):
    """Scans source left to right in a single pass. Raises LexError on the first illegal character."""
    tokens = []
    idx = 0

    while idx < len(source):
        char = source[idx]

        if char.isspace():
            idx += 1

        elif char in DIGITS:
            start = idx
            seen_point = False
            while idx < len(source) and (source[idx] in DIGITS or (source[idx] == "." and not seen_point)):
                seen_point = seen_point or source[idx] == "."
                idx += 1
            tokens.append(Token(NUMBER, source[start:idx], start))

        elif char in LETTERS:
            start = idx
            while idx < len(source) and source[idx] in LETTERS:
                idx += 1
            word = source[start:idx]

            if word in KEYWORDS:
                kind = KEYWORD
            elif word in BOOLEANS:
                kind = BOOLEAN
            else:
                kind = IDENTIFIER
            tokens.append(Token(kind, word, start))

        elif source[idx:idx + 2] in DOUBLE_SYMBOLS:
            tokens.append(Token(SYMBOL, source[idx:idx + 2], idx))
            idx += 2

        elif char in SINGLE_SYMBOLS:
            tokens.append(Token(SYMBOL, char, idx))
            idx += 1

        else:
            raise LexError(idx, char)

    tokens.append(Token(END, "", len(source)))
    return tokens
