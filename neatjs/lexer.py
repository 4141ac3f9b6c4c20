#! cd .. && python3 -m neatjs.lexer

import re
import sys

from .token import Token, CompileError

class LexError(CompileError):
    pass

# fixed operators and punctuation. order matters: an operator must appear
# before any shorter operator which is a prefix of it.
operators = [
    "===", "!==", "...", "->",
    "==", "!=", "+=", "-=", "*=", "/=", "%=",
    "||", "&&", "<=", ">=", "::",
    "*", "/", "-", "+", "!",
    "(", ")", "{", "}", "[", "]", "<", ">",
    ".", ",", ";", ":", "^", "=", "%",
    '"', "'", "@", "?",
]

reserved_words = {
    # statements and operators
    'break', 'case', 'catch', 'continue', 'debugger', 'default', 'delete',
    'do', 'else', 'finally', 'for', 'function', 'if', 'in', 'instanceof',
    'new', 'return', 'switch', 'this', 'throw', 'try', 'typeof', 'var',
    'void', 'while', 'with',
    # literals
    'null', 'true', 'false',
    # reserved for future use
    'class', 'enum', 'export', 'import', 'super',
    'implements', 'interface', 'let', 'package', 'private', 'protected',
    'public', 'static', 'yield',
}

# reserved words which may not appear anywhere in a program
forbidden_words = {'function', 'this', 'yield', 'try', 'catch', 'finally'}

# operators which may not appear anywhere in a program
# and the operator which should be used instead
forbidden_operators = {
    "===": "==",
    "!==": "!=",
}

re_number = re.compile(r"0[xX][0-9a-fA-F]+|[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?")
re_word = re.compile(r"[a-zA-Z$_][a-zA-Z0-9$_]*")
re_pragma = re.compile(r"#(include|declare)\b")
re_regex_flags = re.compile(r"[a-zA-Z]*")
re_shebang = re.compile(r"#![^\n]*")

# token kinds after which a slash is division rather than a regex
expression_end_kinds = (
    Token.T_NUMBER, Token.T_STRING, Token.T_REGEX, Token.T_TEXT,
    ")", "]", "null", "true", "false",
)

# whitespace and comments attached to the end of the previous token
re_whitespace = [
    re.compile(r"\s+"),
    re.compile(r"//[^\n]*"),
    re.compile(r"/\*.*?\*/", re.DOTALL),
]

class Lexer(object):
    """
    read tokens from a string, one at a time

    every token carries the whitespace and comments which follow it,
    so that the concatenation of the preamble and every token reproduces
    the original text.

    string and regular expression literals are not recognized by the
    generic scanner. The parser reads the opening quote as a token
    and then calls read_quoted() to collect the literal.
    """

    def __init__(self, text, filename="<string>"):
        super(Lexer, self).__init__()

        self.text = text
        self.filename = filename

        # offset of the next character to scan
        self._index = 0
        # line of the next character to scan
        self._line = 1
        # a token which has been scanned but not consumed
        self._peeked = None

        # the most recently consumed token
        self.last_token = None

        # whitespace, comments and a shebang line before the first token
        self.preamble = self._scan_whitespace(True)

    def lex(self):
        """ return every token in the text, including the final T_EOF

        quoted strings are collected as a single token. A slash which
        cannot follow an expression opens a regular expression literal.
        """
        tokens = []
        prev = None
        while True:
            token = self.next()
            if token.kind in ("'", '"'):
                token = self.read_quoted(token)
            elif token.kind == '/' and \
                    (prev is None or prev.kind not in expression_end_kinds):
                token = self.read_quoted(token)
            prev = token
            tokens.append(token)
            if token.type == Token.T_EOF:
                break
        return tokens

    def next(self):
        """ consume and return the next token """
        if self._peeked is not None:
            token = self._peeked
            self._peeked = None
        else:
            token = self._read()
        self.last_token = token
        return token

    def peek(self):
        """ return the next token without consuming it """
        if self._peeked is None:
            self._peeked = self._read()
        return self._peeked

    def read_quoted(self, token):
        """ collect a string or regular expression literal

        token is the opening quote (or slash) that was already consumed.
        scanning restarts immediately after the opening character, so any
        whitespace captured after the opening token becomes part of the
        literal.
        """

        if self._peeked is not None:
            raise LexError(self._peeked,
                "unexpected token inside quoted literal", self.filename)

        quote = token.value
        start = token.index + len(quote)
        self._index = start
        self._line = token.line

        end = start
        length = len(self.text)
        while True:
            if end >= length:
                if quote == '/':
                    self.error("runaway regular expression literal", token)
                self.error("runaway string literal", token)
            c = self.text[end]
            if c == '\\':
                # the escaped character is not interpreted
                end += 2
            elif c == quote:
                end += 1
                break
            else:
                end += 1

        if quote == '/':
            type_ = Token.T_REGEX
            end = re_regex_flags.match(self.text, end).end()
        else:
            type_ = Token.T_STRING

        value = quote + self._advance(end - start)
        whitespace = self._scan_whitespace()

        literal = Token(type_, token.line, token.index, value, whitespace)
        self.last_token = literal
        return literal

    def error(self, message, token=None):
        if token is None:
            token = self.last_token
        if token is None:
            token = Token(Token.T_EOF, self._line, self._index, "")
        raise LexError(token, message, self.filename)

    def _advance(self, n):
        """ consume n characters and return them """
        s = self.text[self._index:self._index + n]
        self._index += n
        self._line += s.count('\n')
        return s

    def _scan_whitespace(self, preamble=False):
        """ consume a run of whitespace and comments """

        parts = []

        if preamble:
            m = re_shebang.match(self.text, self._index)
            if m:
                parts.append(self._advance(m.end() - m.start()))

        while True:
            for regex in re_whitespace:
                m = regex.match(self.text, self._index)
                if m and m.end() > m.start():
                    parts.append(self._advance(m.end() - m.start()))
                    break
            else:
                break

        return ''.join(parts)

    def _scan_lexeme(self):
        """ return the type and text of the next lexeme, or None """

        m = re_number.match(self.text, self._index)
        if m:
            return Token.T_NUMBER, m.group(0)

        for op in operators:
            if self.text.startswith(op, self._index):
                return Token.T_SPECIAL, op

        m = re_word.match(self.text, self._index)
        if m:
            word = m.group(0)
            if word in reserved_words:
                return Token.T_KEYWORD, word
            return Token.T_TEXT, word

        m = re_pragma.match(self.text, self._index)
        if m:
            return Token.T_PRAGMA, m.group(0)

        return None

    def _read(self):
        """ scan a single token and the whitespace that follows it """

        line = self._line
        index = self._index

        if index >= len(self.text):
            return Token(Token.T_EOF, line, index, "", "")

        if self.text.startswith("/*", index):
            tok = Token(Token.T_SPECIAL, line, index, "/*")
            raise LexError(tok, "unterminated comment", self.filename)

        lexeme = self._scan_lexeme()
        if lexeme is None:
            tok = Token(Token.T_TEXT, line, index, self.text[index])
            raise LexError(tok, "invalid token", self.filename)

        type_, value = lexeme
        self._advance(len(value))
        whitespace = self._scan_whitespace()
        token = Token(type_, line, index, value, whitespace)

        if type_ == Token.T_KEYWORD and value in forbidden_words:
            raise LexError(token,
                "'%s' is a reserved keyword" % value, self.filename)

        if type_ == Token.T_SPECIAL and value in forbidden_operators:
            raise LexError(token, "use '%s' instead of '%s'" % (
                forbidden_operators[value], value), self.filename)

        return token

def main():  # pragma: no cover

    text = "#! /usr/bin/env node\nx = 'abc' + /a+b/g; // comment\n"
    if len(sys.argv) == 2 and sys.argv[1] == "-":
        text = sys.stdin.read()

    lexer = Lexer(text)
    print(repr(lexer.preamble))
    for token in lexer.lex():
        print(repr(token))

if __name__ == '__main__':  # pragma: no cover
    main()
