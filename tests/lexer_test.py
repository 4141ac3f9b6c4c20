#! cd .. && python3 -m tests.lexer_test

import unittest

from neatjs.token import Token
from neatjs.lexer import Lexer, LexError
from tests.util import edit_distance

def tokcmp(a, b):
    if a is None:
        return False
    if b is None:
        return False
    return a.type == b.type and a.value == b.value and \
        a.whitespace == b.whitespace

def lexcmp(expected, actual, debug=False):

    seq, cor, sub, ins, del_ = edit_distance(actual, expected, tokcmp)
    error_count = sub + ins + del_
    if error_count > 0 or debug:
        print("\ncor: %d sub: %d ins: %d del: %d" % (cor, sub, ins, del_))
        print("token error rate:", error_count / (1 + len(expected)))
        print("\n%-50s | %-.50s" % ("    HYP", "    REF"))
        for a, b in seq:
            c = ' ' if tokcmp(a, b) else '|'
            print("%-50r %s %-.50r" % (a, c, b))
    return error_count

def EOF():
    return Token(Token.T_EOF, 1, 0, "", "")

class TokenTestCase(unittest.TestCase):

    def test_001_toString(self):
        token = Token(Token.T_NUMBER, 1, 0, '3.14')
        self.assertEqual(token.toString(), "T_NUMBER<1,0,'3.14'>\n")

    def test_002_immutable(self):
        token = Token(Token.T_TEXT, 1, 0, 'x')
        with self.assertRaises(AttributeError):
            token.value = 'y'

    def test_003_kind(self):
        self.assertEqual(Token(Token.T_SPECIAL, 1, 0, '(').kind, '(')
        self.assertEqual(Token(Token.T_KEYWORD, 1, 0, 'if').kind, 'if')
        self.assertEqual(Token(Token.T_PRAGMA, 1, 0, '#include').kind, '#include')
        self.assertEqual(Token(Token.T_TEXT, 1, 0, 'x').kind, Token.T_TEXT)

    def test_004_is_word(self):
        self.assertTrue(Token(Token.T_TEXT, 1, 0, 'x').isWord())
        self.assertTrue(Token(Token.T_KEYWORD, 1, 0, 'default').isWord())
        self.assertFalse(Token(Token.T_STRING, 1, 0, "'x'").isWord())

class LexerTestCase(unittest.TestCase):

    def test_001_assign(self):
        expected = [
            Token(Token.T_TEXT, 1, 0, 'x', ' '),
            Token(Token.T_SPECIAL, 1, 0, '=', ' '),
            Token(Token.T_NUMBER, 1, 0, '1', ''),
            Token(Token.T_SPECIAL, 1, 0, ';', ''),
            EOF(),
        ]
        tokens = Lexer("x = 1;").lex()
        self.assertFalse(lexcmp(expected, tokens, False))

    def test_002_numbers(self):
        expected = [
            Token(Token.T_NUMBER, 1, 0, '0x1F', ' '),
            Token(Token.T_NUMBER, 1, 0, '1.5e3', ' '),
            Token(Token.T_NUMBER, 1, 0, '42', ''),
            EOF(),
        ]
        tokens = Lexer("0x1F 1.5e3 42").lex()
        self.assertFalse(lexcmp(expected, tokens, False))

    def test_003_keywords(self):
        expected = [
            Token(Token.T_KEYWORD, 1, 0, 'if', ' '),
            Token(Token.T_TEXT, 1, 0, 'iffy', ' '),
            Token(Token.T_KEYWORD, 1, 0, 'instanceof', ' '),
            Token(Token.T_TEXT, 1, 0, '$_x1', ''),
            EOF(),
        ]
        tokens = Lexer("if iffy instanceof $_x1").lex()
        self.assertFalse(lexcmp(expected, tokens, False))

    def test_004_longest_operator(self):
        expected = [
            Token(Token.T_TEXT, 1, 0, 'a', ''),
            Token(Token.T_SPECIAL, 1, 0, '->', ''),
            Token(Token.T_TEXT, 1, 0, 'b', ''),
            Token(Token.T_SPECIAL, 1, 0, '::', ''),
            Token(Token.T_TEXT, 1, 0, 'c', ''),
            Token(Token.T_SPECIAL, 1, 0, '...', ''),
            Token(Token.T_SPECIAL, 1, 0, '<=', ''),
            Token(Token.T_SPECIAL, 1, 0, '-', ''),
            Token(Token.T_NUMBER, 1, 0, '1', ''),
            EOF(),
        ]
        tokens = Lexer("a->b::c...<=-1").lex()
        self.assertFalse(lexcmp(expected, tokens, False))

    def test_005_comments(self):
        expected = [
            Token(Token.T_TEXT, 1, 0, 'x', ' // c\n/* b */ '),
            Token(Token.T_TEXT, 1, 0, 'y', '\n'),
            EOF(),
        ]
        tokens = Lexer("x // c\n/* b */ y\n").lex()
        self.assertFalse(lexcmp(expected, tokens, False))

    def test_006_pragma(self):
        expected = [
            Token(Token.T_PRAGMA, 1, 0, '#include', ' '),
            Token(Token.T_TEXT, 1, 0, 'each', ''),
            Token(Token.T_SPECIAL, 1, 0, ';', ''),
            EOF(),
        ]
        tokens = Lexer("#include each;").lex()
        self.assertFalse(lexcmp(expected, tokens, False))

    def test_007_line_numbers(self):
        tokens = Lexer("a\nb /* 1\n2 */\nc").lex()
        self.assertEqual([t.line for t in tokens], [1, 2, 4, 4])
        self.assertEqual([t.index for t in tokens[:3]], [0, 2, 14])

    def test_008_peek(self):
        lexer = Lexer("a b")
        self.assertEqual(lexer.peek().value, 'a')
        self.assertEqual(lexer.peek().value, 'a')
        self.assertEqual(lexer.next().value, 'a')
        self.assertEqual(lexer.next().value, 'b')
        self.assertEqual(lexer.next().type, Token.T_EOF)
        self.assertEqual(lexer.next().type, Token.T_EOF)

    def test_009_preamble(self):
        lexer = Lexer("#!/usr/bin/env node\n// comment\nx")
        self.assertEqual(lexer.preamble, "#!/usr/bin/env node\n// comment\n")
        self.assertEqual(lexer.next().value, 'x')

    def test_010_round_trip(self):
        text = "  #declare :node;\nf(a, b) {\n\treturn a+b; // sum\n}\n"
        lexer = Lexer(text)
        tokens = lexer.lex()
        self.assertEqual(lexer.preamble + ''.join(t.text() for t in tokens), text)

    def test_011_extend_is_identifier(self):
        tokens = Lexer("extend(A, B)").lex()
        self.assertEqual(tokens[0].type, Token.T_TEXT)
        self.assertEqual(tokens[0].value, 'extend')

class LexerQuotedTestCase(unittest.TestCase):

    def test_001_string(self):
        expected = [
            Token(Token.T_STRING, 1, 0, "'abc'", ' '),
            Token(Token.T_SPECIAL, 1, 0, '+', ' '),
            Token(Token.T_STRING, 1, 0, '"x"', ''),
            EOF(),
        ]
        tokens = Lexer("'abc' + \"x\"").lex()
        self.assertFalse(lexcmp(expected, tokens, False))

    def test_002_leading_whitespace(self):
        tokens = Lexer("'  // not a comment'").lex()
        self.assertEqual(tokens[0].value, "'  // not a comment'")
        self.assertEqual(tokens[0].type, Token.T_STRING)

    def test_003_escape(self):
        tokens = Lexer(r"'a\'b' x").lex()
        self.assertEqual(tokens[0].value, r"'a\'b'")
        self.assertEqual(tokens[1].value, 'x')

    def test_004_multiline_string_line(self):
        tokens = Lexer("x\n'a\\\nb' y").lex()
        self.assertEqual(tokens[1].line, 2)
        self.assertEqual(tokens[2].line, 3)

    def test_005_regex(self):
        lexer = Lexer("/a+b/gi x")
        opener = lexer.next()
        literal = lexer.read_quoted(opener)
        self.assertEqual(literal.type, Token.T_REGEX)
        self.assertEqual(literal.value, "/a+b/gi")
        self.assertEqual(literal.whitespace, " ")
        self.assertEqual(lexer.next().value, 'x')

    def test_006_runaway_string(self):
        with self.assertRaises(LexError) as ctx:
            Lexer("x = 'abc").lex()
        self.assertEqual(ctx.exception.message, "runaway string literal")
        self.assertEqual(ctx.exception.line, 1)

    def test_007_runaway_regex(self):
        lexer = Lexer("/abc")
        opener = lexer.next()
        with self.assertRaises(LexError) as ctx:
            lexer.read_quoted(opener)
        self.assertEqual(ctx.exception.message, "runaway regular expression literal")

    def test_008_lex_regex(self):
        text = "var r = /a\\d+/g;\nr = [/x/, (/y/i)];"
        lexer = Lexer(text)
        tokens = lexer.lex()
        regex = [t.value for t in tokens if t.type == Token.T_REGEX]
        self.assertEqual(regex, ["/a\\d+/g", "/x/", "/y/i"])
        self.assertEqual(lexer.preamble + ''.join(t.text() for t in tokens), text)

    def test_009_lex_division(self):
        tokens = Lexer("a / b / 2; f(x)/ 3; v[0] /4").lex()
        slashes = [t for t in tokens if t.value == '/']
        self.assertEqual(len(slashes), 4)
        for token in slashes:
            self.assertEqual(token.type, Token.T_SPECIAL)

class LexerErrorTestCase(unittest.TestCase):

    def test_001_reserved_keyword(self):
        for word in ('function', 'this', 'yield', 'try', 'catch', 'finally'):
            with self.assertRaises(LexError) as ctx:
                Lexer("x\n%s" % word).lex()
            self.assertEqual(ctx.exception.message,
                "'%s' is a reserved keyword" % word)
            self.assertEqual(ctx.exception.line, 2)

    def test_002_strict_equality(self):
        with self.assertRaises(LexError) as ctx:
            Lexer("a === b").lex()
        self.assertEqual(ctx.exception.message, "use '==' instead of '==='")

        with self.assertRaises(LexError) as ctx:
            Lexer("a !== b").lex()
        self.assertEqual(ctx.exception.message, "use '!=' instead of '!=='")

    def test_003_invalid_token(self):
        with self.assertRaises(LexError) as ctx:
            Lexer("a\n\n  #").lex()
        self.assertEqual(ctx.exception.message, "invalid token")
        self.assertEqual(ctx.exception.line, 3)

    def test_004_shebang_not_first(self):
        with self.assertRaises(LexError):
            Lexer("x\n#!/usr/bin/env node").lex()

    def test_005_unterminated_comment(self):
        with self.assertRaises(LexError) as ctx:
            Lexer("x /* abc").lex()
        self.assertEqual(ctx.exception.message, "unterminated comment")

    def test_006_error_format(self):
        with self.assertRaises(LexError) as ctx:
            Lexer("\n\nthis", "app.neat").lex()
        self.assertEqual(str(ctx.exception),
            "app.neat, line 3: 'this' is a reserved keyword")

def main():
    unittest.main()

if __name__ == '__main__':
    main()
