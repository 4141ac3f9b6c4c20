
class TokenError(Exception):
    def __init__(self, token, message):
        self.original_message = message
        message = "type: %s line: %d index: %d (%r) %s" % (
            token.type, token.line, token.index, token.value, message)
        super(TokenError, self).__init__(message)

        self.token = token

class CompileError(TokenError):
    """ an error which stops a file from being compiled

    the message is formatted the same way for syntax and validation errors:
    "<filename>, line <N>: <message>"
    """

    def __init__(self, token, message, filename="<string>"):
        super(CompileError, self).__init__(token, message)
        self.filename = filename
        self.line = token.line
        self.message = message
        self.args = ("%s, line %d: %s" % (filename, self.line, message),)

class Token(object):
    """ a single lexeme and the whitespace which immediately follows it

    Tokens are immutable once produced by the lexer.
    """

    T_NUMBER = "T_NUMBER"
    T_STRING = "T_STRING"
    T_REGEX = "T_REGEX"
    T_TEXT = "T_TEXT"
    T_SPECIAL = "T_SPECIAL"
    T_KEYWORD = "T_KEYWORD"
    T_PRAGMA = "T_PRAGMA"
    T_EOF = "T_EOF"

    __slots__ = ('type', 'line', 'index', 'value', 'whitespace', 'kind')

    def __init__(self, type, line=1, index=0, value="", whitespace=""):
        super(Token, self).__init__()
        setattr_ = super(Token, self).__setattr__
        setattr_('type', type)
        setattr_('line', line)
        setattr_('index', index)
        setattr_('value', value)
        setattr_('whitespace', whitespace)
        # specials, keywords and pragmas are dispatched on their literal text
        if type in (Token.T_SPECIAL, Token.T_KEYWORD, Token.T_PRAGMA):
            setattr_('kind', value)
        else:
            setattr_('kind', type)

    def __setattr__(self, name, value):
        raise AttributeError("Token is immutable")

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return self.type == other.type and \
            self.index == other.index and \
            self.value == other.value and \
            self.whitespace == other.whitespace

    def __hash__(self):
        return hash((self.type, self.index, self.value))

    def __str__(self):
        return self.toString(False, 0)

    def __repr__(self):
        return "Token(Token.%s, %r, %r, %r, %r)" % (
            self.type, self.line, self.index, self.value, self.whitespace)

    def toString(self, pretty=True, depth=0, pad="  "):
        if pretty:
            return "%s%s<%s,%s,%r>\n" % (
                pad * depth, self.type, self.line, self.index, self.value)
        return "%s<%r>" % (self.type, self.value)

    def isWord(self):
        """ true for identifiers and reserved words

        property names may be any word, including reserved words
        """
        return self.type in (Token.T_TEXT, Token.T_KEYWORD)

    def text(self):
        """ the source text owned by this token """
        return self.value + self.whitespace

    def first_token(self):
        return self

    def tokens(self):
        yield self

    def flatten(self, depth=0):
        return [(depth, self)]

