#! cd .. && python3 -m neatjs.parser
"""
recursive descent parser

statements are dispatched on the kind of the next token. expressions use
precedence climbing: binary operators bind when their precedence is
strictly greater than the current level, the ternary and assignment
operators bind when it is greater or equal which makes them right
associative.

the parser consumes every token exactly once and stores it in the tree,
so that rendering the tree reproduces the source text.
"""
import sys

from .token import Token, CompileError
from .lexer import Lexer
from .node import Program, Block, IfStatement, WhileStatement, \
    ForStatement, BreakStatement, ContinueStatement, ReturnStatement, \
    ThrowStatement, VarStatement, LabeledStatement, SwitchStatement, \
    CaseClause, ExprStatement, FunctionStatement, FunctionExpr, \
    ArrowFunctionExpr, SimpleArrowFunctionExpr, ExprList, NumberExpr, \
    StringExpr, NullExpr, BooleanExpr, IdentExpr, UnaryOpExpr, \
    BinaryOpExpr, TernaryOpExpr, CallExpr, InvokeExpr, IndexExpr, \
    PropertyExpr, PrototypePropertyExpr, NewExpr, ArrayExpr, ObjectExpr, \
    GroupExpr, PassExpr, YadaExpr, IncludePragma, DeclarePragma, \
    DeclareTag, Node
from .validator import Validator

class ParseError(CompileError):
    pass

binary_precedence = {
    '*': 60, '/': 60, '%': 60,
    '+': 50, '-': 50,
    '<': 40, '<=': 40, '>': 40, '>=': 40, 'instanceof': 40,
    '==': 30, '!=': 30,
    '&&': 20,
    '||': 10,
}

ternary_precedence = 7

assignment_precedence = {
    '=': 5, '+=': 5, '-=': 5, '*=': 5, '/=': 5, '%=': 5,
}

unary_operators = ('!', '-', '+', 'typeof', 'delete')

# the operand of a prefix operator binds tighter than any binary operator
unary_precedence = 100

quotes = ("'", '"', '/')

def describe(token):
    if token.type == Token.T_EOF:
        return "end of input"
    return token.value

class Parser(object):

    def __init__(self, filename="<string>", text="", declared=()):
        super(Parser, self).__init__()

        self.filename = filename
        self.text = text
        # names visible to the program without a #declare pragma
        self.declared = tuple(declared)

        self.lexer = None

        # false while parsing the middle operand of a ternary or a case
        # label, where a colon belongs to the enclosing construct
        self.allow_this_binding = True

        self.statement_mapping = {
            'if': self.parse_if,
            'while': self.parse_while,
            'for': self.parse_for,
            'break': self.parse_break,
            'continue': self.parse_continue,
            'return': self.parse_return,
            'throw': self.parse_throw,
            'var': self.parse_var,
            'switch': self.parse_switch,
            '#include': self.parse_include_pragma,
            '#declare': self.parse_declare_pragma,
        }

        self.primary_mapping = {
            Token.T_NUMBER: self.parse_number,
            Token.T_TEXT: self.parse_ident,
            'null': self.parse_null,
            'true': self.parse_boolean,
            'false': self.parse_boolean,
            "'": self.parse_string,
            '"': self.parse_string,
            '/': self.parse_string,
            '@': self.parse_pass_expr,
            '[': self.parse_array_expr,
            '{': self.parse_object_expr,
            'new': self.parse_new_expr,
            '(': self.parse_group_expr,
            '->': self.parse_simple_arrow,
        }

    def parse(self):
        """ parse and validate the text, returning a Program """

        self.lexer = Lexer(self.text, self.filename)

        statements = self.parse_statements((Token.T_EOF,))
        self.expect(Token.T_EOF)

        program = Program(self.lexer.preamble, statements)
        program.helpers = Validator(self.filename, self.declared).validate(program)
        return program

    def error(self, message, token=None):
        if token is None:
            token = self.lexer.last_token
        if token is None:
            token = self.lexer.peek()
        raise ParseError(token, message, self.filename)

    def peek_kind(self):
        return self.lexer.peek().kind

    def expect(self, kind):
        """ consume the next token, which must be of the given kind """
        token = self.lexer.next()
        if token.kind != kind:
            if kind == Token.T_TEXT:
                expected = "identifier"
            elif kind == Token.T_EOF:
                expected = "end of input"
            else:
                expected = "'%s'" % kind
            self.error("expected %s instead of '%s'" % (
                expected, describe(token)), token)
        return token

    def expect_word(self):
        """ consume a property name, any identifier or reserved word """
        token = self.lexer.next()
        if not token.isWord():
            self.error("expected property name instead of '%s'" % (
                describe(token)), token)
        return token

    # -------------------------------------------------------------------------
    # statements

    def parse_statements(self, closers):
        statements = []
        while self.peek_kind() not in closers:
            if self.peek_kind() == Token.T_EOF:
                break
            statements.append(self.parse_statement())
        return statements

    def parse_statement(self):
        fn = self.statement_mapping.get(self.peek_kind(), self.parse_expr_statement)
        return fn()

    def parse_block(self):
        saved = self.allow_this_binding
        self.allow_this_binding = True
        try:
            children = [self.expect('{')]
            children.extend(self.parse_statements(('}',)))
            children.append(self.expect('}'))
        finally:
            self.allow_this_binding = saved
        return Block(children)

    def parse_if(self):
        children = [
            self.expect('if'),
            self.expect('('),
            self.parse_expr(),
            self.expect(')'),
            self.parse_block(),
        ]

        if self.peek_kind() == 'else':
            children.append(self.lexer.next())
            if self.peek_kind() == 'if':
                children.append(self.parse_if())
            else:
                children.append(self.parse_block())

        return IfStatement(children)

    def parse_while(self):
        children = [
            self.expect('while'),
            self.expect('('),
            self.parse_expr(),
            self.expect(')'),
            self.parse_block(),
        ]
        return WhileStatement(children)

    def parse_for(self):
        children = [
            self.expect('for'),
            self.expect('('),
            self.parse_expr_list(';'),
            self.expect(';'),
            self.parse_expr_list(';'),
            self.expect(';'),
            self.parse_expr_list(')'),
            self.expect(')'),
            self.parse_block(),
        ]
        return ForStatement(children)

    def _parse_jump(self, keyword):
        children = [self.expect(keyword)]
        if self.lexer.peek().type == Token.T_TEXT:
            children.append(self.lexer.next())
        children.append(self.expect(';'))
        return children

    def parse_break(self):
        return BreakStatement(self._parse_jump('break'))

    def parse_continue(self):
        return ContinueStatement(self._parse_jump('continue'))

    def parse_return(self):
        children = [self.expect('return')]
        if self.peek_kind() != ';':
            children.append(self.parse_expr())
        children.append(self.expect(';'))
        return ReturnStatement(children)

    def parse_throw(self):
        children = [
            self.expect('throw'),
            self.parse_expr(),
            self.expect(';'),
        ]
        return ThrowStatement(children)

    def parse_var(self):
        children = [
            self.expect('var'),
            self.parse_expr_list(';'),
            self.expect(';'),
        ]
        return VarStatement(children)

    def parse_switch(self):
        children = [
            self.expect('switch'),
            self.expect('('),
            self.parse_expr(),
            self.expect(')'),
            self.expect('{'),
        ]

        while self.peek_kind() in ('case', 'default'):
            children.append(self.parse_case())

        children.append(self.expect('}'))
        return SwitchStatement(children)

    def parse_case(self):

        token = self.lexer.next()
        children = [token]

        if token.kind == 'case':
            saved = self.allow_this_binding
            self.allow_this_binding = False
            try:
                children.append(self.parse_expr())
            finally:
                self.allow_this_binding = saved

        children.append(self.expect(':'))

        saved = self.allow_this_binding
        self.allow_this_binding = True
        try:
            children.extend(self.parse_statements(('case', 'default', '}')))
        finally:
            self.allow_this_binding = saved

        return CaseClause(children)

    def parse_include_pragma(self):
        children = [self.expect('#include')]
        while True:
            children.append(self.expect(Token.T_TEXT))
            if self.peek_kind() != ',':
                break
            children.append(self.lexer.next())
        children.append(self.expect(';'))
        return IncludePragma(children)

    def parse_declare_pragma(self):
        children = [self.expect('#declare')]
        while True:
            if self.peek_kind() == ':':
                colon = self.lexer.next()
                children.append(DeclareTag([colon, self.expect_word()]))
            else:
                children.append(self.expect(Token.T_TEXT))
            if self.peek_kind() != ',':
                break
            children.append(self.lexer.next())
        children.append(self.expect(';'))
        return DeclarePragma(children)

    def parse_expr_statement(self):

        if self.peek_kind() == ';':
            return ExprStatement([self.lexer.next()])

        expr = self.parse_expr()

        if expr.type == Node.T_IDENT_EXPR and self.peek_kind() == ':':
            return self.parse_labeled_statement(expr)

        this_binding = []
        if self.peek_kind() == ':':
            this_binding = [self.lexer.next(), self.expect(Token.T_TEXT)]

        if expr.type == Node.T_CALL and expr.is_function_spec() and \
                self.peek_kind() == '{':
            children = [expr.target.ident] + expr.children[1:]
            children.extend(this_binding)
            children.append(self.parse_block())
            return FunctionStatement(children)

        if this_binding:
            if self.peek_kind() != '{':
                self.expect('{')
            self.error("invalid function declaration", expr.first_token())

        return ExprStatement([expr, self.expect(';')])

    def parse_labeled_statement(self, expr):
        children = [expr.ident, self.lexer.next()]

        kind = self.peek_kind()
        if kind == 'while':
            children.append(self.parse_while())
        elif kind == 'for':
            children.append(self.parse_for())
        elif kind == 'switch':
            children.append(self.parse_switch())
        else:
            self.error("invalid labeled statement", self.lexer.peek())

        return LabeledStatement(children)

    # -------------------------------------------------------------------------
    # expressions

    def parse_expr_list(self, closer):
        """ parse comma separated expressions up to (not including) closer

        a trailing comma is allowed
        """
        saved = self.allow_this_binding
        self.allow_this_binding = True
        try:
            children = []
            while self.peek_kind() != closer:
                children.append(self.parse_expr())
                if self.peek_kind() != ',':
                    break
                children.append(self.lexer.next())
        finally:
            self.allow_this_binding = saved
        return ExprList(children)

    def parse_expr(self, prec=0):

        token = self.lexer.peek()

        if token.kind in unary_operators:
            op = self.lexer.next()
            expr = UnaryOpExpr([op, self.parse_expr(unary_precedence)])
        else:
            fn = self.primary_mapping.get(token.kind, None)
            if fn is None:
                if token.type == Token.T_EOF:
                    self.error("unexpected end of input", token)
                self.error("invalid expression", token)
            expr = fn()

        while True:
            token = self.lexer.peek()
            kind = token.kind

            if kind in binary_precedence:
                if binary_precedence[kind] <= prec:
                    break
                op = self.lexer.next()
                rhs = self.parse_expr(binary_precedence[kind])
                expr = BinaryOpExpr([expr, op, rhs])

            elif kind in assignment_precedence:
                if assignment_precedence[kind] < prec:
                    break
                op = self.lexer.next()
                rhs = self.parse_expr(assignment_precedence[kind])
                expr = BinaryOpExpr([expr, op, rhs])

            elif kind == '?':
                if ternary_precedence < prec:
                    break
                expr = self.parse_ternary(expr)

            elif kind == '.':
                children = [expr, self.lexer.next(), self.expect_word()]
                if self.peek_kind() == '(':
                    children.append(self.lexer.next())
                    children.append(self.parse_expr_list(')'))
                    children.append(self.expect(')'))
                    expr = InvokeExpr(children)
                else:
                    expr = PropertyExpr(children)

            elif kind == '(':
                expr = CallExpr([
                    expr,
                    self.lexer.next(),
                    self.parse_expr_list(')'),
                    self.expect(')'),
                ])

            elif kind == '[':
                saved = self.allow_this_binding
                self.allow_this_binding = True
                try:
                    expr = IndexExpr([
                        expr,
                        self.lexer.next(),
                        self.parse_expr(),
                        self.expect(']'),
                    ])
                finally:
                    self.allow_this_binding = saved

            elif kind == '::':
                children = [expr, self.lexer.next()]
                if self.lexer.peek().isWord():
                    children.append(self.lexer.next())
                expr = PrototypePropertyExpr(children)

            elif kind == '...':
                if expr.type != Node.T_IDENT_EXPR:
                    self.error("unexpected '...'", token)
                expr = YadaExpr([expr.ident, self.lexer.next()])

            else:
                break

        return expr

    def parse_ternary(self, test):
        op = self.expect('?')

        saved = self.allow_this_binding
        self.allow_this_binding = False
        try:
            if_true = self.parse_expr()
        finally:
            self.allow_this_binding = saved

        colon = self.expect(':')
        if_false = self.parse_expr(ternary_precedence)
        return TernaryOpExpr([test, op, if_true, colon, if_false])

    def parse_number(self):
        return NumberExpr([self.lexer.next()])

    def parse_ident(self):
        return IdentExpr([self.lexer.next()])

    def parse_null(self):
        return NullExpr([self.lexer.next()])

    def parse_boolean(self):
        return BooleanExpr([self.lexer.next()])

    def parse_string(self):
        """ a string or a regular expression literal """
        opener = self.lexer.next()
        return StringExpr([self.lexer.read_quoted(opener)])

    def parse_pass_expr(self):
        children = [self.expect('@')]
        if self.lexer.peek().type == Token.T_TEXT:
            children.append(self.lexer.next())
        return PassExpr(children)

    def parse_array_expr(self):
        children = [
            self.expect('['),
            self.parse_expr_list(']'),
            self.expect(']'),
        ]
        return ArrayExpr(children)

    def parse_object_expr(self):

        saved = self.allow_this_binding
        self.allow_this_binding = True
        try:
            children = [self.expect('{')]
            while self.peek_kind() != '}':
                token = self.lexer.peek()
                if token.isWord():
                    children.append(self.lexer.next())
                elif token.kind in ("'", '"'):
                    opener = self.lexer.next()
                    children.append(self.lexer.read_quoted(opener))
                else:
                    self.error("invalid object key", token)

                children.append(self.expect(':'))
                children.append(self.parse_expr())

                if self.peek_kind() != ',':
                    break
                children.append(self.lexer.next())

            children.append(self.expect('}'))
        finally:
            self.allow_this_binding = saved

        return ObjectExpr(children)

    def parse_new_expr(self):
        keyword = self.expect('new')
        target = IdentExpr([self.expect(Token.T_TEXT)])
        while self.peek_kind() == '.':
            target = PropertyExpr([target, self.lexer.next(), self.expect_word()])

        children = [
            keyword,
            target,
            self.expect('('),
            self.parse_expr_list(')'),
            self.expect(')'),
        ]
        return NewExpr(children)

    def parse_simple_arrow(self):
        return SimpleArrowFunctionExpr([self.expect('->'), self.parse_expr()])

    def parse_group_expr(self):
        """ parse a parenthesized list

        depending on what follows the closing parenthesis the list is the
        parameter list of a function expression, the parameter list of an
        arrow function or a single grouped expression.
        """

        lparen = self.expect('(')
        params = self.parse_expr_list(')')
        rparen = self.expect(')')

        this_binding = []
        if self.allow_this_binding and self.peek_kind() == ':':
            this_binding = [self.lexer.next(), self.expect(Token.T_TEXT)]

        kind = self.peek_kind()

        if kind == '{':
            if not params.is_formal_params():
                self.error("invalid formal parameter list before '{'", lparen)
            children = [lparen, params, rparen]
            children.extend(this_binding)
            children.append(self.parse_block())
            return FunctionExpr(children)

        if this_binding:
            self.expect('{')

        if kind == '->':
            if not params.is_formal_params():
                self.error("invalid formal parameter list before '->'", lparen)
            arrow = self.lexer.next()
            return ArrowFunctionExpr([lparen, params, rparen, arrow, self.parse_expr()])

        if len(params.children) != 1:
            self.error("unexpected '%s' after formal parameter list" % (
                describe(self.lexer.peek())), self.lexer.peek())

        return GroupExpr([lparen, params.children[0], rparen])

def main():  # pragma: no cover

    text = """
    #declare :node;

    greet(name) {
        return 'hello ' + name;
    }

    console.log(greet('world'));
    """

    if len(sys.argv) == 2 and sys.argv[1] == "-":
        text = sys.stdin.read()

    program = Parser("<main>", text).parse()
    print(program.toString())

if __name__ == '__main__':  # pragma: no cover
    main()
