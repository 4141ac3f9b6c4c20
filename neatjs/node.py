#! cd .. && python3 -m neatjs.node
"""
syntax tree nodes

Every node owns an ordered list of children. A child is either a Token
or another Node, in the order they appear in the source text. Rendering a
node without a special rule is the concatenation of its children.

Each node class has a type tag. The validator and the formatter dispatch
on the tag, a missing entry in their mapping selects the default behavior.
"""

class Node(object):

    T_PROGRAM = "T_PROGRAM"
    T_BLOCK = "T_BLOCK"

    # statements
    T_IF = "T_IF"
    T_WHILE = "T_WHILE"
    T_FOR = "T_FOR"
    T_BREAK = "T_BREAK"
    T_CONTINUE = "T_CONTINUE"
    T_RETURN = "T_RETURN"
    T_THROW = "T_THROW"
    T_VAR = "T_VAR"
    T_LABEL = "T_LABEL"
    T_SWITCH = "T_SWITCH"
    T_CASE = "T_CASE"
    T_EXPR_STATEMENT = "T_EXPR_STATEMENT"
    T_FUNCTION_STATEMENT = "T_FUNCTION_STATEMENT"
    T_INCLUDE = "T_INCLUDE"
    T_DECLARE = "T_DECLARE"
    T_DECLARE_TAG = "T_DECLARE_TAG"

    # function expressions
    T_FUNCTION = "T_FUNCTION"
    T_ARROW_FUNCTION = "T_ARROW_FUNCTION"
    T_SIMPLE_ARROW_FUNCTION = "T_SIMPLE_ARROW_FUNCTION"

    # expressions
    T_EXPR_LIST = "T_EXPR_LIST"
    T_NUMBER_EXPR = "T_NUMBER_EXPR"
    T_STRING_EXPR = "T_STRING_EXPR"
    T_NULL_EXPR = "T_NULL_EXPR"
    T_BOOLEAN_EXPR = "T_BOOLEAN_EXPR"
    T_IDENT_EXPR = "T_IDENT_EXPR"
    T_UNARY = "T_UNARY"
    T_BINARY = "T_BINARY"
    T_TERNARY = "T_TERNARY"
    T_CALL = "T_CALL"
    T_INVOKE = "T_INVOKE"
    T_INDEX = "T_INDEX"
    T_PROPERTY = "T_PROPERTY"
    T_PROTOTYPE_PROPERTY = "T_PROTOTYPE_PROPERTY"
    T_NEW = "T_NEW"
    T_ARRAY = "T_ARRAY"
    T_OBJECT = "T_OBJECT"
    T_GROUPING = "T_GROUPING"
    T_PASS = "T_PASS"
    T_YADA = "T_YADA"

    type = None

    def __init__(self, children):
        super(Node, self).__init__()
        self.children = list(children)

    def __repr__(self):
        return "<%s %r>" % (self.type, self.first_token().value)

    def first_token(self):
        """ return the earliest leaf token of this node """
        return self.children[0].first_token()

    def tokens(self):
        """ yield every leaf token in source order """
        for child in self.children:
            yield from child.tokens()

    def flatten(self, depth=0):
        items = [(depth, self)]
        for child in self.children:
            items.extend(child.flatten(depth + 1))
        return items

    def toString(self, pretty=True, depth=0, pad="  "):

        if pretty:
            parts = ["%s%s\n" % (pad * depth, self.type)]
            for child in self.children:
                parts.append(child.toString(pretty, depth + 1, pad))
            return ''.join(parts)

        t = ','.join(child.toString(False) for child in self.children)
        return "%s{%s}" % (self.type, t)

class Program(Node):
    type = Node.T_PROGRAM

    def __init__(self, preamble, statements):
        super(Program, self).__init__(statements)
        self.preamble = preamble
        # names of the helpers required by the program, in include order
        # assigned once validation is complete
        self.helpers = ()

    def __repr__(self):
        return "<%s>" % self.type

    @property
    def statements(self):
        return self.children

class Block(Node):
    type = Node.T_BLOCK

    @property
    def statements(self):
        return self.children[1:-1]

class IfStatement(Node):
    type = Node.T_IF

    @property
    def test(self):
        return self.children[2]

    @property
    def block(self):
        return self.children[4]

    @property
    def else_part(self):
        """ either a Block or another IfStatement, or None """
        if len(self.children) > 6:
            return self.children[6]
        return None

class WhileStatement(Node):
    type = Node.T_WHILE

    @property
    def test(self):
        return self.children[2]

    @property
    def block(self):
        return self.children[4]

class ForStatement(Node):
    type = Node.T_FOR

    @property
    def init(self):
        return self.children[2]

    @property
    def test(self):
        return self.children[4]

    @property
    def post(self):
        return self.children[6]

    @property
    def block(self):
        return self.children[8]

class BreakStatement(Node):
    type = Node.T_BREAK

    @property
    def label(self):
        if len(self.children) == 3:
            return self.children[1]
        return None

class ContinueStatement(BreakStatement):
    type = Node.T_CONTINUE

class ReturnStatement(Node):
    type = Node.T_RETURN

    @property
    def expr(self):
        if len(self.children) == 3:
            return self.children[1]
        return None

class ThrowStatement(Node):
    type = Node.T_THROW

    @property
    def expr(self):
        return self.children[1]

class VarStatement(Node):
    type = Node.T_VAR

    @property
    def exprs(self):
        return self.children[1]

class LabeledStatement(Node):
    type = Node.T_LABEL

    @property
    def label(self):
        return self.children[0]

    @property
    def statement(self):
        return self.children[2]

class SwitchStatement(Node):
    type = Node.T_SWITCH

    @property
    def test(self):
        return self.children[2]

    @property
    def clauses(self):
        return self.children[5:-1]

class CaseClause(Node):
    """ case expr: statements... or default: statements... """
    type = Node.T_CASE

    def is_default(self):
        return self.children[0].kind == 'default'

    @property
    def test(self):
        if self.is_default():
            return None
        return self.children[1]

    @property
    def statements(self):
        if self.is_default():
            return self.children[2:]
        return self.children[3:]

class ExprStatement(Node):
    type = Node.T_EXPR_STATEMENT

    @property
    def expr(self):
        if len(self.children) > 1:
            return self.children[0]
        return None

class FunctionNode(Node):
    """ common accessors for functions with a parameter list and a body

    children: [name?] ( params ) [: this_name] block
    """

    # index of the opening parenthesis
    _paren = 0

    @property
    def params(self):
        return self.children[self._paren + 1]

    @property
    def block(self):
        return self.children[-1]

    @property
    def this_binding(self):
        """ the (colon, identifier) tokens of a this-binding, or None """
        i = self._paren + 3
        if len(self.children) > i + 1:
            return tuple(self.children[i:i + 2])
        return None

class FunctionStatement(FunctionNode):
    type = Node.T_FUNCTION_STATEMENT
    _paren = 1

    @property
    def name(self):
        return self.children[0]

class FunctionExpr(FunctionNode):
    type = Node.T_FUNCTION

class ArrowFunctionExpr(Node):
    type = Node.T_ARROW_FUNCTION

    @property
    def params(self):
        return self.children[1]

    @property
    def arrow(self):
        return self.children[3]

    @property
    def expr(self):
        return self.children[4]

class SimpleArrowFunctionExpr(Node):
    type = Node.T_SIMPLE_ARROW_FUNCTION

    @property
    def arrow(self):
        return self.children[0]

    @property
    def expr(self):
        return self.children[1]

class ExprList(Node):
    """ comma separated expressions, a trailing comma is allowed """
    type = Node.T_EXPR_LIST

    def first_token(self):
        if not self.children:
            return None
        return self.children[0].first_token()

    @property
    def items(self):
        return self.children[::2]

    def is_formal_params(self):
        """ true if every item is a valid formal parameter """
        valid = (Node.T_IDENT_EXPR, Node.T_PASS, Node.T_YADA)
        return all(item.type in valid for item in self.items)

class NumberExpr(Node):
    type = Node.T_NUMBER_EXPR

class StringExpr(Node):
    """ a string or regular expression literal """
    type = Node.T_STRING_EXPR

class NullExpr(Node):
    type = Node.T_NULL_EXPR

class BooleanExpr(Node):
    type = Node.T_BOOLEAN_EXPR

class IdentExpr(Node):
    type = Node.T_IDENT_EXPR

    @property
    def ident(self):
        return self.children[0]

class UnaryOpExpr(Node):
    type = Node.T_UNARY

    @property
    def op(self):
        return self.children[0]

    @property
    def expr(self):
        return self.children[1]

class BinaryOpExpr(Node):
    type = Node.T_BINARY

    @property
    def lhs(self):
        return self.children[0]

    @property
    def op(self):
        return self.children[1]

    @property
    def rhs(self):
        return self.children[2]

class TernaryOpExpr(Node):
    type = Node.T_TERNARY

    @property
    def test(self):
        return self.children[0]

    @property
    def if_true(self):
        return self.children[2]

    @property
    def if_false(self):
        return self.children[4]

class CallExpr(Node):
    type = Node.T_CALL

    @property
    def target(self):
        return self.children[0]

    @property
    def args(self):
        return self.children[2]

    def is_function_spec(self):
        """ true if this call could be the head of a function declaration

            name(a, b)
        """
        return self.target.type == Node.T_IDENT_EXPR and \
            self.args.is_formal_params()

class InvokeExpr(Node):
    """ target.name(args) """
    type = Node.T_INVOKE

    @property
    def target(self):
        return self.children[0]

    @property
    def name(self):
        return self.children[2]

    @property
    def args(self):
        return self.children[4]

class IndexExpr(Node):
    type = Node.T_INDEX

    @property
    def target(self):
        return self.children[0]

    @property
    def index(self):
        return self.children[2]

class PropertyExpr(Node):
    type = Node.T_PROPERTY

    @property
    def target(self):
        return self.children[0]

    @property
    def name(self):
        return self.children[2]

class PrototypePropertyExpr(Node):
    """ target:: or target::name """
    type = Node.T_PROTOTYPE_PROPERTY

    @property
    def target(self):
        return self.children[0]

    @property
    def name(self):
        if len(self.children) == 3:
            return self.children[2]
        return None

class NewExpr(Node):
    type = Node.T_NEW

    @property
    def target(self):
        return self.children[1]

    @property
    def args(self):
        return self.children[3]

class ArrayExpr(Node):
    type = Node.T_ARRAY

    @property
    def items(self):
        return self.children[1]

class ObjectExpr(Node):
    """ { key: value, ... }

    children: '{' (key ':' value ','?)* '}'
    """
    type = Node.T_OBJECT

    @property
    def values(self):
        return self.children[3:-1:4]

    @property
    def keys(self):
        return self.children[1:-1:4]

class GroupExpr(Node):
    type = Node.T_GROUPING

    @property
    def expr(self):
        return self.children[1]

class PassExpr(Node):
    """ @ or @handler, only valid as the first formal parameter """
    type = Node.T_PASS

    @property
    def handler(self):
        if len(self.children) == 2:
            return self.children[1]
        return None

class YadaExpr(Node):
    """ name... only valid as the last formal parameter """
    type = Node.T_YADA

    @property
    def ident(self):
        return self.children[0]

class PragmaNode(Node):

    @property
    def keyword(self):
        return self.children[0]

    @property
    def names(self):
        """ the declared items, without separators """
        return self.children[1:-1:2]

class IncludePragma(PragmaNode):
    type = Node.T_INCLUDE

class DeclarePragma(PragmaNode):
    type = Node.T_DECLARE

class DeclareTag(Node):
    """ :tag inside a #declare pragma """
    type = Node.T_DECLARE_TAG

    @property
    def value(self):
        return ''.join(tok.value for tok in self.children)
