#! cd .. && python3 -m neatjs.formatter
"""
render a validated program as javascript

the output is the source text with a few local rewrites. The whitespace
and comments of every token are copied through unchanged, so line numbers
in the output match the input.

    a == b          a === b
    x::y            x.prototype.y
    f(a) {}         function f(a) {}
    (a) -> a + 1    function (a) { return a + 1; }
    (@err, x) {}    function (__err, x) { if (__err) { err(__err); return; }}
"""
import io
import sys

from .token import Token
from .node import Node
from .parser import Parser
from . import builtins

class Formatter(object):

    def __init__(self):
        super(Formatter, self).__init__()

        self.stream = None

        self.format_mapping = {
            Node.T_BINARY: self._format_binary,
            Node.T_PROTOTYPE_PROPERTY: self._format_prototype_property,
            Node.T_OBJECT: self._format_object,
            Node.T_FUNCTION_STATEMENT: self._format_function,
            Node.T_FUNCTION: self._format_function,
            Node.T_ARROW_FUNCTION: self._format_arrow_function,
            Node.T_SIMPLE_ARROW_FUNCTION: self._format_simple_arrow_function,
            Node.T_INCLUDE: self._format_pragma,
            Node.T_DECLARE: self._format_pragma,
        }

    def format(self, program):

        self.stream = io.StringIO()

        self.stream.write(program.preamble)
        for stmt in program.statements:
            self._format(stmt)

        for name in program.helpers:
            self.stream.write(builtins.helpers[name])

        return self.stream.getvalue()

    def _write(self, text):
        self.stream.write(text)

    def _format(self, item):
        if isinstance(item, Token):
            self._write(item.value)
            self._write(item.whitespace)
        else:
            fn = self.format_mapping.get(item.type, self._format_default)
            fn(item)

    def _format_default(self, node):
        for child in node.children:
            self._format(child)

    def _format_binary(self, node):
        op = node.op
        self._format(node.lhs)
        if op.value in ('==', '!='):
            self._write(op.value + '=')
            self._write(op.whitespace)
        else:
            self._format(op)
        self._format(node.rhs)

    def _format_prototype_property(self, node):
        self._format(node.target)
        self._write('.prototype')
        self._write(node.children[1].whitespace)
        if node.name is not None:
            self._write('.')
            self._format(node.name)

    def _format_object(self, node):
        children = node.children
        trailing = len(children) - 2
        for i, child in enumerate(children):
            if i == trailing and isinstance(child, Token) and child.kind == ',':
                self._write(child.whitespace)
            else:
                self._format(child)

    def _format_function(self, node):
        """ function statements and function expressions

        the parameter list is rewritten and the block gets a prologue
        which implements error passing, the this-binding and the rest
        parameter.
        """

        self._write('function ')
        children = node.children
        # the name, if any, and the opening parenthesis
        index = children.index(node.params)
        for child in children[:index]:
            self._format(child)

        prologue = []
        params = node.params
        for child in params.children:
            if isinstance(child, Token):
                self._format(child)
            elif child.type == Node.T_PASS:
                self._write('__err')
                for tok in child.tokens():
                    self._write(tok.whitespace)
                if child.handler is not None:
                    prologue.append(" if (__err) { %s(__err); return; }" % (
                        child.handler.value))
                else:
                    prologue.append(" if (__err) { throw __err; }")
            elif child.type == Node.T_YADA:
                ident, dots = child.children
                self._format(ident)
                self._write(dots.whitespace)
            else:
                self._format(child)

        self._format(children[index + 1])

        binding = node.this_binding
        if binding is not None:
            colon, name = binding
            self._write(colon.whitespace)
            self._write(name.whitespace)
            prologue.append(" var %s = this;" % name.value)

        for i, item in enumerate(params.items):
            if item.type == Node.T_YADA:
                prologue.append(" %s = [].slice.call(arguments, %d);" % (
                    item.ident.value, i))

        block = node.block
        lbrace = block.children[0]
        self._write(lbrace.value)
        for text in prologue:
            self._write(text)
        self._write(lbrace.whitespace)
        for child in block.children[1:]:
            self._format(child)

    def _format_arrow_function(self, node):
        self._write('function ')
        for child in node.children[:3]:
            self._format(child)
        self._format_arrow_body(node.arrow, node.expr)

    def _format_simple_arrow_function(self, node):
        self._write('function (_) ')
        self._format_arrow_body(node.arrow, node.expr)

    def _format_arrow_body(self, arrow, expr):
        self._write('{')
        self._write(arrow.whitespace)
        self._write('return ')
        self._format(expr)
        self._write('; }')

    def _format_pragma(self, node):
        """ pragmas become a comment, keeping the original line breaks """

        self._write('/* ')
        for i, child in enumerate(node.children):
            self._write(child.value)
            if i % 2 == 0:
                self._write(' ')
        self._write('*/')

        for tok in node.tokens():
            self._write(tok.whitespace)

def main():  # pragma: no cover

    text = """#declare :node;

    add(a, b) {
        return a + b;
    }

    console.log([1, 2, 3].map(-> add(_, 1)) == null);
    """

    if len(sys.argv) == 2 and sys.argv[1] == "-":
        text = sys.stdin.read()

    program = Parser("<main>", text).parse()
    print(Formatter().format(program))

if __name__ == '__main__':  # pragma: no cover
    main()
