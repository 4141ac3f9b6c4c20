#! cd .. && python3 -m neatjs.validator
"""
scope validation

every identifier referenced by a program must be declared: as a function,
a var, a parameter, a this-binding, or through an #include or #declare
pragma at the top of the program.

validation runs in three passes over a scope body. pragmas are applied
first, then declarations are hoisted, then every statement is checked.
"""

from .token import CompileError
from .node import Node
from . import builtins

class ValidationError(CompileError):
    pass

class Scope(object):
    """ names visible in a function or program body

    a name is DECLARED if it was declared in this scope, or INHERITED if it
    was declared in an enclosing scope. Only a DECLARED name can collide with
    a new declaration.
    """

    DECLARED = 1
    INHERITED = 2

    def __init__(self, names=None):
        super(Scope, self).__init__()
        self.names = dict(names) if names else {}

    def __repr__(self):
        return "<Scope %r>" % sorted(self.names)

    def declare(self, name):
        self.names[name] = Scope.DECLARED

    def is_declared(self, name):
        return self.names.get(name) == Scope.DECLARED

    def contains(self, name):
        return name in self.names

    def fork(self):
        """ return a new scope for a nested function body """
        return Scope({name: Scope.INHERITED for name in self.names})

# where the statement being checked is located
LEVEL_PROGRAM = 0
LEVEL_FUNCTION = 1
LEVEL_BLOCK = 2

class Validator(object):

    def __init__(self, filename="<string>", declared=()):
        super(Validator, self).__init__()

        self.filename = filename
        self.declared = declared

        self.helpers = []
        self.level = LEVEL_PROGRAM

        self.visit_mapping = {
            Node.T_BLOCK: self.visit_block,
            Node.T_CASE: self.visit_case,
            Node.T_FUNCTION_STATEMENT: self.visit_function_statement,
            Node.T_FUNCTION: self.visit_function,
            Node.T_ARROW_FUNCTION: self.visit_arrow_function,
            Node.T_SIMPLE_ARROW_FUNCTION: self.visit_simple_arrow_function,
            Node.T_IDENT_EXPR: self.visit_ident,
            Node.T_PROPERTY: self.visit_property,
            Node.T_PROTOTYPE_PROPERTY: self.visit_property,
            Node.T_INVOKE: self.visit_invoke,
            Node.T_PASS: self.visit_pass,
            Node.T_YADA: self.visit_yada,
            Node.T_INCLUDE: self.visit_pragma,
            Node.T_DECLARE: self.visit_pragma,
        }

        self.pragma_mapping = {
            Node.T_INCLUDE: self.apply_include,
            Node.T_DECLARE: self.apply_declare,
        }

    def validate(self, program):
        """ check the program and return the names of the required helpers

        raises ValidationError on the first problem found
        """

        scope = Scope()
        for name in self.declared:
            scope.declare(name)

        for stmt in program.statements:
            fn = self.pragma_mapping.get(stmt.type, None)
            if fn is not None:
                fn(stmt, scope)

        self.hoist(program.statements, scope)

        self.level = LEVEL_PROGRAM
        for stmt in program.statements:
            self.visit(stmt, scope)

        return tuple(self.helpers)

    def error(self, item, message):
        token = item.first_token() if isinstance(item, Node) else item
        raise ValidationError(token, message, self.filename)

    def declare(self, scope, token):
        if scope.is_declared(token.value):
            self.error(token, "'%s' is already declared in this scope" % token.value)
        scope.declare(token.value)

    # -------------------------------------------------------------------------
    # pragmas

    def apply_include(self, pragma, scope):
        for token in pragma.names:
            name = token.value
            if name not in builtins.helpers:
                self.error(token, "unknown helper '%s'" % name)
            scope.declare(name)
            if name not in self.helpers:
                self.helpers.append(name)

    def apply_declare(self, pragma, scope):
        for item in pragma.names:
            if isinstance(item, Node):
                tag = item.value
                if tag not in builtins.declare_tags:
                    self.error(item, "invalid declaration group '%s'" % tag)
                for name in builtins.declare_tags[tag]:
                    scope.declare(name)
            else:
                scope.declare(item.value)

    # -------------------------------------------------------------------------
    # hoisting

    def hoist(self, statements, scope, direct=True):
        """ declare functions and vars before the body is checked

        function statements are only hoisted when they appear directly in
        the body. var statements are hoisted from any nested block which
        is not itself a function.
        """

        for stmt in statements:

            if stmt.type == Node.T_FUNCTION_STATEMENT:
                if direct:
                    self.declare(scope, stmt.name)

            elif stmt.type == Node.T_VAR:
                self.hoist_var(stmt, scope)

            elif stmt.type == Node.T_IF:
                self.hoist(stmt.block.statements, scope, False)
                else_part = stmt.else_part
                if else_part is not None:
                    if else_part.type == Node.T_BLOCK:
                        self.hoist(else_part.statements, scope, False)
                    else:
                        self.hoist([else_part], scope, False)

            elif stmt.type in (Node.T_WHILE, Node.T_FOR):
                self.hoist(stmt.block.statements, scope, False)

            elif stmt.type == Node.T_LABEL:
                self.hoist([stmt.statement], scope, False)

            elif stmt.type == Node.T_SWITCH:
                for clause in stmt.clauses:
                    self.hoist(clause.statements, scope, False)

    def hoist_var(self, stmt, scope):

        items = stmt.exprs.items
        if not items:
            self.error(stmt, "invalid expression in var statement")

        for expr in items:
            if expr.type == Node.T_IDENT_EXPR:
                ident = expr.ident
            elif expr.type == Node.T_BINARY and \
                    expr.lhs.type == Node.T_IDENT_EXPR and \
                    expr.op.value == '=':
                ident = expr.lhs.ident
            else:
                self.error(expr, "invalid expression in var statement")
            self.declare(scope, ident)

    # -------------------------------------------------------------------------
    # checking

    def visit(self, node, scope):
        fn = self.visit_mapping.get(node.type, self.visit_default)
        fn(node, scope)

    def visit_default(self, node, scope):
        for child in node.children:
            if isinstance(child, Node):
                self.visit(child, scope)

    def visit_statements(self, statements, scope, level):
        saved = self.level
        self.level = level
        for stmt in statements:
            self.visit(stmt, scope)
        self.level = saved

    def visit_block(self, node, scope):
        self.visit_statements(node.statements, scope, LEVEL_BLOCK)

    def visit_case(self, node, scope):
        if not node.is_default():
            self.visit(node.test, scope)
        self.visit_statements(node.statements, scope, LEVEL_BLOCK)

    def visit_function_statement(self, node, scope):
        if self.level == LEVEL_BLOCK:
            self.error(node, "functions may only be declared in the top-level "
                "of the program or directly within other functions")
        self.visit_function(node, scope)

    def visit_function(self, node, scope):

        inner = scope.fork()

        params = node.params.items
        last = len(params) - 1
        for i, param in enumerate(params):
            if param.type == Node.T_IDENT_EXPR:
                self.declare(inner, param.ident)

            elif param.type == Node.T_PASS:
                if i != 0:
                    self.error(param, "'@' must be the first parameter")
                handler = param.handler
                if handler is not None:
                    if not inner.contains(handler.value):
                        self.error(param, "'%s' has not been declared" % handler.value)
                    # the handler may not be hidden by a declaration in the body
                    inner.declare(handler.value)

            elif param.type == Node.T_YADA:
                if i != last:
                    self.error(param, "'...' must be the last parameter")
                self.declare(inner, param.ident)

        binding = node.this_binding
        if binding is not None:
            self.declare(inner, binding[1])

        statements = node.block.statements
        self.hoist(statements, inner)
        self.visit_statements(statements, inner, LEVEL_FUNCTION)

    def visit_arrow_function(self, node, scope):

        inner = scope.fork()
        for param in node.params.items:
            if param.type != Node.T_IDENT_EXPR:
                self.error(param, "arrow functions cannot have @ or ... params")
            self.declare(inner, param.ident)

        self.visit(node.expr, inner)

    def visit_simple_arrow_function(self, node, scope):
        inner = scope.fork()
        inner.declare('_')
        self.visit(node.expr, inner)

    def visit_ident(self, node, scope):
        token = node.ident
        if not scope.contains(token.value):
            self.error(token, "'%s' has not been declared" % token.value)

    def visit_property(self, node, scope):
        self.visit(node.target, scope)

    def visit_invoke(self, node, scope):
        self.visit(node.target, scope)
        self.visit(node.args, scope)

    def visit_pass(self, node, scope):
        self.error(node, "invalid expression beginning with '@'")

    def visit_yada(self, node, scope):
        self.error(node, "invalid expression ending with '...'")

    def visit_pragma(self, node, scope):
        if self.level != LEVEL_PROGRAM:
            self.error(node, "%s is only allowed at the top-level of the program" % (
                node.keyword.value))
