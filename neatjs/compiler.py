#! cd .. && python3 -m neatjs.compiler
"""
compile neat source text into javascript

    result = compile("app.neat", text)
    if result.ok:
        print(result.output)
    else:
        print(result.error)
"""
import sys
import logging

from .token import CompileError
from .parser import Parser
from .formatter import Formatter

log = logging.getLogger("neatjs.compiler")

class CompileResult(object):
    """ the outcome of compiling a single file

    exactly one of output and error is set
    """

    def __init__(self, output=None, error=None):
        super(CompileResult, self).__init__()
        self.output = output
        self.error = error

    def __repr__(self):
        if self.ok:
            return "<CompileResult ok %d chars>" % len(self.output)
        return "<CompileResult error %r>" % str(self.error)

    @property
    def ok(self):
        return self.error is None

def parse(text, filename="<string>", declare=()):
    """ parse and validate text, returning the Program

    raises CompileError
    """
    return Parser(filename, text, declare).parse()

def render(program):
    """ return the javascript for a validated Program """
    return Formatter().format(program)

def compile(identifier, text, declare=None):
    """ compile text, the identifier is used in error messages

    declare is an optional sequence of names which are visible to the
    program without a #declare pragma.
    """

    try:
        program = parse(text, identifier, declare or ())
    except CompileError as e:
        log.debug("failed to compile %s: %s", identifier, e)
        return CompileResult(error=e)

    output = render(program)
    log.debug("compiled %s: %d statements, helpers: %s",
        identifier, len(program.statements), ", ".join(program.helpers) or "none")
    return CompileResult(output=output)

def main():  # pragma: no cover

    text = """
    #include each;
    #declare :node;

    each(process.argv, (arg, i) {
        console.log(i, arg);
    });
    """

    if len(sys.argv) == 2 and sys.argv[1] == "-":
        text = sys.stdin.read()

    result = compile("<main>", text)
    if result.ok:
        print(result.output)
    else:
        print(result.error)

if __name__ == '__main__':  # pragma: no cover
    main()
