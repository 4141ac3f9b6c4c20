import os
import sys
import logging

from .token import CompileError
from .lexer import Lexer
from .compiler import compile, parse
from .builder import Builder, BuildError

log = logging.getLogger("neatjs.cli")

def env_declared():
    """ names listed in NEATJS_DECLARE, comma separated """
    text = os.environ.get('NEATJS_DECLARE', "")
    return [name.strip() for name in text.split(",") if name.strip()]

def read_source(path):
    """ return (identifier, text) for a path, '-' reads stdin """
    if path == "-":
        return "<stdin>", sys.stdin.read()
    with open(path, "r") as rf:
        return path, rf.read()

class CLI(object):
    def __init__(self):
        super(CLI, self).__init__()

    def register(self, parser):
        pass

    def execute(self, args):
        pass

class CompileCLI(CLI):
    """ compile a single neat file into javascript

    use '-' to read from stdin or write to stdout
    """

    def register(self, parser):
        subparser = parser.add_parser('compile',
            description=self.__doc__,
            help=self.__doc__.strip().split("\n")[0])
        subparser.set_defaults(func=self.execute, cli=self)

        subparser.add_argument('in_neat')
        subparser.add_argument('out_js', nargs='?', default="-")

    def execute(self, args):

        identifier, text = read_source(args.in_neat)

        result = compile(identifier, text, env_declared())
        if not result.ok:
            sys.stderr.write("%s\n" % result.error)
            return 1

        if args.out_js == "-":
            sys.stdout.write(result.output)
        else:
            with open(args.out_js, "w") as wf:
                wf.write(result.output)
            log.info("wrote %s", args.out_js)

        return 0

class BuildCLI(CLI):
    """ compile every neat file in a directory tree

    the directory structure of the source is mirrored in the destination
    """

    def register(self, parser):
        subparser = parser.add_parser('build',
            description=self.__doc__,
            help=self.__doc__.strip().split("\n")[0])
        subparser.set_defaults(func=self.execute, cli=self)

        subparser.add_argument('--ext', default=Builder.source_ext,
            help="source file extension (default: %(default)s)")
        subparser.add_argument('--out-ext', default=Builder.output_ext,
            help="output file extension (default: %(default)s)")
        subparser.add_argument('src_dir')
        subparser.add_argument('dst_dir')

    def execute(self, args):

        builder = Builder(args.src_dir, args.dst_dir,
            declare=env_declared(),
            source_ext=args.ext,
            output_ext=args.out_ext)

        try:
            builder.build()
        except BuildError as e:
            sys.stderr.write("%s\n" % e)
            return 1

        return 0

class CheckCLI(CLI):
    """ validate neat files without writing any output
    """

    def register(self, parser):
        subparser = parser.add_parser('check',
            description=self.__doc__,
            help=self.__doc__.strip().split("\n")[0])
        subparser.set_defaults(func=self.execute, cli=self)

        subparser.add_argument('files', nargs='+')

    def execute(self, args):

        declared = env_declared()
        failed = 0
        for path in args.files:
            identifier, text = read_source(path)
            result = compile(identifier, text, declared)
            if result.ok:
                log.info("%s: ok", identifier)
            else:
                sys.stderr.write("%s\n" % result.error)
                failed += 1

        return 1 if failed else 0

class AstCLI(CLI):
    """ print the syntax tree for a neat file
    """

    def register(self, parser):
        subparser = parser.add_parser('ast',
            description=self.__doc__,
            help=self.__doc__.strip().split("\n")[0])
        subparser.set_defaults(func=self.execute, cli=self)

        subparser.add_argument('in_neat')

    def execute(self, args):

        identifier, text = read_source(args.in_neat)

        try:
            program = parse(text, identifier, env_declared())
        except CompileError as e:
            sys.stderr.write("%s\n" % e)
            return 1

        sys.stdout.write(program.toString())
        return 0

class TokensCLI(CLI):
    """ print the tokens of a neat file
    """

    def register(self, parser):
        subparser = parser.add_parser('tokens',
            description=self.__doc__,
            help=self.__doc__.strip().split("\n")[0])
        subparser.set_defaults(func=self.execute, cli=self)

        subparser.add_argument('in_neat')

    def execute(self, args):

        identifier, text = read_source(args.in_neat)

        try:
            tokens = Lexer(text, identifier).lex()
        except CompileError as e:
            sys.stderr.write("%s\n" % e)
            return 1

        for token in tokens:
            sys.stdout.write("%r\n" % token)
        return 0

def register_parsers(parser):

    CompileCLI().register(parser)
    BuildCLI().register(parser)
    CheckCLI().register(parser)
    AstCLI().register(parser)
    TokensCLI().register(parser)
