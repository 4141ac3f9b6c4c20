
from .token import Token, TokenError, CompileError
from .lexer import Lexer, LexError
from .parser import Parser, ParseError
from .validator import Validator, ValidationError, Scope
from .formatter import Formatter
from .compiler import CompileResult, compile, parse, render
from .builder import Builder, BuildError
