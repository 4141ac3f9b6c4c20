#! cd .. && python -m tests.util
from neatjs.token import Token
from neatjs.parser import Parser
from neatjs.lexer import Lexer

def edit_distance(hyp, ref, eq=None):
    """
    given: two sequences hyp and ref (str, list, or bytes)

    solve E(i,j) -> E(m,n)
    """

    if len(hyp) == 0:
        return [(None, elem) for elem in ref], 0, 0, 0, len(ref)

    if len(ref) == 0:
        return [(elem, None) for elem in hyp], 0, 0, len(hyp), 0

    if eq is None:
        eq = lambda a, b: a == b

    e = [0, ] * (len(hyp) * len(ref))
    s = lambda i, j: i * len(ref) + j
    d = lambda i, j: 0 if eq(hyp[i], ref[j]) else 1
    E = lambda i, j: e[s(i, j)]

    e[s(0, 0)] = d(0, 0)

    # build the error table using dynamic programming
    # first build the top and left edge
    for i in range(1, len(hyp)):
        e[s(i, 0)] = min([1 + i, d(i, 0) + i])

    for j in range(1, len(ref)):
        e[s(0, j)] = min([1 + j, d(0, j) + j])

    # fill in remaining squares
    for i in range(1, len(hyp)):
        for j in range(1, len(ref)):
            e[s(i, j)] = min([1 + E(i - 1, j), 1 + E(i, j - 1), d(i, j) + E(i - 1, j - 1)])

    # reverse walk
    # find number of substitutions/insertions/deletions
    i = len(hyp) - 1
    j = len(ref) - 1
    seq = []
    cor = sub = del_ = ins = 0
    while i > 0 and j > 0:
        _a = E(i, j)            # current cost
        _b = E(i - 1, j)        # cost of insertion
        _c = E(i, j - 1)        # cost of deletion
        _d = E(i - 1, j - 1)    # cost of a substitution

        if _d <= _a and _d < _b and _d < _c:
            seq.append((hyp[i], ref[j]))
            if eq(hyp[i], ref[j]):
                cor += 1
            else:
                sub += 1
            i, j = i - 1, j - 1
        elif _b <= _c:
            seq.append((hyp[i], None))
            i = i - 1
            ins += 1
        else:
            seq.append((None, ref[j]))
            j = j - 1
            del_ += 1

    while i >= 0 and j >= 0:
        seq.append((hyp[i], ref[j]))
        if eq(hyp[i], ref[j]):
            cor += 1
        else:
            sub += 1
        i = i - 1
        j = j - 1

    while i >= 0:
        seq.append((hyp[i], None))
        i = i - 1
        ins += 1

    while j >= 0:
        seq.append((None, ref[j]))
        j = j - 1
        del_ += 1

    if sub + ins + del_ == 0:
        assert cor == len(hyp), (cor, len(hyp))

    return reversed(seq), cor, sub, ins, del_

def tokcmp(a, b):
    """ compare two (depth, item) pairs from flatten()

    nodes are compared by type, tokens by type and value
    """
    if a is None:
        return False
    if b is None:
        return False

    depth1, item1 = a
    depth2, item2 = b

    if depth1 != depth2 or item1.type != item2.type:
        return False

    if isinstance(item1, Token):
        return isinstance(item2, Token) and item1.value == item2.value

    return not isinstance(item2, Token)

def parsecmp(expected, actual, debug=False):

    a = actual.flatten()
    b = expected.flatten()

    seq, cor, sub, ins, del_ = edit_distance(a, b, tokcmp)

    error_count = sub + ins + del_
    if error_count > 0 or debug:
        print("\n--- %-50s | --- %-.50s" % ("    HYP", "    REF"))
        for a, b in seq:
            c = ' ' if tokcmp(a, b) else '|'
            if not a:
                a = (0, None)
            if not b:
                b = (0, None)
            print("%3d %-50r %s %3d %-.50r" % (a[0], a[1], c, b[0], b[1]))
        print(actual.toString())
    return error_count

def TOKEN(t, v):
    return Token(getattr(Token, t), 1, 0, v)

def NODE(cls, *children):
    return cls(children)

def IDENT(name):
    """ shorthand for an identifier expression """
    from neatjs.node import IdentExpr
    return IdentExpr([TOKEN('T_TEXT', name)])

def parse(text, declared=()):
    return Parser("<test>", text, declared).parse()

def lex(text):
    return Lexer(text, "<test>").lex()

def source_text(program):
    """ reconstruct the source from the preamble and the leaf tokens """
    return program.preamble + ''.join(tok.text() for tok in program.tokens())

