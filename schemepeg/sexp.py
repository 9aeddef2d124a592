import re

from fractions import Fraction

from schemepeg.grammar import char_names, identifier
from schemepeg.types import (
    Char,
    Exp,
    Pair,
    Placeholder,
    Symbol,
    Vector,
    nil
    )

__all__ = [
    'walk',
    'is_cyclic',
    'patch',
    'shared',
    'write',
    'equal'
    ]

LPAR = '('
RPAR = ')'

re_identifier = re.compile(identifier + r'\Z')

# Everything here tracks visited pairs and vectors by id, since datum
# labels can make them circular.

def is_compound(obj):
    return isinstance(obj, (Pair, Vector))

def children(obj):
    if isinstance(obj, Pair):
        return [obj.car, obj.cdr]
    elif isinstance(obj, Vector):
        return list(obj)
    return []

def walk(datum):
    """Yield datum and everything reachable from it, each pair and
    vector only once."""
    seen = set()
    stack = [datum]
    while stack:
        obj = stack.pop()
        if is_compound(obj):
            if id(obj) in seen:
                continue
            seen.add(id(obj))
            stack.extend(reversed(children(obj)))
        yield obj

def is_cyclic(datum):
    """True when some pair or vector reachable from datum contains itself."""
    if not is_compound(datum):
        return False
    path, done = set([id(datum)]), set()
    stack = [(datum, iter(children(datum)))]
    while stack:
        obj, rest = stack[-1]
        for child in rest:
            if not is_compound(child) or id(child) in done:
                continue
            if id(child) in path:
                return True
            path.add(id(child))
            stack.append((child, iter(children(child))))
            break
        else:
            stack.pop()
            path.discard(id(obj))
            done.add(id(obj))
    return False

def patch(datum, old, new):
    """Replace every reference to old inside datum by new, in place."""
    if datum is old:
        return new
    for obj in walk(datum):
        if isinstance(obj, Pair):
            if obj.car is old:
                obj.car = new
            if obj.cdr is old:
                obj.cdr = new
        elif isinstance(obj, Vector):
            for i, e in enumerate(obj):
                if e is old:
                    obj[i] = new
    return datum

def shared(datum):
    """ids of the pairs and vectors reachable more than once."""
    seen, res = set(), set()
    stack = [datum]
    while stack:
        obj = stack.pop()
        if not is_compound(obj):
            continue
        if id(obj) in seen:
            res.add(id(obj))
            continue
        seen.add(id(obj))
        stack.extend(children(obj))
    return res


################################################################################
## Writing data back out
################################################################################

char_escapes = {
    '\\': '\\\\',
    '"': '\\"',
    '\a': '\\a',
    '\b': '\\b',
    '\t': '\\t',
    '\n': '\\n',
    '\r': '\\r'
    }

symbol_escapes = dict(char_escapes)
del symbol_escapes['"']
symbol_escapes['|'] = '\\|'

char_words = dict((v, k) for k, v in char_names.items())

def escape(txt, escapes):
    res = ''
    for c in txt:
        if c in escapes:
            res += escapes[c]
        elif not c.isprintable():
            res += '\\x{0:x};'.format(ord(c))
        else:
            res += c
    return res

def write_atom(obj):
    if obj is True:
        return '#t'
    elif obj is False:
        return '#f'
    elif obj is nil:
        return '()'
    elif isinstance(obj, Symbol):
        if re_identifier.match(obj.name):
            return obj.name
        return '|' + escape(obj.name, symbol_escapes) + '|'
    elif isinstance(obj, Char):
        if obj.val in char_words:
            return '#\\' + char_words[obj.val]
        elif obj.val.isprintable():
            return '#\\' + obj.val
        return '#\\x{0:x}'.format(ord(obj.val))
    elif isinstance(obj, str):
        return '"' + escape(obj, char_escapes) + '"'
    elif isinstance(obj, float):
        if obj != obj:
            return '+nan.0'
        elif obj in (float('inf'), float('-inf')):
            return '+inf.0' if obj > 0 else '-inf.0'
        return repr(obj)
    elif isinstance(obj, Fraction):
        return '{0}/{1}'.format(obj.numerator, obj.denominator)
    elif isinstance(obj, (bytes, bytearray)):
        return '#u8(' + ' '.join(str(b) for b in obj) + ')'
    elif isinstance(obj, Placeholder):
        return '#{0}#'.format(obj.label)
    elif isinstance(obj, Exp):
        return repr(obj)
    return str(obj)

def write(datum):
    """The external representation of datum. Shared and circular
    structure is written with datum labels, so this always terminates."""
    labels = dict.fromkeys(shared(datum))
    count = [0]
    def write_(obj):
        if is_compound(obj) and id(obj) in labels:
            n = labels[id(obj)]
            if n is not None:
                return '#{0}#'.format(n)
            n = labels[id(obj)] = count[0]
            count[0] += 1
            return '#{0}={1}'.format(n, body(obj))
        return body(obj)
    def body(obj):
        if isinstance(obj, Pair):
            parts = [write_(obj.car)]
            rest = obj.cdr
            while isinstance(rest, Pair) and id(rest) not in labels:
                parts.append(write_(rest.car))
                rest = rest.cdr
            if rest is not nil:
                parts.extend(['.', write_(rest)])
            return LPAR + ' '.join(parts) + RPAR
        elif isinstance(obj, Vector):
            return '#' + LPAR + ' '.join(write_(e) for e in obj) + RPAR
        return write_atom(obj)
    return write_(datum)

def equal(a, b):
    """Structural equality, shared structure included."""
    return write(a) == write(b)
