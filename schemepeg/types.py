
__all__ = [
    'Symbol',
    'Char',
    'Nil',
    'nil',
    'Pair',
    'Vector',
    'Placeholder',
    'from_list',
    'to_list',
    'Exp',
    'VarExp',
    'LitExp',
    'QuoteExp',
    'LamExp',
    'AppExp',
    'BeginExp',
    'DefExp',
    'FunDefExp',
    'SyntaxDefExp',
    'SyntaxRule'
    ]

################################################################################
## Data
################################################################################

class Symbol(object):
    """A symbol. There is only ever one Symbol per name, so symbols
    compare by identity.

    @type name: String
    @param name: The name of the symbol
    """
    table = {}

    def __new__(cls, name):
        try:
            return cls.table[name]
        except KeyError:
            sym = super(Symbol, cls).__new__(cls)
            sym.name = name
            cls.table[name] = sym
            return sym

    def __repr__(self):
        return sexp.write(self)

class Char(object):
    """A character, kept apart from strings of length one.

    @type val: String
    @param val: The character
    """
    def __init__(self, val):
        self.val = val

    def __eq__(self, other):
        return isinstance(other, Char) and self.val == other.val

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash((Char, self.val))

    def __repr__(self):
        return sexp.write(self)

class Nil(object):
    """The empty list."""
    def __repr__(self):
        return '()'

nil = Nil()

class Pair(object):
    """A pair. Mutable, so that datum labels can be patched in after
    the pair is built.

    @type car: Any datum
    @param car: The first element
    @type cdr: Any datum
    @param cdr: The rest; nil ends a proper list
    """
    def __init__(self, car, cdr):
        self.car = car
        self.cdr = cdr

    def __repr__(self):
        return sexp.write(self)

class Vector(list):
    """A vector of data."""
    def __repr__(self):
        return sexp.write(self)

class Placeholder(object):
    """Stands for a labelled datum while the datum is being built."""
    def __init__(self, label):
        self.label = label

    def __repr__(self):
        return 'Placeholder({0})'.format(self.label)

def from_list(items, tail=nil):
    """Chain items into pairs ending in tail."""
    res = tail
    for item in reversed(items):
        res = Pair(item, res)
    return res

def to_list(datum):
    """The elements of a proper list, as a Python list."""
    res = []
    seen = set()
    while isinstance(datum, Pair):
        if id(datum) in seen:
            raise ValueError('circular list')
        seen.add(id(datum))
        res.append(datum.car)
        datum = datum.cdr
    if datum is not nil:
        raise ValueError('improper list')
    return res

# import here to avoid circular import dependency
from schemepeg import sexp

################################################################################
## Scheme Expressions
################################################################################

class Exp(object):
    """Base of the forms. Two forms are equal when they write the same."""
    def toDatum(self):
        raise NotImplementedError

    def __repr__(self):
        return sexp.write(self.toDatum())

    def __eq__(self, other):
        return type(self) == type(other) and repr(self) == repr(other)

    def __ne__(self, other):
        return not self == other

    def __hash__(self):
        return hash(repr(self))

def formals_datum(argExps, restExp):
    tail = restExp.toDatum() if restExp is not None else nil
    return from_list([e.toDatum() for e in argExps], tail)

class VarExp(Exp):
    """A variable.

    @type name: String
    @param name: The name of the variable
    """
    def __init__(self, name):
        self.name = name

    def toDatum(self):
        return Symbol(self.name)

class LitExp(Exp):
    """A self-evaluating literal.

    @type datum: Any datum
    @param datum: The value
    """
    def __init__(self, datum):
        self.datum = datum

    def toDatum(self):
        return self.datum

class QuoteExp(Exp):
    """A quotation, written either (quote d) or 'd.

    @type datum: Any datum
    @param datum: The quoted datum
    """
    def __init__(self, datum):
        self.datum = datum

    def toDatum(self):
        return from_list([Symbol('quote'), self.datum])

class LamExp(Exp):
    """A lambda expression.

    @type argExps: A List of VarExps
    @param argExps: The fixed formal parameters of the lambda
    @type restExp: A VarExp or None
    @param restExp: The parameter collecting any further arguments
    @type bodyExps: A List of Scheme expressions
    @param bodyExps: The body of the lambda
    """
    def __init__(self, argExps, restExp, bodyExps):
        self.argExps = list(argExps)
        self.restExp = restExp
        self.bodyExps = list(bodyExps)

    def toDatum(self):
        if not self.argExps and self.restExp is not None:
            formals = self.restExp.toDatum()
        else:
            formals = formals_datum(self.argExps, self.restExp)
        return from_list(
            [Symbol('lambda'), formals] + [e.toDatum() for e in self.bodyExps]
            )

class AppExp(Exp):
    """A procedure call.

    @type funcExp: Any Scheme expression
    @param funcExp: The procedure being applied
    @type argExps: Scheme expressions (not passed as a list though!)
    @param argExps: The operands
    """
    def __init__(self, funcExp, *argExps):
        self.funcExp = funcExp
        self.argExps = argExps

    def toDatum(self):
        return from_list([self.funcExp.toDatum()] + [e.toDatum() for e in self.argExps])

class BeginExp(Exp):
    """A begin expression.

    @type exps: A list of Scheme expressions
    @param exps: The expressions contained within the `begin`
    """
    def __init__(self, *exps):
        self.exps = exps

    def toDatum(self):
        return from_list([Symbol('begin')] + [e.toDatum() for e in self.exps])

class DefExp(Exp):
    """A definition binding a variable to a value.

    @type varExp: A VarExp
    @param varExp: The variable being defined
    @type exp: Any Scheme expression
    @param exp: Its value
    """
    def __init__(self, varExp, exp):
        self.varExp = varExp
        self.exp = exp

    def toDatum(self):
        return from_list([Symbol('define'), self.varExp.toDatum(), self.exp.toDatum()])

class FunDefExp(Exp):
    """A definition of a procedure, (define (name . formals) body).

    @type varExp: A VarExp
    @param varExp: The name of the procedure
    @type argExps: A List of VarExps
    @param argExps: The fixed formal parameters
    @type restExp: A VarExp or None
    @param restExp: The rest parameter
    @type bodyExps: A List of Scheme expressions
    @param bodyExps: The body
    """
    def __init__(self, varExp, argExps, restExp, bodyExps):
        self.varExp = varExp
        self.argExps = list(argExps)
        self.restExp = restExp
        self.bodyExps = list(bodyExps)

    def toDatum(self):
        head = Pair(self.varExp.toDatum(), formals_datum(self.argExps, self.restExp))
        return from_list([Symbol('define'), head] + [e.toDatum() for e in self.bodyExps])

class SyntaxRule(Exp):
    """One (pattern template) rule of a syntax-rules transformer."""
    def __init__(self, pattern, template):
        self.pattern = pattern
        self.template = template

    def toDatum(self):
        return from_list([self.pattern, self.template])

class SyntaxDefExp(Exp):
    """A define-syntax with a syntax-rules transformer. Never expanded.

    @type varExp: A VarExp
    @param varExp: The keyword being defined
    @type literals: A List of VarExps
    @param literals: The literal identifiers of the transformer
    @type rules: A List of SyntaxRules
    @param rules: The rules, in order
    """
    def __init__(self, varExp, literals, rules):
        self.varExp = varExp
        self.literals = list(literals)
        self.rules = list(rules)

    def toDatum(self):
        transformer = from_list(
            [Symbol('syntax-rules'), from_list([e.toDatum() for e in self.literals])] +
            [r.toDatum() for r in self.rules]
            )
        return from_list([Symbol('define-syntax'), self.varExp.toDatum(), transformer])
