from fractions import Fraction

from schemepeg.errors import NumericFormatError, UnresolvedLabelError
from schemepeg.sexp import patch
from schemepeg.types import (
    AppExp,
    BeginExp,
    Char,
    DefExp,
    FunDefExp,
    LamExp,
    LitExp,
    Placeholder,
    QuoteExp,
    Symbol,
    SyntaxDefExp,
    SyntaxRule,
    VarExp,
    Vector,
    from_list,
    nil
    )

__all__ = [
    'rules',
    'Actions',
    'TableActions',
    'DatumActions',
    'to_number'
    ]

# one entry per capture point of the grammar
rules = [
    'boolean',
    'symbol',
    'string',
    'character',
    'binary_number',
    'octal_number',
    'decimal_number',
    'hex_number',
    'list',
    'vector',
    'bytevector',
    'label_placeholder',
    'label',
    'identifier',
    'literal',
    'quotation',
    'lambda',
    'call',
    'sequence',
    'simple_definition',
    'function_definition',
    'syntax_definition',
    'syntax_rule'
    ]


# largest exponent an exact decimal may have
max_exact_exponent = 10000


class Actions(object):
    """The constructors the grammar calls for each capture.

    The grammar hands over the captured fields as keyword arguments, plus
    position, the Position (filename, offset, line, column) where the
    capture starts. It only ever nests the returned values into later
    captures; it never looks inside them.
    Subclasses define make_<rule> for each name in rules.

    Actions run after the whole input has matched, in source order, so a
    constructor never sees a capture that backtracking later discards.
    """
    def construct(self, rule, **fields):
        try:
            action = getattr(self, 'make_' + rule)
        except AttributeError:
            raise NotImplementedError('no action for rule ' + repr(rule))
        return action(**fields)


class TableActions(Actions):
    """Actions looked up in a dict of callables keyed by rule name."""
    def __init__(self, table):
        unknown = set(table) - set(rules)
        if unknown:
            raise ValueError('unknown rules: ' + ', '.join(sorted(unknown)))
        missing = set(rules) - set(table)
        if missing:
            raise ValueError('missing rules: ' + ', '.join(sorted(missing)))
        self.table = dict(table)

    def construct(self, rule, **fields):
        try:
            action = self.table[rule]
        except KeyError:
            raise NotImplementedError('no action for rule ' + repr(rule))
        return action(**fields)


def to_number(desc):
    """A Python number for a NumberDescriptor: int or Fraction when exact,
    float when inexact."""
    if desc.kind == 'special':
        if desc.exact:
            raise NumericFormatError('no exact representation', desc)
        return desc.sign * float(desc.special)
    elif desc.kind == 'rational':
        if desc.denominator == 0:
            raise NumericFormatError('zero denominator', desc)
        val = Fraction(desc.numerator, desc.denominator)
    elif desc.kind == 'decimal':
        if not desc.exact:
            # through the string, so huge exponents give inf
            return desc.sign * float('{0}.{1}e{2}'.format(
                desc.whole,
                desc.fraction or '0',
                desc.exponent or 0
                ))
        if abs(desc.exponent or 0) > max_exact_exponent:
            raise NumericFormatError('exponent too large for an exact number', desc)
        fraction = desc.fraction or ''
        val = Fraction(int(str(desc.whole) + fraction), 10 ** len(fraction))
        val *= Fraction(10) ** (desc.exponent or 0)
    else:
        val = desc.whole
    val = desc.sign * val
    if not desc.exact:
        return float(val)
    elif isinstance(val, Fraction) and val.denominator == 1:
        return val.numerator
    return val


class DatumActions(Actions):
    """Builds the data and forms of schemepeg.types."""

    def make_boolean(self, value, position=None):
        return value

    def make_symbol(self, name, position=None):
        return Symbol(name)

    def make_string(self, value, position=None):
        return value

    def make_character(self, value, position=None):
        return Char(value)

    def make_number(self, descriptor):
        return to_number(descriptor)

    def make_binary_number(self, descriptor, position=None):
        return self.make_number(descriptor)

    def make_octal_number(self, descriptor, position=None):
        return self.make_number(descriptor)

    def make_decimal_number(self, descriptor, position=None):
        return self.make_number(descriptor)

    def make_hex_number(self, descriptor, position=None):
        return self.make_number(descriptor)

    def make_list(self, items, tail, position=None):
        return from_list(items, nil if tail is None else tail)

    def make_vector(self, items, position=None):
        return Vector(items)

    def make_bytevector(self, values, position=None):
        return bytes(values)

    def make_label_placeholder(self, label, position=None):
        return Placeholder(label)

    def make_label(self, label, placeholder, datum, position=None):
        if datum is placeholder:
            raise UnresolvedLabelError('datum label refers only to itself', label)
        return patch(datum, placeholder, datum)

    def make_identifier(self, name, position=None):
        return VarExp(name)

    def make_literal(self, datum, position=None):
        return LitExp(datum)

    def make_quotation(self, datum, position=None):
        return QuoteExp(datum)

    def make_lambda(self, formals, rest, body, position=None):
        return LamExp(formals, rest, body)

    def make_call(self, operator, operands, position=None):
        return AppExp(operator, *operands)

    def make_sequence(self, forms, position=None):
        return BeginExp(*forms)

    def make_simple_definition(self, name, value, position=None):
        return DefExp(name, value)

    def make_function_definition(self, name, formals, rest, body, position=None):
        return FunDefExp(name, formals, rest, body)

    def make_syntax_definition(self, name, literals, rules, position=None):
        return SyntaxDefExp(name, literals, rules)

    def make_syntax_rule(self, pattern, template, position=None):
        return SyntaxRule(pattern, template)
