import re

from collections import namedtuple

from schemepeg.grammar import delimiter

__all__ = [
    'Number',
    'Numeral',
    'NumberDescriptor',
    'BinaryNumber',
    'OctalNumber',
    'DecimalNumber',
    'HexNumber'
    ]


class NumberDescriptor(namedtuple('NumberDescriptor', [
        'radix',
        'exactness',
        'sign',
        'whole',
        'numerator',
        'denominator',
        'fraction',
        'exponent',
        'special'
        ])):
    """What a numeral says, before anything decides how to represent it.

    @type radix: int
    @param radix: 2, 8, 10 or 16
    @type exactness: String or None
    @param exactness: 'exact' or 'inexact' when a prefix gave one
    @type sign: int
    @param sign: 1 or -1
    @type whole: int or None
    @param whole: integer part of an integer or decimal numeral
    @type fraction: String or None
    @param fraction: digits after the decimal point, '' for '1.'
    @type exponent: int or None
    @param exponent: signed exponent of a decimal numeral
    @type special: String or None
    @param special: 'inf' or 'nan'
    """
    __slots__ = ()

    @property
    def kind(self):
        if self.special:
            return 'special'
        elif self.denominator is not None:
            return 'rational'
        elif self.fraction is not None or self.exponent is not None:
            return 'decimal'
        else:
            return 'integer'

    @property
    def exact(self):
        if self.exactness:
            return self.exactness == 'exact'
        return self.kind in ('integer', 'rational')


digits = {
    2: '[01]',
    8: '[0-7]',
    10: '[0-9]',
    16: '[0-9a-f]'
    }

radix_markers = {
    2: '#b',
    8: '#o',
    10: '#d',
    16: '#x'
    }

exactnesses = {
    'e': 'exact',
    'i': 'inexact'
    }

def numeral(base):
    """Regular expression for a real numeral in the given radix."""
    digit = digits[base]
    radix = radix_markers[base]
    exactness = '#(?P<exactness{0}>[ei])'
    if base == 10:
        # the decimal radix marker may be left out
        prefix = '(?:{r}(?:{e1})?|{e2}(?:{r})?)?'
    else:
        prefix = '(?:{r}(?:{e1})?|{e2}{r})'
    prefix = prefix.format(r=radix, e1=exactness.format(1), e2=exactness.format(2))
    ureal = '(?P<numerator>{d}+)/(?P<denominator>{d}+)'.format(d=digit)
    if base == 10:
        ureal += (
            r'|(?=\.?[0-9])(?P<whole>[0-9]*)'
            r'(?:(?P<point>\.)(?P<fraction>[0-9]*))?'
            r'(?:e(?P<exponent>[+-]?[0-9]+))?'
            )
    else:
        ureal += '|(?P<whole>{d}+)'.format(d=digit)
    real = r'(?P<sign>[+-])?(?:{0})|(?P<special>[+-](?:inf|nan)\.0)'.format(ureal)
    return re.compile(prefix + '(?:' + real + ')' + delimiter, re.I)


class Numeral(str):
    radix = None

    def descriptor(self):
        m = type(self).grammar.match(self)
        exactness = m.group('exactness1') or m.group('exactness2')
        if exactness:
            exactness = exactnesses[exactness.lower()]
        sign = -1 if (m.group('sign') or m.group('special') or '+')[0] == '-' else 1
        fields = dict.fromkeys(NumberDescriptor._fields)
        fields.update(radix=self.radix, exactness=exactness, sign=sign)
        if m.group('special'):
            fields['special'] = m.group('special')[1:4].lower()
        elif m.group('denominator'):
            fields['numerator'] = int(m.group('numerator'), self.radix)
            fields['denominator'] = int(m.group('denominator'), self.radix)
        else:
            fields['whole'] = int(m.group('whole') or '0', self.radix)
            if self.radix == 10:
                if m.group('point'):
                    fields['fraction'] = m.group('fraction')
                if m.group('exponent'):
                    fields['exponent'] = int(m.group('exponent'))
        return NumberDescriptor(**fields)

    def build(self, ctx):
        return ctx.construct(self.rule, self, descriptor=self.descriptor())

class BinaryNumber(Numeral):
    grammar = numeral(2)
    radix = 2
    rule = 'binary_number'

class OctalNumber(Numeral):
    grammar = numeral(8)
    radix = 8
    rule = 'octal_number'

class DecimalNumber(Numeral):
    grammar = numeral(10)
    radix = 10
    rule = 'decimal_number'

class HexNumber(Numeral):
    grammar = numeral(16)
    radix = 16
    rule = 'hex_number'

# ordered choice over the radices
Number = [BinaryNumber, OctalNumber, DecimalNumber, HexNumber]
