import re

from pypeg2 import attr, maybe_some, some

from schemepeg.errors import DuplicateLabelError, UnresolvedLabelError
from schemepeg.grammar import abbreviations, delimiter

from .basetype import *

__all__ = [
    'Datum',
    'ProperList',
    'DottedList',
    'Vector',
    'Bytevector',
    'Abbreviation',
    'LabelDefinition',
    'LabelReference',
    'LabelTable',
    'as_list'
    ]

def as_list(val):
    """Normalize what a repetition captured: nothing, one node or a list."""
    if val is None:
        return []
    elif isinstance(val, list):
        return list(val)
    else:
        return [val]


class LabelTable(dict):
    """Datum labels seen so far in one top-level datum.

    A label is allocated with a placeholder before its datum is built, so a
    reference from inside the datum resolves to the placeholder.
    """
    def allocate(self, label, placeholder):
        if label in self:
            raise DuplicateLabelError('datum label defined twice', label)
        self[label] = placeholder

    def bind(self, label, value):
        self[label] = value

    def resolve(self, label):
        try:
            return self[label]
        except KeyError:
            raise UnresolvedLabelError('reference to undefined datum label', label)


# delay until after Datum has been defined
Datum = []

class ProperList(object):
    grammar = '(', attr('items', maybe_some(Datum)), ')'

    def build(self, ctx):
        items = [d.build(ctx) for d in as_list(self.items)]
        return ctx.construct('list', self, items=items, tail=None)

class DottedList(object):
    grammar = '(', attr('items', some(Datum)), '.', attr('tail', Datum), ')'

    def build(self, ctx):
        items = [d.build(ctx) for d in as_list(self.items)]
        return ctx.construct('list', self, items=items, tail=self.tail.build(ctx))

class Vector(object):
    grammar = '#(', attr('items', maybe_some(Datum)), ')'

    def build(self, ctx):
        return ctx.construct('vector', self, items=[d.build(ctx) for d in as_list(self.items)])

class Byte(str):
    grammar = re.compile(r'(?:25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[0-9][0-9]?)' + delimiter)

class Bytevector(object):
    grammar = '#u8(', attr('items', maybe_some(Byte)), ')'

    def build(self, ctx):
        return ctx.construct('bytevector', self, values=[int(b) for b in as_list(self.items)])

class Abbreviation(object):
    grammar = attr('prefix', re.compile(r",@|[',`]")), attr('datum', Datum)

    @property
    def keyword(self):
        return abbreviations[self.prefix]

    def build(self, ctx):
        # expanded here, not by a macro expander
        items = [ctx.construct('symbol', self, name=self.keyword), self.datum.build(ctx)]
        return ctx.construct('list', self, items=items, tail=None)

class LabelDefinition(object):
    grammar = attr('label', re.compile(r'#[0-9]+=')), attr('datum', Datum)

    def build(self, ctx):
        label = int(self.label[1:-1])
        placeholder = ctx.construct('label_placeholder', self, label=label)
        ctx.labels.allocate(label, placeholder)
        value = self.datum.build(ctx)
        value = ctx.construct('label', self, label=label, placeholder=placeholder, datum=value)
        ctx.labels.bind(label, value)
        return value

class LabelReference(str):
    grammar = re.compile(r'#[0-9]+#')

    def build(self, ctx):
        return ctx.labels.resolve(int(self[1:-1]))

SimpleDatum = [Boolean, Number, Character, String, Symbol, Bytevector]

CompoundDatum = [ProperList, DottedList, Vector, Abbreviation]

Datum.extend(SimpleDatum + CompoundDatum + [LabelDefinition, LabelReference])
