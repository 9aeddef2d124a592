import re

from schemepeg.grammar import (
    delimiter,
    identifier,
    inline_hex_escape,
    intraline_whitespace,
    line_ending,
    mnemonic_escape
    )

from .character import *
from .number import *

__all__ = [
    'Boolean',
    'Character',
    'Number',
    'String',
    'Symbol',
    'unescape'
    ]

mnemonics = {
    'a': '\a',
    'b': '\b',
    't': '\t',
    'n': '\n',
    'r': '\r'
    }

re_escape = re.compile(
    r'\\(?:x(?P<hex>[0-9a-fA-F]+);'
    r'|(?P<mnemonic>[abtnr])'
    r'|(?P<literal>["\\|])'
    r'|{0}*{1}{0}*)'.format(intraline_whitespace, line_ending)
    )

def unescape(txt):
    """Replace the escapes allowed in strings and |symbols| by the
    characters they denote; a line continuation disappears."""
    def replace(m):
        if m.group('hex'):
            return chr(int(m.group('hex'), 16))
        elif m.group('mnemonic'):
            return mnemonics[m.group('mnemonic')]
        elif m.group('literal'):
            return m.group('literal')
        else:
            return ''
    return re_escape.sub(replace, txt)


class Boolean(str):
    grammar = re.compile(r'#(?:true|false|t|f)' + delimiter, re.I)

    def build(self, ctx):
        return ctx.construct('boolean', self, value=self.lower() in ('#t', '#true'))

string_element = r'(?:[^"\\]|{0}|{1}|\\"|\\\\|\\\||\\{2}*{3}{2}*)'.format(
    mnemonic_escape,
    inline_hex_escape,
    intraline_whitespace,
    line_ending
    )

class String(str):
    grammar = re.compile(r'"{0}*"'.format(string_element))

    def build(self, ctx):
        return ctx.construct('string', self, value=unescape(self[1:-1]))

class Symbol(str):
    grammar = re.compile(identifier + delimiter)

    @property
    def name(self):
        if self.startswith('|'):
            return unescape(self[1:-1])
        return str(self)

    def build(self, ctx):
        return ctx.construct('symbol', self, name=self.name)
