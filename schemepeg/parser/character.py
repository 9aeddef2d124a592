import re

from schemepeg.grammar import char_names, delimiter

__all__ = ['Character']

class Character(str):
    # can't use r'' syntax or it breaks vim's coloring...annoying
    grammar = re.compile(
        '#\\\\(?:x(?P<hex>[0-9a-fA-F]+)|(?P<name>%s)|(?P<char>.))%s' % (
            '|'.join(char_names),
            delimiter
            ),
        re.S
        )

    @property
    def value(self):
        m = Character.grammar.match(self)
        if m.group('hex'):
            return chr(int(m.group('hex'), 16))
        elif m.group('name'):
            return char_names[m.group('name')]
        else:
            return m.group('char')

    def build(self, ctx):
        return ctx.construct('character', self, value=self.value)
