import logging
import re
import sys

from collections import namedtuple
from contextlib import contextmanager

from pypeg2 import Parser, attr, some

from schemepeg.actions import Actions, DatumActions, TableActions
from schemepeg.errors import SchemeSyntaxError, UnterminatedLiteralError
from schemepeg.grammar import atmosphere, comment, whitespace

from .datum import Datum, LabelTable, as_list
from .expression import CommandOrDefinition, build_expression

__all__ = [
    'Program',
    'Data',
    'Context',
    'Position',
    'SchemeParser',
    'SchemeGrammar',
    'parse',
    'read'
    ]

logger = logging.getLogger(__name__)

unterminated = re.compile(r'"(?:[^"\\]|\\.)*\Z|#\\\Z', re.S)

# pypeg2 stack frames per level of nesting, with room to spare
frames_per_level = 40

max_recursion_limit = 100000

Position = namedtuple('Position', ['filename', 'offset', 'line', 'column'])


class Program(object):
    grammar = attr('forms', some(CommandOrDefinition))

class Data(object):
    grammar = attr('data', some(Datum))


def position(txt, offset):
    """1-based line and column of offset in txt."""
    line = txt.count('\n', 0, offset) + 1
    col = offset - (txt.rfind('\n', 0, offset) + 1) + 1
    return line, col

def describe(thing):
    # only terminals are worth reporting
    if isinstance(thing, str):
        return repr(thing)
    elif isinstance(thing, type) and issubclass(thing, str):
        return thing.__name__
    return None


@contextmanager
def deep_recursion(txt):
    """Raise the recursion limit for as deep as txt could nest."""
    old = sys.getrecursionlimit()
    limit = min(max_recursion_limit, old + frames_per_level * txt.count('('))
    sys.setrecursionlimit(max(old, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(old)

def too_deep(txt, offset, filename=None):
    line, col = position(txt, offset)
    return SchemeSyntaxError('nesting too deep', offset, line, col, filename=filename)


class SchemeParser(Parser):
    """A pypeg2 parser remembering the furthest point any terminal failed,
    and the offset at which each grammar node starts.

    pypeg2 only keeps its last error, which after backtracking is rarely
    where the input actually went wrong.
    """
    def __init__(self, source, filename=None):
        super(SchemeParser, self).__init__()
        self.source = source
        self.filename = filename
        self.whitespace = whitespace
        self.comment = comment
        self.furthest = len(source) + 1
        self.expected = []

    def _parse(self, text, thing, pos=[1, 0]):
        t, r = super(SchemeParser, self)._parse(text, thing, pos)
        if isinstance(r, SyntaxError):
            if thing is not self.whitespace and thing is not self.comment:
                self.failed(text, thing)
        elif isinstance(thing, type) and isinstance(r, thing):
            r.offset = self.start(text)
        return t, r

    def start(self, text):
        # past any atmosphere not yet skipped
        return len(self.source) - len(text) + atmosphere.match(text).end()

    def failed(self, text, thing):
        remaining = len(self.source) - self.start(text)
        if remaining < self.furthest:
            self.furthest = remaining
            self.expected = []
        if remaining == self.furthest:
            name = describe(thing)
            if name and name not in self.expected:
                self.expected.append(name)

    @property
    def offset(self):
        return max(len(self.source) - self.furthest, 0)

    def error(self):
        offset = self.offset
        line, col = position(self.source, offset)
        rest = self.source[offset:]
        if atmosphere.match(rest).end() == len(rest):
            cls, msg = UnterminatedLiteralError, 'unexpected end of input'
        elif unterminated.match(rest):
            cls, msg = UnterminatedLiteralError, 'unterminated literal'
        else:
            cls, msg = SchemeSyntaxError, 'unexpected {0!r}'.format(rest[:10])
        return cls(msg, offset, line, col, self.expected, self.filename)


class Context(object):
    """State of the build pass over one top-level form."""
    def __init__(self, actions, source, filename=None):
        self.actions = actions
        self.source = source
        self.filename = filename
        self.labels = LabelTable()

    def position(self, node):
        offset = getattr(node, 'offset', None)
        if offset is None:
            return None
        line, col = position(self.source, offset)
        return Position(self.filename, offset, line, col)

    def construct(self, rule, node, **fields):
        """Hand the fields captured by node to the action for rule."""
        return self.actions.construct(rule, position=self.position(node), **fields)


class SchemeGrammar(object):
    """The grammar bound to a table of semantic actions.

    @type actions: Actions or a dict of callables
    @param actions: constructors for every capture, defaults to DatumActions
    """
    def __init__(self, actions=None):
        if actions is None:
            actions = DatumActions()
        elif not isinstance(actions, Actions):
            actions = TableActions(actions)
        self.actions = actions

    def parse(self, txt, filename=None):
        """Parse a program, returning its top-level forms in order."""
        with deep_recursion(txt):
            tree = self.match(txt, Program, filename)
            return self.build(tree.forms, build_expression, txt, filename)

    def read(self, txt, filename=None):
        """Read every top-level datum of txt."""
        with deep_recursion(txt):
            tree = self.match(txt, Data, filename)
            return self.build(tree.data, lambda node, ctx: node.build(ctx), txt, filename)

    def match(self, txt, thing, filename=None):
        start = atmosphere.match(txt).end()
        if start == len(txt):
            line, col = position(txt, start)
            raise SchemeSyntaxError('no forms in input', start, line, col, filename=filename)
        logger.debug('matching %d characters as %s', len(txt), thing.__name__)
        parser = SchemeParser(txt, filename)
        try:
            rest, tree = parser.parse(txt[start:], thing)
        except SyntaxError:
            err = parser.error()
            logger.debug('match failed: %s', err)
            raise err
        except RecursionError:
            err = too_deep(txt, parser.offset, filename)
            logger.debug('match failed: %s', err)
            raise err
        if atmosphere.match(rest).end() != len(rest):
            err = parser.error()
            logger.debug('match stopped early: %s', err)
            raise err
        return tree

    def build(self, nodes, build_node, txt, filename=None):
        results = []
        for node in as_list(nodes):
            # datum labels never leak from one top-level form to the next
            ctx = Context(self.actions, txt, filename)
            try:
                results.append(build_node(node, ctx))
            except RecursionError:
                raise too_deep(txt, getattr(node, 'offset', 0), filename)
        logger.debug('built %d top-level forms', len(results))
        return results


def parse(txt, actions=None, filename=None):
    return SchemeGrammar(actions).parse(txt, filename)

def read(txt, actions=None, filename=None):
    return SchemeGrammar(actions).read(txt, filename)
