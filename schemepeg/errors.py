
__all__ = [
    'SchemeError',
    'SchemeSyntaxError',
    'UnterminatedLiteralError',
    'NumericFormatError',
    'LabelError',
    'UnresolvedLabelError',
    'DuplicateLabelError'
    ]


class SchemeError(Exception):
    """Base class of every error raised while reading Scheme text."""


class SchemeSyntaxError(SchemeError):
    """No alternative of the grammar matched.

    @type offset: int
    @param offset: furthest position (0-based) the matcher reached
    @type expected: A list of Strings
    @param expected: the terminals that failed at C{offset}
    """
    def __init__(self, msg, offset=0, line=1, column=1, expected=(), filename=None):
        self.msg = msg
        self.offset = offset
        self.line = line
        self.column = column
        self.expected = list(expected)
        self.filename = filename
        super(SchemeSyntaxError, self).__init__(str(self))

    @property
    def rule(self):
        return self.expected[0] if self.expected else None

    def __str__(self):
        where = '{0}:{1}'.format(self.line, self.column)
        if self.filename:
            where = self.filename + ':' + where
        res = where + ': ' + self.msg
        if self.expected:
            res += ' (expected ' + ', '.join(self.expected) + ')'
        return res


class UnterminatedLiteralError(SchemeSyntaxError):
    """Input ended inside a string, character, list, vector or bytevector."""


class NumericFormatError(SchemeError):
    """A numeral matched the grammar but does not denote a number."""
    def __init__(self, msg, numeral=None):
        self.numeral = numeral
        if numeral is not None:
            msg = '{0}: {1}'.format(msg, numeral)
        super(NumericFormatError, self).__init__(msg)


class LabelError(SchemeError):
    def __init__(self, msg, label):
        self.label = label
        super(LabelError, self).__init__('{0}: #{1}#'.format(msg, label))


class UnresolvedLabelError(LabelError):
    """A C{#n#} reference with no earlier C{#n=} in the same datum."""


class DuplicateLabelError(LabelError):
    """A label defined twice within one top-level datum."""
