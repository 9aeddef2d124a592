"""An ordered-choice grammar for R7RS-flavoured Scheme text.

    >>> from schemepeg import parse, read
    >>> parse("(define (f x) (* x 2))")
    [(define (f x) (* x 2))]
    >>> read("#0=(1 . #0#)")
    [#0=(1 . #0#)]
"""

from schemepeg.actions import Actions, DatumActions, TableActions
from schemepeg.errors import (
    SchemeError,
    SchemeSyntaxError,
    UnterminatedLiteralError,
    NumericFormatError,
    LabelError,
    UnresolvedLabelError,
    DuplicateLabelError
    )
from schemepeg.parser import NumberDescriptor, Position, SchemeGrammar, parse, read

__all__ = [
    'Actions',
    'DatumActions',
    'TableActions',
    'SchemeError',
    'SchemeSyntaxError',
    'UnterminatedLiteralError',
    'NumericFormatError',
    'LabelError',
    'UnresolvedLabelError',
    'DuplicateLabelError',
    'NumberDescriptor',
    'Position',
    'SchemeGrammar',
    'parse',
    'read'
    ]
