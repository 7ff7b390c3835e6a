"""Builder for Octane query expressions.

Octane filters collections with a small expression language passed in the
``query`` parameter::

    query="name EQ ^login fails^;severity EQ {id EQ ^list_node.severity.high^}"

Statements are ``field OP value``. ``;`` joins with AND, ``||`` with OR and
a leading ``!`` negates. Strings are wrapped in ``^`` and references to
other entities use a nested ``{...}`` query.
"""

from typing import Any, Iterable, Optional

EQ = 'EQ'
LT = 'LT'
GT = 'GT'
LE = 'LE'
GE = 'GE'
IN = 'IN'
BTW = 'BTW'

OPERATORS = {EQ, LT, GT, LE, GE, IN, BTW}


def format_value(value: Any) -> str:
    """Render a Python value as an Octane query literal."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, Query):
        return '{' + value.build() + '}'
    text = str(value).replace('\\', '\\\\').replace('^', '\\^')
    return f'^{text}^'


class Query:
    """An immutable query expression.

    Combine with :meth:`and_`, :meth:`or_` and :meth:`negate`; each returns a
    new ``Query``.
    """

    def __init__(self, expression: str, grouped: bool = False, compound: bool = False):
        if not expression:
            raise ValueError('Query expression cannot be empty')
        self._expression = expression
        self._is_group = grouped
        # an ungrouped AND chain; needs parentheses inside an OR
        self._is_compound = compound

    @classmethod
    def statement(cls, field: str, op: str, value: Any) -> 'Query':
        op = op.upper()
        if op not in OPERATORS:
            raise ValueError(f'Unknown query operator: {op}')
        if op == IN:
            return cls.in_(field, value)
        if op == BTW:
            low, high = value
            return cls.between(field, low, high)
        return cls(f'{field} {op} {format_value(value)}')

    @classmethod
    def in_(cls, field: str, values: Iterable[Any]) -> 'Query':
        rendered = ','.join(format_value(v) for v in values)
        if not rendered:
            raise ValueError(f'IN statement on {field} needs at least one value')
        return cls(f'{field} IN {rendered}')

    @classmethod
    def between(cls, field: str, low: Any, high: Any) -> 'Query':
        return cls(f'{field} BTW {format_value(low)}...{format_value(high)}')

    @classmethod
    def reference(cls, field: str, subquery: 'Query') -> 'Query':
        """``field EQ {subquery}`` - match on a related entity."""
        return cls(f'{field} EQ {format_value(subquery)}')

    @classmethod
    def null(cls, field: str) -> 'Query':
        return cls(f'{field} EQ null')

    def and_(self, other: 'Query') -> 'Query':
        return Query(f'{self._expression};{other._expression}', compound=True)

    def or_(self, other: 'Query') -> 'Query':
        return Query(f'({self._or_operand()}||{other._or_operand()})', grouped=True)

    def negate(self) -> 'Query':
        return Query(f'!{self._grouped()}')

    def _or_operand(self) -> str:
        if self._is_compound:
            return self._grouped()
        return self._expression

    def _grouped(self) -> str:
        if self._is_group:
            return self._expression
        return f'({self._expression})'

    def build(self) -> str:
        return self._expression

    def as_param(self) -> str:
        """The expression as sent in the ``query`` URL parameter."""
        return f'"{self._expression}"'

    def __str__(self) -> str:
        return self._expression

    def __repr__(self) -> str:
        return f'Query({self._expression!r})'

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Query) and other._expression == self._expression

    def __hash__(self) -> int:
        return hash(self._expression)


def to_param(query: Optional[Any]) -> Optional[str]:
    """Accept a ``Query`` or a raw expression string for the ``query`` parameter."""
    if query is None:
        return None
    if isinstance(query, Query):
        return query.as_param()
    text = str(query)
    if text.startswith('"') and text.endswith('"'):
        return text
    return f'"{text}"'
