"""
Precedence table — operator symbol → (precedence, associativity, arity).

Built once via default_precedence_table() and passed explicitly into every
stage that needs it. The table is read-only after construction, so a single
instance can be shared by any number of concurrent evaluations.

Unary plus/minus are stored under the internal symbols "u+" / "u-": the
surface "+" and "-" map to the binary entries, and resolve_operator() picks
the unary entry from the token's position.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Optional, Sequence

from contracts import Arity, Associativity, OperatorKind, Token, TokenKind

UNARY_PLUS = "u+"
UNARY_MINUS = "u-"

# Surface symbols that may start an operand (and so may follow "(" or a binary operator).
UNARY_CAPABLE = frozenset({"+", "-", "not"})


@dataclass(frozen=True)
class OperatorSpec:
    symbol: str
    kind: OperatorKind
    precedence: int
    associativity: Associativity
    arity: Arity

    @property
    def is_unary(self) -> bool:
        return self.arity is Arity.UNARY


class PrecedenceTable(Mapping):
    """Immutable mapping of operator symbol → OperatorSpec."""

    def __init__(self, specs: Iterable[OperatorSpec]) -> None:
        entries: dict[str, OperatorSpec] = {}
        for spec in specs:
            if spec.symbol in entries:
                raise ValueError(f"Duplicate operator symbol: {spec.symbol!r}")
            entries[spec.symbol] = spec
        self._entries = MappingProxyType(entries)

    def __getitem__(self, symbol: str) -> OperatorSpec:
        return self._entries[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"PrecedenceTable({list(self._entries)!r})"

    def symbols_of(self, *kinds: OperatorKind) -> frozenset[str]:
        return frozenset(s for s, spec in self._entries.items() if spec.kind in kinds)

    def resolve(self, symbol: str, unary: bool) -> OperatorSpec:
        """OperatorSpec for a surface symbol in unary or binary position."""
        if unary and symbol == "+":
            return self._entries[UNARY_PLUS]
        if unary and symbol == "-":
            return self._entries[UNARY_MINUS]
        return self._entries[symbol]


def _spec(symbol: str, kind: OperatorKind, precedence: int,
          associativity: Associativity = Associativity.LEFT,
          arity: Arity = Arity.BINARY) -> OperatorSpec:
    return OperatorSpec(symbol, kind, precedence, associativity, arity)


def default_precedence_table() -> PrecedenceTable:
    right, unary = Associativity.RIGHT, Arity.UNARY
    return PrecedenceTable([
        _spec(UNARY_PLUS, OperatorKind.UNARY_PLUS, 8, right, unary),
        _spec(UNARY_MINUS, OperatorKind.UNARY_MINUS, 8, right, unary),
        _spec("^", OperatorKind.EXPONENT, 7, right),
        _spec("*", OperatorKind.MULTIPLICATIVE, 6),
        _spec("/", OperatorKind.MULTIPLICATIVE, 6),
        _spec("+", OperatorKind.ADDITIVE, 5),
        _spec("-", OperatorKind.ADDITIVE, 5),
        _spec("<", OperatorKind.COMPARISON, 4),
        _spec("<=", OperatorKind.COMPARISON, 4),
        _spec(">", OperatorKind.COMPARISON, 4),
        _spec(">=", OperatorKind.COMPARISON, 4),
        _spec("=", OperatorKind.COMPARISON, 4),
        _spec("!=", OperatorKind.COMPARISON, 4),
        _spec("not", OperatorKind.LOGICAL_NOT, 3, right, unary),
        _spec("and", OperatorKind.LOGICAL_AND, 2),
        _spec("or", OperatorKind.LOGICAL_OR, 1),
    ])


DEFAULT_PRECEDENCE = default_precedence_table()


def is_unary_position(tokens: Sequence[Token], index: int) -> bool:
    """A "+"/"-" is unary when it opens the expression or follows "(" or an operator."""
    if index == 0:
        return True
    prev = tokens[index - 1]
    return prev.kind in (TokenKind.LEFT_PAREN, TokenKind.OPERATOR)


def resolve_operator(
    tokens: Sequence[Token],
    index: int,
    table: PrecedenceTable,
) -> Optional[OperatorSpec]:
    """OperatorSpec of the operator token at index, or None for an unknown symbol.

    The reclassification is computed on demand and never written back into
    the token sequence.
    """
    token = tokens[index]
    if token.text not in table or token.text in (UNARY_PLUS, UNARY_MINUS):
        return None
    unary = token.text in ("+", "-") and is_unary_position(tokens, index)
    return table.resolve(token.text, unary)
