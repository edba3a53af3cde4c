from __future__ import annotations

from typing import Callable, Iterable

ClausePredicate = Callable[[str], bool]

_QUOTES = ('"', "`")


def normalize_clause(clause: str) -> str:
    """Quote a bare import path such as ``strings`` or ``net/http``.

    Clauses carrying a quote character or more than one token (aliases,
    dot and blank imports) are returned untouched.
    """
    if not clause or any(quote in clause for quote in _QUOTES):
        return clause
    if len(clause.split()) != 1:
        return clause
    return f'"{clause}"'


def parse_imports(spec: str, accept: ClausePredicate) -> list[str]:
    clauses: list[str] = []
    for piece in spec.strip(" ;").split(";"):
        clause = normalize_clause(piece.strip(" \t"))
        if accept(clause):
            clauses.append(clause)
    return clauses


def accept_non_empty(clause: str) -> bool:
    return clause != ""


def excluding(names: Iterable[str]) -> ClausePredicate:
    """Reject empty clauses and the given packages in either quoting style."""
    rejected = {""}
    for name in names:
        rejected.update(f"{quote}{name}{quote}" for quote in _QUOTES)

    def accept(clause: str) -> bool:
        return clause not in rejected

    return accept


def render_import_block(clauses: list[str]) -> str:
    # gofmt rejects an empty ``import ()`` block in some toolchains.
    if not clauses:
        return ""
    return "import (\n" + "\n".join(clauses) + "\n)"
