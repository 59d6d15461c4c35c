"""Boolean search expressions in the arXiv ``search_query`` syntax.

An expression is an ordered list of clauses, each ``code:term``, joined left
to right by AND, OR or ANDNOT::

    ti:quantum AND au:bohr ANDNOT cat:physics.gen-ph

The API evaluates strictly left to right and has no parentheses, so clauses
render in exactly the order they were added. Terms are not escaped: a term
containing ``:`` or an operator keyword changes the meaning of the query.
"""

from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .fields import field_code


class SearchOperator(str, Enum):
    """Combinator joining a clause to the expression before it."""

    AND = "AND"
    OR = "OR"
    ANDNOT = "ANDNOT"


class SortBy(str, Enum):
    """Values accepted by the ``sortBy`` parameter."""

    RELEVANCE = "relevance"
    LAST_UPDATED = "lastUpdatedDate"
    SUBMITTED = "submittedDate"


class SortOrder(str, Enum):
    """Values accepted by the ``sortOrder`` parameter."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class Clause(BaseModel):
    """One ``code:term`` unit, with the operator that joins it to its left."""

    model_config = ConfigDict(frozen=True)

    operator: Optional[SearchOperator] = None
    code: str
    term: str

    def render(self) -> str:
        fragment = f"{self.code}:{self.term}"
        if self.operator is None:
            return fragment
        return f"{self.operator.value} {fragment}"


class QueryExpression(BaseModel):
    """Immutable, append-only sequence of clauses."""

    model_config = ConfigDict(frozen=True)

    clauses: Tuple[Clause, ...] = ()

    def start(self, prefix: Any, term: str) -> "QueryExpression":
        """Return an expression holding only ``prefix:term``."""
        return QueryExpression(clauses=(Clause(code=field_code(prefix), term=term),))

    def add(self, operator: SearchOperator, prefix: Any, term: str) -> "QueryExpression":
        """
        Return a copy with ``OPERATOR prefix:term`` appended.

        On an empty expression the operator is dropped and the clause
        becomes the first one.
        """
        if not self.clauses:
            return self.start(prefix, term)
        clause = Clause(operator=SearchOperator(operator), code=field_code(prefix), term=term)
        return QueryExpression(clauses=self.clauses + (clause,))

    def render(self) -> str:
        return " ".join(clause.render() for clause in self.clauses)

    def __bool__(self) -> bool:
        return bool(self.clauses)

    def __str__(self) -> str:
        return self.render()
