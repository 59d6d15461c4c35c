"""Search options and assembly of the arXiv query URL.

Every optional modifier of a search is a small immutable option value.
``apply_options`` folds a sequence of them, in order, over a
``SearchRequest``, producing a new request each step::

    request = build_search_request(
        FieldPrefix.AUTHOR, "Feynman",
        with_and(FieldPrefix.TITLE, "QED"),
        with_max_results(5),
    )
    request.query_string()
    # 'max_results=5&search_query=au%3AFeynman+AND+ti%3AQED'
"""

from functools import reduce
from typing import Any, Dict, Iterable, Union
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

from .config import DEFAULT_BASE_URL
from .query import QueryExpression, SearchOperator, SortBy, SortOrder

SEARCH_QUERY = "search_query"
SORT_BY = "sortBy"
SORT_ORDER = "sortOrder"
MAX_RESULTS = "max_results"
START = "start"


class ClauseOption(BaseModel):
    """Append ``OPERATOR prefix:term`` to the search expression."""

    model_config = ConfigDict(frozen=True)

    operator: SearchOperator
    prefix: Any
    term: str


class SortByOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: SortBy


class SortOrderOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: SortOrder


class MaxResultsOption(BaseModel):
    """Result limit; not range checked, the API applies its own cap."""

    model_config = ConfigDict(frozen=True)

    value: int


class StartIndexOption(BaseModel):
    """Offset of the first result, for callers paging by hand."""

    model_config = ConfigDict(frozen=True)

    value: int


SearchOption = Union[ClauseOption, SortByOption, SortOrderOption, MaxResultsOption, StartIndexOption]


def with_and(prefix: Any, term: str) -> ClauseOption:
    return ClauseOption(operator=SearchOperator.AND, prefix=prefix, term=term)


def with_or(prefix: Any, term: str) -> ClauseOption:
    return ClauseOption(operator=SearchOperator.OR, prefix=prefix, term=term)


def with_and_not(prefix: Any, term: str) -> ClauseOption:
    return ClauseOption(operator=SearchOperator.ANDNOT, prefix=prefix, term=term)


def with_sort_by(value: Union[SortBy, str]) -> SortByOption:
    return SortByOption(value=value)


def with_sort_order(value: Union[SortOrder, str]) -> SortOrderOption:
    return SortOrderOption(value=value)


def with_max_results(n: int) -> MaxResultsOption:
    return MaxResultsOption(value=n)


def with_start(n: int) -> StartIndexOption:
    return StartIndexOption(value=n)


class SearchRequest(BaseModel):
    """
    Parameters of one search call.

    ``expression`` accumulates into ``search_query``; every other parameter
    lives in ``options`` keyed by its wire name, so setting it again
    replaces the earlier value.
    """

    model_config = ConfigDict(frozen=True)

    expression: QueryExpression = Field(default_factory=QueryExpression)
    options: Dict[str, str] = Field(default_factory=dict)

    def start_query(self, prefix: Any, term: str) -> "SearchRequest":
        return self.model_copy(update={'expression': self.expression.start(prefix, term)})

    def add_clause(self, operator: SearchOperator, prefix: Any, term: str) -> "SearchRequest":
        return self.model_copy(update={'expression': self.expression.add(operator, prefix, term)})

    def set_parameter(self, key: str, value: str) -> "SearchRequest":
        return self.model_copy(update={'options': {**self.options, key: value}})

    @property
    def search_query(self) -> str:
        return self.expression.render()

    def params(self) -> Dict[str, str]:
        """Every query parameter by wire name."""
        params = {}
        if self.expression:
            params[SEARCH_QUERY] = self.expression.render()
        params.update(self.options)
        return params

    def query_string(self) -> str:
        """Form-encode the parameters with keys in sorted order."""
        return urlencode(sorted(self.params().items()))

    def url(self, base_url: str = DEFAULT_BASE_URL) -> str:
        return f"{base_url}?{self.query_string()}"


def apply_option(request: SearchRequest, option: SearchOption) -> SearchRequest:
    """Apply a single option, returning the updated request."""
    if isinstance(option, ClauseOption):
        return request.add_clause(option.operator, option.prefix, option.term)
    elif isinstance(option, SortByOption):
        return request.set_parameter(SORT_BY, option.value.value)
    elif isinstance(option, SortOrderOption):
        return request.set_parameter(SORT_ORDER, option.value.value)
    elif isinstance(option, MaxResultsOption):
        return request.set_parameter(MAX_RESULTS, str(option.value))
    elif isinstance(option, StartIndexOption):
        return request.set_parameter(START, str(option.value))
    raise TypeError(f"Unsupported search option: {option!r}")


def apply_options(request: SearchRequest, options: Iterable[SearchOption]) -> SearchRequest:
    """Apply options left to right."""
    return reduce(apply_option, options, request)


def build_search_request(prefix: Any, term: str, *options: SearchOption) -> SearchRequest:
    """Start a query with ``prefix:term`` then apply ``options`` in order."""
    return apply_options(SearchRequest().start_query(prefix, term), options)


def build_search_url(
    prefix: Any,
    term: str,
    *options: SearchOption,
    base_url: str = DEFAULT_BASE_URL
) -> str:
    """Full request URL for a search, without performing it."""
    return build_search_request(prefix, term, *options).url(base_url)
