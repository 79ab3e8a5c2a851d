"""jq query compilation and evaluation.

A compiled query is run lazily: ``CompiledQuery.steps`` yields one tagged
``Step`` per pulled value, so a runtime error in the jq program is a value
(``Error``) rather than an exception escaping the iterator. ``evaluate``
consumes those steps and decides the verdict.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Union

import jq

from apichecker.errors import QueryCompileError, QueryEvaluationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Value:
    value: Any


@dataclass(frozen=True)
class Error:
    error: Exception


@dataclass(frozen=True)
class Done:
    pass


Step = Union[Value, Error, Done]


@dataclass(frozen=True)
class QueryResult:
    value: Any = None
    verdict: bool = False
    produced: bool = False


class CompiledQuery:
    def __init__(self, source: str, program):
        self.source = source
        self._program = program

    def steps(self, data: Any) -> Iterator[Step]:
        """Run the program against ``data`` and yield one step per output."""
        try:
            outputs = iter(self._program.input_value(data))
        except ValueError as exc:
            yield Error(exc)
            return

        while True:
            try:
                value = next(outputs)
            except StopIteration:
                yield Done()
                return
            except ValueError as exc:
                yield Error(exc)
                return
            yield Value(value)

    def __repr__(self) -> str:
        return f"CompiledQuery({self.source!r})"


# Queries must not read the process environment (it holds the Slack token).
_SANDBOX_PRELUDE = "def env: {}; {} as $ENV | "


def compile_query(source: str) -> CompiledQuery:
    try:
        program = jq.compile(f"{_SANDBOX_PRELUDE}(\n{source}\n)")
    except ValueError as exc:
        raise QueryCompileError(f"{source!r}: {exc}") from exc
    return CompiledQuery(source, program)


def evaluate(steps: Iterable[Step]) -> QueryResult:
    """
    Pull steps until the first ``true``, the first error, or the end.

    Returns the last observed value and the verdict. The verdict is true only
    when a produced value is the boolean ``true``; nothing after it is pulled.
    """
    last = None
    produced = False

    for step in steps:
        if isinstance(step, Error):
            raise QueryEvaluationError(str(step.error)) from step.error
        if isinstance(step, Done):
            break

        logger.info("jq result: %r", step.value)
        last = step.value
        produced = True
        if step.value is True:
            return QueryResult(value=last, verdict=True, produced=True)

    if not produced:
        logger.warning("jq query produced no values")
    return QueryResult(value=last, verdict=False, produced=produced)
