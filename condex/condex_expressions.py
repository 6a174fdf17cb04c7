"""
Expression tree nodes for condition expressions.

Nodes are built once when a condition is compiled and evaluated many times
against different events. No node mutates itself after construction.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Tuple, Union

import pystache

from condex.condex_config import internal_logger
from condex.condex_errors import ArityError
from condex.condex_events import LogEvent
from condex.condex_functions import FunctionDescriptor

DiagnosticsSink = Union[logging.Logger, Callable[[str], Any], None]


class ConditionExpression(ABC):
    """Base class for every node of a condition expression tree."""

    @abstractmethod
    def render(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def evaluate(self, context: LogEvent) -> Any:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render()


class LiteralExpression(ConditionExpression):
    """A constant value: string, number, boolean or null."""
    def __init__(self, value: Any):
        self.value = value

    def render(self) -> str:
        v = self.value
        if v is None:
            return "null"
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, str):
            return "'" + v.replace("'", "''") + "'"
        return str(v)

    def evaluate(self, context: LogEvent) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"LiteralExpression({self.value!r})"


class LayoutExpression(ConditionExpression):
    """A Mustache template rendered against the event, e.g. `'{{logger}}'`."""
    def __init__(self, template: str):
        self.template = template
        self._renderer = pystache.Renderer(escape=lambda u: u)

    def render(self) -> str:
        return "'" + self.template.replace("'", "''") + "'"

    def evaluate(self, context: LogEvent) -> str:
        return self._renderer.render(self.template, context.as_template_context())

    def __repr__(self) -> str:
        return f"LayoutExpression({self.template!r})"


def _report(diagnostics: DiagnosticsSink, message: str):
    if diagnostics is None:
        return
    if isinstance(diagnostics, logging.Logger):
        diagnostics.error(message)
    else:
        diagnostics(message)


class CallExpression(ConditionExpression):
    """Condition method invocation, written `name(arg1, arg2, ...)`.

    The argument count is checked against the descriptor once, here. When the
    method's first parameter is a `LogEvent`, the event being evaluated is
    passed in that slot and is not written at the call site. Formal
    parameters past the supplied ones are filled from their defaults.

    Raises ArityError when the count is out of range. The message goes to
    `diagnostics` first: a logger (logged at ERROR), a callable taking the
    message, or None to skip reporting.
    """

    def __init__(self, name: str, descriptor: FunctionDescriptor,
                 arguments: Iterable[ConditionExpression],
                 diagnostics: DiagnosticsSink = internal_logger):
        args: Tuple[ConditionExpression, ...] = tuple(arguments)
        accepts_context = descriptor.accepts_context
        actual = len(args) + (1 if accepts_context else 0)
        required = descriptor.required_count
        total = descriptor.total_count
        if actual < required or actual > total:
            err = ArityError(name, required, total, actual)
            _report(diagnostics, str(err))
            raise err

        self._name = name
        self._descriptor = descriptor
        self._arguments = args
        self._accepts_context = accepts_context
        self._invoker = descriptor.invoker
        self._trailing_defaults: Tuple[Any, ...] = tuple(p.default for p in descriptor.parameters[actual:])

    @property
    def name(self) -> str:
        return self._name

    @property
    def descriptor(self) -> FunctionDescriptor:
        return self._descriptor

    @property
    def arguments(self) -> Tuple[ConditionExpression, ...]:
        return self._arguments

    @property
    def accepts_context(self) -> bool:
        return self._accepts_context

    @property
    def trailing_defaults(self) -> Tuple[Any, ...]:
        return self._trailing_defaults

    def render(self) -> str:
        return f"{self._name}({', '.join(arg.render() for arg in self._arguments)})"

    def evaluate(self, context: LogEvent) -> Any:
        offset = 1 if self._accepts_context else 0
        n = len(self._arguments)
        buf = [None] * (n + offset + len(self._trailing_defaults))
        for i in range(n):
            buf[i + offset] = self._arguments[i].evaluate(context)
        if offset:
            buf[0] = context
        buf[n + offset:] = self._trailing_defaults
        return self._invoker(None, buf)

    def __repr__(self) -> str:
        return f"<CallExpression {self.render()}>"

