"""
Function descriptors and the registry that binds condition method names.

A descriptor captures a callable's positional parameter list once, together
with an invoker that calls it with a prepared argument list. Expression nodes
hold on to the descriptor and never inspect the callable again.
"""
import inspect
from typing import Any, Callable, Dict, List, Optional, Sequence

from condex.condex_errors import UnknownMethodError
from condex.condex_events import LogEvent

Invoker = Callable[[Any, Sequence[Any]], Any]

_NO_DEFAULT = inspect.Parameter.empty


class Parameter:
    """One formal parameter of a condition method."""
    def __init__(self, position: int, name: str, has_default: bool = False,
                 default: Any = None, annotation: Any = None):
        self.position = position
        self.name = name
        self.has_default = has_default
        self.default = default if has_default else None
        self.annotation = annotation

    @property
    def is_context(self) -> bool:
        return self.annotation is LogEvent

    def __repr__(self) -> str:
        if self.has_default:
            return f"Parameter({self.position}, {self.name}={self.default!r})"
        return f"Parameter({self.position}, {self.name})"

    def __eq__(self, other):
        if not isinstance(other, Parameter):
            return NotImplemented
        return (self.position == other.position and self.name == other.name and
                self.has_default == other.has_default and self.default == other.default and
                self.annotation is other.annotation)


class FunctionDescriptor:
    """Static description of a bound condition method.

    `parameters` is the ordered formal parameter list. `invoker` is called as
    `invoker(target, args)`; condition methods are never dispatched on a
    target so callers pass `None`.
    """
    def __init__(self, name: str, parameters: Sequence[Parameter], invoker: Invoker):
        params = tuple(parameters)
        for i, p in enumerate(params):
            if p.position != i:
                raise ValueError(f"Parameter '{p.name}' of '{name}' is at position {p.position}, expected {i}.")
        seen_optional = False
        for p in params:
            if p.has_default:
                seen_optional = True
            elif seen_optional:
                raise ValueError(f"Required parameter '{p.name}' of '{name}' follows an optional parameter.")
        self.name = name
        self.parameters = params
        self.invoker = invoker

    @property
    def accepts_context(self) -> bool:
        """True when the first parameter wants the event injected."""
        return len(self.parameters) > 0 and self.parameters[0].is_context

    @property
    def required_count(self) -> int:
        return sum(1 for p in self.parameters if not p.has_default)

    @property
    def total_count(self) -> int:
        return len(self.parameters)

    def __repr__(self) -> str:
        return f"<FunctionDescriptor {self.name}({', '.join(p.name for p in self.parameters)})>"


def _make_invoker(func: Callable) -> Invoker:
    def invoke(target, args):
        return func(*args)
    return invoke


def describe(func: Callable, name: Optional[str] = None) -> FunctionDescriptor:
    """Build a descriptor for a plain function or bound method.

    Only positional parameters are supported. Keyword-only parameters must
    carry a default and are left at it; `*args`/`**kwargs` are rejected.
    """
    name = name or getattr(func, "__name__", repr(func))
    try:
        sig = inspect.signature(func, eval_str=True)
    except (NameError, TypeError):
        # Unresolvable string annotations: fall back to the raw signature.
        sig = inspect.signature(func)

    params: List[Parameter] = []
    for p in sig.parameters.values():
        match p.kind:
            case inspect.Parameter.POSITIONAL_ONLY | inspect.Parameter.POSITIONAL_OR_KEYWORD:
                has_default = p.default is not _NO_DEFAULT
                annotation = None if p.annotation is _NO_DEFAULT else p.annotation
                params.append(Parameter(len(params), p.name, has_default,
                                        p.default if has_default else None, annotation))
            case inspect.Parameter.KEYWORD_ONLY:
                if p.default is _NO_DEFAULT:
                    raise ValueError(f"Condition method '{name}' has required keyword-only parameter '{p.name}'.")
            case _:
                raise ValueError(f"Condition method '{name}' cannot take variadic parameter '{p.name}'.")
    return FunctionDescriptor(name, params, _make_invoker(func))


class FunctionRegistry:
    """Maps condition method names to callables and resolves descriptors."""

    def __init__(self):
        self._functions: Dict[str, Callable] = {}
        self._descriptors: Dict[str, FunctionDescriptor] = {}

    @classmethod
    def with_builtins(cls) -> 'FunctionRegistry':
        from condex.condex_methods import ConditionMethods
        registry = cls()
        ConditionMethods().install(registry)
        return registry

    def register(self, name: str, func: Callable):
        if not name:
            raise ValueError("Condition method name must not be empty.")
        if not callable(func):
            raise TypeError(f"Condition method '{name}' must be callable, not {type(func)}")
        self._functions[name] = func
        # Drop any stale descriptor for a rebound name
        self._descriptors.pop(name, None)

    def unregister(self, name: str):
        if name not in self._functions:
            raise UnknownMethodError(name)
        del self._functions[name]
        self._descriptors.pop(name, None)

    def __contains__(self, name) -> bool:
        return name in self._functions

    def names(self) -> List[str]:
        return sorted(self._functions)

    def resolve(self, name: str, arg_count: Optional[int] = None) -> FunctionDescriptor:
        """Return the descriptor bound to `name`.

        `arg_count` is the call-site argument count. Each name binds a single
        callable, so it is accepted for interface parity but not used to pick
        an overload; arity is checked when the call expression is built.
        """
        desc = self._descriptors.get(name)
        if desc is None:
            func = self._functions.get(name)
            if func is None:
                raise UnknownMethodError(name)
            desc = describe(func, name)
            self._descriptors[name] = desc
        return desc

    def call(self, name: str, arguments, **kwargs):
        """Resolve `name` and build a call expression over `arguments`."""
        from condex.condex_expressions import CallExpression
        arguments = list(arguments)
        return CallExpression(name, self.resolve(name, len(arguments)), arguments, **kwargs)
