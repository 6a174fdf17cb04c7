"""
Built-in condition methods.
"""
import inspect
import re
from typing import Any

from condex.condex_events import LogEvent

_REGEX_OPTIONS = {
    "ignorecase": re.IGNORECASE,
    "multiline": re.MULTILINE,
    "singleline": re.DOTALL,
    "ignorepatternwhitespace": re.VERBOSE,
}


def _s(value) -> str:
    return "" if value is None else str(value)


class ConditionMethods:
    """Python implementations for all built-in condition methods.

    Every `_snake_case` method is bound as `kebab-case`, e.g. `_starts_with`
    becomes `starts-with`.
    """

    def install(self, registry):
        for name, member in inspect.getmembers(self):
            if name.startswith('_') and not name.startswith('__') and callable(member):
                registry.register(name[1:].replace('_', '-'), member)

    # --- Comparison ---
    def _equals(self, a, b):
        return a == b

    def _strequals(self, a, b, ignore_case=False):
        if ignore_case:
            return _s(a).casefold() == _s(b).casefold()
        return _s(a) == _s(b)

    # --- Strings ---
    def _contains(self, haystack, needle, ignore_case=True):
        if ignore_case:
            return _s(needle).casefold() in _s(haystack).casefold()
        return _s(needle) in _s(haystack)

    def _starts_with(self, haystack, needle, ignore_case=True):
        if ignore_case:
            return _s(haystack).casefold().startswith(_s(needle).casefold())
        return _s(haystack).startswith(_s(needle))

    def _ends_with(self, haystack, needle, ignore_case=True):
        if ignore_case:
            return _s(haystack).casefold().endswith(_s(needle).casefold())
        return _s(haystack).endswith(_s(needle))

    def _length(self, s):
        return len(_s(s))

    def _regex_matches(self, input, pattern, options=""):
        flags = 0
        for opt in re.split(r"[\s,|]+", _s(options).strip()):
            if not opt:
                continue
            try:
                flags |= _REGEX_OPTIONS[opt.lower()]
            except KeyError:
                raise ValueError(f"Unknown regex option '{opt}'") from None
        return re.search(_s(pattern), _s(input), flags) is not None

    # --- Event ---
    def _has_property(self, event: LogEvent, name):
        return _s(name) in event.properties

    def _property(self, event: LogEvent, name, default=None) -> Any:
        return event.properties.get(_s(name), default)
