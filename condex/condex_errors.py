"""
Error types raised while building condition expressions.
"""


class ConditionParseError(Exception):
    """A condition expression is invalid and cannot be built."""
    pass


class UnknownMethodError(ConditionParseError):
    def __init__(self, name: str):
        super().__init__(f"Unknown condition method '{name}'.")
        self.name = name


class ArityError(ConditionParseError):
    """The number of arguments passed to a condition method is out of range."""
    def __init__(self, name: str, required: int, total: int, actual: int):
        self.name = name
        self.required = required
        self.total = total
        self.actual = actual
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.required < self.total:
            return (f"Condition method '{self.name}' requires between {self.required} "
                    f"and {self.total} parameters, but passed {self.actual}.")
        return (f"Condition method '{self.name}' requires {self.required} parameters, "
                f"but passed {self.actual}.")
