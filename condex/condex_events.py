"""
The event object condition expressions are evaluated against.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogEvent:
    """A single log record routed through the condition engine.

    A condition method whose first parameter is annotated with `LogEvent`
    receives the event being evaluated as that argument.
    """
    level: str = "Info"
    logger_name: str = ""
    message: str = ""
    properties: Dict[str, Any] = field(default_factory=dict)
    exception: Optional[BaseException] = None

    def as_template_context(self) -> dict:
        """Flatten the event into a plain dict for Mustache layouts."""
        out = dict(self.properties)
        # Core fields win over same-named properties
        out.update({
            "level": self.level,
            "logger": self.logger_name,
            "message": self.message,
            "exception": "" if self.exception is None else str(self.exception),
        })
        return out
