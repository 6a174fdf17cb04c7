from condex.condex_errors import ConditionParseError, ArityError, UnknownMethodError
from condex.condex_events import LogEvent
from condex.condex_functions import Parameter, FunctionDescriptor, FunctionRegistry, describe
from condex.condex_expressions import ConditionExpression, LiteralExpression, LayoutExpression, CallExpression
from condex.condex_methods import ConditionMethods
from condex.condex_config import CondexConfig, load_config, configure_internal_logging, diagnostics_sink, internal_logger
