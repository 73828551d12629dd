from .errors import (
    ConfigError,
    EmptyInputError,
    FileOpenError,
    NestingTooDeepError,
    PropcheckError,
    PropositionSyntaxError,
    UsageError,
    VariableLimitExceeded,
)
from .expr import FALSE, TRUE, Binary, BinaryOp, Constant, Expr, Not, Variable, strip_negations
from .loader import PropositionList, is_proposition_line, load_propositions, parse_lines
from .parser import Parser, parse_proposition, parse_propositions
from .registry import MAX_VARIABLES, VariableRegistry
