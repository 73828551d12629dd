"""Entailment checking over enumerated truth assignments."""

from .checker import Assignment, EntailmentResult, Verdict, check_entailment, check_expressions
from .config import STRATEGIES, CheckerConfig, load_config_from_env
from .evaluate import bindings, evaluate, evaluate_batch

__all__: list[str] = [
    "Assignment",
    "CheckerConfig",
    "EntailmentResult",
    "STRATEGIES",
    "Verdict",
    "bindings",
    "check_entailment",
    "check_expressions",
    "evaluate",
    "evaluate_batch",
    "load_config_from_env",
]
