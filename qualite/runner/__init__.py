"""Runner module - bounded execution and result collection.

The run pipeline lives in `qualite.runner.pipeline`; it depends on the
reporters, which themselves import the result types from this package.
"""

from .executor import BoundedExecutor, ExecutionResult
from .result_collector import ResultCollector, RunOutcome, RunStatus

__all__ = [
    "BoundedExecutor",
    "ExecutionResult",
    "ResultCollector",
    "RunOutcome",
    "RunStatus",
]
