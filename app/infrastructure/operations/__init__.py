"""Operation result types and status enums.

Standardized result types returned by message transports, so that delivery
outcomes are reported as values rather than raised.
"""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
]
