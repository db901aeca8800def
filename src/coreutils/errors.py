"""
Pipeline Errors

Exception taxonomy for the attrition ETL run.
Only loading can fail on data; every later stage is total.
"""


class AttritionPipelineError(Exception):
    """Base class for all pipeline errors"""


class SchemaMismatch(AttritionPipelineError):
    """A required source field is absent or cannot be cast to its canonical type"""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class ConstraintViolation(AttritionPipelineError):
    """A bounded or positive field holds a value outside its declared range"""

    def __init__(self, column: str, violations: int, rule: str):
        super().__init__(
            f"Column '{column}' violates {rule} in {violations} record(s)"
        )
        self.column = column
        self.violations = violations
        self.rule = rule


class StagingDiscarded(AttritionPipelineError):
    """Raw staging data was accessed after it was discarded"""


class PipelineStateError(AttritionPipelineError):
    """A single-use pipeline was invoked more than once"""
