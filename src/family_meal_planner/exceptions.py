"""Planner errors raised by services when caller intent violates a precondition."""


class PlannerError(Exception):
    """Base class for recoverable, user-actionable planner failures."""

    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"{self.message} (code: {self.code})"


class MealPlanException(PlannerError):
    """Meal plan or template operation failed."""

    def __init__(
        self,
        message: str,
        code: str,
        errors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message, code)
        self.errors = dict(errors or {})


class MealSlotException(PlannerError):
    """Family meal slot configuration was rejected."""
