"""Calculator errors."""


class InvalidInputError(ValueError):
    """Salary or employment type violates the calculator's preconditions."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
