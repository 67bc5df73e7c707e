"""
Engine errors.

Categorical inputs (crop, location, season) never fail: unknown values fall
back to table defaults. Numeric inputs that cannot be scored are rejected.
"""

from typing import List, Optional


class InvalidInput(ValueError):
    """Raised when crop conditions cannot be scored."""

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    @classmethod
    def from_validation_error(cls, exc) -> "InvalidInput":
        """Build from a pydantic ValidationError, keeping one entry per bad field."""
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]),
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        fields = ", ".join(e["field"] for e in errors) or "input"
        return cls(f"Invalid crop conditions: {fields}", errors)
