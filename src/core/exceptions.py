"""
Pipeline errors raised before anything reaches the generative backend.
Backend errors live next to the retry runner in src/utils/llm_client.py.
"""
from typing import Iterable


class ValidationError(ValueError):
    """Assembled input is unusable. Lists every problem found, not just the first."""

    def __init__(self, problems: Iterable[str]):
        self.problems = list(problems)
        super().__init__("Invalid prompt input: " + "; ".join(self.problems))


class CompositionError(RuntimeError):
    """The composed meta-prompt still contains template markers. Always a bug."""

    def __init__(self, placeholders: Iterable[str]):
        self.placeholders = sorted(set(placeholders))
        super().__init__(
            "Unresolved template placeholders: " + ", ".join(self.placeholders)
        )


class BusinessNotFoundError(LookupError):
    """No business record exists for the requested id."""

    def __init__(self, business_id: str):
        self.business_id = business_id
        super().__init__("Business not found")
