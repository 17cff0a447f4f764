from __future__ import annotations


class DealValidationError(ValueError):
    """
    Raised when deal inputs fail up-front validation.

    `reasons` holds one human-readable string per failed check so callers
    (forms, CLI, API layers) can surface all of them at once.
    """

    def __init__(self, reasons: list[str] | str) -> None:
        if isinstance(reasons, str):
            reasons = [reasons]
        self.reasons: list[str] = list(reasons)
        super().__init__("; ".join(self.reasons))
