"""
Domain Exceptions

Error taxonomy shared by the bonus engine and its collaborators.
"""


class BonusError(Exception):
    """Base exception for bonus-calculation errors."""
    pass


class ConfigurationError(BonusError):
    """
    Raised when the bracket configuration is unusable.

    Covers missing (KPI, role) tables, empty tables, and thresholds that are
    unsorted, duplicated, negative or not finite. Fatal at load time.
    """
    pass


class InvalidInputError(BonusError):
    """
    Raised when a collaborator hands in a value the roster cannot accept,
    e.g. a negative base salary or a non-finite achievement.
    """
    def __init__(self, field: str, value, message: str = None):
        self.field = field
        self.value = value
        self.message = message or f"Valor inválido para '{field}': {value!r}"
        super().__init__(self.message)
