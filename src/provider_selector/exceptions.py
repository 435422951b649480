"""
Custom exceptions for the provider selector.
"""


class ProviderSelectorError(Exception):
    """Base exception for the provider selector."""
    pass


class CriteriaError(ProviderSelectorError):
    """Raised when user-supplied criteria cannot be used for scoring."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidCriteriaError(CriteriaError):
    """Raised when criteria are missing or not a key-value mapping."""
    pass


class NoCriteriaSelectedError(CriteriaError):
    """Raised when no recognised criterion carries a positive weight."""
    pass


class CatalogLoadError(ProviderSelectorError):
    """Raised when a provider catalog cannot be built or loaded."""
