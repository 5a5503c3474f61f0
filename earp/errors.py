class PolicyError(Exception):
    """Base class for replacement policy contract failures."""


class ConfigurationError(PolicyError, ValueError):
    """Raised when a policy configuration cannot produce a finite cost."""


class EmptyCandidateSetError(PolicyError, ValueError):
    """Raised when a victim is requested from an empty candidate set."""
