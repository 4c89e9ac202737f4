"""Registry exceptions."""


class RegistryError(Exception):
    """Base class for registry errors."""
    pass


class AlgorithmNotFoundError(RegistryError, LookupError):
    """An algorithm name is not registered in its family.

    This is a bug in the calling test, not an environment condition, so it
    is never recovered from inside the registry.
    """

    def __init__(self, family: str, name: str, known: tuple[str, ...] = ()):
        self.family = family
        self.name = name
        self.known = known
        message = f"Unknown {family} algorithm: {name!r}"
        if known:
            message += f" (known: {', '.join(known)})"
        super().__init__(message)


class RegistryIntegrityError(RegistryError):
    """Catalog and capability tables disagree."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Registry integrity check failed: " + "; ".join(problems))


class HarnessConfigurationError(RegistryError):
    """Harness configuration is missing or invalid."""
    pass
