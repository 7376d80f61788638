from dataclasses import dataclass


@dataclass(slots=True)
class PendingStep:
    """A deferred continuation of the chain resolver.

    ``remaining`` counts down in seconds; the step runs once it reaches zero,
    but only if ``generation`` still matches the GameState generation.
    """
    kind: str
    remaining: float
    generation: int
