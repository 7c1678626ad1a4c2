"""
Exception hierarchy for vmkit.
"""
from typing import List, Sequence


class VmkitError(Exception):
    """Base class for all vmkit errors."""
    pass


class DuplicateRegistrationError(VmkitError):
    """Raised when a type is registered twice in a container."""
    pass


class ResolutionError(VmkitError):
    """Raised when the container cannot build an instance."""
    pass


def _type_name(node) -> str:
    return getattr(node, "__qualname__", None) or getattr(node, "__name__", None) or str(node)


def format_cycle(cycle: Sequence) -> str:
    """Render a cycle as `A -> B -> A`."""
    return " -> ".join(_type_name(node) for node in cycle)


class DependencyCycleError(VmkitError):
    """
    Raised when constructor dependencies form one or more cycles.

    Carries every cycle found during a full traversal, not just the first.

    Attributes:
        cycles: list of cycles, each a list of types starting and ending
            with the same type
    """
    def __init__(self, message: str, cycles: List[List[type]]):
        super().__init__(message)
        self.message = message
        self.cycles = cycles

    def __str__(self) -> str:
        if not self.cycles:
            return self.message
        lines = [self.message]
        lines.extend(f"  {format_cycle(cycle)}" for cycle in self.cycles)
        return "\n".join(lines)
