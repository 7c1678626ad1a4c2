"""
vmkit Core - Application Infrastructure.

Provides:
- Signal: Synchronous observer with owned subscription handles
- Container: Constructor-injection container with cycle checking
- find_cycles: Iterative cycle detection over any directed graph
- objects_equal / enumerable_equal: Value equality for stale tracking
- ConfigManager: Configuration with persistence
- ContainerBuilder: Fluent container setup

Usage:
    from vmkit.core import ContainerBuilder

    container = (ContainerBuilder("config.json")
                 .add_registrar(register_view_models)
                 .build())
"""
from .events import Signal, Subscription, CompositeSubscription
from .equality import objects_equal, enumerable_equal
from .graph import VisitState, find_cycles, find_cycles_in_mapping
from .exceptions import (
    VmkitError,
    DependencyCycleError,
    DuplicateRegistrationError,
    ResolutionError,
)
from .container import Container, Lifetime, Registration, constructor_dependencies
from .config import ConfigManager, AppConfig, GeneralSettings, ContainerSettings
from .timer import ElapsedTimer
from .bootstrap import ContainerBuilder

__all__ = [
    # Events
    "Signal",
    "Subscription",
    "CompositeSubscription",

    # Equality
    "objects_equal",
    "enumerable_equal",

    # Graph
    "VisitState",
    "find_cycles",
    "find_cycles_in_mapping",

    # Errors
    "VmkitError",
    "DependencyCycleError",
    "DuplicateRegistrationError",
    "ResolutionError",

    # Container
    "Container",
    "Lifetime",
    "Registration",
    "constructor_dependencies",
    "ContainerBuilder",

    # Configuration
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "ContainerSettings",

    # Utils
    "ElapsedTimer",
]
