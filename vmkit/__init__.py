"""
vmkit - ViewModel infrastructure for MVVM applications.

Stale-state tracking for view models, constructor-injection container
with dependency-cycle checking, validation and bindable commands.
"""

from vmkit.core import (
    Container,
    ContainerBuilder,
    ConfigManager,
    DependencyCycleError,
    Lifetime,
    Signal,
    find_cycles,
)
from vmkit.core.logging import setup_logging
from vmkit.mvvm import (
    BaseViewModel,
    BindableProperty,
    ObservableList,
    StaleMonitor,
    ViewModelValidator,
)

__version__ = "0.1.0"

__all__ = [
    "Container",
    "ContainerBuilder",
    "ConfigManager",
    "DependencyCycleError",
    "Lifetime",
    "Signal",
    "find_cycles",
    "setup_logging",
    "BaseViewModel",
    "BindableProperty",
    "ObservableList",
    "StaleMonitor",
    "ViewModelValidator",
]
