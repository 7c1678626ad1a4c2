"""
MVVM Package - ViewModel infrastructure.

Provides:
- BindableProperty / BindableBase: Change-notifying properties.
- ObservableList: List with mutation notifications.
- StaleMonitor: Dirty-state tracking of declared properties and collections.
- ViewModelValidator / CompositeValidator: pydantic-backed validation.
- Command / AsyncCommand / TimeoutAsyncCommand: Bindable commands.
- BaseViewModel and the stale/validate/discard/save contracts.
"""
from vmkit.mvvm.bindable import BindableBase, BindableProperty, bindable_properties
from vmkit.mvvm.collection import CollectionAction, ObservableList
from vmkit.mvvm.stale_monitor import StaleMonitor, monitor_of
from vmkit.mvvm.validation import CompositeValidator, ValidationFailure, ViewModelValidator
from vmkit.mvvm.commands import AsyncCommand, BindableCommand, Command, TimeoutAsyncCommand
from vmkit.mvvm.viewmodel import (
    BaseViewModel,
    DiscardableViewModel,
    SaveableViewModel,
    StaleMonitorViewModel,
    ValidateableViewModel,
    is_stale_monitored,
)

__all__ = [
    # Binding
    "BindableBase",
    "BindableProperty",
    "bindable_properties",

    # Collections
    "CollectionAction",
    "ObservableList",

    # Stale tracking
    "StaleMonitor",
    "monitor_of",

    # Validation
    "CompositeValidator",
    "ValidationFailure",
    "ViewModelValidator",

    # Commands
    "Command",
    "BindableCommand",
    "AsyncCommand",
    "TimeoutAsyncCommand",

    # ViewModels
    "BaseViewModel",
    "StaleMonitorViewModel",
    "ValidateableViewModel",
    "DiscardableViewModel",
    "SaveableViewModel",
    "is_stale_monitored",
]
