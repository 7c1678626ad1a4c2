"""
MVVM ViewModel Infrastructure.

Provides a base class for ViewModels with property change notification
plus the contracts for ViewModels that track stale state, validate input,
and can discard or save their changes.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from vmkit.mvvm.bindable import BindableBase
from vmkit.mvvm.commands import AsyncCommand
from vmkit.mvvm.stale_monitor import StaleMonitor, monitor_of
from vmkit.mvvm.validation import CompositeValidator, ViewModelValidator

Validator = Union[ViewModelValidator, CompositeValidator]


class BaseViewModel(BindableBase):
    """
    Base class for ViewModels.

    Use BindableProperty descriptors for automatic change notification.
    Assign `stale_monitor` and/or `validator` in the subclass constructor
    after the bindable state is set up.

    Example:
        class ProfileViewModel(BaseViewModel):
            name = BindableProperty(default="")

            def __init__(self):
                super().__init__()
                self.stale_monitor = ProfileStaleMonitor(self)
                self.validator = ProfileValidator(self)
    """

    def __init__(self):
        super().__init__()
        self.stale_monitor: Optional[StaleMonitor] = None
        self.validator: Optional[Validator] = None

    def dispose(self) -> None:
        """Release the stale monitor and validator subscriptions."""
        if self.stale_monitor is not None:
            self.stale_monitor.dispose()
        if self.validator is not None:
            self.validator.dispose()


class StaleMonitorViewModel(BaseViewModel, ABC):
    """ViewModel that must provide a stale monitor."""

    def __init__(self):
        super().__init__()
        self.stale_monitor = self.create_stale_monitor()

    @abstractmethod
    def create_stale_monitor(self) -> StaleMonitor:
        pass

    @property
    def is_stale(self) -> bool:
        return self.stale_monitor.is_stale


class ValidateableViewModel(BaseViewModel, ABC):
    """ViewModel that must provide a validator."""

    def __init__(self):
        super().__init__()
        self.validator = self.create_validator()

    @abstractmethod
    def create_validator(self) -> Validator:
        pass


class DiscardableViewModel(StaleMonitorViewModel, ABC):
    """ViewModel whose pending changes can be discarded."""

    @property
    @abstractmethod
    def discard_command(self) -> AsyncCommand:
        pass


class SaveableViewModel(DiscardableViewModel, ABC):
    """ViewModel whose changes can be validated and saved."""

    def __init__(self):
        super().__init__()
        self.validator = self.create_validator()

    @abstractmethod
    def create_validator(self) -> Validator:
        pass

    @property
    @abstractmethod
    def save_command(self) -> AsyncCommand:
        pass


def is_stale_monitored(obj: Any) -> bool:
    """True if obj carries a StaleMonitor."""
    return monitor_of(obj) is not None
