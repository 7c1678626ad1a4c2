"""
Bindable Commands.

Provides:
- Command: Executable action with a can-execute state
- BindableCommand: Command whose executable state can be bound
- AsyncCommand: Command tracking busy / success / failure of an async operation
- TimeoutAsyncCommand: Debounced AsyncCommand (e.g. search-as-you-type)
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Optional

from loguru import logger

from vmkit.core.events import Signal
from vmkit.mvvm.bindable import BindableBase, BindableProperty

GENERAL_FAILURE_MESSAGE = "Something went wrong. Please try again."


class Command(ABC):
    """
    Base command.

    Example:
        class RefreshCommand(Command):
            def execute(self, parameter=None):
                self.vm.reload()
    """

    def __init__(self, can_execute: bool = True):
        self._can_execute = can_execute
        self.can_execute_changed = Signal("can_execute_changed")

    def can_execute(self, parameter: Any = None) -> bool:
        return self._can_execute

    @abstractmethod
    def execute(self, parameter: Any = None) -> Any:
        """Execute the command."""
        pass

    def set_can_execute(self, can_execute: bool) -> None:
        """Set the executable state and notify `can_execute_changed` subscribers."""
        self._can_execute = can_execute
        self.can_execute_changed.emit(self)

    @property
    def command_name(self) -> str:
        return self.__class__.__name__


class BindableCommand(BindableBase, Command):
    """Command exposing its executable state as a bindable property."""

    is_executable = BindableProperty(default=True)

    def __init__(self, can_execute: bool = True):
        BindableBase.__init__(self)
        Command.__init__(self, can_execute)
        self.is_executable = can_execute

    def set_can_execute(self, can_execute: bool) -> None:
        self.is_executable = can_execute
        super().set_can_execute(can_execute)

    def log_parameter_mismatch(self, expected_type: type, parameter: Any) -> None:
        logger.warning(f"{self.command_name} expected {expected_type.__name__} parameter but received {parameter!r}")

    def log_validation_errors(self, validator) -> None:
        logger.info(f"Cancelling {self.command_name} execution due to {validator.get_all_errors_in_string()}")


class AsyncCommand(BindableCommand):
    """
    Command running an asynchronous operation.

    Subclasses implement `execute_core_async` and return True on success.
    The state of the last execution is exposed through `is_busy`,
    `is_successful` and `failure_message`.

    Example:
        class SaveCommand(AsyncCommand):
            def __init__(self, vm):
                super().__init__()
                self.vm = vm

            async def execute_core_async(self, parameter=None) -> bool:
                await self.vm.repository.save(self.vm.model)
                return True

        await command.execute_async()
    """

    is_busy = BindableProperty(default=False)
    is_successful = BindableProperty(default=False)
    failure_message = BindableProperty(default=None)

    def execute(self, parameter: Any = None) -> "asyncio.Task":
        """Schedule `execute_async` on the running event loop."""
        return asyncio.get_running_loop().create_task(self.execute_async(parameter))

    async def execute_async(self, parameter: Any = None) -> None:
        """
        Run the command, tracking its state.

        Generally this should not be overridden; override
        `execute_core_async` instead.
        """
        if self.is_busy:
            logger.debug(f"{self.command_name} was already executing. Cancelling recurrent execution.")
            return

        logger.debug(f"{self.command_name} execution started")
        self.is_busy = True
        self.is_successful = False
        self.failure_message = None
        try:
            self.is_successful = bool(await self.execute_core_async(parameter))
            logger.debug(f"{self.command_name} execution completed with result {self.is_successful}.")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.handle_exception(e)
        finally:
            self.is_busy = False

    @abstractmethod
    async def execute_core_async(self, parameter: Any = None) -> bool:
        """The operation itself."""
        pass

    def handle_exception(self, exception: Exception) -> None:
        """
        Default exception handler. Sets a generic `failure_message`.

        Override for custom handling and set a user-friendly message.
        """
        self.failure_message = GENERAL_FAILURE_MESSAGE
        logger.error(f"{self.command_name} execution failed with exception: {exception}")


class TimeoutAsyncCommand(AsyncCommand):
    """
    Debounced AsyncCommand.

    Each call waits `timeout` seconds before running. A newer call cancels
    the pending one, so only the last of a burst of calls executes.
    """

    timeout: float = 0.3

    def __init__(self, can_execute: bool = True):
        super().__init__(can_execute)
        self._pending: Optional[asyncio.Task] = None

    async def execute_async(self, parameter: Any = None) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

        task = asyncio.ensure_future(self._run_after_timeout(parameter))
        self._pending = task
        try:
            await asyncio.wait([task])
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task.cancelled():
            logger.debug(f"{self.command_name} superseded by a newer execution")

    async def _run_after_timeout(self, parameter: Any) -> None:
        await asyncio.sleep(self.timeout)
        await AsyncCommand.execute_async(self, parameter)
