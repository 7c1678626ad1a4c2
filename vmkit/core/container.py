"""
Dependency Injection Container
Maps service types to implementations and builds instances through
constructor injection. Can verify the registration graph for
constructor-dependency cycles before the application starts.
"""

import inspect
import threading
import types
import typing
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, TypeVar

from loguru import logger

from .exceptions import (
    DependencyCycleError,
    DuplicateRegistrationError,
    ResolutionError,
    format_cycle,
)
from .graph import find_cycles

T = TypeVar('T')


class Lifetime(str, Enum):
    TRANSIENT = "transient"
    SINGLETON = "singleton"


@dataclass
class Registration:
    registered_type: type
    mapped_to_type: type
    lifetime: Lifetime = Lifetime.TRANSIENT
    instance: Any = None


def _unwrap_optional(annotation):
    if typing.get_origin(annotation) is typing.Union:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _is_injectable(service_type) -> bool:
    return isinstance(service_type, type) and service_type.__module__ != "builtins"


def constructor_parameters(cls: type) -> List[Tuple[inspect.Parameter, Optional[type]]]:
    """
    List the keyword-capable parameters of ``cls.__init__`` with their
    annotated type (None when not annotated with a class).
    """
    init = cls.__init__
    if init is object.__init__:
        return []

    try:
        signature = inspect.signature(init)
    except (TypeError, ValueError):
        return []

    result = []
    for index, (name, param) in enumerate(signature.parameters.items()):
        if index == 0 and name in ("self", "cls"):
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD,
                          inspect.Parameter.POSITIONAL_ONLY):
            continue
        annotation = _unwrap_optional(_resolve_annotation(cls, init, name, param.annotation))
        result.append((param, annotation if isinstance(annotation, type) else None))
    return result


def _resolve_annotation(cls: type, init: Callable, name: str, annotation: Any) -> Any:
    """
    Resolve one parameter annotation, including string and forward
    references, against the module globals of ``init``.

    Each parameter is resolved on its own so one unresolvable name
    (e.g. a TYPE_CHECKING-only import) does not hide the others.
    Returns None when the annotation cannot be resolved.
    """
    if annotation is inspect.Parameter.empty:
        return None
    if isinstance(annotation, type):
        return annotation

    func = inspect.unwrap(init)
    shim = types.FunctionType(_annotation_holder.__code__, getattr(func, "__globals__", {}))
    shim.__annotations__ = {name: annotation}
    try:
        return typing.get_type_hints(shim, localns={cls.__name__: cls}).get(name)
    except (NameError, AttributeError, TypeError, SyntaxError) as e:
        logger.warning(f"Cannot resolve annotation {annotation!r} of parameter '{name}' "
                       f"in {cls.__qualname__}: {e}")
        return None


def _annotation_holder():
    pass


def constructor_dependencies(cls: type) -> List[type]:
    """Annotated parameter types of ``cls.__init__``."""
    if not isinstance(cls, type):
        return []
    return [dep for _, dep in constructor_parameters(cls) if dep is not None]


class Container:
    """
    Container for managing service registrations and constructor injection

    Usage:
        container = Container()
        container.register_type(IRepository, SqlRepository, Lifetime.SINGLETON)
        container.register_type(OrdersViewModel)
        container.check_for_cycles()
        vm = container.resolve(OrdersViewModel)
    """

    def __init__(self):
        self._registrations: Dict[type, Registration] = {}
        self._lock = threading.RLock()

    def register_type(self, registered_type: Type[T], mapped_to_type: Optional[type] = None,
                      lifetime: Lifetime = Lifetime.TRANSIENT, overwrite: bool = False) -> "Container":
        """
        Map a service type to its implementation.

        Args:
            registered_type: Service type (interface) requested by consumers
            mapped_to_type: Implementation; defaults to registered_type
            lifetime: TRANSIENT builds on every resolve, SINGLETON once
            overwrite: Replace an existing registration instead of failing

        Returns:
            Self for chaining
        """
        mapped_to_type = mapped_to_type or registered_type
        self._add(Registration(registered_type, mapped_to_type, Lifetime(lifetime)), overwrite)
        logger.info(f"Registered type: {registered_type.__name__} -> {mapped_to_type.__name__} ({Lifetime(lifetime).value})")
        return self

    def register_instance(self, registered_type: Type[T], instance: T, overwrite: bool = False) -> "Container":
        """
        Register an existing object as a singleton.

        Returns:
            Self for chaining
        """
        self._add(Registration(registered_type, type(instance), Lifetime.SINGLETON, instance), overwrite)
        logger.info(f"Registered instance: {registered_type.__name__}")
        return self

    def _add(self, registration: Registration, overwrite: bool):
        with self._lock:
            if registration.registered_type in self._registrations and not overwrite:
                raise DuplicateRegistrationError(
                    f"Type {registration.registered_type.__name__} is already registered"
                )
            self._registrations[registration.registered_type] = registration

    @property
    def registrations(self) -> List[Registration]:
        with self._lock:
            return list(self._registrations.values())

    def is_registered(self, service_type: type) -> bool:
        with self._lock:
            return service_type in self._registrations

    def get_registration(self, service_type: type) -> Optional[Registration]:
        with self._lock:
            return self._registrations.get(service_type)

    def resolve(self, service_type: Type[T]) -> T:
        """
        Build or fetch an instance of service_type.

        Raises:
            ResolutionError: If the type or one of its dependencies cannot be built
        """
        with self._lock:
            return self._resolve(service_type, [])

    def _resolve(self, service_type: type, chain: List[type]):
        registration = self._registrations.get(service_type)
        if registration is not None and registration.instance is not None:
            return registration.instance

        if service_type in chain:
            raise ResolutionError(f"Circular resolution: {format_cycle(chain + [service_type])}")

        target = registration.mapped_to_type if registration is not None else service_type
        if not _is_injectable(target) or inspect.isabstract(target):
            raise ResolutionError(f"No registration for type {getattr(service_type, '__name__', service_type)}")

        kwargs = {}
        for param, dependency in constructor_parameters(target):
            has_default = param.default is not inspect.Parameter.empty
            if dependency is None or not _is_injectable(dependency):
                if has_default:
                    continue
                raise ResolutionError(
                    f"Cannot inject parameter '{param.name}' of {target.__name__}"
                )
            if has_default and dependency not in self._registrations:
                continue
            kwargs[param.name] = self._resolve(dependency, chain + [service_type])

        try:
            instance = target(**kwargs)
        except Exception as e:
            raise ResolutionError(f"Failed to create {target.__name__}: {e}") from e

        if registration is not None and registration.lifetime is Lifetime.SINGLETON:
            registration.instance = instance
        logger.debug(f"Resolved {getattr(service_type, '__name__', service_type)} -> {target.__name__}")
        return instance

    def check_for_cycles(self, namespace: Optional[str] = None) -> None:
        """
        Verify that constructor dependencies between registered
        implementations contain no cycles.

        Args:
            namespace: Only consider registrations whose service type's
                module starts with this prefix

        Raises:
            DependencyCycleError: With every cycle found
        """
        registrations = [
            registration for registration in self.registrations
            if namespace is None or registration.registered_type.__module__.startswith(namespace)
        ]

        type_map = {r.registered_type: r.mapped_to_type for r in registrations}
        types = [r.mapped_to_type for r in registrations]

        cycles = find_cycles(types, lambda t: self._related_types(t, type_map))
        if cycles:
            for cycle in cycles:
                logger.error(f"Dependency cycle: {format_cycle(cycle)}")
            raise DependencyCycleError("Found dependency cycles.", cycles)

        logger.debug(f"No dependency cycles among {len(types)} registrations")

    @staticmethod
    def _related_types(service_type: type, type_map: Dict[type, type]) -> Iterable[type]:
        return [type_map.get(dep, dep) for dep in constructor_dependencies(service_type)]

    def clear(self):
        with self._lock:
            self._registrations.clear()

    def __len__(self):
        return len(self._registrations)


Registrar = Callable[[Container], Any]
