"""
Container - registration, constructor injection and cycle checks.
"""
from abc import ABC, abstractmethod
from typing import Optional

import pytest

from vmkit.core.container import Container, Lifetime, constructor_dependencies
from vmkit.core.exceptions import (
    DependencyCycleError,
    DuplicateRegistrationError,
    ResolutionError,
)


# --- Acyclic services ---

class IRepository(ABC):
    @abstractmethod
    def load(self): ...


class MemoryRepository(IRepository):
    def load(self):
        return ["item"]


class Clock:
    pass


class ItemsService:
    def __init__(self, repository: IRepository, clock: Clock):
        self.repository = repository
        self.clock = clock


class ItemsViewModel:
    def __init__(self, service: ItemsService, title: str = "Items", logger: Optional["Clock"] = None):
        self.service = service
        self.title = title
        self.logger = logger


# --- Cyclic services ---

class IAlpha(ABC):
    pass


class IBeta(ABC):
    pass


class Alpha(IAlpha):
    def __init__(self, beta: IBeta):
        self.beta = beta


class Beta(IBeta):
    def __init__(self, alpha: IAlpha):
        self.alpha = alpha


class Narcissus:
    def __init__(self, other: "Narcissus"):
        self.other = other


class Gamma:
    def __init__(self, delta: "Delta"):
        self.delta = delta


class Delta:
    def __init__(self, gamma: Gamma):
        self.gamma = gamma


class TestRegistration:

    def test_register_type_is_chainable(self):
        container = Container()
        result = container.register_type(IRepository, MemoryRepository).register_type(Clock)

        assert result is container
        assert container.is_registered(IRepository)
        assert container.is_registered(Clock)
        assert len(container) == 2

    def test_duplicate_registration_raises(self):
        container = Container().register_type(Clock)
        with pytest.raises(DuplicateRegistrationError):
            container.register_type(Clock)

    def test_overwrite_replaces_registration(self):
        container = Container().register_type(IRepository, MemoryRepository)
        instance = MemoryRepository()
        container.register_instance(IRepository, instance, overwrite=True)

        assert container.resolve(IRepository) is instance

    def test_registrations_expose_mapping(self):
        container = Container().register_type(IRepository, MemoryRepository, Lifetime.SINGLETON)
        registration = container.get_registration(IRepository)

        assert registration.mapped_to_type is MemoryRepository
        assert registration.lifetime is Lifetime.SINGLETON


class TestResolve:

    @pytest.fixture
    def container(self):
        return (Container()
                .register_type(IRepository, MemoryRepository, Lifetime.SINGLETON)
                .register_type(ItemsService))

    def test_constructor_injection(self, container):
        service = container.resolve(ItemsService)

        assert isinstance(service.repository, MemoryRepository)
        # Unregistered concrete classes are built directly
        assert isinstance(service.clock, Clock)

    def test_singleton_is_cached(self, container):
        assert container.resolve(IRepository) is container.resolve(IRepository)

    def test_transient_builds_new_instances(self, container):
        assert container.resolve(ItemsService) is not container.resolve(ItemsService)

    def test_defaults_kept_for_unregistered_parameters(self, container):
        vm = container.resolve(ItemsViewModel)

        assert vm.title == "Items"
        assert vm.logger is None

    def test_registered_optional_parameter_is_injected(self, container):
        container.register_type(Clock, lifetime=Lifetime.SINGLETON)
        vm = container.resolve(ItemsViewModel)

        assert vm.logger is container.resolve(Clock)

    def test_abstract_without_registration_fails(self):
        with pytest.raises(ResolutionError):
            Container().resolve(IRepository)

    def test_builtin_parameter_without_default_fails(self):
        class NeedsName:
            def __init__(self, name: str):
                self.name = name

        with pytest.raises(ResolutionError):
            Container().resolve(NeedsName)

    def test_circular_resolution_fails(self):
        container = Container().register_type(IAlpha, Alpha).register_type(IBeta, Beta)

        with pytest.raises(ResolutionError, match="Circular resolution"):
            container.resolve(IAlpha)


def test_constructor_dependencies():
    assert constructor_dependencies(ItemsService) == [IRepository, Clock]
    assert constructor_dependencies(ItemsViewModel) == [ItemsService, str, Clock]
    assert constructor_dependencies(Clock) == []


class TestCheckForCycles:

    def test_acyclic_registrations_pass(self):
        container = (Container()
                     .register_type(IRepository, MemoryRepository)
                     .register_type(ItemsService)
                     .register_type(ItemsViewModel))

        container.check_for_cycles()

    def test_interface_cycle_is_reported_through_mapping(self):
        container = Container().register_type(IAlpha, Alpha).register_type(IBeta, Beta)

        with pytest.raises(DependencyCycleError) as exc_info:
            container.check_for_cycles()

        assert exc_info.value.cycles == [[Alpha, Beta, Alpha]]
        assert "Alpha -> Beta -> Alpha" in str(exc_info.value)

    def test_self_loop(self):
        container = Container().register_type(Narcissus)

        with pytest.raises(DependencyCycleError) as exc_info:
            container.check_for_cycles()

        assert exc_info.value.cycles == [[Narcissus, Narcissus]]

    def test_all_cycles_are_reported(self):
        container = (Container()
                     .register_type(IAlpha, Alpha)
                     .register_type(IBeta, Beta)
                     .register_type(Narcissus)
                     .register_type(Gamma))

        with pytest.raises(DependencyCycleError) as exc_info:
            container.check_for_cycles()

        cycles = exc_info.value.cycles
        assert [Alpha, Beta, Alpha] in cycles
        assert [Narcissus, Narcissus] in cycles
        # Delta is not registered but still followed as its own implementation
        assert [Gamma, Delta, Gamma] in cycles
        assert len(cycles) == 3

    def test_namespace_filter(self):
        container = Container().register_type(IAlpha, Alpha).register_type(IBeta, Beta)

        container.check_for_cycles(namespace="some.other.package")

        with pytest.raises(DependencyCycleError):
            container.check_for_cycles(namespace=IAlpha.__module__)
