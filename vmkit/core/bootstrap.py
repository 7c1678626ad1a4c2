"""
Bootstrap helpers for vmkit applications.

Builds a container from registrar functions and refuses to hand it out
while constructor dependencies contain cycles.
"""
from typing import List, Optional

from loguru import logger

from .config import ConfigManager
from .container import Container, Registrar


class ContainerBuilder:
    """
    Fluent builder for the application container.

    Example:
        container = (ContainerBuilder("config.json")
                     .with_logging()
                     .add_registrar(register_core_dependencies)
                     .add_registrar(register_view_models)
                     .build())
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize container builder.

        Args:
            config_path: Path to config file; None uses in-memory defaults
                persisted to config.json
        """
        self.config_path = config_path or "config.json"
        self._registrars: List[Registrar] = []
        self._logging_configured = False

    def add_registrar(self, registrar: Registrar):
        """
        Add a function that registers types on the container.

        Args:
            registrar: Callable receiving the container

        Returns:
            Self for chaining
        """
        self._registrars.append(registrar)
        return self

    def with_logging(self, enable: bool = True):
        """
        Configure logging setup.

        Args:
            enable: Whether to setup logging

        Returns:
            Self for chaining
        """
        self._logging_configured = enable
        return self

    def build(self) -> Container:
        """
        Create the container and run all registrars.

        Returns:
            Container with all registrations

        Raises:
            DependencyCycleError: If cycle checking is enabled and cycles exist
        """
        config = ConfigManager(self.config_path)

        if self._logging_configured:
            from .logging import setup_logging
            setup_logging(config.data.general.debug_mode, config.data.general.log_dir)

        container = Container()
        container.register_instance(ConfigManager, config)

        for registrar in self._registrars:
            registrar(container)

        settings = config.data.container
        if settings.check_cycles:
            container.check_for_cycles(settings.namespace)
        else:
            logger.warning("Dependency cycle check disabled")

        logger.info(f"Container built with {len(container)} registrations")
        return container
