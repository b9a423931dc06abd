"""
Service Container - Dependency Injection Container for CardParty
Manages service creation, dependencies, and lifecycle.
"""

from typing import Dict, Any, List, Optional, Callable
import inspect
from enum import Enum


class ServiceLifecycle(Enum):
    """Service lifecycle management options"""
    SINGLETON = "singleton"  # One instance per container
    TRANSIENT = "transient"  # New instance every time


class ServiceDefinition:
    """Definition of how a service should be created"""

    def __init__(
        self,
        name: str,
        factory: Callable,
        dependencies: List[str] = None,
        lifecycle: ServiceLifecycle = ServiceLifecycle.SINGLETON,
        config: Dict[str, Any] = None
    ):
        self.name = name
        self.factory = factory
        self.dependencies = dependencies or []
        self.lifecycle = lifecycle
        self.config = config or {}


class CircularDependencyError(Exception):
    """Raised when circular dependency is detected"""
    pass


class ServiceNotFoundError(Exception):
    """Raised when requested service is not registered"""
    pass


class ServiceContainer:
    """
    Dependency Injection Container for managing services and their dependencies.

    Features:
    - Explicit dependency resolution
    - Circular dependency detection
    - Singleton and transient lifecycle management
    - Configuration injection
    - External dependencies (SocketIO, schedulers, fakes in tests)
    """

    def __init__(self):
        self._services: Dict[str, ServiceDefinition] = {}
        self._instances: Dict[str, Any] = {}
        self._creating: set = set()  # Track services being created (circular detection)
        self._config: Dict[str, Any] = {}

    def register(
        self,
        name: str,
        factory: Callable,
        dependencies: List[str] = None,
        lifecycle: ServiceLifecycle = ServiceLifecycle.SINGLETON,
        config: Dict[str, Any] = None
    ) -> 'ServiceContainer':
        """
        Register a service with the container.

        Args:
            name: Service name for retrieval
            factory: Class or function to create the service
            dependencies: List of service names this service depends on
            lifecycle: How the service instance should be managed
            config: Keyword arguments passed to function factories

        Returns:
            Self for method chaining
        """
        if name in self._services:
            raise ValueError(f"Service '{name}' is already registered")

        if not callable(factory):
            raise ValueError(f"Factory for '{name}' must be callable")

        self._services[name] = ServiceDefinition(
            name=name,
            factory=factory,
            dependencies=dependencies,
            lifecycle=lifecycle,
            config=config
        )
        return self

    def configure_services(self) -> 'ServiceContainer':
        """
        Register all CardParty services with their dependencies.
        This method contains the service configuration for the application.
        """
        from src.card_source import CardPack
        from src.config.game_settings import GameSettings
        from src.room_manager import RoomManager
        from src.services.broadcast_service import BroadcastService
        from src.services.error_response_factory import ErrorResponseFactory
        from src.services.round_clock import ThreadingTickScheduler
        from src.services.session_service import SessionService
        from src.services.validation_service import ValidationService

        # Validation and error handling services - no dependencies
        self.register('ValidationService', ValidationService)
        self.register('ErrorResponseFactory', ErrorResponseFactory)
        self.register('SessionService', SessionService)

        # Game configuration and content
        self.register('GameSettings', lambda: GameSettings(self.get_app_config()))
        self.register('CardPack', lambda: CardPack.from_yaml(self._config.get('cards_file', 'cards.yaml')))

        # Round clocks schedule on timer threads unless a scheduler was injected
        if 'TickScheduler' not in self._instances:
            self.register('TickScheduler', ThreadingTickScheduler)

        # Broadcast service - socketio is injected as external dependency
        self.register('BroadcastService', BroadcastService, dependencies=['socketio'])

        # Room registry - owns every game session
        self.register('RoomManager', RoomManager,
                      dependencies=['BroadcastService', 'CardPack', 'GameSettings', 'TickScheduler'])

        return self

    def set_external_dependency(self, name: str, instance: Any) -> 'ServiceContainer':
        """
        Set an external dependency that's created outside the container.
        Useful for Flask-SocketIO and similar framework objects.
        """
        self._instances[name] = instance
        return self

    def set_config(self, config: Dict[str, Any]) -> 'ServiceContainer':
        """Set global configuration for the container"""
        self._config.update(config)
        return self

    def get_config(self, name: str, default: Any = None) -> Any:
        return self._config.get(name, default)

    def get_app_config(self):
        """Typed view of the container configuration (defaults when empty)"""
        from config_factory import AppConfig, Environment

        known = AppConfig.__dataclass_fields__
        config = {key: value for key, value in self._config.items() if key in known}
        if isinstance(config.get('environment'), str):
            config['environment'] = Environment(config['environment'])
        return AppConfig(**config)

    def get(self, name: str) -> Any:
        """
        Get a service instance, creating it if necessary.

        Raises:
            ServiceNotFoundError: If service is not registered
            CircularDependencyError: If circular dependency detected
        """
        # External dependencies and created singletons
        if name in self._instances:
            return self._instances[name]

        if name not in self._services:
            raise ServiceNotFoundError(f"Service '{name}' is not registered")

        return self._create_service(name)

    def _create_service(self, name: str) -> Any:
        """
        Create a service instance with dependency injection.
        """
        if name in self._creating:
            cycle = ' -> '.join(list(self._creating) + [name])
            raise CircularDependencyError(f"Circular dependency detected: {cycle}")

        self._creating.add(name)

        try:
            service_def = self._services[name]

            dependencies = [self.get(dep_name) for dep_name in service_def.dependencies]

            if inspect.isclass(service_def.factory):
                instance = service_def.factory(*dependencies)
            else:
                instance = service_def.factory(*dependencies, **service_def.config)

            if service_def.lifecycle == ServiceLifecycle.SINGLETON:
                self._instances[name] = instance

            return instance

        finally:
            self._creating.discard(name)

    def has_service(self, name: str) -> bool:
        """Check if a service is registered"""
        return name in self._services or name in self._instances

    def get_service_names(self) -> List[str]:
        """Get list of all registered service names"""
        return list(self._services.keys())

    def validate_dependencies(self) -> Dict[str, List[str]]:
        """
        Validate all service dependencies can be resolved.

        Returns:
            Dictionary mapping service names to lists of missing dependencies
        """
        issues = {}

        for name, service_def in self._services.items():
            missing_deps = [dep for dep in service_def.dependencies if not self.has_service(dep)]
            if missing_deps:
                issues[name] = missing_deps

        return issues

    def clear(self) -> 'ServiceContainer':
        """Clear all services and instances (useful for testing)"""
        self._services.clear()
        self._instances.clear()
        self._creating.clear()
        self._config.clear()
        return self

    def __repr__(self) -> str:
        return f"ServiceContainer(services={len(self._services)}, instances={len(self._instances)})"


# Global container instance for the application
_app_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """Get the global application service container"""
    global _app_container
    if _app_container is None:
        _app_container = ServiceContainer()
    return _app_container


def reset_container() -> None:
    """Drop the global container (tests)"""
    global _app_container
    if _app_container is not None:
        _app_container.clear()
    _app_container = None


def configure_container(socketio=None, config=None, scheduler=None) -> ServiceContainer:
    """
    Configure the global service container with CardParty services.

    Args:
        socketio: Flask-SocketIO instance
        config: Application configuration dictionary
        scheduler: Optional tick scheduler replacing the threading one

    Returns:
        Configured service container
    """
    container = get_container()
    container.clear()  # Clear any existing configuration

    # Set external dependencies
    if socketio is not None:
        container.set_external_dependency('socketio', socketio)

    if scheduler is not None:
        container.set_external_dependency('TickScheduler', scheduler)

    if config is not None:
        container.set_config(config)

    container.configure_services()

    return container
