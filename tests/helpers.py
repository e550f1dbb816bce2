from abc import ABC, abstractmethod
from typing import Any, List, Protocol
from starlette.testclient import TestClient
from container_lib.components.container import ObjectContainer


class Logger(ABC):
    @abstractmethod
    def log(self, message: str) -> None: ...


class ConsoleLogger(Logger):
    def __init__(self):
        self.lines: List[str] = []

    def log(self, message: str) -> None:
        self.lines.append(message)


class FileLogger(Logger):
    def __init__(self, path: str = 'app.log'):
        self.path = path

    def log(self, message: str) -> None:
        pass


class Clock(Protocol):
    def now(self) -> float: ...


class FixedClock:
    def now(self) -> float:
        return 42.0


class Greeter:
    def __init__(self, logger: Logger, greeting: str = 'hello'):
        self.logger = logger
        self.greeting = greeting

    def greet(self, who: str) -> str:
        msg = f"{self.greeting} {who}"
        self.logger.log(msg)
        return msg


class Exploding:
    def __init__(self):
        raise RuntimeError('boom')


class NotALogger:
    pass


def make_console_logger() -> Logger:
    return ConsoleLogger()


SHARED_LOGGER = ConsoleLogger()


def register_service_on_client(client: TestClient, service_type: Any, instance: Any, name: str = None) -> None:
    """Register a service instance into the app's object container for tests.

    Usage in tests:
        from tests.helpers import register_service_on_client
        register_service_on_client(client, Logger, fake_logger)
    """
    container = getattr(client.app.state, 'container', None)
    if container is None:
        container = ObjectContainer()
        client.app.state.container = container

    container.register_instance(instance, service_type, service_name=name)
