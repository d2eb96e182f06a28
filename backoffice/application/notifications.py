"""
Notifier port.
Non-blocking user notifications raised by use cases and editor state.
"""

from abc import ABC, abstractmethod


class Notifier(ABC):

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        pass
