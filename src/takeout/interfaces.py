"""Collaborator interfaces consumed by the lifecycle controller."""

from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence


class Console(ABC):
    """Line-oriented, synchronous user interaction."""

    @abstractmethod
    def ask(self, question: str, default: Optional[str] = None) -> str:
        """Ask a question; empty input resolves to the default."""

    @abstractmethod
    def choose(self, question: str, options: Sequence[str]) -> str:
        """Present a menu and return the selected option."""

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass


class Environment(ABC):
    @abstractmethod
    def port_is_available(self, port: int) -> bool:
        """Return True when nothing on the host is bound to the port."""


class ContainerRuntime(ABC):
    @abstractmethod
    def image_is_downloaded(self, organization: str, image_name: str, tag: str) -> bool:
        pass

    @abstractmethod
    def download_image(self, organization: str, image_name: str, tag: str) -> None:
        pass

    @abstractmethod
    def boot_container(self, template: str, parameters: Mapping[str, str]) -> None:
        pass

    @abstractmethod
    def takeout_containers(self) -> list[tuple[str, str]]:
        """Return (name, status) for every container created by takeout."""

    @abstractmethod
    def stop_container(self, name: str) -> None:
        pass


class TagRegistry(ABC):
    """Tag lookup scoped to a single image."""

    @abstractmethod
    def get_latest_tag(self) -> str:
        pass
