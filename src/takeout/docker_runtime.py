import logging
import shlex
import subprocess
from typing import Mapping, Optional

import docker
from docker.errors import APIError, DockerException, ImageNotFound, NotFound

from .exceptions import ContainerBootError, ContainerStopError, ImageDownloadError
from .interfaces import ContainerRuntime
from .naming import is_takeout_container, render_template
from .settings import get_settings

logger = logging.getLogger(__name__)


def image_reference(organization: str, image_name: str, tag: str) -> str:
    return f"{organization}/{image_name}:{tag}"


class DockerRuntime(ContainerRuntime):
    """
    Container runtime backed by the docker SDK.
    Containers are booted through the docker CLI so that run templates read like `docker run` arguments.
    """

    def __init__(self, client: Optional[docker.DockerClient] = None, binary: Optional[str] = None):
        settings = get_settings()
        self.binary = binary or settings.DOCKER_BINARY
        self._base_url = settings.DOCKER_BASE_URL
        self._client = client

    @property
    def client(self) -> docker.DockerClient:
        if self._client is None:
            self._client = docker.from_env(base_url=self._base_url) if self._base_url else docker.from_env()
        return self._client

    def image_is_downloaded(self, organization: str, image_name: str, tag: str) -> bool:
        try:
            self.client.images.get(image_reference(organization, image_name, tag))
        except ImageNotFound:
            return False
        except DockerException as e:
            raise ImageDownloadError(f"Could not inspect local images: {e}") from e
        return True

    def download_image(self, organization: str, image_name: str, tag: str) -> None:
        reference = image_reference(organization, image_name, tag)
        try:
            self.client.images.pull(f"{organization}/{image_name}", tag=tag)
        except DockerException as e:
            raise ImageDownloadError(f"Could not pull {reference}: {e}") from e
        logger.debug("Pulled %s", reference)

    def boot_container(self, template: str, parameters: Mapping[str, str]) -> None:
        command = [self.binary, "run", *shlex.split(render_template(template, parameters))]
        logger.debug("Running %s", shlex.join(command))

        try:
            completed = subprocess.run(command, capture_output=True, text=True, check=False)
        except OSError as e:
            raise ContainerBootError(f"Could not execute {self.binary}: {e}") from e

        if completed.returncode != 0:
            raise ContainerBootError(completed.stderr.strip() or f"{self.binary} run exited with {completed.returncode}")

    def takeout_containers(self) -> list[tuple[str, str]]:
        containers = self.client.containers.list(all=True, filters={"name": "TO--"})
        # The name filter is a substring match
        return sorted(
            (container.name, container.status) for container in containers if is_takeout_container(container.name)
        )

    def stop_container(self, name: str) -> None:
        try:
            container = self.client.containers.get(name)
            if container.status == "running":
                container.stop()
            container.remove()
        except NotFound:
            logger.debug("Container %s already gone", name)
        except APIError as e:
            raise ContainerStopError(f"Could not stop {name}: {e}") from e
