import logging
import re
from typing import Callable, Optional

import httpx

from .exceptions import TagResolutionError
from .interfaces import TagRegistry
from .models import ServiceDefinition
from .settings import get_settings

logger = logging.getLogger(__name__)

LATEST = "latest"

_NUMERIC_TAG = re.compile(r"^v?\d+(\.\d+)*$")


def _version_key(tag: str) -> tuple[int, ...]:
    return tuple(int(part) for part in tag.lstrip("v").split("."))


class DockerHubTags(TagRegistry):
    """Reads the tag list of one image from the Docker Hub v2 API."""

    def __init__(self, organization: str, image_name: str, client: Optional[httpx.Client] = None):
        settings = get_settings()
        self.organization = organization
        self.image_name = image_name
        self.page_size = settings.REGISTRY_PAGE_SIZE
        self.registry_url = settings.REGISTRY_URL
        self.timeout = settings.REGISTRY_TIMEOUT
        self._client = client

    @classmethod
    def for_service(cls, service: ServiceDefinition) -> "DockerHubTags":
        return cls(service.organization, service.image_name)

    def tags(self) -> list[str]:
        if self._client is not None:
            return self._fetch_tags(self._client)

        with httpx.Client(base_url=self.registry_url, timeout=self.timeout) as client:
            return self._fetch_tags(client)

    def _fetch_tags(self, client: httpx.Client) -> list[str]:
        url = f"/v2/repositories/{self.organization}/{self.image_name}/tags"
        try:
            response = client.get(url, params={"page_size": self.page_size})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TagResolutionError(f"Could not list tags for {self.organization}/{self.image_name}: {e}") from e

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            raise TagResolutionError(f"Unexpected tag listing for {self.organization}/{self.image_name}")

        return [
            result["name"] for result in results if isinstance(result, dict) and isinstance(result.get("name"), str)
        ]

    def get_latest_tag(self) -> str:
        candidates = [tag for tag in self.tags() if _NUMERIC_TAG.match(tag)]
        if not candidates:
            raise TagResolutionError(f"No versioned tags found for {self.organization}/{self.image_name}")

        latest = max(candidates, key=_version_key)
        logger.debug("Resolved %s/%s:latest to %s", self.organization, self.image_name, latest)
        return latest


class TagResolver:
    def __init__(self, registry_factory: Callable[[ServiceDefinition], TagRegistry] = DockerHubTags.for_service):
        self._registry_factory = registry_factory

    def resolve(self, service: ServiceDefinition, requested_tag: str) -> str:
        """Explicit tags are trusted verbatim; only the `latest` sentinel hits the registry."""
        if requested_tag != LATEST:
            return requested_tag

        try:
            return self._registry_factory(service).get_latest_tag()
        except TagResolutionError:
            raise
        except Exception as e:
            raise TagResolutionError(f"Could not resolve the latest tag of {service.image_name}: {e}") from e
