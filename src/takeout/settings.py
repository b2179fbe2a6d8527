from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Docker daemon, tag registry and port-probe options for takeout.
    Every field can be overridden with the TAKEOUT_ prefix, e.g. TAKEOUT_LOG_LEVEL=DEBUG.
    """

    DOCKER_BASE_URL: str | None = None  # Optional: Connect to remote docker
    DOCKER_BINARY: str = "docker"

    REGISTRY_URL: str = "https://registry.hub.docker.com"
    REGISTRY_TIMEOUT: float = 10.0
    REGISTRY_PAGE_SIZE: int = 100

    PORT_CHECK_HOST: str = "127.0.0.1"
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="TAKEOUT_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> AppSettings:
    """Process-wide settings; environment changes after the first call are not picked up."""
    return AppSettings()
