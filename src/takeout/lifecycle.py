import logging
from typing import Optional

from .exceptions import ImageDownloadError, TagResolutionError, TakeoutError
from .interfaces import Console, ContainerRuntime, Environment
from .models import DisableResult, EnableResult, FailureKind, LifecycleState, ServiceDefinition
from .naming import build_parameters, service_segment
from .prompts import PromptSession
from .tags import TagResolver

logger = logging.getLogger(__name__)

ENABLE_FAILED = "Service failed to enable!!"
DISABLE_FAILED = "Service failed to disable!!"


class LifecycleController:
    """
    Drives a service from a definition to a running container, and back.
    enable: Idle -> Prompted -> ImageReady -> Started | Failed
    disable: Idle -> Selected -> Stopped | Failed
    """

    def __init__(
        self,
        console: Console,
        environment: Environment,
        runtime: ContainerRuntime,
        tag_resolver: Optional[TagResolver] = None,
    ):
        self.console = console
        self.runtime = runtime
        self.prompts = PromptSession(console, environment, tag_resolver or TagResolver())
        self.state = LifecycleState.IDLE

    def enable(self, service: ServiceDefinition) -> EnableResult:
        self.state = LifecycleState.IDLE

        try:
            responses = self.prompts.run(service)
        except TagResolutionError as e:
            return self._enable_failed(service, FailureKind.RESOLUTION, e)
        self.state = LifecycleState.PROMPTED
        tag = responses["tag"]

        try:
            self._ensure_image_is_downloaded(service, tag)
        except ImageDownloadError as e:
            return self._enable_failed(service, FailureKind.ACQUISITION, e)
        self.state = LifecycleState.IMAGE_READY

        self.console.info(f"Enabling {service.short_name}...")

        parameters: dict[str, str] = {}
        try:
            parameters = build_parameters(service, responses, tag)
            self.runtime.boot_container(service.run_template, parameters)
        except Exception as e:
            # Any boot failure is reported the same way; the cause stays on the result
            return self._enable_failed(service, FailureKind.RUNTIME, e, parameters)

        self.state = LifecycleState.STARTED
        self.console.info("Service enabled!")
        return EnableResult(
            service=service.identifier,
            state=self.state,
            container_name=parameters["container_name"],
            parameters=parameters,
        )

    def _ensure_image_is_downloaded(self, service: ServiceDefinition, tag: str) -> None:
        if self.runtime.image_is_downloaded(service.organization, service.image_name, tag):
            return

        self.console.info("Downloading docker image...")
        self.runtime.download_image(service.organization, service.image_name, tag)

    def _enable_failed(
        self,
        service: ServiceDefinition,
        kind: FailureKind,
        error: Exception,
        parameters: Optional[dict[str, str]] = None,
    ) -> EnableResult:
        logger.debug("Enabling %s failed (%s): %s", service.identifier, kind.value, error, exc_info=error)
        self.state = LifecycleState.FAILED
        self.console.error(ENABLE_FAILED)
        parameters = parameters or {}
        return EnableResult(
            service=service.identifier,
            state=self.state,
            failure=kind,
            error=error,
            container_name=parameters.get("container_name"),
            parameters=parameters,
        )

    def disable(self, selector: Optional[str] = None) -> DisableResult:
        self.state = LifecycleState.IDLE

        names = [name for name, _status in self.runtime.takeout_containers()]
        if not names:
            self.console.info("No Takeout containers are enabled.")
            return DisableResult(state=self.state)

        name = self._select_container(names, selector)
        if name is None:
            self.state = LifecycleState.FAILED
            self.console.error(f"No enabled container matches '{selector}'.")
            return DisableResult(state=self.state)
        self.state = LifecycleState.SELECTED

        self.console.info(f"Disabling {name}...")
        try:
            self.runtime.stop_container(name)
        except TakeoutError as e:
            logger.debug("Disabling %s failed: %s", name, e, exc_info=e)
            self.state = LifecycleState.FAILED
            self.console.error(DISABLE_FAILED)
            return DisableResult(state=self.state, container_name=name, error=e)

        self.state = LifecycleState.STOPPED
        self.console.info("Service disabled!")
        return DisableResult(state=self.state, container_name=name)

    def _select_container(self, names: list[str], selector: Optional[str]) -> Optional[str]:
        if selector is None:
            return self.console.choose("Takeout containers to disable", names)

        if selector in names:
            return selector

        matches = [name for name in names if service_segment(name) == selector.strip().lower()]
        if not matches:
            return None
        if len(matches) == 1:
            return matches[0]
        return self.console.choose(f"Which {selector} container should be disabled?", matches)
