import logging
import uuid
from typing import Optional

from .interfaces import Console, Environment
from .models import PromptSpec, ServiceDefinition
from .tags import LATEST, TagResolver

logger = logging.getLogger(__name__)

PORT_QUESTION = "Which host port would you like this service to use?"
TAG_QUESTION = "Which tag (version) of this service would you like to use?"
NICKNAME_QUESTION = "Enter a nickname for this container"


def generate_nickname() -> str:
    return uuid.uuid4().hex[:13]


def default_prompts(service: ServiceDefinition, nickname: Optional[str] = None) -> list[PromptSpec]:
    """Built-in prompts, always asked first and in this order."""
    return [
        PromptSpec(key="port", question=PORT_QUESTION, default=str(service.default_port)),
        PromptSpec(key="tag", question=TAG_QUESTION, default=LATEST),
        PromptSpec(key="nickname", question=NICKNAME_QUESTION, default=nickname or generate_nickname()),
    ]


class PromptSession:
    """Collects the answers needed to enable one service."""

    def __init__(self, console: Console, environment: Environment, tag_resolver: TagResolver):
        self.console = console
        self.environment = environment
        self.tag_resolver = tag_resolver

    def run(self, service: ServiceDefinition) -> dict[str, str]:
        responses = {
            "organization": service.organization,
            "image_name": service.image_name,
        }

        for prompt in default_prompts(service):
            self._ask(prompt, responses)

            # No way out of this loop other than a free port
            while prompt.key == "port" and (problem := self._port_problem(responses["port"])):
                self.console.error(problem)
                self._ask(prompt, responses)

            if prompt.key == "port":
                responses["port"] = str(int(responses["port"]))

        for prompt in service.prompts:
            self._ask(prompt, responses)

        responses["tag"] = self.tag_resolver.resolve(service, responses["tag"])
        return responses

    def _ask(self, prompt: PromptSpec, responses: dict[str, str]) -> None:
        answer = self.console.ask(prompt.question, prompt.default)
        if answer is None or answer == "":
            answer = prompt.default or ""
        responses[prompt.key] = str(answer)

    def _port_problem(self, value: str) -> Optional[str]:
        try:
            port = int(value)
        except ValueError:
            port = 0
        if not 1 <= port <= 65535:
            logger.debug("Rejected port answer %r", value)
            return f"{value!r} is not a valid port. Please enter a number between 1 and 65535."
        if not self.environment.port_is_available(port):
            return f"Port {port} is already in use. Please select a different port."
        return None
