"""Pytest configuration and shared fixtures."""

from collections import deque

import pytest

from takeout.exceptions import ContainerBootError
from takeout.interfaces import Console, ContainerRuntime, Environment, TagRegistry
from takeout.lifecycle import LifecycleController
from takeout.models import PromptSpec, ServiceDefinition
from takeout.tags import TagResolver


class ScriptedConsole(Console):
    """Answers questions from a queue; an exhausted queue accepts the default."""

    def __init__(self, answers=(), choices=()):
        self.answers = deque(answers)
        self.choices = deque(choices)
        self.questions = []
        self.infos = []
        self.errors = []

    def ask(self, question, default=None):
        self.questions.append((question, default))
        return self.answers.popleft() if self.answers else ""

    def choose(self, question, options):
        self.questions.append((question, tuple(options)))
        return self.choices.popleft() if self.choices else options[0]

    def info(self, message):
        self.infos.append(message)

    def error(self, message):
        self.errors.append(message)


class FakeEnvironment(Environment):
    def __init__(self, busy=()):
        self.busy = set(busy)
        self.checked = []

    def port_is_available(self, port):
        self.checked.append(port)
        return port not in self.busy


class FakeRuntime(ContainerRuntime):
    def __init__(self, downloaded=(), containers=(), boot_error=None, download_error=None, stop_error=None):
        self.downloaded = set(downloaded)
        self.containers = list(containers)
        self.boot_error = boot_error
        self.download_error = download_error
        self.stop_error = stop_error
        self.downloads = []
        self.boots = []
        self.stopped = []

    def image_is_downloaded(self, organization, image_name, tag):
        return (organization, image_name, tag) in self.downloaded

    def download_image(self, organization, image_name, tag):
        if self.download_error:
            raise self.download_error
        self.downloads.append((organization, image_name, tag))
        self.downloaded.add((organization, image_name, tag))

    def boot_container(self, template, parameters):
        self.boots.append((template, dict(parameters)))
        if self.boot_error:
            raise self.boot_error

    def takeout_containers(self):
        return list(self.containers)

    def stop_container(self, name):
        if self.stop_error:
            raise self.stop_error
        self.stopped.append(name)


class FakeRegistry(TagRegistry):
    def __init__(self, latest="8.0.36", error=None):
        self.latest = latest
        self.error = error
        self.calls = 0

    def get_latest_tag(self):
        self.calls += 1
        if self.error:
            raise self.error
        return self.latest


@pytest.fixture
def mysql_service():
    return ServiceDefinition(
        identifier="mysql",
        display_name="MySQL",
        image_name="mysql",
        default_port=3306,
        prompts=(PromptSpec(key="volume", question="Volume?", default="mysql_data"),),
        run_template='-d --name "{container_name}" -p "{port}":3306 -v "{volume}":/var/lib/mysql '
        '"{organization}/{image_name}:{tag}"',
    )


@pytest.fixture
def console():
    return ScriptedConsole()


@pytest.fixture
def environment():
    return FakeEnvironment()


@pytest.fixture
def runtime():
    return FakeRuntime()


@pytest.fixture
def registry():
    return FakeRegistry()


@pytest.fixture
def resolver(registry):
    return TagResolver(registry_factory=lambda service: registry)


@pytest.fixture
def controller(console, environment, runtime, resolver):
    return LifecycleController(console, environment, runtime, resolver)


@pytest.fixture
def boot_failure():
    return ContainerBootError("port is already allocated")
