"""
Registry of the services takeout knows how to enable.

Run templates are `docker run` arguments with `{placeholder}` fields. Every template can use
`organization`, `image_name`, `port`, `tag`, `nickname`, `container_name` and the keys of its own prompts.
"""

from typing import Iterable

from .exceptions import UnknownServiceError
from .models import PromptSpec, ServiceDefinition


class ServiceCatalog:
    def __init__(self, definitions: Iterable[ServiceDefinition] = ()):
        self._services: dict[str, ServiceDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: ServiceDefinition) -> None:
        if definition.identifier in self._services:
            raise ValueError(f"Service '{definition.identifier}' is already registered")
        self._services[definition.identifier] = definition

    def get(self, identifier: str) -> ServiceDefinition:
        try:
            return self._services[identifier.strip().lower()]
        except KeyError:
            raise UnknownServiceError(identifier) from None

    def find_by_name(self, display_name: str) -> ServiceDefinition:
        for definition in self._services.values():
            if definition.name == display_name:
                return definition
        raise UnknownServiceError(display_name)

    def all(self) -> list[ServiceDefinition]:
        return sorted(self._services.values(), key=lambda definition: definition.name.lower())

    def __contains__(self, identifier: str) -> bool:
        return identifier.strip().lower() in self._services

    def __len__(self) -> int:
        return len(self._services)


def _volume(default: str) -> PromptSpec:
    return PromptSpec(key="volume", question="What is the Docker volume name?", default=default)


MYSQL = ServiceDefinition(
    identifier="mysql",
    display_name="MySQL",
    image_name="mysql",
    default_port=3306,
    prompts=(
        _volume("mysql_data"),
        PromptSpec(key="root_password", question="What is the root password?", default=""),
        PromptSpec(key="allow_empty_password", question="Allow an empty root password? (yes/no)", default="yes"),
    ),
    run_template=(
        '-d --name "{container_name}" -p "{port}":3306 '
        '-e MYSQL_ROOT_PASSWORD="{root_password}" -e MYSQL_ALLOW_EMPTY_PASSWORD="{allow_empty_password}" '
        '-v "{volume}":/var/lib/mysql "{organization}/{image_name}:{tag}"'
    ),
)

MARIADB = ServiceDefinition(
    identifier="mariadb",
    display_name="MariaDB",
    image_name="mariadb",
    default_port=3306,
    prompts=(
        _volume("mariadb_data"),
        PromptSpec(key="root_password", question="What is the root password?", default=""),
        PromptSpec(key="allow_empty_password", question="Allow an empty root password? (yes/no)", default="yes"),
    ),
    run_template=(
        '-d --name "{container_name}" -p "{port}":3306 '
        '-e MARIADB_ROOT_PASSWORD="{root_password}" -e MARIADB_ALLOW_EMPTY_ROOT_PASSWORD="{allow_empty_password}" '
        '-v "{volume}":/var/lib/mysql "{organization}/{image_name}:{tag}"'
    ),
)

POSTGRESQL = ServiceDefinition(
    identifier="postgresql",
    display_name="PostgreSQL",
    image_name="postgres",
    default_port=5432,
    prompts=(
        _volume("postgres_data"),
        PromptSpec(key="root_password", question="What is the postgres user password?", default="password"),
    ),
    run_template=(
        '-d --name "{container_name}" -p "{port}":5432 -e POSTGRES_PASSWORD="{root_password}" '
        '-v "{volume}":/var/lib/postgresql/data "{organization}/{image_name}:{tag}"'
    ),
)

MONGODB = ServiceDefinition(
    identifier="mongodb",
    display_name="MongoDB",
    image_name="mongo",
    default_port=27017,
    prompts=(_volume("mongo_data"),),
    run_template='-d --name "{container_name}" -p "{port}":27017 -v "{volume}":/data/db "{organization}/{image_name}:{tag}"',
)

REDIS = ServiceDefinition(
    identifier="redis",
    display_name="Redis",
    image_name="redis",
    default_port=6379,
    prompts=(_volume("redis_data"),),
    run_template='-d --name "{container_name}" -p "{port}":6379 -v "{volume}":/data "{organization}/{image_name}:{tag}"',
)

MEMCACHED = ServiceDefinition(
    identifier="memcached",
    display_name="Memcached",
    image_name="memcached",
    default_port=11211,
    run_template='-d --name "{container_name}" -p "{port}":11211 "{organization}/{image_name}:{tag}"',
)

MEILISEARCH = ServiceDefinition(
    identifier="meilisearch",
    display_name="MeiliSearch",
    organization="getmeili",
    image_name="meilisearch",
    default_port=7700,
    prompts=(_volume("meili_data"),),
    run_template=(
        '-d --name "{container_name}" -p "{port}":7700 -v "{volume}":/meili_data "{organization}/{image_name}:{tag}"'
    ),
)

ELASTICSEARCH = ServiceDefinition(
    identifier="elasticsearch",
    display_name="ElasticSearch",
    image_name="elasticsearch",
    default_port=9200,
    prompts=(
        _volume("elastic_data"),
        PromptSpec(key="memory", question="How much memory should the JVM use?", default="1g"),
    ),
    run_template=(
        '-d --name "{container_name}" -p "{port}":9200 -e discovery.type=single-node -e xpack.security.enabled=false '
        '-e ES_JAVA_OPTS="-Xms{memory} -Xmx{memory}" -v "{volume}":/usr/share/elasticsearch/data '
        '"{organization}/{image_name}:{tag}"'
    ),
)

MAILHOG = ServiceDefinition(
    identifier="mailhog",
    display_name="MailHog",
    organization="mailhog",
    image_name="mailhog",
    default_port=1025,
    prompts=(PromptSpec(key="web_port", question="Which host port would you like the web UI to use?", default="8025"),),
    run_template='-d --name "{container_name}" -p "{port}":1025 -p "{web_port}":8025 "{organization}/{image_name}:{tag}"',
)

RABBITMQ = ServiceDefinition(
    identifier="rabbitmq",
    display_name="RabbitMQ",
    image_name="rabbitmq",
    default_port=5672,
    prompts=(_volume("rabbitmq_data"),),
    run_template=(
        '-d --name "{container_name}" -p "{port}":5672 '
        '-v "{volume}":/var/lib/rabbitmq "{organization}/{image_name}:{tag}"'
    ),
)

DEFAULT_SERVICES = (
    MYSQL,
    MARIADB,
    POSTGRESQL,
    MONGODB,
    REDIS,
    MEMCACHED,
    MEILISEARCH,
    ELASTICSEARCH,
    MAILHOG,
    RABBITMQ,
)


def default_catalog() -> ServiceCatalog:
    return ServiceCatalog(DEFAULT_SERVICES)
