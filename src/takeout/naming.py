import re
import unicodedata
from typing import Mapping, Optional

from .exceptions import TemplateRenderError
from .models import ServiceDefinition

CONTAINER_PREFIX = "TO"
SEPARATOR = "--"

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase ASCII slug with non-alphanumeric runs collapsed to a single '-'."""
    ascii_value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", ascii_value.lower()).strip("-")


def container_name(service: ServiceDefinition, nickname: str, tag: str) -> str:
    return SEPARATOR.join([CONTAINER_PREFIX, service.short_name, slugify(nickname), tag])


def is_takeout_container(name: str) -> bool:
    return name.startswith(CONTAINER_PREFIX + SEPARATOR)


def service_segment(name: str) -> Optional[str]:
    """Short name of the service a takeout container was created for."""
    if not is_takeout_container(name):
        return None
    parts = name.split(SEPARATOR)
    return parts[1] if len(parts) > 1 else None


def build_parameters(service: ServiceDefinition, responses: Mapping[str, str], resolved_tag: str) -> dict[str, str]:
    parameters = {key: str(value) for key, value in responses.items()}
    parameters["container_name"] = container_name(service, parameters["nickname"], resolved_tag)
    parameters["tag"] = resolved_tag  # Overwrite "latest" with actual latest tag
    return parameters


def render_template(template: str, parameters: Mapping[str, str]) -> str:
    missing = sorted({key for key in _PLACEHOLDER.findall(template) if key not in parameters})
    if missing:
        raise TemplateRenderError(missing)

    return _PLACEHOLDER.sub(lambda match: str(parameters[match.group(1)]), template)
