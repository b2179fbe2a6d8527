from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

BUILTIN_PROMPT_KEYS = ("port", "tag", "nickname")


class PromptSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., pattern=r"^[A-Za-z_][A-Za-z0-9_]*$", description="Placeholder name in the run template")
    question: str
    default: Optional[str] = None


class ServiceDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., pattern=r"^[a-z0-9]+$", description="Stable lower-case short name")
    image_name: str = Field(..., min_length=1)
    run_template: str = Field(..., min_length=1)
    default_port: int = Field(..., ge=1, le=65535)
    organization: str = Field("library", description="Official repositories use `library` as the organization name")
    display_name: Optional[str] = None
    prompts: tuple[PromptSpec, ...] = ()

    @field_validator("image_name", "run_template")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def unique_prompt_keys(self) -> "ServiceDefinition":
        seen = set(BUILTIN_PROMPT_KEYS)
        for prompt in self.prompts:
            if prompt.key in seen:
                raise ValueError(f"Duplicate prompt key '{prompt.key}'")
            seen.add(prompt.key)
        return self

    @property
    def short_name(self) -> str:
        return self.identifier

    @property
    def name(self) -> str:
        return self.display_name or self.identifier.title()


class LifecycleState(str, Enum):
    IDLE = "idle"
    PROMPTED = "prompted"
    IMAGE_READY = "image_ready"
    STARTED = "started"
    SELECTED = "selected"
    STOPPED = "stopped"
    FAILED = "failed"


class FailureKind(str, Enum):
    RESOLUTION = "resolution"
    ACQUISITION = "acquisition"
    RUNTIME = "runtime"


class EnableResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    service: str
    state: LifecycleState
    failure: Optional[FailureKind] = None
    error: Optional[Exception] = None
    container_name: Optional[str] = None
    parameters: dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.state == LifecycleState.STARTED


class DisableResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    state: LifecycleState
    container_name: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.state in (LifecycleState.STOPPED, LifecycleState.IDLE)
