class TakeoutError(Exception):
    """Base class for every error raised by takeout."""


class UnknownServiceError(TakeoutError):
    def __init__(self, identifier: str):
        super().__init__(f"Unknown service '{identifier}'")
        self.identifier = identifier


class TagResolutionError(TakeoutError):
    """The tag registry could not produce a concrete tag."""


class ImageDownloadError(TakeoutError):
    """Pulling an image from the registry failed."""


class TemplateRenderError(TakeoutError):
    def __init__(self, missing: list[str]):
        super().__init__(f"Run template has no value for: {', '.join(missing)}")
        self.missing = missing


class ContainerBootError(TakeoutError):
    """The container runtime refused to start the container."""


class ContainerStopError(TakeoutError):
    pass
