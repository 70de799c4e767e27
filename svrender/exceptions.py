"""svrender exceptions."""


class SvRenderError(Exception):
    """Base svrender error."""


class InvalidSettingError(SvRenderError, ValueError):
    """A renderer setting or collaborator was configured with an unusable value."""

    def __init__(self, setting: str, value, reason: str = ""):
        self.setting = setting
        self.value = value
        message = f"Invalid value for {setting}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SiteModelError(SvRenderError):
    """The site description could not be loaded."""

    def __init__(self, message: str, source: str = ""):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
