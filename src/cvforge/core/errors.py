"""Error taxonomy shared by the normalizer, the render backends and the HTTP layer."""

from __future__ import annotations


class CVForgeError(Exception):
    """Base class for every error raised by the rendering pipeline."""


class ValidationError(CVForgeError):
    """A required input field is missing or malformed.

    Caused by the caller; resubmitting a corrected payload recovers.
    """

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class RenderTimeoutError(CVForgeError):
    """The browser process exceeded the budget of one render stage."""

    def __init__(self, stage: str, seconds: float):
        self.stage = stage
        self.seconds = seconds
        super().__init__(f"PDF rendering timed out during {stage} (budget {seconds:g}s)")


class ProcessLaunchError(CVForgeError):
    """The headless browser could not be started."""


class TemplateInjectionError(CVForgeError):
    """The render context does not match what the template references."""
