"""
Error types raised by the resolution workflow.

Every failure inside the core surfaces as a subclass of LauncherError so the
command line can report it and pick an exit code in one place.
"""

from typing import Optional


class LauncherError(Exception):
    """Base class for all launcher failures."""


class DirectoryUnreadable(LauncherError):
    """The models directory itself could not be listed."""

    def __init__(self, directory: str, cause: Optional[BaseException] = None):
        self.directory = directory
        self.cause = cause
        super().__init__(f"Cannot read models directory {directory!r}: {cause}")


class UnknownTemplate(LauncherError, ValueError):
    """A prompt template id matched no canonical id or alias."""

    def __init__(self, template_id: str):
        self.template_id = template_id
        super().__init__(f"Unknown prompt template: {template_id!r}")


class AcquireError(LauncherError):
    """Base class for failures while turning a model reference into a file."""


class InvalidUrl(AcquireError):
    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid model url {url!r}: {reason}")


class NoFilenameInUrl(AcquireError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No filename found in the url to download: {url}")


class DownloadFailed(AcquireError):
    """Any network, HTTP status, or write failure during a download."""

    def __init__(self, url: str, cause: BaseException):
        self.url = url
        self.cause = cause
        super().__init__(f"Download of {url} failed: {cause}")


class ModelSelectionCancelled(LauncherError):
    def __init__(self):
        super().__init__("No model selected")


class TemplateSelectionCancelled(LauncherError):
    def __init__(self):
        super().__init__("No prompt template selected")
