"""Error taxonomy for openapigen.

Every error is fatal at the point of first occurrence. The CLI is the only
place that turns these into exit codes; everything else raises.

- MalformedInput: the API description cannot be decoded or parsed
- ConversionError: Swagger 2.0 -> OpenAPI 3 conversion failed
- FileIOError: a file or directory cannot be opened, read or created
- TemplateError: a template failed to compile or render
- PathError: an input or output path cannot be computed
"""

from pathlib import Path


class OpenapigenError(Exception):
    """Base class for all fatal openapigen errors.

    Attributes:
        message: Human-readable description
        stage: Pipeline stage that failed (e.g. "legacy parse", "render")
        path: Offending file path, if any
    """

    def __init__(
        self,
        message: str,
        stage: str,
        path: Path | str | None = None,
    ) -> None:
        self.message = message
        self.stage = stage
        self.path = Path(path) if path is not None else None
        super().__init__(self._format())

    def _format(self) -> str:
        text = f"{self.stage}: {self.message}"
        if self.path is not None:
            text += f" ({self.path})"
        return text


class MalformedInput(OpenapigenError):
    """Raised when the API description document cannot be parsed."""

    def __init__(
        self,
        message: str,
        stage: str = "parse",
        path: Path | str | None = None,
    ) -> None:
        super().__init__(message, stage, path)


class ConversionError(OpenapigenError):
    """Raised when a Swagger 2.0 construct has no OpenAPI 3 equivalent."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message, "conversion", path)


class FileIOError(OpenapigenError):
    """Raised when a file or directory cannot be read or created."""

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        stage: str = "io",
    ) -> None:
        super().__init__(message, stage, path)


class TemplateError(OpenapigenError):
    """Raised when a template fails to compile or render.

    Always carries the path of the offending template.
    """

    def __init__(self, message: str, path: Path | str, stage: str = "template") -> None:
        super().__init__(message, stage, path)


class PathError(OpenapigenError):
    """Raised when an absolute, relative or output path cannot be computed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message, "path", path)
