"""Unit tests for the error taxonomy."""

from pathlib import Path

from openapigen.errors import (
    ConversionError,
    FileIOError,
    MalformedInput,
    OpenapigenError,
    PathError,
    TemplateError,
)


class TestErrors:
    """Tests for error formatting and stages."""

    def test_message_with_stage(self) -> None:
        assert str(ConversionError("two body parameters")) == "conversion: two body parameters"

    def test_message_with_path(self) -> None:
        error = TemplateError("cannot render output: boom", Path("t/a.tpl"), stage="template render")
        assert str(error) == f"template render: cannot render output: boom ({Path('t/a.tpl')})"
        assert error.path == Path("t/a.tpl")

    def test_default_stages(self) -> None:
        assert MalformedInput("x").stage == "parse"
        assert FileIOError("x").stage == "io"
        assert PathError("x").stage == "path"

    def test_all_share_a_base(self) -> None:
        for error_class in (MalformedInput, ConversionError, FileIOError, PathError):
            assert issubclass(error_class, OpenapigenError)
        assert issubclass(TemplateError, OpenapigenError)
