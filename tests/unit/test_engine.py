"""Unit tests for the text and HTML render engines."""

import io

import pytest

from openapigen.errors import TemplateError
from openapigen.models.canonical import Info, Operation, PathItem, Specification
from openapigen.renderers.helpers import build_helpers
from openapigen.templates.engine import (
    HTMLEngine,
    RenderEngine,
    RenderOptions,
    TextEngine,
    build_context,
    select_engine,
)


def render_text(engine: RenderEngine, source: str, spec: Specification) -> str:
    """Compile and render a template string into text."""
    template = engine.compile(source, "inline.tpl")
    stream = io.StringIO()
    engine.render(template, build_context(spec), stream, name="inline.tpl")
    return stream.getvalue()


@pytest.fixture
def spec() -> Specification:
    """A small specification with markup in its title."""
    return Specification(
        info=Info(title="Pets & <Friends>", version="1.0"),
        paths={"/pets": PathItem(get=Operation(operation_id="list_pets", tags=["pets"]))},
    )


class TestSelectEngine:
    """Tests for engine selection."""

    def test_text_by_default(self, spec: Specification) -> None:
        engine = select_engine(False, build_helpers(spec))
        assert isinstance(engine, TextEngine)
        assert engine.mode == "text"

    def test_html_when_requested(self, spec: Specification) -> None:
        engine = select_engine(True, build_helpers(spec))
        assert isinstance(engine, HTMLEngine)
        assert engine.mode == "html"

    def test_both_engines_share_helper_table(self, spec: Specification) -> None:
        helpers = build_helpers(spec)
        text = select_engine(False, helpers)
        html = select_engine(True, helpers)
        for name in helpers:
            assert text.environment.globals[name] is html.environment.globals[name]

    def test_options_are_applied(self, spec: Specification) -> None:
        engine = select_engine(False, build_helpers(spec), RenderOptions(trim_blocks=True))
        assert engine.environment.trim_blocks is True


class TestEscaping:
    """Tests for the only behavioral difference between the engines."""

    def test_text_inserts_verbatim(self, spec: Specification) -> None:
        engine = TextEngine(build_helpers(spec))
        assert render_text(engine, "{{ info.title }}", spec) == "Pets & <Friends>"

    def test_html_escapes(self, spec: Specification) -> None:
        engine = HTMLEngine(build_helpers(spec))
        assert render_text(engine, "{{ info.title }}", spec) == "Pets &amp; &lt;Friends&gt;"

    def test_html_escapes_helper_output(self, spec: Specification) -> None:
        engine = HTMLEngine(build_helpers(spec))
        assert render_text(engine, "{{ toLower(info.title) }}", spec) == "pets &amp; &lt;friends&gt;"


class TestZeroValues:
    """Tests for absent fields rendering as empty text."""

    def test_absent_description_is_empty(self, spec: Specification) -> None:
        engine = TextEngine(build_helpers(spec))
        source = "[{{ paths['/pets'].get.description }}]"
        assert render_text(engine, source, spec) == "[]"

    def test_chain_through_absent_field_is_empty(self, spec: Specification) -> None:
        engine = TextEngine(build_helpers(spec))
        source = "[{{ info.contact.email }}][{{ spec.nothing.at.all }}]"
        assert render_text(engine, source, spec) == "[][]"

    def test_absent_field_through_helper_is_empty(self, spec: Specification) -> None:
        engine = TextEngine(build_helpers(spec))
        source = "[{{ info.license.name | camelCase }}]"
        assert render_text(engine, source, spec) == "[]"


class TestHelpersInTemplates:
    """Tests for helpers called from templates."""

    def test_helpers_as_functions_and_filters(self, spec: Specification) -> None:
        engine = TextEngine(build_helpers(spec))
        source = (
            "{{ camelCase(paths['/pets'].get.operation_id) }} "
            "{{ paths['/pets'].get.operation_id | lowerCamelCase }} "
            "{{ uniquePathTags() | join(',') }}"
        )
        assert render_text(engine, source, spec) == "ListPets listPets pets"

    def test_short_helper_names(self, spec: Specification) -> None:
        engine = TextEngine(build_helpers(spec))
        assert render_text(engine, "{{ camel('user_id') }}", spec) == "UserId"

    def test_spec_and_top_level_names_agree(self, spec: Specification) -> None:
        engine = TextEngine(build_helpers(spec))
        assert render_text(engine, "{{ spec.info.version }}={{ info.version }}", spec) == "1.0=1.0"


class TestErrors:
    """Tests for compile and render failures."""

    def test_syntax_error_names_template_and_mode(self, spec: Specification) -> None:
        engine = HTMLEngine(build_helpers(spec))
        with pytest.raises(TemplateError) as exc_info:
            engine.compile("{% for x in %}", "broken.tpl")
        error = exc_info.value
        assert error.stage == "template parse"
        assert str(error.path) == "broken.tpl"
        assert "html mode" in error.message

    def test_helper_failure_is_render_error(self, spec: Specification) -> None:
        engine = TextEngine(build_helpers(spec))
        template = engine.compile("{{ debugDump(camelCase) }}", "dump.tpl")
        with pytest.raises(TemplateError) as exc_info:
            engine.render(template, build_context(spec), io.StringIO(), name="dump.tpl")
        assert exc_info.value.stage == "template render"
        assert "cannot marshal" in exc_info.value.message
