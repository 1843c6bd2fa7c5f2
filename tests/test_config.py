"""Tests for ContextVar-based render configuration."""

from threading import Thread

import pytest

from helpers import bare, block, cmd, expr_stmt, script, type_constraint, var
from pspretty import (
    RenderConfig,
    ScriptRenderer,
    get_render_config,
    render,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from pspretty.nodes import CatchClause, IfStatement, InvokeMemberExpression, TryStatement

TREE = script(IfStatement(clauses=((expr_stmt(var("a")), block(cmd("Run"))),)), cmd("Next"))


class TestRenderConfigDataclass:
    """RenderConfig frozen dataclass behavior."""

    def test_defaults(self) -> None:
        config = RenderConfig()
        assert config.indent_unit == "    "
        assert config.newline == "\n"

    def test_immutability(self) -> None:
        config = RenderConfig()
        with pytest.raises(AttributeError):
            config.indent_unit = "\t"  # type: ignore[misc]

    def test_from_dict_ignores_unknown_keys(self) -> None:
        config = RenderConfig.from_dict({"indent_unit": "  ", "color": "red"})
        assert config == RenderConfig(indent_unit="  ")

    def test_list_separator_is_not_configurable(self) -> None:
        with pytest.raises(TypeError):
            RenderConfig(separator=" ")  # type: ignore[call-arg]
        assert RenderConfig.from_dict({"separator": " "}) == RenderConfig()


class TestContextVar:
    """get/set/reset and the context manager."""

    def setup_method(self) -> None:
        reset_render_config()

    def teardown_method(self) -> None:
        reset_render_config()

    def test_set_and_reset(self) -> None:
        set_render_config(RenderConfig(newline="\r\n"))
        assert get_render_config().newline == "\r\n"
        reset_render_config()
        assert get_render_config() == RenderConfig()

    def test_context_manager_restores(self) -> None:
        with render_config_context(RenderConfig(indent_unit="  ")):
            assert render(TREE) == "if ($a)\n{\n  Run\n}\n\nNext"
        assert render(TREE) == "if ($a)\n{\n    Run\n}\n\nNext"

    def test_context_manager_restores_on_error(self) -> None:
        with pytest.raises(RuntimeError), render_config_context(RenderConfig(indent_unit="  ")):
            raise RuntimeError("boom")
        assert get_render_config() == RenderConfig()

    def test_explicit_config_wins(self) -> None:
        with render_config_context(RenderConfig(indent_unit="  ")):
            assert render(TREE, config=RenderConfig(indent_unit="\t")) == "if ($a)\n{\n\tRun\n}\n\nNext"

    def test_crlf_newlines(self) -> None:
        text = ScriptRenderer(config=RenderConfig(newline="\r\n")).render(TREE)
        assert text == "if ($a)\r\n{\r\n    Run\r\n}\r\n\r\nNext"

    def test_thread_isolation(self) -> None:
        results: dict[str, str] = {}

        def worker() -> None:
            set_render_config(RenderConfig(indent_unit="\t"))
            results["thread"] = render(TREE)

        set_render_config(RenderConfig(indent_unit="  "))
        thread = Thread(target=worker)
        thread.start()
        thread.join()

        assert results["thread"] == "if ($a)\n{\n\tRun\n}\n\nNext"
        assert get_render_config().indent_unit == "  "

    def test_lists_keep_comma_separator_under_any_config(self) -> None:
        call = InvokeMemberExpression(expression=var("x"), member=bare("Foo"), arguments=(var("a"), var("b")))
        catch = TryStatement(
            body=block(cmd("Run")),
            catch_clauses=(
                CatchClause(catch_types=(type_constraint("A"), type_constraint("B")), body=block(cmd("Handle"))),
            ),
        )
        config = RenderConfig(indent_unit="\t", newline="\r\n")
        assert render(call, config=config) == "$x.Foo($a, $b)"
        assert "catch [A], [B]" in render(script(catch), config=config)
