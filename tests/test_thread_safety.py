"""Concurrent rendering with a shared ScriptRenderer."""

from concurrent.futures import ThreadPoolExecutor

from helpers import block, cmd, expr_stmt, script, var
from pspretty.nodes import IfStatement, WhileStatement
from pspretty.renderers.script import ScriptRenderer


def _tree(i: int):  # type: ignore[no-untyped-def]
    inner = WhileStatement(condition=expr_stmt(var(f"w{i}")), body=block(cmd(f"Step{i}")))
    return script(IfStatement(clauses=((expr_stmt(var(f"c{i}")), block(inner)),)), cmd(f"After{i}"))


def test_shared_renderer_is_thread_safe() -> None:
    renderer = ScriptRenderer()
    trees = [_tree(i) for i in range(50)]
    expected = [renderer.render(tree) for tree in trees]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(renderer.render, trees * 4))

    assert results == expected * 4
