"""pspretty renderers.

Renderers convert typed AST nodes into output formats.

Available Renderers:
- ScriptRenderer: Renders AST to canonically formatted PowerShell using the
  StringBuilder pattern

Thread Safety:
All renderers use StringBuilder local to each render() call.
Safe for concurrent use from multiple threads.

"""

from pspretty.renderers.script import RenderContext, ScriptRenderer

__all__ = ["RenderContext", "ScriptRenderer"]
