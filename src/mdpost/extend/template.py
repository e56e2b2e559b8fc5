"""Jinja2 template engine used for scaffolds and in-post template tags"""

from typing import Any, Callable

from jinja2 import Environment


class TemplateEngine:
    """Renders template source strings against a variables mapping.

    Autoescaping is off: output is markdown/HTML that is already escaped where
    it needs to be. Undefined variables render as empty strings.
    """

    def __init__(self) -> None:
        self.env = Environment(autoescape=False, keep_trailing_newline=True, enable_async=True)

    def register_filter(self, name: str, fn: Callable) -> None:
        self.env.filters[name] = fn

    def register_global(self, name: str, value: Any) -> None:
        self.env.globals[name] = value

    async def render(self, text: str, variables: dict[str, Any]) -> str:
        return await self.env.from_string(text).render_async(**variables)
