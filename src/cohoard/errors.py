"""
Exception hierarchy for cohoard.

Every error carries a human-readable message. The underlying library
exception, when there is one, is chained as ``__cause__``.
"""


class CohoardError(Exception):
    """Base class for all cohoard errors."""


class ConfigError(CohoardError):
    """Raised when a people/config document has an invalid structure."""


class RenderError(CohoardError):
    """Base class for failures of the render pipeline."""


class TemplateCompileError(RenderError):
    """The template source could not be compiled (syntax error)."""

    def __init__(self, template_name: str, message: str, lineno=None):
        self.template_name = template_name
        self.lineno = lineno
        location = f"{template_name}:{lineno}" if lineno else template_name
        super().__init__(f"Failed to compile template {location}: {message}")


class TemplateRenderError(RenderError):
    """Evaluating the template failed (undefined variable, filter error, ...)."""

    def __init__(self, template_name: str, message: str):
        self.template_name = template_name
        super().__init__(f"Failed to render template {template_name}: {message}")


class CssInlineError(RenderError):
    """A <style> block could not be inlined."""


class MissingBodyError(RenderError):
    """The post-processed document has no <body> element."""
