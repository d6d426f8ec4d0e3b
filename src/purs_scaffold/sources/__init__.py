"""Template sources: where template files come from.

``select_source`` picks exactly one implementation per run from the
execution context. There is no fallback between them.
"""

from purs_scaffold.config import ScaffoldConfig
from purs_scaffold.context import ExecutionContext
from purs_scaffold.sources.base import TemplateSource
from purs_scaffold.sources.local import FileSource
from purs_scaffold.sources.remote import HttpSource


def select_source(context: ExecutionContext, config: ScaffoldConfig) -> TemplateSource:
    """Return the template source for *context*."""
    if context is ExecutionContext.LOCAL:
        return FileSource(config.templates_dir, max_parallel=config.max_parallel_copies)
    return HttpSource(config.origin)


__all__ = [
    "FileSource",
    "HttpSource",
    "TemplateSource",
    "select_source",
]
