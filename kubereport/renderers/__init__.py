"""Report sinks: paginated PDF and delimited text."""

from kubereport.renderers.base import FileRenderer, Renderer, artifact_name
from kubereport.renderers.delimited import DelimitedRenderer
from kubereport.renderers.pagination import PageCursor, TablePaginator, TableStyle
from kubereport.renderers.pdf import PaginatedRenderer

__all__ = [
    "DelimitedRenderer",
    "FileRenderer",
    "PageCursor",
    "PaginatedRenderer",
    "Renderer",
    "TablePaginator",
    "TableStyle",
    "artifact_name",
]
