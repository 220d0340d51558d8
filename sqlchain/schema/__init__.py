"""sqlchain schema models: BuilderOptions and RenderedSQL."""
from sqlchain.schema.options import BuilderOptions
from sqlchain.schema.rendered import RenderedSQL

__all__ = [
    "BuilderOptions",
    "RenderedSQL",
]
