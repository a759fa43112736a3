"""
Infrastructure Layer - Output sinks for bundle records.
"""

from bundler.infrastructure.markdown_sink import MarkdownSink, render_record
from bundler.infrastructure.memory_sink import MemorySink

__all__ = [
    "MarkdownSink",
    "MemorySink",
    "render_record",
]
