# MIT License (see LICENSE)
"""
Rendering adapters for FrameSnapshot output.

    - RendererAdapter: Abstract base class defining the frame interface.
    - DebugRenderer: Text/console output for debugging.
    - NullRenderer: No-op renderer for benchmarks.
    - BufferedRenderer: Records frame summaries for inspection.

Typical usage:
    from orbits_sim.renderer import DebugRenderer

    DebugRenderer().render(controller.tick())
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
