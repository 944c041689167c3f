"""Book-style PDF reader core.

Documents are rasterized once into an ordered sequence of page images with a
synthetic cover prepended, and a small navigation state machine steps through
them with single-flight slide transitions.  :class:`ViewerSession` composes
the two for a presentation layer.
"""

from .session import ViewerSession, ViewState

__version__ = "0.1.0"

__all__ = ["ViewerSession", "ViewState", "__version__"]
