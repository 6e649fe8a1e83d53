"""split-stream — multi-video grid sessions with lifecycle analytics.

Composes a bounded set of YouTube streams into a responsive grid and
records the viewing session as a stream of analytics events.
"""

from split_stream.version import __version__

__all__: list[str] = ["__version__"]
