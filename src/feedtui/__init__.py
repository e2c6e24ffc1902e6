"""feedtui — terminal dashboard feeds.

The archive feed recovers historical social-media posts from Wayback Machine
captures; see :mod:`feedtui.feeds.archive`.
"""

__version__ = "0.1.0"
