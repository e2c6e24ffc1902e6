"""Dashboard feeds.

Each feed kind provides one :class:`~feedtui.feeds.base.FeedFetcher`
subclass registered with :func:`~feedtui.feeds.registry.register`.
"""
