"""Wayback Machine archive feed.

Recovers historical social-media posts for a profile or search pattern:
the CDX index lists which post pages were captured, the captures are
filtered down to genuine post pages, and each archived page is fetched
(at most three at a time) to recover the post text.

No credentials are required.  The Internet Archive can be slow or
unavailable; only the index query is allowed to fail a poll.
"""
