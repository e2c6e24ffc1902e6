"""Post text recovery from archived HTML.

Archived post pages come from many markup eras, so no single selector
works.  :func:`extract_text` evaluates an ordered cascade of strategies and
returns the first non-empty result:

1. ``og:description`` meta tag.
2. ``twitter:description`` card meta tag.
3. Generic ``description`` meta tag, unless it is a site tagline.
4. Legacy ``.tweet-text`` markup.
5. ``application/ld+json`` blocks carrying ``articleBody`` or ``text``.

Each strategy takes the parsed document and returns stripped text or
``None``, so it can be tested on its own.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence
from functools import partial
from typing import Any

from bs4 import BeautifulSoup

from feedtui.feeds.archive.config import (
    WB_BOILERPLATE_PHRASES,
    WB_MIN_DESCRIPTION_LENGTH,
)

logger = logging.getLogger(__name__)

Strategy = Callable[[BeautifulSoup], str | None]

_LD_JSON_BODY_FIELDS: tuple[str, ...] = ("articleBody", "text")


def _clean(value: Any) -> str | None:
    """Return *value* stripped, or ``None`` if it is not a non-blank string."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _meta_content(soup: BeautifulSoup, selector: str) -> str | None:
    tag = soup.select_one(selector)
    if tag is None:
        return None
    return _clean(tag.get("content"))


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


def og_description(soup: BeautifulSoup) -> str | None:
    """Open Graph share description."""
    return _meta_content(
        soup, 'meta[property="og:description"], meta[name="og:description"]'
    )


def card_description(soup: BeautifulSoup) -> str | None:
    """Twitter card description."""
    return _meta_content(
        soup, 'meta[name="twitter:description"], meta[property="twitter:description"]'
    )


def page_description(
    soup: BeautifulSoup,
    boilerplate_phrases: Sequence[str] = WB_BOILERPLATE_PHRASES,
) -> str | None:
    """Generic page description, rejected when it looks like a site tagline.

    A description counts only if it is longer than
    :data:`~feedtui.feeds.archive.config.WB_MIN_DESCRIPTION_LENGTH` characters
    and its lower-cased text contains none of *boilerplate_phrases*.
    """
    text = _meta_content(soup, 'meta[name="description"]')
    if text is None or len(text) <= WB_MIN_DESCRIPTION_LENGTH:
        return None
    lowered = text.lower()
    for phrase in boilerplate_phrases:
        phrase = phrase.lower()
        if phrase and (lowered.startswith(phrase) or phrase in lowered):
            logger.debug("archive: ignoring boilerplate description %r", text[:60])
            return None
    return text


def legacy_tweet_text(soup: BeautifulSoup) -> str | None:
    """Inline ``.tweet-text`` element of pre-2019 page markup."""
    for element in soup.select(".tweet-text, .js-tweet-text"):
        text = _clean(element.get_text())
        if text:
            return text
    return None


def linked_data_body(soup: BeautifulSoup) -> str | None:
    """Body of the first JSON-LD object carrying post text.

    A block may hold one object or an array of objects.  Blocks that do not
    decode are skipped.
    """
    for script in soup.select('script[type="application/ld+json"]'):
        raw = script.string if script.string is not None else script.get_text()
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.debug("archive: skipping malformed ld+json block: %s", exc)
            continue
        objects = data if isinstance(data, list) else [data]
        for obj in objects:
            if not isinstance(obj, dict):
                continue
            for field in _LD_JSON_BODY_FIELDS:
                text = _clean(obj.get(field))
                if text:
                    return text
    return None


def build_strategies(
    boilerplate_phrases: Sequence[str] | None = None,
) -> list[Strategy]:
    """Return the extraction cascade in evaluation order."""
    phrases = WB_BOILERPLATE_PHRASES if boilerplate_phrases is None else boilerplate_phrases
    return [
        og_description,
        card_description,
        partial(page_description, boilerplate_phrases=phrases),
        legacy_tweet_text,
        linked_data_body,
    ]


# ---------------------------------------------------------------------------
# Public extraction function
# ---------------------------------------------------------------------------


def extract_text(
    html: str,
    boilerplate_phrases: Sequence[str] | None = None,
) -> str | None:
    """Recover the post text from one archived page.

    Args:
        html: Raw HTML of the archived page (may be partial or malformed).
        boilerplate_phrases: Site taglines that disqualify the generic page
            description.  Defaults to
            :data:`~feedtui.feeds.archive.config.WB_BOILERPLATE_PHRASES`.

    Returns:
        The first non-empty strategy result, or ``None`` when no strategy
        matched.
    """
    soup = BeautifulSoup(html, "html.parser")
    for strategy in build_strategies(boilerplate_phrases):
        text = strategy(soup)
        if text:
            return text
    return None
