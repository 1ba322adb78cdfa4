"""
Site binding for mihetofilms.web.app.

Extractors run a browser-side script against a rendered :class:`Document` and
turn the raw dictionaries it returns into models. The crawlers accept any
callable with the same signature, so these can be swapped out.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, List

from .errors import ExtractionError
from .models import MISSING, DetailRecord, ListingEntry, VideoLink, extract_listing_id
from .renderer import Document

ListingExtractor = Callable[[Document], List[ListingEntry]]
DetailExtractor = Callable[[Document, str], DetailRecord]


LISTING_SCRIPT = r"""
(gridSelector) => {
    const text = (root, selector) => {
        const el = root.querySelector(selector);
        return el ? el.innerText.trim() : null;
    };
    return Array.from(document.querySelectorAll(gridSelector + ' > a')).map(card => {
        const img = card.querySelector('img');
        return {
            title: text(card, 'h3'),
            imageUrl: img ? img.src : null,
            href: card.getAttribute('href'),
            uploadedTime: text(card, 'p.text-gray-400'),
            subber: text(card, 'p.text-white.font-medium'),
        };
    });
}
"""

DETAIL_SCRIPT = r"""
() => {
    const text = (el) => (el ? el.innerText.trim() : null);
    const cardHeading = (classes, label) =>
        Array.from(document.querySelectorAll('div.card h2.' + classes))
            .find(el => el.textContent.includes(label)) || null;

    const data = {};
    data.title = text(document.querySelector('div.title h2.text-white.text-3xl.font-bold'));

    const poster = document.querySelector('img.border-3.rounded-full.aspect-square.object-cover');
    data.posterUrl = poster ? poster.src : null;

    data.info = {};
    const infoBox = document.querySelector('div.card.my-5 div.text-sm.text-gray-300.space-y-3');
    if (infoBox) {
        infoBox.querySelectorAll('div.flex.items-center.gap-2').forEach(row => {
            const label = row.querySelector('span.font-medium.text-gray-400');
            const value = row.querySelector('span.text-white');
            if (label && value) {
                data.info[label.innerText.trim().replace(':', '')] = value.innerText.trim();
            }
        });
    }

    const description = cardHeading('text-lg.font-semibold.text-white.mb-3', 'Movie Description');
    data.description = description ? text(description.nextElementSibling) : null;

    const trailer = cardHeading('text-lg.font-semibold.text-white.mb-4', 'Trailer');
    data.trailerFound = Boolean(trailer);
    data.trailerText = trailer ? text(trailer.nextElementSibling) : null;

    data.videos = [];
    const videosHeading = cardHeading('text-lg.font-semibold.text-white.mb-4', 'Movie Videos');
    const list = videosHeading ? videosHeading.nextElementSibling : null;
    if (list && list.tagName === 'UL' && list.classList.contains('space-y-3')) {
        list.querySelectorAll('li.flex.items-center.justify-between').forEach(item => {
            const img = item.querySelector('img');
            const link = item.querySelector('a[href][target="_blank"][rel="noopener noreferrer"]');
            data.videos.push({
                episode: text(item.querySelector('span.text-gray-300.font-medium')),
                thumbnailUrl: img ? img.src : null,
                downloadLink: link ? link.href : null,
            });
        });
    }

    data.comments = null;
    const comments = cardHeading('text-lg.font-semibold.text-white.mb-4', 'Comments');
    const commentList = comments ? comments.nextElementSibling : null;
    if (commentList && commentList.tagName === 'UL') {
        const empty = commentList.querySelector('li.text-gray-400');
        data.comments = {
            count: commentList.querySelectorAll('li').length,
            emptyText: empty ? empty.innerText.trim() : null,
        };
    }
    return data;
}
"""

NO_TRAILER_TEXT = "No trailer available"
NO_COMMENTS_TEXT = "No comments yet"


def _text(value: Any) -> str:
    if isinstance(value, str) and value:
        return value
    return MISSING


def _parse_int(value: str) -> int:
    digits = ""
    for char in value.strip():
        if not char.isdigit():
            break
        digits += char
    return int(digits) if digits else 0


def listing_entry_from_raw(raw: Dict[str, Any]) -> ListingEntry:
    """Build a :class:`ListingEntry` from one card scraped by ``LISTING_SCRIPT``."""

    href = _text(raw.get("href"))
    return ListingEntry(
        id=extract_listing_id(href),
        title=_text(raw.get("title")),
        image_url=_text(raw.get("imageUrl")),
        detail_page_relative_url=href,
        uploaded_time=_text(raw.get("uploadedTime")),
        subber=_text(raw.get("subber")),
    )


def detail_record_from_raw(raw: Dict[str, Any], identifier: str) -> DetailRecord:
    """Build a :class:`DetailRecord` from the dictionary returned by ``DETAIL_SCRIPT``."""

    info = raw.get("info") or {}
    number_of_videos = info.get("Videos")

    if raw.get("trailerFound"):
        trailer_text = _text(raw.get("trailerText"))
        trailer_available = trailer_text != NO_TRAILER_TEXT
    else:
        trailer_text = "Not found"
        trailer_available = False

    comments = raw.get("comments")
    comments_available = bool(
        comments and comments.get("count", 0) > 0 and comments.get("emptyText") != NO_COMMENTS_TEXT
    )

    return DetailRecord(
        id=identifier,
        title=_text(raw.get("title")),
        poster_url=_text(raw.get("posterUrl")),
        country=info.get("Country"),
        narrator=info.get("Narrator"),
        number_of_videos=_parse_int(number_of_videos) if number_of_videos is not None else None,
        description=_text(raw.get("description")),
        trailer_available=trailer_available,
        trailer_text=trailer_text,
        videos=[
            VideoLink(
                episode=_text(video.get("episode")),
                thumbnail_url=_text(video.get("thumbnailUrl")),
                download_link=_text(video.get("downloadLink")),
            )
            for video in raw.get("videos") or []
        ],
        comments_available=comments_available,
    )


class MihetofilmsListingExtractor:
    """Reads the browse grid of a rendered listing page."""

    def __init__(self, grid_selector: str) -> None:
        self.grid_selector = grid_selector

    def __call__(self, document: Document) -> List[ListingEntry]:
        raw_cards = document.evaluate(LISTING_SCRIPT, self.grid_selector)
        if not isinstance(raw_cards, list):
            raise ExtractionError(f"Listing script returned {type(raw_cards).__name__}, expected a list")
        return [listing_entry_from_raw(card) for card in raw_cards]


class MihetofilmsDetailExtractor:
    """Reads the info, trailer, videos and comments cards of a detail page."""

    def __call__(self, document: Document, identifier: str) -> DetailRecord:
        raw = document.evaluate(DETAIL_SCRIPT)
        if not isinstance(raw, dict):
            raise ExtractionError(f"Detail script returned {type(raw).__name__} for {identifier}")
        return detail_record_from_raw(raw, identifier)
