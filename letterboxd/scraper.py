"""Letterboxd watchlist scraping."""

from __future__ import annotations

import time
from typing import List
from urllib.parse import quote

import cloudscraper
import requests
from bs4 import BeautifulSoup

from core.errors import ScrapeError
from core.matching import slug_to_title
from logger import get_logger

log = get_logger()

LETTERBOXD_BASE = "https://letterboxd.com"
POSTER_SELECTOR = ".poster-list .film-poster"
SLUG_ATTRS = ("data-film-slug", "data-item-slug")


def create_scraper() -> requests.Session:
    """Create a cloudscraper session for Letterboxd's Cloudflare front."""
    return cloudscraper.create_scraper(
        browser={"browser": "chrome", "platform": "darwin", "mobile": False}
    )


def watchlist_url(username: str, page: int = 1) -> str:
    """Build the watchlist URL for a user and page number."""
    base = f"{LETTERBOXD_BASE}/{quote(username.strip(), safe='')}/watchlist/"
    if page <= 1:
        return base
    return f"{base}page/{page}/"


def fetch_page(session: requests.Session, url: str) -> str:
    """Fetch a page body, raising ScrapeError on any failure."""
    try:
        resp = session.get(url, timeout=30)
    except requests.RequestException as exc:
        raise ScrapeError(f"Error fetching {url}: {exc}", url=url) from exc
    if not 200 <= resp.status_code < 300:
        raise ScrapeError(f"HTTP {resp.status_code} for {url}", url=url, status=resp.status_code)
    return resp.text


def parse_page_count(soup: BeautifulSoup) -> int:
    """Read the page count from the pagination control, defaulting to 1."""
    items = soup.select(".paginate-pages li")
    if not items:
        return 1
    text = items[-1].get_text(strip=True)
    try:
        count = int(text)
    except ValueError:
        return 1
    return max(count, 1)


def parse_slugs(soup: BeautifulSoup) -> List[str]:
    """Extract non-empty film slugs from poster elements, in page order."""
    slugs: List[str] = []
    for el in soup.select(POSTER_SELECTOR):
        slug = ""
        for attr in SLUG_ATTRS:
            slug = (el.get(attr) or "").strip()
            if slug:
                break
        if slug:
            slugs.append(slug)
    return slugs


def fetch_watchlist(session: requests.Session, username: str, delay: float = 0.0) -> List[str]:
    """Scrape every page of a user's watchlist.

    An HTTP error page (unknown or private user, missing page) ends the
    scrape for this user with whatever was collected so far.

    Args:
        session: Requests-compatible session.
        username: Letterboxd username.
        delay: Seconds to wait between page fetches.

    Returns:
        Candidate titles (slugs with hyphens replaced by spaces) in watchlist
        order. Duplicates are kept.

    Raises:
        ScrapeError: If a page cannot be fetched at the transport level.
    """
    titles: List[str] = []
    total = 1
    page = 1
    while page <= total:
        if page > 1 and delay > 0:
            time.sleep(delay)
        try:
            html = fetch_page(session, watchlist_url(username, page))
        except ScrapeError as exc:
            if exc.status is None:
                raise
            log.warn(f"  ⚠️ {exc}; skipping the rest of {username}'s watchlist")
            return titles
        soup = BeautifulSoup(html, "lxml")
        if page == 1:
            total = parse_page_count(soup)
        slugs = parse_slugs(soup)
        log.info(f"  Page {page}/{total}: {len(slugs)} film(s)")
        titles.extend(slug_to_title(slug) for slug in slugs)
        page += 1
    return titles
