import pytest
import requests
from bs4 import BeautifulSoup

from core.errors import ScrapeError
from letterboxd.scraper import fetch_page, fetch_watchlist, parse_page_count, parse_slugs, watchlist_url


def _pages_handler(fake_response, pages: dict[str, str]):
    def handler(method, url, **kwargs):
        if url not in pages:
            return fake_response(404, text="not found")
        return fake_response(200, text=pages[url])

    return handler


def test_watchlist_url_formats_pages_and_encodes_username() -> None:
    assert watchlist_url("alice") == "https://letterboxd.com/alice/watchlist/"
    assert watchlist_url("alice", 3) == "https://letterboxd.com/alice/watchlist/page/3/"
    assert watchlist_url("a b/c") == "https://letterboxd.com/a%20b%2Fc/watchlist/"


def test_fetch_watchlist_fetches_every_page_in_order(fake_session, fake_response, render_watchlist, capsys) -> None:
    base = "https://letterboxd.com/alice/watchlist/"
    pages = {
        base: render_watchlist(["dune-part-two", "the-thing-1982"], pages=3),
        f"{base}page/2/": render_watchlist(["se7en"], pages=3),
        f"{base}page/3/": render_watchlist(["parasite-2019", "dune-part-two"], pages=3),
    }
    session = fake_session(_pages_handler(fake_response, pages))

    titles = fetch_watchlist(session, "alice")

    assert [url for _, url, _ in session.calls] == [base, f"{base}page/2/", f"{base}page/3/"]
    assert titles == ["dune part two", "the thing 1982", "se7en", "parasite 2019", "dune part two"]
    out = capsys.readouterr().out
    assert "Page 1/3: 2 film(s)" in out
    assert "Page 3/3: 2 film(s)" in out


def test_fetch_watchlist_defaults_to_single_page(fake_session, fake_response, render_watchlist) -> None:
    base = "https://letterboxd.com/bob/watchlist/"
    session = fake_session(_pages_handler(fake_response, {base: render_watchlist(["alien"])}))

    assert fetch_watchlist(session, "bob") == ["alien"]
    assert len(session.calls) == 1


def test_fetch_watchlist_skips_user_on_http_error(fake_session, fake_response, capsys) -> None:
    session = fake_session(_pages_handler(fake_response, {}))

    assert fetch_watchlist(session, "missing-user") == []
    assert len(session.calls) == 1
    assert "HTTP 404" in capsys.readouterr().err


def test_fetch_page_reports_http_status(fake_session, fake_response) -> None:
    session = fake_session(_pages_handler(fake_response, {}))

    with pytest.raises(ScrapeError) as excinfo:
        fetch_page(session, "https://letterboxd.com/missing-user/watchlist/")
    assert excinfo.value.status == 404


def test_fetch_watchlist_raises_on_transport_error(fake_session) -> None:
    def handler(method, url, **kwargs):
        raise requests.ConnectionError("boom")

    with pytest.raises(ScrapeError):
        fetch_watchlist(fake_session(handler), "alice")


def test_fetch_watchlist_keeps_pages_before_a_failed_page(fake_session, fake_response, render_watchlist) -> None:
    base = "https://letterboxd.com/alice/watchlist/"
    session = fake_session(_pages_handler(fake_response, {base: render_watchlist(["alien"], pages=2)}))

    assert fetch_watchlist(session, "alice") == ["alien"]
    assert len(session.calls) == 2


def test_parse_page_count_handles_bad_pagination() -> None:
    soup = BeautifulSoup('<div class="paginate-pages"><ul><li>1</li><li>…</li></ul></div>', "lxml")
    assert parse_page_count(soup) == 1
    soup = BeautifulSoup('<div class="paginate-pages"><ul><li>1</li><li>12</li></ul></div>', "lxml")
    assert parse_page_count(soup) == 12


def test_parse_slugs_skips_empty_and_uses_item_slug() -> None:
    html = (
        '<ul class="poster-list">'
        '<li><div class="film-poster" data-film-slug="alien"></div></li>'
        '<li><div class="film-poster" data-film-slug=""></div></li>'
        '<li><div class="film-poster"></div></li>'
        '<li><div class="film-poster" data-item-slug="aliens"></div></li>'
        "</ul>"
        '<div class="film-poster" data-film-slug="outside-list"></div>'
    )
    assert parse_slugs(BeautifulSoup(html, "lxml")) == ["alien", "aliens"]
