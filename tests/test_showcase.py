import logging

import pytest

from sitehooks.config import PaginationDefaults, ShowcaseConfig, SiteConfig
from sitehooks.models import Document, Page, Site
from sitehooks.showcase import (
    apply_showcase_settings,
    create_takeover_pages,
    disable_collection_showcase_output,
    inject_pagination,
    pagination_descriptor,
    repair_showcase_permalink,
    resolve_showcase_permalink,
)


def _tab(title="Projects", **front_matter) -> Document:
    data = {"layout": "showcase", "title": title, "icon": "fas fa-folder"}
    data.update(front_matter)
    return Document.from_front_matter("_tabs/projects.md", data, collection="tabs", content="Intro")


def test_pagination_descriptor_uses_configured_defaults():
    config = SiteConfig(
        showcase=ShowcaseConfig(pagination=PaginationDefaults(per_page=6, sort_reverse=False, title_template="Blog"))
    )

    assert pagination_descriptor(config, category="Projects") == {
        "enabled": True,
        "collection": "posts",
        "per_page": 6,
        "sort_field": "rank",
        "sort_reverse": False,
        "title": "Blog",
        "category": "Projects",
    }
    assert "category" not in pagination_descriptor(config)


def test_inject_pagination_adds_descriptor_to_showcase_page():
    page = Page("blog/index.md", {"layout": "showcase", "title": "Blog"})

    descriptor = inject_pagination(page, SiteConfig())

    assert page.data["pagination"] is descriptor
    assert descriptor["title"] == ":title"
    assert descriptor["sort_field"] == "rank"
    assert descriptor["category"] == "Blog"


def test_inject_pagination_only_fills_missing_title():
    page = Page("blog/index.md", {"layout": "showcase.html", "pagination": {"per_page": 3, "title": " "}})

    inject_pagination(page, SiteConfig())

    assert page.data["pagination"] == {"per_page": 3, "title": ":title"}


def test_inject_pagination_keeps_custom_title_and_skips_other_layouts():
    custom = Page("a.md", {"layout": "showcase", "pagination": {"title": "Page :num of :title"}})
    plain = Page("b.md", {"layout": "page", "title": "B"})

    inject_pagination(custom, SiteConfig())

    assert custom.data["pagination"] == {"title": "Page :num of :title"}
    assert inject_pagination(plain, SiteConfig()) is None
    assert "pagination" not in plain.data


@pytest.mark.parametrize(
    "permalink, expected",
    [
        ("", "/my-projects/"),
        ("/:title/", "/my-projects/"),
        ("/tabs/:Title", "/my-projects/"),
        ("/__tabs_suppressed__/projects/", "/my-projects/"),
        ("/work/", "/work/"),
    ],
)
def test_resolve_showcase_permalink(permalink, expected):
    assert resolve_showcase_permalink("My Projects", permalink) == expected


def test_disable_collection_showcase_output_skips_posts():
    post = Document.from_front_matter("_posts/a.md", {"layout": "showcase", "title": "A"})
    tab = _tab()
    other_tab = Document.from_front_matter("_tabs/about.md", {"layout": "page"}, collection="tabs")
    site = Site(documents=[post, tab, other_tab])

    assert disable_collection_showcase_output(site) == [tab]
    assert tab.data["output"] is False
    assert tab.data["published"] is False
    assert "output" not in post.data
    assert "output" not in other_tab.data


def test_takeover_page_copies_tab():
    tab = _tab(output=False)
    site = Site(documents=[tab])

    (page,) = create_takeover_pages(site)

    assert page.path == "/projects/index.md"
    assert page.content == "Intro"
    assert page.data["permalink"] == "/projects/"
    assert page.data["collection"] == "tabs"
    assert page.data["tab"] is True
    assert page.data["icon"] == "fas fa-folder"
    assert page.data["layout"] == "showcase"
    assert page.data["pagination"]["category"] == "Projects"
    assert "output" not in page.data
    assert "published" not in page.data
    assert tab.data["permalink"] == "/projects/"
    assert tab.data["published"] is False
    assert site.pages == [page]


def test_takeover_page_honours_explicit_permalink_and_tab_flag():
    tab = _tab(permalink="/portfolio/index.html", tab="projects")
    site = Site(documents=[tab])

    (page,) = create_takeover_pages(site)

    assert page.path == "/portfolio/index.md"
    assert page.data["tab"] == "projects"


def test_untitled_showcase_gets_no_takeover():
    site = Site(documents=[_tab(title="")])

    assert create_takeover_pages(site) == []
    assert site.pages == []


def test_repair_showcase_permalink():
    tab = _tab(permalink="/__tabs_suppressed__/projects/")

    assert repair_showcase_permalink(tab, SiteConfig()) == "/projects/"
    assert tab.data["permalink"] == "/projects/"
    assert tab.data["published"] is False
    assert repair_showcase_permalink(tab, SiteConfig()) is None


def test_repair_showcase_permalink_ignores_posts_and_plain_docs():
    post = Document.from_front_matter("_posts/a.md", {"layout": "showcase", "title": "A"})
    plain = Document.from_front_matter("_tabs/a.md", {"layout": "page", "title": "A"}, collection="tabs")

    assert repair_showcase_permalink(post, SiteConfig()) is None
    assert repair_showcase_permalink(plain, SiteConfig()) is None
    assert "permalink" not in post.data


def test_apply_showcase_settings():
    tab = _tab()
    blog = Page("blog.md", {"layout": "showcase", "title": "Blog"})
    site = Site(documents=[tab], pages=[blog])

    apply_showcase_settings(site)

    assert tab.data["output"] is False
    assert [page.path for page in site.pages] == ["blog.md", "/projects/index.md"]
    assert all("pagination" in page.data for page in site.pages)


def test_apply_showcase_settings_disabled():
    tab = _tab()
    site = Site(config=SiteConfig(showcase=ShowcaseConfig(enabled=False)), documents=[tab])

    apply_showcase_settings(site)

    assert "output" not in tab.data
    assert site.pages == []


def test_debug_logging(caplog):
    caplog.set_level(logging.INFO, logger="sitehooks.showcase")
    site = Site(config=SiteConfig(showcase=ShowcaseConfig(debug=True)), documents=[_tab()])

    apply_showcase_settings(site)

    assert "SHOWCASE_TAKEOVER" in caplog.text
