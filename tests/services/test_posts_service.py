import asyncio

import pytest

from spacetraveling.errors import FormatError, NotFoundError
from spacetraveling.schemas.blog import ContentSection, RichTextBlock
from spacetraveling.services.posts_service import (
    LISTING_FIELDS,
    PostsService,
    calculate_reading_time,
    count_words,
    map_post_detail,
    map_post_summary,
    map_posts_page,
)
from tests.conftest import FakeCMS, make_post_doc, make_summary_doc


def section(heading, *texts):
    return ContentSection(
        heading=heading, body=[RichTextBlock(text=text) for text in texts]
    )


def test_map_post_summary_formats_date_and_fields():
    doc = make_summary_doc(
        "como-utilizar-hooks",
        title="Como utilizar Hooks",
        subtitle="Pensando em sincronização em vez de ciclos de vida",
        author="Joseph Oliveira",
    )

    post = map_post_summary(doc)

    assert post.uid == "como-utilizar-hooks"
    assert post.first_publication_date == "25 mar 2021"
    assert post.title == "Como utilizar Hooks"
    assert post.subtitle == "Pensando em sincronização em vez de ciclos de vida"
    assert post.author == "Joseph Oliveira"


def test_map_post_summary_uses_first_publication_date():
    doc = make_summary_doc("a", date="2021-03-15T10:00:00+0000")
    doc["last_publication_date"] = "2021-05-20T10:00:00+0000"

    assert map_post_summary(doc).first_publication_date == "15 mar 2021"


def test_map_post_summary_without_date_raises_format_error():
    doc = make_summary_doc("a", date=None)

    with pytest.raises(FormatError):
        map_post_summary(doc)


def test_map_post_summary_is_immutable():
    post = map_post_summary(make_summary_doc("a"))

    with pytest.raises(Exception):
        post.title = "changed"


def test_map_posts_page_keeps_order_and_cursor():
    page = map_posts_page(
        {
            "results": [make_summary_doc("b"), make_summary_doc("a")],
            "next_page": "url2",
        }
    )

    assert [p.uid for p in page.results] == ["b", "a"]
    assert page.next_page == "url2"


def test_map_posts_page_handles_empty_response():
    page = map_posts_page({"results": None})

    assert page.results == []
    assert page.next_page is None


def test_map_post_detail_copies_content_and_reading_time():
    doc = make_post_doc(
        "hello",
        [("Intro", ["Proin et varius", "Nullam dolor"]), ("Outro", ["Fim"])],
        title="Hello",
        banner="https://images.test/banner.png",
    )

    post = map_post_detail(doc)

    assert post.uid == "hello"
    assert post.first_publication_date == "2021-03-25T19:25:28+0000"
    assert post.banner_url == "https://images.test/banner.png"
    assert [s.heading for s in post.content] == ["Intro", "Outro"]
    assert [b.text for b in post.content[0].body] == ["Proin et varius", "Nullam dolor"]
    assert post.reading_time == 1


def test_map_post_detail_keeps_null_date_unformatted():
    doc = make_post_doc("hello", [("Intro", ["text"])], date=None)

    assert map_post_detail(doc).first_publication_date is None


def test_map_post_detail_tolerates_missing_banner_and_content():
    post = map_post_detail({"uid": "bare", "data": {"title": "Bare"}})

    assert post.banner_url is None
    assert post.content == []
    assert post.reading_time == 0


def test_count_words_includes_headings():
    sections = [section("Intro", "one two", "three"), section("Two words", "")]
    assert count_words(sections) == 6


def test_reading_time_boundary_at_200_words():
    body = "word " * 199
    assert calculate_reading_time([section("Intro", body)]) == 1
    assert calculate_reading_time([section("Intro", body + "word")]) == 2


def test_reading_time_is_at_least_one_for_any_words():
    assert calculate_reading_time([section("", "single")]) == 1
    assert calculate_reading_time([]) == 0


def test_reading_time_is_monotonic_in_word_count():
    previous = 0
    for words in range(0, 1001, 37):
        minutes = calculate_reading_time([section("", "w " * words)])
        assert minutes >= previous
        previous = minutes


def test_reading_time_respects_custom_speed():
    assert calculate_reading_time([section("", "w " * 100)], words_per_minute=50) == 2


def test_get_posts_pagination_queries_first_page():
    cms = FakeCMS(
        first_page={
            "results": [make_summary_doc("a"), make_summary_doc("b")],
            "next_page": "url2",
        }
    )
    service = PostsService(cms, page_size=20)

    page = asyncio.run(service.get_posts_pagination())

    assert [p.uid for p in page.results] == ["a", "b"]
    assert page.next_page == "url2"
    name, predicates, kwargs = cms.calls[0]
    assert name == "query"
    assert predicates == ['[at(document.type, "post")]']
    assert kwargs == {"fetch": LISTING_FIELDS, "page_size": 20, "page": 1}


def test_get_post_maps_detail():
    cms = FakeCMS(documents={"hello": make_post_doc("hello", [("Intro", ["hi"])])})

    post = asyncio.run(PostsService(cms).get_post("hello"))

    assert post.uid == "hello"
    assert cms.calls == [("get_by_uid", "post", "hello")]


def test_get_post_propagates_not_found():
    with pytest.raises(NotFoundError):
        asyncio.run(PostsService(FakeCMS()).get_post("missing"))
