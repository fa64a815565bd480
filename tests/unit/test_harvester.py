"""Unit tests for ContentHarvester: ordering, fallbacks and filtering."""

from __future__ import annotations

import pytest

from newsrag.models.document import FeedEntry, NewsSource
from newsrag.services.harvester import ContentHarvester
from tests.conftest import FakeArticleProvider, FakeFeedProvider, RecordingSleep, entry

_FEED = "https://feeds.example.com/bbc.xml"
_LONG = "Paragraph text that is long enough to keep. " * 5


def _harvester(feeds, pages, sleep: RecordingSleep, **kwargs) -> ContentHarvester:
    return ContentHarvester(
        feed_provider=FakeFeedProvider(feeds),
        article_provider=FakeArticleProvider(pages),
        sleep=sleep,
        clock=lambda: 171234,
        **kwargs,
    )


class TestContentHarvester:
    @pytest.mark.asyncio
    async def test_documents_in_feed_order(self, bbc_source: NewsSource, recording_sleep: RecordingSleep) -> None:
        entries = [entry(i) for i in range(3)]
        pages = {e.link: _LONG for e in entries}
        harvester = _harvester({_FEED: entries}, pages, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert [d.title for d in docs] == ["Headline 0", "Headline 1", "Headline 2"]
        assert harvester._article_provider.requested == [e.link for e in entries]

    @pytest.mark.asyncio
    async def test_document_fields(self, bbc_source: NewsSource, recording_sleep: RecordingSleep) -> None:
        item = entry(3, summary="<p>Short <b>summary</b></p>")
        harvester = _harvester({_FEED: [entry(0), entry(1), entry(2), item]}, {item.link: _LONG}, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert len(docs) == 1
        doc = docs[0]
        assert doc.id == "bbc_171234_3"
        assert doc.source_name == "BBC"
        assert doc.source_url == item.link
        assert doc.published_at == "Fri, 01 Mar 2024 12:00:00 GMT"
        assert doc.summary == "Short summary"
        assert doc.content == _LONG

    @pytest.mark.asyncio
    async def test_max_per_source(self, bbc_source: NewsSource, recording_sleep: RecordingSleep) -> None:
        entries = [entry(i) for i in range(20)]
        harvester = _harvester({_FEED: entries}, {e.link: _LONG for e in entries}, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert len(docs) == 15

    @pytest.mark.asyncio
    async def test_delay_after_each_entry(self, bbc_source: NewsSource, recording_sleep: RecordingSleep) -> None:
        entries = [entry(i) for i in range(3)]
        harvester = _harvester({_FEED: entries}, {}, recording_sleep)

        await harvester.collect(bbc_source)

        assert recording_sleep.delays == [0.7, 0.7, 0.7]

    @pytest.mark.asyncio
    async def test_min_length_boundary(self, bbc_source: NewsSource, recording_sleep: RecordingSleep) -> None:
        short, exact = entry(0), entry(1)
        pages = {short.link: "x" * 99, exact.link: "y" * 100}
        harvester = _harvester({_FEED: [short, exact]}, pages, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert [d.content for d in docs] == ["y" * 100]

    @pytest.mark.asyncio
    async def test_page_failure_falls_back_to_summary(
        self, bbc_source: NewsSource, recording_sleep: RecordingSleep
    ) -> None:
        item = entry(0, summary="<p>" + "Feed snippet. " * 10 + "</p>")
        harvester = _harvester({_FEED: [item]}, {item.link: None}, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert len(docs) == 1
        assert docs[0].content == ("Feed snippet. " * 10).strip()

    @pytest.mark.asyncio
    async def test_empty_page_falls_back_to_summary(
        self, bbc_source: NewsSource, recording_sleep: RecordingSleep
    ) -> None:
        item = entry(0, summary="Snippet " * 20)
        harvester = _harvester({_FEED: [item]}, {}, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert docs[0].content.startswith("Snippet Snippet")

    @pytest.mark.asyncio
    async def test_page_text_preferred_over_summary(
        self, bbc_source: NewsSource, recording_sleep: RecordingSleep
    ) -> None:
        item = entry(0, summary="Snippet " * 20)
        harvester = _harvester({_FEED: [item]}, {item.link: _LONG}, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert docs[0].content == _LONG

    @pytest.mark.asyncio
    async def test_short_page_text_does_not_fall_back(
        self, bbc_source: NewsSource, recording_sleep: RecordingSleep
    ) -> None:
        item = entry(0, summary="Snippet " * 20)
        harvester = _harvester({_FEED: [item]}, {item.link: "Too short."}, recording_sleep)

        assert await harvester.collect(bbc_source) == []

    @pytest.mark.asyncio
    async def test_entry_without_link_uses_summary(
        self, bbc_source: NewsSource, recording_sleep: RecordingSleep
    ) -> None:
        item = FeedEntry(title="No link", link="", summary="Snippet " * 20)
        harvester = _harvester({_FEED: [item]}, {}, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert len(docs) == 1
        assert harvester._article_provider.requested == []

    @pytest.mark.asyncio
    async def test_missing_published_uses_current_time(
        self, bbc_source: NewsSource, recording_sleep: RecordingSleep
    ) -> None:
        item = FeedEntry(title="Undated", link="https://example.com/u")
        harvester = _harvester({_FEED: [item]}, {item.link: _LONG}, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert docs[0].published_at.startswith("20")
        assert "T" in docs[0].published_at

    @pytest.mark.asyncio
    async def test_summary_truncated(self, bbc_source: NewsSource, recording_sleep: RecordingSleep) -> None:
        item = entry(0, summary="s" * 500)
        harvester = _harvester({_FEED: [item]}, {item.link: _LONG}, recording_sleep)

        docs = await harvester.collect(bbc_source)

        assert len(docs[0].summary) == 300

    @pytest.mark.asyncio
    async def test_feed_failure_yields_nothing(self, recording_sleep: RecordingSleep) -> None:
        broken = NewsSource(name="Broken", feed_url="https://feeds.example.com/broken.xml")
        harvester = _harvester({}, {}, recording_sleep)

        assert await harvester.collect(broken) == []
        assert recording_sleep.delays == []

    @pytest.mark.asyncio
    async def test_harvest_is_lazy(self, bbc_source: NewsSource, recording_sleep: RecordingSleep) -> None:
        entries = [entry(i) for i in range(3)]
        harvester = _harvester({_FEED: entries}, {e.link: _LONG for e in entries}, recording_sleep)

        stream = harvester.harvest(bbc_source)
        first = await stream.__anext__()
        await stream.aclose()

        assert first.title == "Headline 0"
        assert harvester._article_provider.requested == [entries[0].link]
