import asyncio

import pytest

from strapigraph import FieldDataProcessor, NodeActions, SourceConfig, process_field_data
from strapigraph.runtime.processor import gather_or_cancel


def make_config(**overrides):
    data = {
        "apiURL": "https://cms.example.com",
        "markdownImages": {"typesToParse": {"Article": ["body"]}},
    }
    data.update(overrides)
    return SourceConfig.from_dict(data)


class StubAcquirer:
    """Records calls; returns {"id": ...} for known URLs and None otherwise."""

    def __init__(self, results=None, delay=0.0):
        self.results = results or {}
        self.delay = delay
        self.calls = []
        self.active = 0
        self.max_active = 0

    async def __call__(self, *, url, parent_node_id, create_node, create_node_id, get_cache):
        self.calls.append({"url": url, "parent_node_id": parent_node_id})
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            file_id = self.results.get(url)
            return {"id": file_id} if file_id else None
        finally:
            self.active -= 1


def prefixed(seed):
    return "id:" + seed


@pytest.mark.asyncio
async def test_upload_file_gets_file_id():
    acquirer = StubAcquirer({"https://cms.example.com/uploads/cover.png": "F1"})
    data = {"__typename": "UploadFile", "url": "/uploads/cover.png", "name": "cover.png"}

    output = await process_field_data(data, make_config(), acquirer, node_id="parent-1")

    assert output["file"] == "F1"
    assert output["name"] == "cover.png"
    assert acquirer.calls == [{"url": "https://cms.example.com/uploads/cover.png", "parent_node_id": "parent-1"}]
    assert "file" not in data


@pytest.mark.asyncio
async def test_failed_upload_leaves_no_file_field():
    output = await process_field_data(
        {"__typename": "UploadFile", "url": "/uploads/missing.png"},
        make_config(),
        StubAcquirer(),
    )
    assert "file" not in output


@pytest.mark.asyncio
async def test_absolute_urls_not_prefixed():
    acquirer = StubAcquirer({"https://cdn.example.com/a.png": "F2"})
    output = await process_field_data(
        {"__typename": "UploadFile", "url": "https://cdn.example.com/a.png"},
        make_config(),
        acquirer,
    )
    assert output["file"] == "F2"


@pytest.mark.asyncio
async def test_markdown_images_keep_positions():
    acquirer = StubAcquirer({"https://cms.example.com/uploads/b.png": "IMG-B"})
    data = {
        "__typename": "Article",
        "body": "![first](/uploads/a.png) and ![second](/uploads/b.png)",
    }

    output = await process_field_data(data, make_config(), acquirer, node_id="article-node")

    assert output["body_images"] == [None, "IMG-B"]
    assert output["body_images"][1] == "IMG-B"
    assert [c["url"] for c in acquirer.calls] == [
        "https://cms.example.com/uploads/a.png",
        "https://cms.example.com/uploads/b.png",
    ]


@pytest.mark.asyncio
async def test_markdown_trailing_failures_not_padded():
    acquirer = StubAcquirer({"https://cms.example.com/uploads/a.png": "IMG-A"})
    data = {"__typename": "Article", "body": "![a](/uploads/a.png) ![b](/uploads/b.png)"}

    output = await process_field_data(data, make_config(), acquirer)

    assert output["body_images"] == ["IMG-A"]


@pytest.mark.asyncio
async def test_markdown_all_failed_or_unconfigured():
    data = {"__typename": "Article", "body": "![a](/uploads/a.png)"}
    output = await process_field_data(data, make_config(), StubAcquirer())
    assert "body_images" not in output

    acquirer = StubAcquirer({"https://cms.example.com/uploads/a.png": "IMG-A"})
    page = {"__typename": "Page", "body": "![a](/uploads/a.png)"}
    output = await process_field_data(page, make_config(), acquirer)
    assert "body_images" not in output
    assert acquirer.calls == []


@pytest.mark.asyncio
async def test_relations_linked_and_nested_values_processed():
    acquirer = StubAcquirer({"https://cms.example.com/uploads/q.png": "IMG-Q"})
    data = {
        "__typename": "Article",
        "title": "Hello",
        "author": {
            "__typename": "AuthorEntityResponse",
            "data": {"id": "7", "attributes": {"avatar": {"__typename": "UploadFile", "url": "/uploads/x.png"}}},
        },
        "tags": {
            "__typename": "TagRelationResponseCollection",
            "data": [{"__typename": "TagEntity", "id": "1", "attributes": {"__typename": "Tag", "name": "news"}}],
        },
        "blocks": [
            {"__typename": "ComponentSharedMedia", "file": {"__typename": "UploadFile", "url": "/uploads/q.png"}},
        ],
    }

    processor = FieldDataProcessor(make_config(), acquirer, NodeActions(create_node_id=prefixed))
    output = await processor.process(data, node_id="n1")

    assert output["author"]["id"] == "id:StrapiAuthor-7"
    assert "nodeId" not in output["author"]
    assert output["tags"]["data"][0]["attributes"]["name"] == "news"
    assert output["blocks"][0]["file"]["file"] == "IMG-Q"
    # singular relations are not walked
    assert [c["url"] for c in acquirer.calls] == ["https://cms.example.com/uploads/q.png"]
    assert "id" not in data["author"]


@pytest.mark.asyncio
async def test_scalars_and_lists_pass_through():
    processor = FieldDataProcessor(make_config(), StubAcquirer())
    assert await processor.process("text") == "text"
    assert await processor.process(None) is None
    assert await processor.process([1, {"a": 1}]) == [1, {"a": 1}]


@pytest.mark.asyncio
async def test_download_limit_bounds_concurrency():
    urls = [f"/uploads/{i}.png" for i in range(6)]
    acquirer = StubAcquirer({f"https://cms.example.com{u}": f"F{i}" for i, u in enumerate(urls)}, delay=0.01)
    data = {"__typename": "Article", "body": " ".join(f"![i]({u})" for u in urls)}

    output = await process_field_data(data, make_config(maxConcurrentDownloads=2), acquirer)

    assert output["body_images"] == [f"F{i}" for i in range(6)]
    assert acquirer.max_active <= 2


@pytest.mark.asyncio
async def test_acquirer_errors_propagate():
    async def broken(**kwargs):
        raise RuntimeError("disk full")

    with pytest.raises(RuntimeError, match="disk full"):
        await process_field_data(
            {"__typename": "UploadFile", "url": "/uploads/a.png"},
            make_config(),
            broken,
        )


@pytest.mark.asyncio
async def test_failure_cancels_sibling_downloads():
    finished = []
    cancelled = []

    async def acquirer(*, url, **kwargs):
        if url.endswith("/a.png"):
            raise RuntimeError("bad image")
        try:
            await asyncio.sleep(0.05)
        except asyncio.CancelledError:
            cancelled.append(url)
            raise
        finished.append(url)
        return {"id": "B"}

    data = {"__typename": "Article", "body": "![a](/uploads/a.png) ![b](/uploads/b.png)"}

    with pytest.raises(RuntimeError, match="bad image"):
        await process_field_data(data, make_config(), acquirer)
    await asyncio.sleep(0.1)

    assert finished == []
    assert cancelled == ["https://cms.example.com/uploads/b.png"]


@pytest.mark.asyncio
async def test_failure_cancels_sibling_subtrees():
    started = []
    finished = []

    async def acquirer(*, url, **kwargs):
        started.append(url)
        if url.endswith("/broken.png"):
            raise RuntimeError("broken")
        await asyncio.sleep(0.05)
        finished.append(url)
        return {"id": url}

    data = {
        "__typename": "Article",
        "cover": {"__typename": "UploadFile", "url": "/uploads/slow.png"},
        "blocks": [{"__typename": "ComponentSharedMedia", "file": {"__typename": "UploadFile", "url": "/uploads/broken.png"}}],
    }

    with pytest.raises(RuntimeError, match="broken"):
        await process_field_data(data, make_config(), acquirer)
    await asyncio.sleep(0.1)

    assert len(started) == 2
    assert finished == []


@pytest.mark.asyncio
async def test_gather_or_cancel_keeps_order():
    async def value(v, delay):
        await asyncio.sleep(delay)
        return v

    assert await gather_or_cancel(value("a", 0.02), value("b", 0.0), value("c", 0.01)) == ["a", "b", "c"]
    assert await gather_or_cancel() == []


@pytest.mark.asyncio
async def test_empty_image_destination_keeps_positions():
    acquirer = StubAcquirer({"https://cms.example.com/uploads/b.png": "IMG-B"})
    data = {"__typename": "Article", "body": "![a]() ![b](/uploads/b.png)"}

    output = await process_field_data(data, make_config(), acquirer)

    assert output["body_images"] == [None, "IMG-B"]
    assert [c["url"] for c in acquirer.calls] == ["https://cms.example.com/uploads/b.png"]
