import pytest

from legitcheck.images import ImageExtractor
from legitcheck.utils.analysis import RawPost

GALLERY = {
    "is_gallery": True,
    "gallery_data": {"items": [{"media_id": "m2", "id": 1}, {"media_id": "m1", "id": 2}, {"media_id": "m3", "id": 3}]},
    "media_metadata": {
        "m1": {"status": "valid", "s": {"u": "https://preview.redd.it/m1.jpg?width=1080&amp;s=abc", "x": 1080}},
        "m2": {"status": "valid", "s": {"u": "https://preview.redd.it/m2.jpg?width=1080&amp;s=def", "x": 1080}},
        "m3": {"status": "failed"},
    },
}

PREVIEW = {
    "images": [
        {"source": {"url": "https://preview.redd.it/first.jpg?auto=webp&amp;s=111"}},
        {"source": {"url": "https://preview.redd.it/second.jpg?auto=webp&amp;s=222"}},
    ]
}


def post(**fields):
    return RawPost.from_json(dict({"id": "p1", "title": "LC?"}, **fields))


@pytest.fixture
def extractor():
    return ImageExtractor()


def test_gallery_in_item_order_with_unescaped_urls(extractor):
    assert extractor.extract(post(**GALLERY)) == [
        "https://preview.redd.it/m2.jpg?width=1080&s=def",
        "https://preview.redd.it/m1.jpg?width=1080&s=abc",
    ]


def test_gallery_wins_over_direct_url_and_preview(extractor):
    images = extractor.extract(post(url="https://i.redd.it/direct.png", preview=PREVIEW, **GALLERY))
    assert "https://i.redd.it/direct.png" not in images
    assert len(images) == 2


def test_gallery_without_valid_items_does_not_fall_through(extractor):
    gallery = dict(GALLERY, media_metadata={"m1": {"status": "failed"}})
    assert extractor.extract(post(url="https://i.redd.it/direct.png", **gallery)) == []


@pytest.mark.parametrize(
    "url",
    ["https://i.redd.it/a.jpg", "https://i.redd.it/a.JPEG", "https://i.imgur.com/a.png", "https://i.redd.it/a.GIF"],
)
def test_direct_image_url(extractor, url):
    assert extractor.extract(post(url=url, preview=PREVIEW)) == [url]


def test_non_image_url_uses_first_preview(extractor):
    images = extractor.extract(post(url="https://www.reddit.com/gallery/p1", preview=PREVIEW))
    assert images == ["https://preview.redd.it/first.jpg?auto=webp&s=111"]


def test_image_extension_must_end_url(extractor):
    assert extractor.extract(post(url="https://i.redd.it/a.jpg?width=640")) == []


def test_nothing_to_extract(extractor):
    assert extractor.extract(post(url="https://youtube.com/watch?v=1")) == []
    assert extractor.extract(post(preview={"images": []})) == []
    assert extractor.extract(post(preview={"images": [{"source": {}}]})) == []
