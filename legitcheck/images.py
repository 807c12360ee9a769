import re
from typing import List

from legitcheck.utils.analysis import RawPost
from legitcheck.utils.logging import get_logger

logger = get_logger(__name__)

IMAGE_URL_REGEX = re.compile(r"\.(jpg|jpeg|png|gif)$", re.IGNORECASE)


def _unescape(url: str) -> str:
    return url.replace("&amp;", "&")


class ImageExtractor:
    """Pulls the image URLs out of a listing entry.

    Strategies are tried in a fixed order and the first applicable one
    decides the result: gallery items, then a direct image link, then the
    first preview image.
    """

    def extract(self, post: RawPost) -> List[str]:
        if post.is_gallery and post.gallery_data and post.media_metadata:
            return self._from_gallery(post)
        if post.url and IMAGE_URL_REGEX.search(post.url):
            return [post.url]
        return self._from_preview(post)

    def _from_gallery(self, post: RawPost) -> List[str]:
        images = []
        for item in post.gallery_data.get("items") or []:
            media = post.media_metadata.get(item.get("media_id"))
            if not media or media.get("status") != "valid":
                continue
            # "s" is the full-resolution source
            source = media.get("s") or {}
            if source.get("u"):
                images.append(_unescape(source["u"]))
        logger.debug_with_context(f"Gallery post {post.id} yielded {len(images)} images")
        return images

    def _from_preview(self, post: RawPost) -> List[str]:
        preview_images = (post.preview or {}).get("images") or []
        if not preview_images:
            return []
        source = preview_images[0].get("source") or {}
        if source.get("url"):
            return [_unescape(source["url"])]
        return []
