"""
Inline image placeholders.

Images pasted into the source text are stood in for by `[[image:N]]`
tokens. The chunker sees each token as an ordinary word; these helpers
map a finished chunk back onto text and image segments.
"""

import html
import re
from typing import Dict, List, Sequence

from ..core.models import ContentSegment, ImageRecord

IMAGE_PREFIX = "[[image:"
IMAGE_SUFFIX = "]]"
PLACEHOLDER_PATTERN = re.compile(
    re.escape(IMAGE_PREFIX) + r"(\d+)" + re.escape(IMAGE_SUFFIX)
)
PASTED_IMAGE_ALT = "Pasted image"


def create_placeholder_token(image_index: int) -> str:
    return f"{IMAGE_PREFIX}{image_index}{IMAGE_SUFFIX}"


def _text_to_html(text: str) -> str:
    escaped = html.escape(text)
    return re.sub(r"\r?\n", "<br>", escaped)


def _image_to_html(image: ImageRecord) -> str:
    alt = html.escape(image.alt_text or PASTED_IMAGE_ALT)
    src = html.escape(image.data_url)
    return f'<img src="{src}" alt="{alt}" draggable="false">'


def _text_segment(text: str) -> ContentSegment:
    return ContentSegment(
        variant="text", plain_text=text, html_content=_text_to_html(text)
    )


def build_chunk_segments(
    chunk_text: str, images: Sequence[ImageRecord]
) -> List[ContentSegment]:
    """
    Split a chunk into ordered text and image segments.

    Args:
        chunk_text: Chunk that may contain placeholder tokens
        images: Image records known to the editor

    Returns:
        Segments in reading order. A token with no matching record still
        yields an image segment, with image set to None.
    """
    lookup: Dict[str, ImageRecord] = {
        image.placeholder_token: image for image in images
    }
    segments: List[ContentSegment] = []
    last_index = 0

    for match in PLACEHOLDER_PATTERN.finditer(chunk_text):
        before = chunk_text[last_index : match.start()]
        if before:
            segments.append(_text_segment(before))

        image = lookup.get(match.group(0))
        segments.append(
            ContentSegment(
                variant="image",
                html_content=_image_to_html(image) if image else "",
                image=image,
            )
        )
        last_index = match.end()

    trailing = chunk_text[last_index:]
    if trailing:
        segments.append(_text_segment(trailing))

    return segments


def extract_plain_text(text: str, images: Sequence[ImageRecord]) -> str:
    """Text with every placeholder token removed."""
    return "".join(
        segment.plain_text
        for segment in build_chunk_segments(text, images)
        if segment.variant == "text"
    )
