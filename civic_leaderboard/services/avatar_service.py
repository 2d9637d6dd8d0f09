"""
Avatars - turn the raw avatar field into something the UI can render directly.

The raw field is a URL, an emoji or nothing. It is parsed once into
PlaceholderAvatar | ImageUrlAvatar and normalized from there.
"""

import re
from typing import Optional
from urllib.parse import urlparse

from civic_leaderboard.models.avatar import AvatarReference, ImageUrlAvatar, PlaceholderAvatar


DEFAULT_AVATAR = "👤"

CLOUDINARY_HOST = "res.cloudinary.com"
CLOUDINARY_UPLOAD_MARKER = "/upload/"
# Auto quality/format, 200x200 face-aware square crop
CLOUDINARY_TRANSFORM = "q_auto,f_auto,c_fill,w_200,h_200,g_face/"

# A transform segment looks like "w_200,c_fill" (comma separated key_value pairs)
_TRANSFORM_SEGMENT = re.compile(r"^[a-z]{1,3}_[^/]+$")


def parse_avatar_reference(raw: Optional[str]) -> AvatarReference:
    """Classify the raw avatar value (blank values get the default placeholder)"""
    if raw is None or not raw.strip():
        return PlaceholderAvatar(text=DEFAULT_AVATAR)

    url = raw.strip()
    if url.startswith(("http://", "https://")):
        return ImageUrlAvatar(url=url)

    # Placeholder text is shown as stored
    return PlaceholderAvatar(text=raw)


def _has_transform(url: str) -> bool:
    after_marker = url.split(CLOUDINARY_UPLOAD_MARKER, 1)[1]
    first_segment = after_marker.split("/", 1)[0]
    return bool(_TRANSFORM_SEGMENT.match(first_segment))


def normalize_avatar(reference: AvatarReference) -> str:
    """Display-ready avatar: placeholder text or a size-bounded image URL"""
    if isinstance(reference, PlaceholderAvatar):
        return reference.text

    url = reference.url
    if urlparse(url).hostname != CLOUDINARY_HOST:
        return url
    if CLOUDINARY_UPLOAD_MARKER not in url or _has_transform(url):
        return url

    return url.replace(
        CLOUDINARY_UPLOAD_MARKER,
        CLOUDINARY_UPLOAD_MARKER + CLOUDINARY_TRANSFORM,
        1,
    )


def normalize_avatar_reference(raw: Optional[str]) -> str:
    """Shortcut: parse + normalize"""
    return normalize_avatar(parse_avatar_reference(raw))
