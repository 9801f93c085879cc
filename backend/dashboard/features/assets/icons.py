"""Best-effort icon URL extraction from asset records.

The assets API does not document where images live, and the field names
differ between heroes, items and ranks. Known paths are probed first; when
none holds a usable URL every URL-like string in the record is collected and
the best one is chosen from ``SCORING``.
"""

import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from dashboard.core.enums import AssetKind

UrlResolver = Callable[[str], str]

CANDIDATE_PATHS: Dict[AssetKind, Tuple[str, ...]] = {
    AssetKind.HERO: (
        "icon",
        "icon_url",
        "image",
        "image_url",
        "small_image",
        "portrait_image",
        "images.icon",
        "images.small",
        "images.portrait",
        "images.hero",
        "images.card",
        "images.top_bar",
    ),
    AssetKind.ITEM: (
        "icon",
        "icon_url",
        "image",
        "image_url",
        "shop_image",
        "images.icon",
        "images.small",
        "images.shop",
        "images.item",
    ),
    AssetKind.RANK: (
        "icon",
        "icon_url",
        "image",
        "image_url",
        "badge_image",
        "images.icon",
        "images.badge",
        "images.small",
    ),
}

# (substring, score for the matching kind, score for any other kind, kind)
# kind None means the substring scores the same for every kind.
SCORING: Tuple[Tuple[str, int, int, Optional[AssetKind]], ...] = (
    ("icon", 20, 20, None),
    ("small", 8, 8, None),
    ("thumb", 8, 8, None),
    ("badge", 20, 2, AssetKind.RANK),
    ("portrait", 15, 2, AssetKind.HERO),
    ("hero", 10, 0, AssetKind.HERO),
    ("item", 10, 0, AssetKind.ITEM),
    ("http", 1, 1, None),
)
IMAGE_EXTENSION_SCORE = 4
MAX_COLLECT_DEPTH = 5

_IMAGE_EXTENSION = re.compile(r"\.(png|webp|jpg|jpeg|avif)(\?|$)")
_BARE_IMAGE_PATH = re.compile(r"^[A-Za-z0-9/_-]+\.(png|webp|jpg|jpeg|avif)$", re.IGNORECASE)


def as_url_string(value: Any) -> Optional[str]:
    """Return the trimmed string if it looks like an image URL or path."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed:
        return None
    if trimmed.startswith(("http://", "https://", "/")):
        return trimmed
    if _BARE_IMAGE_PATH.match(trimmed):
        return trimmed
    return None


def get_by_path(entity: Any, path: str) -> Any:
    """Follow a dotted path through nested dicts; None when it breaks."""
    current = entity
    for segment in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(segment)
    return current


def collect_urls_deep(
    value: Any, depth: int = 0, max_depth: int = MAX_COLLECT_DEPTH
) -> List[str]:
    """Every URL-like string nested in ``value``, in traversal order."""
    urls: List[str] = []
    _collect(value, depth, max_depth, urls)
    return urls


def _collect(value: Any, depth: int, max_depth: int, acc: List[str]) -> None:
    if depth > max_depth or value is None:
        return
    if isinstance(value, str):
        url = as_url_string(value)
        if url:
            acc.append(url)
    elif isinstance(value, list):
        for entry in value:
            _collect(entry, depth + 1, max_depth, acc)
    elif isinstance(value, dict):
        for entry in value.values():
            _collect(entry, depth + 1, max_depth, acc)


def score_asset_url(url: str, kind: AssetKind) -> int:
    """Score a candidate URL; higher means more likely to be the icon."""
    lower = url.lower()
    score = 0
    for needle, matching, other, favoured in SCORING:
        if needle in lower:
            score += matching if favoured is None or favoured == kind else other
    if _IMAGE_EXTENSION.search(lower):
        score += IMAGE_EXTENSION_SCORE
    return score


def normalize_asset_url(url: Optional[str], resolve: UrlResolver) -> Optional[str]:
    """Absolute URLs pass through; paths are resolved against the assets host."""
    if not url:
        return None
    if url.startswith(("http://", "https://")):
        return url
    return resolve(url)


def extract_asset_image_url(
    entity: Any, kind: AssetKind, resolve: UrlResolver
) -> Optional[str]:
    """
    Pick the icon URL of an asset record.

    :param entity: Raw hero, item or rank record
    :param kind: Which field conventions to probe
    :param resolve: Turns a relative path into an absolute assets URL
    :returns: Absolute URL or None when the record holds no image
    """
    if not isinstance(entity, dict):
        return None

    for path in CANDIDATE_PATHS[kind]:
        url = normalize_asset_url(as_url_string(get_by_path(entity, path)), resolve)
        if url:
            return url

    best_url: Optional[str] = None
    best_score = -1
    for candidate in collect_urls_deep(entity):
        url = normalize_asset_url(candidate, resolve)
        if not url:
            continue
        # Strictly greater keeps the first of equally scored URLs
        score = score_asset_url(candidate, kind)
        if score > best_score:
            best_url, best_score = url, score
    return best_url
