"""Structural feature extraction for markdown-like article drafts."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any

H1_RE = re.compile(r"^#\s+\S")
H2_RE = re.compile(r"^##\s+\S")
H3_RE = re.compile(r"^###\s+\S")
UNORDERED_ITEM_RE = re.compile(r"^[-*+]\s+\S")
ORDERED_ITEM_RE = re.compile(r"^\d+[.)]\s+\S")
FENCE_RE = re.compile(r"^(```|~~~)")
META_COMMENT_RE = re.compile(
    r"<!--\s*meta(?:[ _-]?description)?\s*:\s*(.*?)\s*-->",
    re.IGNORECASE | re.DOTALL,
)
META_LINE_RE = re.compile(
    r"^meta(?:[ _-]?description)?[ \t]*:[ \t]*(\S.*)$",
    re.IGNORECASE | re.MULTILINE,
)
SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True, slots=True)
class ContentFeatures:
    """Features extracted from one draft; the analyzer scores only these."""

    has_h1: bool
    h1_count: int
    h2_count: int
    h3_count: int
    unordered_list_items: int
    ordered_list_items: int
    has_meta_description: bool
    meta_description: str
    word_count: int
    keyword: str | None
    keyword_occurrences: int
    keyword_density: float
    keyword_in_intro: bool
    sentence_count: int
    avg_sentence_length: float
    avg_word_length: float

    @property
    def list_item_count(self) -> int:
        return self.unordered_list_items + self.ordered_list_items

    @property
    def has_lists(self) -> bool:
        return self.list_item_count > 0

    @property
    def heading_count(self) -> int:
        return self.h1_count + self.h2_count + self.h3_count

    @property
    def is_hierarchy_valid(self) -> bool:
        """H3 subsections only make sense below an H2 section."""
        return self.h3_count == 0 or self.h2_count > 0

    @property
    def is_empty(self) -> bool:
        return self.word_count == 0

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["list_item_count"] = self.list_item_count
        payload["is_hierarchy_valid"] = self.is_hierarchy_valid
        return payload


def _structural_lines(content: str) -> list[str]:
    """Stripped, non-blank lines outside fenced code blocks."""
    lines: list[str] = []
    in_fence = False
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if FENCE_RE.match(line):
            in_fence = not in_fence
            continue
        if in_fence or not line:
            continue
        lines.append(line)
    return lines


def extract_meta_description(content: str) -> str | None:
    """Return the embedded meta description text, or None when no marker exists."""
    match = META_COMMENT_RE.search(content) or META_LINE_RE.search(content)
    if match is None:
        return None
    return re.sub(r"\s+", " ", match.group(1)).strip()


def count_keyword_occurrences(content: str, keyword: str | None) -> int:
    """Case-insensitive, non-overlapping substring matches of `keyword`."""
    if not keyword:
        return 0
    return content.lower().count(keyword.lower())


def extract_content_features(
    content: str,
    keyword: str | None = None,
    *,
    intro_window_words: int = 100,
) -> ContentFeatures:
    """Extract heading, list, meta, word and keyword features from raw text."""
    content = content or ""
    keyword = (keyword or "").strip() or None
    lines = _structural_lines(content)

    h1_count = sum(1 for line in lines if H1_RE.match(line))
    h2_count = sum(1 for line in lines if H2_RE.match(line))
    h3_count = sum(1 for line in lines if H3_RE.match(line))
    unordered_items = sum(1 for line in lines if UNORDERED_ITEM_RE.match(line))
    ordered_items = sum(1 for line in lines if ORDERED_ITEM_RE.match(line))

    meta_description = extract_meta_description(content)

    words = content.split()
    word_count = len(words)

    occurrences = count_keyword_occurrences(content, keyword)
    density = occurrences / word_count if word_count else 0.0
    intro = " ".join(words[:intro_window_words]).lower()
    keyword_in_intro = bool(keyword) and keyword.lower() in intro

    sentences = [part for part in SENTENCE_SPLIT_RE.split(content) if part.strip()]
    sentence_count = len(sentences)
    avg_sentence_length = word_count / sentence_count if sentence_count else 0.0
    avg_word_length = sum(len(word) for word in words) / word_count if word_count else 0.0

    return ContentFeatures(
        has_h1=h1_count > 0,
        h1_count=h1_count,
        h2_count=h2_count,
        h3_count=h3_count,
        unordered_list_items=unordered_items,
        ordered_list_items=ordered_items,
        has_meta_description=meta_description is not None,
        meta_description=meta_description or "",
        word_count=word_count,
        keyword=keyword,
        keyword_occurrences=occurrences,
        keyword_density=density,
        keyword_in_intro=keyword_in_intro,
        sentence_count=sentence_count,
        avg_sentence_length=avg_sentence_length,
        avg_word_length=avg_word_length,
    )
