"""
Code sample extraction from ACUL example markdown.

The upstream examples are markdown documents mixing prose, SDK snippets and
one or more full React screens. Only fenced blocks tagged as TS/JS and that
look like component source are kept.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

SAMPLE_LANGUAGES = ("tsx", "jsx", "typescript", "javascript", "ts", "js")

# A block must contain at least one of these to be treated as component source
COMPONENT_MARKERS = ("React", "className", "import")

_CODE_BLOCK_RE = re.compile(
    r"^[ \t]*```(?P<lang>" + "|".join(SAMPLE_LANGUAGES) + r")[ \t]*\r?\n(?P<body>.*?)^[ \t]*```",
    re.DOTALL | re.MULTILINE,
)


@dataclass(frozen=True)
class Sample:
    index: int
    code: str
    language: str

    def __len__(self) -> int:
        return len(self.code)


def _looks_like_component(code: str) -> bool:
    return any(marker in code for marker in COMPONENT_MARKERS)


def extract_samples(markdown: str) -> list[Sample]:
    """
    Extract component samples from a markdown document, in document order.

    Args:
        markdown: Raw markdown text

    Returns:
        Qualifying samples; empty when the document has none
    """
    samples: list[Sample] = []
    for match in _CODE_BLOCK_RE.finditer(markdown):
        code = match.group("body").strip()
        if not _looks_like_component(code):
            continue
        samples.append(Sample(index=len(samples), code=code, language=match.group("lang")))
    return samples


def select_best_sample(samples: Sequence[Sample]) -> Sample | None:
    """
    Pick the most complete sample: the longest, first one wins on ties.

    Returns:
        The selected sample, or None for an empty sequence
    """
    best: Sample | None = None
    for sample in samples:
        if best is None or len(sample.code) > len(best.code):
            best = sample
    return best
