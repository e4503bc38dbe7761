"""Keyword entity extraction: crop, location and challenge from free text.

Matching is plain case-insensitive substring containment, so a keyword
embedded in a longer word still matches ("price" contains "rice").

When several keywords of one category occur, the longest keyword wins and
equal lengths resolve to the first-declared keyword of the vocabulary:
"Nairobi, Kenya" yields ``nairobi`` and "maize and rice" yields ``maize``.
"""

from __future__ import annotations

from collections.abc import Sequence

from climate_advisor.knowledge.crops import crop_ids
from climate_advisor.knowledge.gazetteer import CHALLENGES, location_keywords
from climate_advisor.schemas.advice import ExtractedEntities


def best_match(normalized: str, vocabulary: Sequence[str]) -> str | None:
	"""Return the preferred vocabulary keyword contained in ``normalized``."""
	best: str | None = None
	for keyword in vocabulary:
		if keyword not in normalized:
			continue
		if best is None or len(keyword) > len(best):
			best = keyword
	return best


def extract(text: str | None) -> ExtractedEntities:
	normalized = (text or "").lower()
	if not normalized.strip():
		return ExtractedEntities()
	return ExtractedEntities(
		location=best_match(normalized, location_keywords()),
		crop=best_match(normalized, crop_ids()),
		challenge=best_match(normalized, CHALLENGES),
	)
