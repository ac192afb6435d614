"""Technology stack detection by weighted fingerprint matching."""

from __future__ import annotations

from typing import List, Optional, Sequence

from theme_intel.crawler.models import CrawlSession
from theme_intel.extraction.models import StackSignal
from theme_intel.extraction.patterns import StackDetector, load_stack_detectors

# Extra confidence per corroborating fingerprint, and its ceiling.
_BOOST_PER_MATCH = 0.1
_MAX_BOOST = 0.15


def combine_confidence(max_weight: float, evidence_count: int) -> float:
    """Strongest fingerprint weight, boosted by corroboration and capped at 1."""
    boost = min(_BOOST_PER_MATCH * (evidence_count - 1), _MAX_BOOST)
    return min(max_weight + boost, 1.0)


def detect_stack(
    session: CrawlSession,
    detectors: Optional[Sequence[StackDetector]] = None,
) -> List[StackSignal]:
    """Score every detector against the session's markup and stylesheets.

    Detectors with no matching fingerprint produce no signal.  The result is
    sorted by descending confidence; ties keep table order.
    """
    if detectors is None:
        detectors = load_stack_detectors()

    documents = [(p.final_url, p.html) for p in session.pages]
    documents += list(session.css_contents.items())
    corpus = "\n".join(text for _, text in documents)

    signals: List[StackSignal] = []
    for detector in detectors:
        evidence: List[str] = []
        source_urls: List[str] = []
        max_weight = 0.0

        for fp in detector.fingerprints:
            if not fp.regex.search(corpus):
                continue
            evidence.append(fp.description)
            max_weight = max(max_weight, fp.weight)
            for url, text in documents:
                if url not in source_urls and fp.regex.search(text):
                    source_urls.append(url)

        if evidence:
            signals.append(
                StackSignal(
                    name=detector.name,
                    category=detector.category,
                    confidence=combine_confidence(max_weight, len(evidence)),
                    evidence=evidence,
                    source_urls=source_urls,
                )
            )

    # sorted() is stable, so equal confidences keep detector order.
    return sorted(signals, key=lambda s: s.confidence, reverse=True)
