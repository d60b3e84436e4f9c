"""Locate a step's extracted durations in its raw instruction text."""

import dataclasses
import logging
import re
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class MatchedTiming:
    """A duration mention, as code point offsets into the instruction text."""

    start: int
    end: int
    seconds: float
    display_text: str

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def char_range(self) -> Tuple[int, int]:
        return self.start, self.end


def _timing_pattern(time_text: str, time_unit_text: str) -> "re.Pattern[str]":
    return re.compile(
        r"\b" + re.escape(time_text) + r"\s*" + re.escape(time_unit_text) + r"\b",
        re.IGNORECASE,
    )


def matched_timings(step) -> List[MatchedTiming]:
    """Find where each of a step's timings is written in its text.

    Timings with the same number and unit share the occurrences of that
    pair, handed out in document order; a timing left without an occurrence
    is dropped. Any amount of whitespace may separate number and unit.

    Args:
        step: Object with ``instruction_text`` and ``timings``; each timing
            has ``time_text``, ``time_unit_text`` and ``time_in_seconds``.

    Returns:
        Matches sorted by start offset.

    Examples:
        >>> step = build_step("Bake for 20 minutes.", "en")
        >>> [(t.start, t.end, t.display_text) for t in matched_timings(step)]
        [(9, 19, '20 minutes')]
    """
    text = step.instruction_text
    if not text or not step.timings:
        return []

    pools: Dict[Tuple[str, str], List[Tuple[int, int]]] = {}
    for timing in step.timings:
        key = (timing.time_text, timing.time_unit_text)
        if key not in pools:
            pattern = _timing_pattern(*key)
            pools[key] = [match.span() for match in pattern.finditer(text)]

    matches = []
    for timing in step.timings:
        pool = pools[(timing.time_text, timing.time_unit_text)]
        if not pool:
            logger.debug(
                f"No occurrence left for timing '{timing.time_text} {timing.time_unit_text}'"
            )
            continue
        start, end = pool.pop(0)
        matches.append(
            MatchedTiming(
                start=start,
                end=end,
                seconds=timing.time_in_seconds,
                display_text=text[start:end],
            )
        )

    return sorted(matches, key=lambda match: match.start)
