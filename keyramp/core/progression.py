from __future__ import annotations

import logging
from typing import List, Optional

from keyramp.core.letter_stats import ActiveLetterSet, LetterStatsTracker

logger = logging.getLogger(__name__)


class ProgressionPolicy:
    """Unlocks the next letter once every active letter is confident.

    Letters are unlocked one at a time in canonical alphabet order and are
    never removed again.
    """

    def __init__(self, threshold: float = 0.8) -> None:
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    def apply(self, tracker: LetterStatsTracker, active: ActiveLetterSet) -> Optional[str]:
        """Run once per completed lesson; returns the unlocked letter, if any."""
        if not tracker.all_confident(self._threshold):
            return None
        remaining = active.remaining()
        if not remaining:
            logger.debug("All %d letters already unlocked", len(active))
            return None
        letter = remaining[0]
        active.append(letter)
        tracker.track(letter)
        logger.info("Unlocked letter %r (%d active)", letter, len(active))
        return letter

    def upcoming(self, active: ActiveLetterSet, limit: int = 5) -> List[str]:
        """Next locked letters, in the order they will be unlocked."""
        return active.remaining()[: max(0, limit)]
