"""Case-insensitive, first-occurrence-wins merging of recognized words."""

from typing import Iterable, List, Set

from .models import AnalysisResult, WordEntry


class WordAggregator:
    """Collects unique words across the images of one run."""

    def __init__(self):
        self._seen: Set[str] = set()
        self._words: List[WordEntry] = []

    def add(self, entry: WordEntry) -> bool:
        if entry.key in self._seen:
            return False
        self._seen.add(entry.key)
        self._words.append(entry)
        return True

    def extend(self, entries: Iterable[WordEntry]) -> int:
        """Add entries in order; return how many were new."""
        return sum(1 for entry in entries if self.add(entry))

    def __len__(self) -> int:
        return len(self._words)

    def result(self) -> AnalysisResult:
        return AnalysisResult(words=tuple(self._words))
