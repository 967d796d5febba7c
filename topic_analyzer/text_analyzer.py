import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .topics import DEFAULT_KEYWORDS, KeywordTable, Topic

__all__ = ['normalize', 'AnalysisResult', 'TopicAnalyzer', 'analyze']

_SPACE_RUN = re.compile(r" +")
UNDETECTED_LABEL = "Не удалось определить"


def normalize(text: str) -> str:
    """
    Lower-case the text and collapse every run of characters that is neither
    a letter nor a decimal digit into a single space.
    """
    lowered = text.lower()
    # isalpha() covers the L* categories, isdecimal() exactly Nd
    kept = ''.join(ch if ch.isalpha() or ch.isdecimal() else ' ' for ch in lowered)
    return _SPACE_RUN.sub(' ', kept)


@dataclass(frozen=True)
class AnalysisResult:
    """Результат одного анализа текста (только для чтения)"""
    topic_counts: Mapping[Topic, int]
    keyword_counts: Mapping[str, int]
    total_words: int
    detected_topic: Optional[Topic] = None

    def __post_init__(self):
        # every topic is present, in enum order
        counts = {topic: int(self.topic_counts.get(topic, 0)) for topic in Topic}
        object.__setattr__(self, 'topic_counts', MappingProxyType(counts))
        object.__setattr__(self, 'keyword_counts', MappingProxyType(dict(self.keyword_counts)))

    @classmethod
    def empty(cls) -> 'AnalysisResult':
        return cls(topic_counts={}, keyword_counts={}, total_words=0, detected_topic=None)

    def topic_count(self, topic: Topic) -> int:
        return self.topic_counts.get(topic, 0)

    def keyword_count(self, stem: str) -> int:
        return self.keyword_counts.get(stem, 0)

    def topic_percentage(self, topic: Topic) -> float:
        """Fraction of processed words matching the topic, 0.0 for empty input"""
        if self.total_words == 0:
            return 0.0
        return self.topic_count(topic) / self.total_words

    def summary(self) -> str:
        lines = [f"Total words: {self.total_words}"]
        for topic, count in self.topic_counts.items():
            percent = self.topic_percentage(topic) * 100.0
            lines.append(f"{topic.display_name}: {count} ({percent:.2f}%)")
        detected = self.detected_topic.display_name if self.detected_topic else UNDETECTED_LABEL
        lines.append(f"Detected topic: {detected}")
        if self.keyword_counts:
            lines.append("Keyword counts:")
            lines.extend(f"  {stem}: {count}" for stem, count in self.keyword_counts.items())
        return '\n'.join(lines) + '\n'

    def to_dict(self) -> dict:
        return {
            'total_words': self.total_words,
            'detected_topic': self.detected_topic.value if self.detected_topic else None,
            'topic_counts': {topic.value: count for topic, count in self.topic_counts.items()},
            'keyword_counts': dict(self.keyword_counts),
        }

    def __str__(self):
        return self.summary()


@dataclass(frozen=True)
class TopicAnalyzer:
    """
    Classifies text by counting tokens that start with a topic's keyword stem.

    Topics are scanned in table order and stems in their declared order; the
    first stem that prefixes a token takes it, so a token counts for at most
    one topic. The detected topic is the one with the strictly greatest
    count, scanning topics in enum order, so earlier topics win ties and a
    topic with zero matches is never detected.
    """
    keywords: KeywordTable = field(default=DEFAULT_KEYWORDS)

    def keyword_map(self) -> Mapping[Topic, tuple]:
        return self.keywords.as_mapping()

    def match_token(self, token: str):
        """Return (topic, stem) for the first matching stem, or None"""
        for topic, stems in self.keywords.entries():
            for stem in stems:
                if token.startswith(stem):
                    return topic, stem
        return None

    def analyze(self, text: Optional[str]) -> AnalysisResult:
        if not text:
            return AnalysisResult.empty()

        tokens = normalize(text).split()
        topic_counts: Dict[Topic, int] = {topic: 0 for topic in Topic}
        keyword_counts: Dict[str, int] = {}

        for token in tokens:
            match = self.match_token(token)
            if match is None:
                continue
            topic, stem = match
            topic_counts[topic] += 1
            keyword_counts[stem] = keyword_counts.get(stem, 0) + 1

        detected = None
        max_count = 0
        for topic in Topic:
            if topic_counts[topic] > max_count:
                max_count = topic_counts[topic]
                detected = topic

        return AnalysisResult(
            topic_counts=topic_counts,
            keyword_counts=keyword_counts,
            total_words=len(tokens),
            detected_topic=detected,
        )


_default_analyzer = TopicAnalyzer()


def analyze(text: Optional[str]) -> AnalysisResult:
    """Analyze text with the built-in keyword dictionary"""
    return _default_analyzer.analyze(text)
