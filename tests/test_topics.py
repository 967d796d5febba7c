# tests/test_topics.py
import pytest

from topic_analyzer.topics import DEFAULT_KEYWORDS, KeywordTable, Topic


def test_topic_declaration_order():
    assert list(Topic) == [
        Topic.MEDICAL, Topic.HISTORICAL, Topic.PROGRAMMING,
        Topic.NETWORKS, Topic.CRYPTOGRAPHY, Topic.FINANCE,
    ]
    assert DEFAULT_KEYWORDS.topics() == tuple(Topic)


def test_display_names():
    assert Topic.PROGRAMMING.display_name == "Программирование"
    assert Topic.NETWORKS.display_name == "Сети"
    assert all(topic.display_name for topic in Topic)


def test_default_stems_are_lower_case_and_ordered():
    for topic, stems in DEFAULT_KEYWORDS.entries():
        assert stems, topic
        assert all(stem == stem.lower() for stem in stems)
    assert DEFAULT_KEYWORDS.stems_for(Topic.PROGRAMMING)[:3] == ("программ", "разработ", "код")
    assert DEFAULT_KEYWORDS.stems_for(Topic.CRYPTOGRAPHY)[0] == "крипт"


def test_mapping_snapshot_is_read_only():
    mapping = DEFAULT_KEYWORDS.as_mapping()
    assert list(mapping) == list(Topic)
    with pytest.raises(TypeError):
        mapping[Topic.MEDICAL] = ("новое",)
    with pytest.raises(TypeError):
        del mapping[Topic.FINANCE]
    # stems are tuples, so they cannot be appended to either
    with pytest.raises(AttributeError):
        mapping[Topic.FINANCE].append("x")


def test_table_rejects_upper_case_stem():
    with pytest.raises(ValueError):
        KeywordTable([(Topic.MEDICAL, ["Врач"])])


def test_table_rejects_duplicate_topic():
    with pytest.raises(ValueError):
        KeywordTable([(Topic.MEDICAL, ["врач"]), (Topic.MEDICAL, ["лечен"])])


def test_stems_for_missing_topic():
    table = KeywordTable([(Topic.FINANCE, ["банк"])])
    assert table.stems_for(Topic.MEDICAL) == ()
    assert len(table) == 1
