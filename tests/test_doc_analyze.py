# tests/test_doc_analyze.py
import json
import logging

import pytest

from topic_analyzer import doc_analyze
from topic_analyzer.doc_analyze import (
    ProcessingStats,
    find_documents,
    get_default_config,
    main,
    process_file_worker,
    topic_label,
)

PROGRAMMING_TEXT = "Этот текст про программирование, алгоритм и код."
FINANCE_TEXT = "Банк повысил ставку по кредиту и ипотеке."


@pytest.fixture(autouse=True)
def restore_root_logging():
    saved = logging.root.handlers[:]
    level = logging.root.level
    yield
    for handler in logging.root.handlers[:]:
        if handler not in saved:
            handler.close()
            logging.root.removeHandler(handler)
    for handler in saved:
        if handler not in logging.root.handlers:
            logging.root.addHandler(handler)
    logging.root.setLevel(level)


def make_corpus(tmp_path):
    src = tmp_path / 'docs'
    nested = src / 'nested'
    nested.mkdir(parents=True)
    (src / 'code.txt').write_text(PROGRAMMING_TEXT, encoding='utf-8')
    (nested / 'bank.txt').write_bytes(FINANCE_TEXT.encode('cp1251'))
    (nested / 'broken.docx').write_bytes(b'not a zip')
    (src / 'ignored.pdf').write_bytes(b'%PDF-1.4')
    return src


def test_default_config():
    config = get_default_config()
    assert config['directories']['logs_dir'] == 'logs'
    assert set(config['processing']['patterns']) == {'*.txt', '*.docx', '*.doc'}


def test_find_documents(tmp_path):
    src = make_corpus(tmp_path)
    found = find_documents(src, get_default_config()['processing']['patterns'])
    assert [p.name for p in found] == ['code.txt', 'bank.txt', 'broken.docx']
    assert all(p.suffix != '.pdf' for p in found)


def test_worker_success(tmp_path):
    path = tmp_path / 'code.txt'
    path.write_text(PROGRAMMING_TEXT, encoding='utf-8')
    filename, topic, success, content_length, error_msg = process_file_worker(path)
    assert (filename, topic, success, error_msg) == ('code.txt', 'programming', True, '')
    assert content_length == len(PROGRAMMING_TEXT)


def test_worker_no_topic(tmp_path):
    path = tmp_path / 'plain.txt'
    path.write_text('hello world', encoding='utf-8')
    _, topic, success, _, _ = process_file_worker(path)
    assert success
    assert topic == doc_analyze.UNKNOWN_TOPIC


def test_worker_failure(tmp_path):
    path = tmp_path / 'broken.docx'
    path.write_bytes(b'not a zip')
    filename, topic, success, content_length, error_msg = process_file_worker(path)
    assert not success
    assert topic == doc_analyze.UNKNOWN_TOPIC
    assert content_length == 0
    assert error_msg.startswith('invalid_container')


def test_processing_stats(tmp_path):
    stats = ProcessingStats()
    stats.total_files = 4
    stats.add_file_result('a.txt', 'programming', True, 10)
    stats.add_file_result('b.txt', 'programming', True, 5)
    stats.add_file_result('c.txt', 'unknown', True, 0)
    stats.add_file_result('d.docx', 'unknown', False, 0, 'invalid_container: повреждён')

    summary = stats.get_summary()
    assert summary['processing_summary']['processed_files'] == 3
    assert summary['processing_summary']['failed_files'] == 1
    assert summary['processing_summary']['empty_content_files'] == 1
    assert summary['processing_summary']['success_rate'] == pytest.approx(75.0)
    assert summary['topic_distribution'] == {'programming': 2, 'unknown': 1}
    assert summary['recent_errors'][0]['filename'] == 'd.docx'

    out = tmp_path / 'stats.json'
    stats.save_to_file(out)
    raw = out.read_text(encoding='utf-8')
    assert 'повреждён' in raw
    assert json.loads(raw)['topic_distribution']['programming'] == 2


def test_recent_errors_capped():
    stats = ProcessingStats()
    for i in range(60):
        stats.add_file_result(f'{i}.doc', 'unknown', False, 0, 'err')
    assert len(stats.recent_errors) == 50
    assert stats.recent_errors[0]['filename'] == '10.doc'
    assert stats.failed_files == 60


def test_topic_label():
    assert topic_label('finance') == 'Финансы'
    assert topic_label('unknown') == 'Не определена'


def test_main_missing_source(tmp_path, capsys):
    assert main([str(tmp_path / 'nope'), '--logs-dir', str(tmp_path / 'logs')]) == 1
    assert 'не существует' in capsys.readouterr().out


def test_main_single_file(tmp_path, capsys):
    path = tmp_path / 'code.txt'
    path.write_text(PROGRAMMING_TEXT, encoding='utf-8')
    logs = tmp_path / 'logs'
    assert main([str(path), '--logs-dir', str(logs)]) == 0
    out = capsys.readouterr().out
    assert 'Total words: 7' in out
    assert 'Detected topic: Программирование' in out
    assert list(logs.glob('analysis_*.log'))


def test_main_single_file_failure(tmp_path, capsys):
    path = tmp_path / 'broken.docx'
    path.write_bytes(b'not a zip')
    assert main([str(path), '--logs-dir', str(tmp_path / 'logs')]) == 1
    assert 'Ошибка чтения файла' in capsys.readouterr().out


def test_main_batch(tmp_path, capsys):
    src = make_corpus(tmp_path)
    logs = tmp_path / 'logs'
    assert main([str(src), '--logs-dir', str(logs), '--workers', '1']) == 0

    out = capsys.readouterr().out
    assert 'Программирование' in out
    assert 'Финансы' in out

    stats_files = list(logs.glob('stats_*.json'))
    assert len(stats_files) == 1
    data = json.loads(stats_files[0].read_text(encoding='utf-8'))
    assert data['processing_summary']['total_files'] == 3
    assert data['processing_summary']['processed_files'] == 2
    assert data['processing_summary']['failed_files'] == 1
    assert data['topic_distribution'] == {'programming': 1, 'finance': 1}
    assert data['recent_errors'][0]['filename'] == 'broken.docx'


def test_main_batch_empty_dir(tmp_path, capsys):
    src = tmp_path / 'empty'
    src.mkdir()
    assert main([str(src), '--logs-dir', str(tmp_path / 'logs')]) == 0
    assert 'не найдено' in capsys.readouterr().out


def test_find_documents_upper_case_extensions(tmp_path):
    (tmp_path / 'REPORT.TXT').write_text('код', encoding='utf-8')
    (tmp_path / 'Old.DOC').write_bytes(b'kod')
    (tmp_path / 'Scan.PDF').write_bytes(b'%PDF')
    found = find_documents(tmp_path, get_default_config()['processing']['patterns'])
    assert [p.name for p in found] == ['Old.DOC', 'REPORT.TXT']
