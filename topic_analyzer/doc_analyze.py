import argparse
import json
import logging
import sys
from concurrent.futures import ProcessPoolExecutor, as_completed
from datetime import datetime
from fnmatch import fnmatch
from multiprocessing import cpu_count
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .document_parser import SUPPORTED_EXTENSIONS, FormatError, extract
from .text_analyzer import AnalysisResult, analyze
from .topics import Topic

__all__ = ['main']

UNKNOWN_TOPIC = 'unknown'


def setup_logging(log_dir: Path, verbose: bool = False):
    """Настроить журнал: отдельный файл на каждый запуск"""
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"analysis_{timestamp}.log"
    stats_file = log_dir / f"stats_{timestamp}.json"

    log_format = '%(asctime)s - %(levelname)s - %(message)s'
    date_format = '%Y-%m-%d %H:%M:%S'

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=log_format,
        datefmt=date_format,
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8', mode='w')
        ]
    )

    logger = logging.getLogger(__name__)
    logger.warning("=== Анализ документов начат ===")
    logger.warning(f"Журнал: {log_file}")
    logger.warning(f"Статистика: {stats_file}")

    return logger, stats_file


class ProcessingStats:
    """Статистика пакетной обработки"""
    def __init__(self):
        self.start_time = datetime.now()
        self.end_time = None
        self.total_files = 0
        self.processed_files = 0
        self.failed_files = 0
        self.empty_content_files = 0
        self.topic_stats: Dict[str, int] = {}
        self.recent_errors: List[dict] = []

    def add_file_result(self, filename: str, topic: str, success: bool,
                        content_length: int = 0, error_msg: str = ""):
        if success:
            self.processed_files += 1
            self.topic_stats[topic] = self.topic_stats.get(topic, 0) + 1
            if content_length == 0:
                self.empty_content_files += 1
        else:
            self.failed_files += 1
            if len(self.recent_errors) >= 50:
                self.recent_errors.pop(0)
            self.recent_errors.append({
                'filename': filename,
                'error': error_msg,
                'timestamp': datetime.now().isoformat()
            })

    def get_summary(self):
        self.end_time = datetime.now()
        duration = (self.end_time - self.start_time).total_seconds()

        return {
            'processing_summary': {
                'start_time': self.start_time.isoformat(),
                'end_time': self.end_time.isoformat(),
                'total_duration_seconds': duration,
                'total_files': self.total_files,
                'processed_files': self.processed_files,
                'failed_files': self.failed_files,
                'empty_content_files': self.empty_content_files,
                'success_rate': (self.processed_files / self.total_files * 100) if self.total_files > 0 else 0,
                'files_per_second': self.processed_files / duration if duration > 0 else 0
            },
            'topic_distribution': self.topic_stats,
            'recent_errors': self.recent_errors,
        }

    def save_to_file(self, stats_file: Path):
        summary = self.get_summary()
        with open(stats_file, 'w', encoding='utf-8') as f:
            json.dump(summary, f, ensure_ascii=False, indent=2)


def get_default_config():
    """Настройки по умолчанию"""
    return {
        'directories': {
            'source_dir': "documents",
            'logs_dir': "logs",
        },
        'processing': {
            'workers': None,           # None: по числу ядер
            'progress_interval': 10,
            'auto_save_interval': 100,
            'patterns': [f"*.{ext}" for ext in SUPPORTED_EXTENSIONS],
        }
    }


def analyze_file(file_path: Path) -> Tuple[AnalysisResult, int]:
    """Extract and analyze one file; raises FormatError"""
    text = extract(file_path)
    return analyze(text), len(text.strip())


def process_file_worker(file_path: Path) -> Tuple[str, str, bool, int, str]:
    """
    Worker function for process pool.
    Returns: (filename, topic, success, content_length, error_msg)
    """
    try:
        result, content_length = analyze_file(file_path)
    except FormatError as e:
        return (file_path.name, UNKNOWN_TOPIC, False, 0, f"{e.kind.value}: {e.message}")
    except Exception as e:
        return (file_path.name, UNKNOWN_TOPIC, False, 0, f"Ошибка обработки файла: {e}")

    topic = result.detected_topic.value if result.detected_topic else UNKNOWN_TOPIC
    return (file_path.name, topic, True, content_length, "")


def find_documents(source_dir: Path, patterns: List[str]) -> List[Path]:
    """Recursive scan; patterns are matched case-insensitively, like extract()"""
    patterns = [pattern.lower() for pattern in patterns]
    found = [
        p for p in source_dir.rglob("*")
        if p.is_file() and any(fnmatch(p.name.lower(), pattern) for pattern in patterns)
    ]
    return sorted(found)


def get_optimal_worker_count() -> int:
    return min(max(2, cpu_count()), 8)


def print_progress_bar(current: int, total: int, stats: ProcessingStats, width: int = 40):
    percentage = current / total if total > 0 else 0
    elapsed = (datetime.now() - stats.start_time).total_seconds()

    filled = int(width * percentage)
    bar = '█' * filled + '░' * (width - filled)

    status = f"\rПрогресс: [{bar}] {current}/{total} ({percentage*100:.1f}%) | "
    status += f"Успешно: {stats.processed_files} | Ошибки: {stats.failed_files}"
    status += f" | Время: {int(elapsed//60):02d}:{int(elapsed%60):02d}"

    print(status, end='', flush=True)


def topic_label(topic_value: str) -> str:
    try:
        return Topic(topic_value).display_name
    except ValueError:
        return "Не определена"


def run_single(file_path: Path) -> int:
    logger = logging.getLogger(__name__)
    try:
        result, _ = analyze_file(file_path)
    except FormatError as e:
        logger.error(f"{file_path.name}: {e}")
        print(f"Ошибка чтения файла: {e}")
        return 1

    print(result.summary(), end='')
    return 0


def run_batch(source_dir: Path, config: dict, logger, stats_file: Path) -> int:
    processing = config['processing']
    progress_interval = processing['progress_interval']
    auto_save_interval = processing['auto_save_interval']

    print("Поиск документов...")
    documents = find_documents(source_dir, processing['patterns'])
    if not documents:
        print(f"В {source_dir} не найдено документов")
        return 0

    stats = ProcessingStats()
    stats.total_files = len(documents)
    num_workers = processing['workers'] or get_optimal_worker_count()
    print(f"Обработка {len(documents)} файлов, процессов: {num_workers}")
    print("Ctrl+C прерывает обработку с сохранением статистики\n")

    completed = 0
    try:
        with ProcessPoolExecutor(max_workers=num_workers) as executor:
            future_to_file = {
                executor.submit(process_file_worker, path): path
                for path in documents
            }

            for future in as_completed(future_to_file):
                file_path = future_to_file[future]
                completed += 1

                try:
                    filename, topic, success, content_length, error_msg = future.result()
                except Exception as e:
                    logger.error(f"{file_path.name}: {e}")
                    stats.add_file_result(file_path.name, UNKNOWN_TOPIC, False, 0, str(e))
                    continue

                stats.add_file_result(filename, topic, success, content_length, error_msg)
                if not success:
                    logger.error(f"{filename}: {error_msg}")

                if completed % progress_interval == 0 or completed == len(documents):
                    print_progress_bar(completed, len(documents), stats)

                if completed % auto_save_interval == 0:
                    stats.save_to_file(stats_file)

    except KeyboardInterrupt:
        print("\n\nПрервано пользователем, статистика сохраняется...")
        stats.save_to_file(stats_file)
        return 1

    print("\n")
    print("=" * 60)
    print("Распределение по тематикам:")
    print("=" * 60)
    for topic, count in sorted(stats.topic_stats.items(), key=lambda item: -item[1]):
        print(f"{topic_label(topic):30s}: {count:6d}")
    print("-" * 60)
    summary = stats.get_summary()['processing_summary']
    print(f"{'Успешно':30s}: {stats.processed_files:6d}")
    print(f"{'Ошибки':30s}: {stats.failed_files:6d}")
    print(f"{'Пустые':30s}: {stats.empty_content_files:6d}")
    print(f"{'Доля успешных':30s}: {summary['success_rate']:6.1f}%")

    stats.save_to_file(stats_file)
    print(f"\nСтатистика сохранена: {stats_file}")
    return 0


def build_parser(config: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Определение тематики документов (.txt, .docx, .doc)")
    parser.add_argument("source", nargs='?', default=config['directories']['source_dir'],
                        help="File to analyze, or directory to scan recursively")
    parser.add_argument("--logs-dir", default=config['directories']['logs_dir'])
    parser.add_argument("--workers", type=int, default=config['processing']['workers'])
    parser.add_argument("--verbose", action="store_true", help="DEBUG level in the log file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Точка входа"""
    config = get_default_config()
    args = build_parser(config).parse_args(argv)
    config['processing']['workers'] = args.workers

    source = Path(args.source)
    if not source.exists():
        print(f"Ошибка: путь не существует: {source}")
        return 1

    logger, stats_file = setup_logging(Path(args.logs_dir), args.verbose)

    if source.is_file():
        return run_single(source)
    return run_batch(source, config, logger, stats_file)


if __name__ == "__main__":
    sys.exit(main())
