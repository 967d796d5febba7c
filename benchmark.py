#!/usr/bin/env python3
"""
Timing script for extraction + analysis
"""

import sys
import time
from pathlib import Path

from topic_analyzer import FormatError, analyze, extract

def time_single_file(file_path: Path, iterations: int = 5):
    """Time extract + analyze for a single file"""
    print(f"Timing file: {file_path}")

    if not file_path.exists():
        print(f"File not found: {file_path}")
        return

    total_time = 0
    successful_runs = 0

    for i in range(iterations):
        start_time = time.perf_counter()
        try:
            text = extract(file_path)
        except FormatError as e:
            print(f"Run {i+1}: Failed - {e}")
            continue
        result = analyze(text)
        elapsed = time.perf_counter() - start_time
        total_time += elapsed
        successful_runs += 1

        topic = result.detected_topic.name if result.detected_topic else "-"
        print(f"Run {i+1}: {elapsed:.3f}s - {result.total_words} words - Topic: {topic}")

    if successful_runs > 0:
        avg_time = total_time / successful_runs
        print(f"\nAverage processing time: {avg_time:.3f} seconds")
        if avg_time > 0:
            print(f"Estimated files per minute: {60/avg_time:.1f}")
        print(f"Successful runs: {successful_runs}/{iterations}")
    else:
        print("No successful runs to analyze")

def main(paths):
    print("=== Document Topic Analyzer Benchmark ===\n")

    files = [Path(p) for p in paths] or [
        Path("samples/sample.txt"),
        Path("samples/sample.docx"),
        Path("samples/sample.doc"),
    ]
    for file_path in files:
        if file_path.exists():
            time_single_file(file_path, iterations=3)
            print("-" * 50)
        else:
            print(f"Skipping {file_path} - file not found")

if __name__ == "__main__":
    main(sys.argv[1:])
