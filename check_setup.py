#!/usr/bin/env python3
"""
Setup verification script for Document Topic Analyzer
"""

import sys
from pathlib import Path

def check_python_version():
    """Check if Python version is compatible"""
    version = sys.version_info
    if version.major == 3 and version.minor >= 8:
        print(f"✓ Python {version.major}.{version.minor}.{version.micro} - Compatible")
        return True
    else:
        print(f"✗ Python {version.major}.{version.minor}.{version.micro} - Requires Python 3.8+")
        return False

def check_dependencies():
    """Check if all required dependencies are available"""
    dependencies = {
        'python-docx': 'docx.opc.phys_pkg',
    }

    missing = []
    for package_name, import_name in dependencies.items():
        try:
            __import__(import_name)
            print(f"✓ {package_name} - Available")
        except ImportError:
            missing.append(package_name)
            print(f"✗ {package_name} - Missing (required)")

    return missing

def check_project_structure():
    """Check if project structure is correct"""
    required_files = [
        'topic_analyzer/__init__.py',
        'topic_analyzer/topics.py',
        'topic_analyzer/text_analyzer.py',
        'topic_analyzer/document_parser.py',
        'topic_analyzer/doc_analyze.py',
        'pyproject.toml',
        'run.py'
    ]

    missing_files = []
    base_dir = Path(__file__).parent

    for file_path in required_files:
        if (base_dir / file_path).exists():
            print(f"✓ {file_path} - Found")
        else:
            missing_files.append(file_path)
            print(f"✗ {file_path} - Missing")

    return missing_files

def check_import():
    """Check that the package imports and the keyword table is sane"""
    try:
        from topic_analyzer import DEFAULT_KEYWORDS, analyze
        from topic_analyzer.doc_analyze import get_default_config
        print("✓ Main module imports successfully")

        config = get_default_config()
        print("✓ Configuration loaded successfully")
        print(f"  - Topics defined: {len(DEFAULT_KEYWORDS)}")
        print(f"  - Stems defined: {sum(len(stems) for _, stems in DEFAULT_KEYWORDS.entries())}")
        print(f"  - Source directory: {config['directories']['source_dir']}")

        result = analyze("Этот текст про программирование, алгоритм и код.")
        print(f"  - Self-check topic: {result.detected_topic.display_name if result.detected_topic else '-'}")
        return True
    except Exception as e:
        print(f"✗ Import failed: {e}")
        return False

def main():
    """Main setup check function"""
    print("=== Document Topic Analyzer - Setup Check ===\n")

    all_good = True

    print("1. Checking Python version...")
    if not check_python_version():
        all_good = False
    print()

    print("2. Checking dependencies...")
    missing = check_dependencies()
    if missing:
        all_good = False
        print(f"\nRequired packages missing: {', '.join(missing)}")
        print("Install with: pip install " + " ".join(missing))
    print()

    print("3. Checking project structure...")
    missing_files = check_project_structure()
    if missing_files:
        all_good = False
        print(f"\nMissing files: {', '.join(missing_files)}")
    print()

    print("4. Testing module imports...")
    if not check_import():
        all_good = False
    print()

    print("=" * 60)
    if all_good:
        print("✓ Setup verification PASSED - Ready to run!")
        print("\nTo analyze a file or a folder:")
        print("python run.py <path>")
    else:
        print("✗ Setup verification FAILED - Please fix the issues above")
        print("\nCommon fixes:")
        print("pip install -e .")
    print("=" * 60)
    return 0 if all_good else 1

if __name__ == "__main__":
    sys.exit(main())
