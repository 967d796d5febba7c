#!/usr/bin/env python3
"""
Main entry point for the Document Topic Analyzer
"""

import sys

try:
    from topic_analyzer.doc_analyze import main

    if __name__ == "__main__":
        sys.exit(main())

except ImportError as e:
    print("Error: Missing required dependencies.")
    print("Please install the package:")
    print("pip install -e .")
    print(f"Error details: {e}")
    sys.exit(1)
except KeyboardInterrupt:
    print("\nProgram interrupted by user.")
    sys.exit(0)
