"""
Document Topic Analyzer
Keyword-stem topic detection for .txt, .docx and .doc documents.
"""

from .document_parser import FormatError, FormatErrorKind, extract
from .text_analyzer import AnalysisResult, TopicAnalyzer, analyze, normalize
from .topics import DEFAULT_KEYWORDS, KeywordTable, Topic
from .doc_analyze import main

__version__ = "1.0.0"
__all__ = [
    "main",
    "extract",
    "analyze",
    "normalize",
    "AnalysisResult",
    "TopicAnalyzer",
    "FormatError",
    "FormatErrorKind",
    "KeywordTable",
    "Topic",
    "DEFAULT_KEYWORDS",
]
