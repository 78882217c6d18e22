"""Problem references and test data retrieval."""
from .annotation import Annotation, extract_problem_id, read_annotation
from .fetcher import TestcaseFetcher, TestcaseHeader, cache_dir_for

__all__ = [
    "Annotation",
    "TestcaseFetcher",
    "TestcaseHeader",
    "cache_dir_for",
    "extract_problem_id",
    "read_annotation",
]
