"""Business logic services for DataFlow Analytics."""

from .csv_parser import CSVParser, CSVParseError, parse_csv
from .quality_analyzer import QualityAnalyzer, QualityReport, analyze_quality
from .query_pipeline import QueryPipeline, QueryResult, query_rows
from .file_ingestor import FileIngestor
from .render_engine import RenderEngine

__all__ = [
    "CSVParser",
    "CSVParseError",
    "parse_csv",
    "QualityAnalyzer",
    "QualityReport",
    "analyze_quality",
    "QueryPipeline",
    "QueryResult",
    "query_rows",
    "FileIngestor",
    "RenderEngine",
]
