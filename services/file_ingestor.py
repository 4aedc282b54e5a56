"""
FileIngestor for CSV uploads.

Reads an uploaded file, parses and analyses it, and wraps the result in a
FileRecord.
"""

import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Optional

from models import FileRecord
from models.application_state import DEFAULT_UPLOADER
from services.csv_parser import CSVParser, CSVParseError
from services.quality_analyzer import count_rows_with_issues
from utils.validation import validate_csv_filename, parse_tags, normalize_description

logger = logging.getLogger(__name__)


def decode_content(content: bytes) -> str:
    """
    Decode uploaded bytes.

    Tries UTF-8 (dropping a BOM) first, then GBK.

    Raises:
        CSVParseError: If neither encoding works
    """
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    try:
        return content.decode("gbk")
    except UnicodeDecodeError as e:
        raise CSVParseError(f"Cannot decode file, expected UTF-8 or GBK: {e}")


class FileIngestor:
    """
    Builds FileRecords from uploaded CSV content.

    Attributes:
        uploader: Label stamped on every ingested file
        short_row_policy: Passed through to CSVParser
    """

    def __init__(self, uploader: str = DEFAULT_UPLOADER, short_row_policy: str = "skip"):
        self.uploader = uploader
        self.short_row_policy = short_row_policy

    def ingest_text(
        self,
        name: str,
        text: str,
        size: Optional[int] = None,
        description: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> FileRecord:
        """
        Build a FileRecord from decoded CSV text.

        Args:
            name: File name, must end in .csv
            text: Decoded file content
            size: Size in bytes (defaults to the UTF-8 length of text)
            description: Optional free-text description
            tags: Optional comma-separated tags

        Returns:
            New FileRecord

        Raises:
            ValueError: If the file name is not a CSV name
            CSVParseError: If the content is empty or has no usable rows
        """
        is_valid, error_msg = validate_csv_filename(name)
        if not is_valid:
            raise ValueError(error_msg)

        parser = CSVParser(short_row_policy=self.short_row_policy)
        rows = parser.parse(text)
        if not rows:
            raise CSVParseError("The CSV file appears to be empty or incorrectly formatted.")

        issue_count = count_rows_with_issues(rows)

        file_record = FileRecord(
            id=uuid.uuid4().hex,
            name=name,
            size=size if size is not None else len(text.encode("utf-8")),
            upload_date=datetime.now(timezone.utc).isoformat(),
            uploader=self.uploader,
            rows=tuple(rows),
            quality_issue_count=issue_count,
            status="error" if issue_count > 0 else "success",
            description=normalize_description(description),
            tags=parse_tags(tags),
        )

        logger.info(
            f"Ingested '{name}': {file_record.row_count} rows, "
            f"{issue_count} with quality issues"
        )
        return file_record

    def ingest_path(
        self,
        file_path: str,
        description: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> FileRecord:
        """
        Build a FileRecord from a file on disk (a Gradio upload path).

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the name is not a CSV name
            CSVParseError: If the content cannot be decoded or parsed
        """
        name = os.path.basename(file_path)
        is_valid, error_msg = validate_csv_filename(name)
        if not is_valid:
            raise ValueError(error_msg)

        if not os.path.exists(file_path):
            raise FileNotFoundError(f"CSV file not found: {file_path}")

        with open(file_path, "rb") as f:
            content = f.read()

        return self.ingest_text(
            name,
            decode_content(content),
            size=len(content),
            description=description,
            tags=tags,
        )
