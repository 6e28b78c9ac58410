"""
Calendar export as delimited text.
"""
import csv
import io
from typing import Iterable

from ..models import ContentItem

CSV_HEADER = ("Title", "Description", "Platform", "Scheduled Date", "Status")


def export_csv(items: Iterable[ContentItem]) -> str:
    """Header plus one fully quoted row per item."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for item in items:
        writer.writerow([
            item.title,
            item.description or "",
            item.platform,
            item.scheduled_date.isoformat() if item.scheduled_date else "",
            item.status,
        ])
    return buffer.getvalue()
