"""
Tests for calendar CSV export.
"""
import csv
import io
from datetime import datetime
from types import SimpleNamespace

from content_planner.services.export import export_csv


def item(title, description, platform="social", status="draft"):
    return SimpleNamespace(
        title=title,
        description=description,
        platform=platform,
        scheduled_date=datetime(2024, 6, 1, 9, 0),
        status=status,
    )


def test_header_only_for_empty_calendar():
    assert export_csv([]).splitlines() == ['"Title","Description","Platform","Scheduled Date","Status"']


def test_one_line_per_item_plus_header():
    items = [item(f"Post {n}", "desc") for n in range(5)]
    assert len(export_csv(items).splitlines()) == 6


def test_fields_survive_commas_and_quotes():
    items = [
        item("Hello, world", 'She said "ship it"', platform="blog", status="posted"),
        item("No description", None),
    ]
    rows = list(csv.reader(io.StringIO(export_csv(items))))

    assert rows[1] == ["Hello, world", 'She said "ship it"', "blog", "2024-06-01T09:00:00", "posted"]
    assert rows[2] == ["No description", "", "social", "2024-06-01T09:00:00", "draft"]


def test_every_field_is_quoted():
    line = export_csv([item("Plain", "text")]).splitlines()[1]
    assert line == '"Plain","text","social","2024-06-01T09:00:00","draft"'
