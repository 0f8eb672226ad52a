"""
Tests for the structured book event logger.
"""

from structlog.testing import capture_logs

from utilities.logger import BookEventLogger


def test_book_events_include_context():
    """Test bound context is attached to every event."""
    events = BookEventLogger().bind_context(method="POST", path="/books/7")

    with capture_logs() as logs:
        events.log_book_created(7)
        events.log_book_updated(7)
        events.log_book_deleted(7)

    assert [log["event"] for log in logs] == ["Book created", "Book updated", "Book deleted"]
    assert all(log["method"] == "POST" and log["book_id"] == 7 for log in logs)
    assert all(log["log_level"] == "info" for log in logs)


def test_rejection_levels():
    """Test client errors log as warnings and server errors as errors."""
    events = BookEventLogger()

    with capture_logs() as logs:
        events.log_rejected(404, "Book not found", book_id=3)
        events.log_rejected(500, "Failed to encode book data")

    assert logs[0]["log_level"] == "warning"
    assert logs[0]["status_code"] == 404
    assert logs[1]["log_level"] == "error"


def test_clear_context():
    """Test context can be cleared."""
    events = BookEventLogger().bind_context(method="GET")

    with capture_logs() as logs:
        events.clear_context().log_book_deleted(1)

    assert "method" not in logs[0]


def test_api_logs_mutations(client, sample_book_payload):
    """Test handlers log successful mutations and rejections."""
    with capture_logs() as logs:
        client.post("/books/7", json=sample_book_payload)
        client.post("/books/7", json=sample_book_payload)

    created = [log for log in logs if log["event"] == "Book created"]
    rejected = [log for log in logs if log["event"] == "Request rejected"]
    assert created[0]["book_id"] == 7
    assert rejected[0]["status_code"] == 409
    assert rejected[0]["book_id"] == 7
