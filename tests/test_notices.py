"""Tests for NoticeStore."""

from book_catalog.services.notices import NoticeStore


class TestNoticeStore:
    def test_get_missing(self):
        assert NoticeStore({}).get("create") is None

    def test_set_once_then_get_does_not_clear(self):
        notices = NoticeStore({})
        notices.set_once("update", "Book updated successfully!")

        assert notices.get("update") == "Book updated successfully!"
        assert notices.get("update") == "Book updated successfully!"

    def test_consume_returns_once(self):
        notices = NoticeStore({})
        notices.set_once("delete", "Book deleted successfully!")

        assert notices.consume("delete") == "Book deleted successfully!"
        assert notices.consume("delete") is None

    def test_consume_all(self):
        notices = NoticeStore({})
        notices.set_once("create", "Book added successfully!")
        notices.set_once("delete", "Book deleted successfully!")

        assert notices.consume_all() == {
            "create": "Book added successfully!",
            "delete": "Book deleted successfully!",
        }
        assert notices.consume_all() == {}

    def test_writes_through_to_session(self):
        session = {"other": 1}
        NoticeStore(session).set_once("create", "Book added successfully!")

        assert session["other"] == 1
        assert "Book added successfully!" in session.values()

    def test_stores_are_independent(self):
        first, second = NoticeStore({}), NoticeStore({})
        first.set_once("create", "Book added successfully!")

        assert second.get("create") is None
