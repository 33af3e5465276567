"""
Services Package

Request handling that is separate from HTTP plumbing and easy to test in
isolation.

Current services:
- books.py: BookHandler, one method per catalog action, returning Outcomes
- notices.py: NoticeStore for one-shot notices kept in the session
"""
