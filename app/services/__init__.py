"""
Services Package

This package contains the data access used by the routers:
- Separate from HTTP handling (routers)
- Plain functions taking a Session, so they run in the threadpool
- Easier to test in isolation

Current services:
- catalog.py: Reads, counts, writes and dependency-checked deletes
- gather.py: Concurrent reads, one session per branch
"""
