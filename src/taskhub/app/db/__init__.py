"""Record store connection helpers."""

from __future__ import annotations

from .connection import close_record_store, init_record_store, set_store_client

__all__ = ["close_record_store", "init_record_store", "set_store_client"]
