"""Helpers shared by the SurrealDB repositories"""

from __future__ import annotations


def parse_record_key(record_id):
    """Extract the key part from a SurrealDB record ID (RecordID object or string)"""
    # Handle RecordID object from surrealdb SDK
    if hasattr(record_id, "id") and hasattr(record_id, "table_name"):
        return record_id.id
    # Handle dict with 'id' key
    if isinstance(record_id, dict):
        return parse_record_key(record_id.get("id", ""))
    # Handle string format 'table:key'
    if isinstance(record_id, str) and ":" in record_id:
        key = record_id.split(":", 1)[1].strip("⟨⟩<>`")
        return int(key) if key.isdigit() else key
    return record_id


def first_record(result):
    """Normalize select() output, which may be a record or a list of records"""
    if not result:
        return None
    return result[0] if isinstance(result, list) else result


def count_of(result) -> int:
    """Read the value of a `SELECT count() ... GROUP ALL` query"""
    if result:
        return result[0].get("count", 0)
    return 0
