"""
Document store access layer.

Responsibilities:
- Expose the StoreClient primitives (find_one, put, query_by_partition, scan).
- Map the logical collections (users, restaurants, reviews) to tables.
- Translate every backend failure into StoreUnavailable.
"""
