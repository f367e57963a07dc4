"""
Restaurant catalog.

The catalog is read-only for the application: restaurants are seeded into
the store from a CSV and listed back, optionally narrowed by simple filters.
"""
