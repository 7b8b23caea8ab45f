"""
query/ - Statement Building
===========================
Composes optional filter predicates, ordering and pagination into a single
parameterized statement. Knows nothing about connections.
"""
