"""
db/ - Persistence Plumbing
==========================
Connection pool, schema creation and the seed/clear script for the
races, users, favorites and chat history tables.
"""
