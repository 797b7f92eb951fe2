"""
repositories/ - SQL Access
==========================
One class per table group (races, users, favorites, chat history).
Repositories run parameterized SQL through `db.connection.transaction()`
and hand back model dataclasses, never raw rows.
"""
