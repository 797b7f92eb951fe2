"""
middleware/ - Cross-cutting hooks
=================================
Hooks the command router runs around every handler.
"""
