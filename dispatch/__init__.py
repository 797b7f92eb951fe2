"""
dispatch/ - Dispatch Core
=========================
Maps inbound commands and button callbacks to handlers.
Holds the callback codec, both handler registries and the routers.
Nothing here talks to Telegram or the database directly.
"""
