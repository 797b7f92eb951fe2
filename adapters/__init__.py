"""
adapters/ - Platform Layer
==========================
Bindings between chat platforms and the dispatch core. An adapter turns
platform events into CommandInput, hands them to the routers and renders
the resulting CommandOutput with the platform's own API.
"""
