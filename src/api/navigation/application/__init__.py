"""Navigation application layer.

Orchestrates the tenant context resolver, menu resolution, route guarding
and tenant-scoped navigation state.
"""
