"""Infrastructure layer — document host and folder tree enumeration.

The host is the only place that touches the filesystem. Services talk to
it through the :class:`~paractl.infrastructure.host.DocumentHost` protocol
so an embedding application can supply its own storage backend.
"""
