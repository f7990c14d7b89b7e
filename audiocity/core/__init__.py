"""
Core utilities shared across the AudioCity service.

This package hosts configuration (env vars, storage paths), logging setup and
credential hashing. Repositories, services and routers depend on these
primitives instead of reading os.environ or configuring sinks themselves.
"""
