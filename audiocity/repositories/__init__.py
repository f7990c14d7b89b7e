"""
Persistence adapters.

Each repository owns one subtree of the store root and keeps the mapping
between in-memory entities and their JSON documents. Services and routers go
through these classes and never touch the files directly.
"""
