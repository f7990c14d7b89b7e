"""
High-level use cases for the AudioCity service.

`library` wires the repositories together over one store root and
`youtube` acquires media for new songs. Routers receive a MediaLibrary
through app.state instead of building repositories themselves.
"""
