"""Read-only access and digest generation for the Hawaii Disco article archive.

The package exposes the archive reader, the digest pipeline and the note sink
used by the command line host.
"""

__all__: list[str] = []
