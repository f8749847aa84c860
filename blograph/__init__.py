"""BloGraph: an in-memory users/posts/comments graph with referential integrity."""

__version__ = "0.1.0"
