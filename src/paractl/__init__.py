"""paractl — keep vault folders and PARA frontmatter tags in sync."""

__version__ = "0.1.0"
