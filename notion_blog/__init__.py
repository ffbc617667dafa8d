"""
Notion Blog.

A blog front-end that reads posts and page content from a Notion workspace.
"""

__version__ = "1.0.0"
