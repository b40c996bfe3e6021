"""Netscape bookmark export of the navigation data."""

from .exporter import BookmarkExporter, BookmarkItem, export, render

__all__ = ["BookmarkExporter", "BookmarkItem", "export", "render"]
