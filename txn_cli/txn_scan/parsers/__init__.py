"""Readers that turn saved pages into raw tables."""

from __future__ import annotations

from .html_loader import HtmlDocument, load_html_document, parse_html_document, parse_html_tables

__all__ = ["HtmlDocument", "load_html_document", "parse_html_document", "parse_html_tables"]
