"""Leaf helpers for photos, dates and section titles."""

from cvforge.formatting.dates import compute_duration, format_month_year
from cvforge.formatting.images import detect_mime_type, image_descriptor, to_data_url
from cvforge.formatting.locales import LOCALES, resolve_locale

__all__ = [
    "LOCALES",
    "compute_duration",
    "detect_mime_type",
    "format_month_year",
    "image_descriptor",
    "resolve_locale",
    "to_data_url",
]
