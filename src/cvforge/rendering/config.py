"""Rendering settings: edit to customize page format and process budgets."""

# Per-stage budgets for the headless browser, in seconds.
LAUNCH_TIMEOUT = 30.0
CONTENT_TIMEOUT = 15.0
PDF_TIMEOUT = 20.0

PAGE_FORMAT = "A4"
PAGE_MARGIN = {"top": "0", "right": "0", "bottom": "0", "left": "0"}

HTML_TEMPLATE = "cv.html.j2"
STYLESHEET = "style.css"
