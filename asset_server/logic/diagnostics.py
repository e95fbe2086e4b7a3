"""In-band error payloads for assets that failed to build.

A browser requesting a broken script or stylesheet gets a 200 whose body
surfaces the build error where the asset would have been: a script that
throws, or a stylesheet that blanks the page and prints the error.
"""

from __future__ import annotations

import json
import traceback
from string import Template

JAVASCRIPT_CONTENT_TYPE = "application/javascript"
CSS_CONTENT_TYPE = "text/css; charset=utf-8"

_CSS_TEMPLATE = Template(
    """html {
  padding: 18px 36px;
}

head {
  display: block;
}

body {
  margin: 0;
  padding: 0;
}

body > * {
  display: none !important;
}

head:after, body:before, body:after {
  display: block !important;
}

head:after {
  font-family: sans-serif;
  font-size: large;
  font-weight: bold;
  content: "Error compiling CSS asset";
}

body:before, body:after {
  font-family: monospace;
  white-space: pre-wrap;
}

body:before {
  font-weight: bold;
  content: "$message";
}

body:after {
  content: "$backtrace";
}
"""
)


def error_summary(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


def first_frame(exc: BaseException) -> str:
    """Return the frame the exception was raised from as ``file:line:in name``."""
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    if not frames:
        return "(unknown)"
    frame = frames[-1]
    return f"{frame.filename}:{frame.lineno}:in {frame.name}"


def escape_css_content(content: str) -> str:
    """Escape text for use inside a CSS ``content: "..."`` string."""
    return (
        content.replace("\\", "\\005c ")
        .replace("\n", "\\000a ")
        .replace('"', "\\0022 ")
        .replace("/", "\\002f ")
    )


def javascript_exception_body(exc: BaseException) -> bytes:
    err = f"{error_summary(exc)}\n  (in {first_frame(exc)})"
    return f"throw Error({json.dumps(err)})".encode("utf-8")


def css_exception_body(exc: BaseException) -> bytes:
    body = _CSS_TEMPLATE.substitute(
        message=escape_css_content(f"\n{error_summary(exc)}"),
        backtrace=escape_css_content(f"\n  {first_frame(exc)}"),
    )
    return body.encode("utf-8")


__all__ = [
    "JAVASCRIPT_CONTENT_TYPE",
    "CSS_CONTENT_TYPE",
    "error_summary",
    "first_frame",
    "escape_css_content",
    "javascript_exception_body",
    "css_exception_body",
]
