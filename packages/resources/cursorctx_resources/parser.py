"""Parser for the root window RESOURCE_MANAGER property blob.

Only exact, top-level ``key: value`` lines for the keys in
:class:`RecognizedKey` are kept. This is not an Xrm database: there is no
wildcard matching, no precedence and no line continuation.

By default a line without a ``:`` stops the scan and only the values seen
before it are returned. This keeps compatibility with libxcb-cursor, which
gives up on the first malformed line. ``malformed="skip"`` ignores such
lines instead.
"""

from __future__ import annotations

import logging

from .models import RecognizedKey, ResourceTable

MALFORMED_POLICIES = ("abort", "skip")

# C isspace() in the "C" locale.
_C_WHITESPACE = " \t\n\v\f\r"

_logger = logging.getLogger("cursorctx.resources")


def _decode(raw: bytes) -> str:
    # The property is copied as a C string, so a NUL ends it early.
    end = raw.find(b"\0")
    if end != -1:
        raw = raw[:end]
    return raw.decode("utf-8", errors="replace")


def parse_resource_manager(raw: bytes | None, *, malformed: str = "abort") -> ResourceTable:
    if malformed not in MALFORMED_POLICIES:
        raise ValueError(f"malformed must be one of {MALFORMED_POLICIES}, got {malformed!r}")
    if not raw:
        return ResourceTable()

    values: dict[str, str] = {}
    for line_no, line in enumerate(_decode(bytes(raw)).split("\n"), start=1):
        if not line:
            continue
        name, sep, value = line.partition(":")
        if not sep:
            if malformed == "skip":
                _logger.debug("skipping malformed resource line %d", line_no, extra={"event": "resource_line_skipped"})
                continue
            _logger.debug("malformed resource line %d, parse stopped", line_no, extra={"event": "resource_parse_aborted"})
            break
        try:
            key = RecognizedKey(name)
        except ValueError:
            continue
        values[ResourceTable.field_for(key)] = value.lstrip(_C_WHITESPACE)

    return ResourceTable(**values)
