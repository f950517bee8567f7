"""Default cursor size heuristic.

Checked in order, first match wins:

1. ``XCURSOR_SIZE`` in the environment
2. ``Xcursor.size`` from RESOURCE_MANAGER
3. ``Xft.dpi * 16 / 72`` when the dpi is positive
4. the smaller screen dimension divided by 48

Numbers are read with :func:`parse_c_int`, so garbage becomes 0 and
negative values pass through untouched.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping

from .models import ResourceTable, ScreenGeometry, SizeResolution, SizeSource

ENV_CURSOR_SIZE = "XCURSOR_SIZE"

_C_INT = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")

_logger = logging.getLogger("cursorctx.resources")


def parse_c_int(text: str) -> int:
    """Parse like C ``atoi``: leading digits only, 0 when there are none."""
    match = _C_INT.match(text)
    if match is None:
        return 0
    return int(match.group(1))


def explain_size(
    table: ResourceTable,
    env: Mapping[str, str] | None,
    geometry: ScreenGeometry,
) -> SizeResolution:
    env = os.environ if env is None else env

    override = env.get(ENV_CURSOR_SIZE)
    if override is not None:
        result = SizeResolution(parse_c_int(override), SizeSource.ENVIRONMENT)
    elif table.cursor_size is not None:
        result = SizeResolution(parse_c_int(table.cursor_size), SizeSource.RESOURCE)
    else:
        result = None
        if table.font_dpi is not None:
            dpi = parse_c_int(table.font_dpi)
            if dpi > 0:
                result = SizeResolution(dpi * 16 // 72, SizeSource.DPI)
        if result is None:
            dim = geometry.height if geometry.height < geometry.width else geometry.width
            result = SizeResolution(dim // 48, SizeSource.SCREEN)

    _logger.debug(
        "cursor size %d from %s",
        result.size,
        result.source.value,
        extra={"event": "cursor_size_resolved"},
    )
    return result


def resolve_size(
    table: ResourceTable,
    env: Mapping[str, str] | None,
    geometry: ScreenGeometry,
) -> int:
    return explain_size(table, env, geometry).size
