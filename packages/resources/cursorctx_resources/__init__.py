"""Resource-manager parsing and default cursor size resolution."""

from .models import RecognizedKey, ResourceTable, ScreenGeometry, SizeResolution, SizeSource
from .parser import MALFORMED_POLICIES, parse_resource_manager
from .size import explain_size, parse_c_int, resolve_size

__all__ = [
    "MALFORMED_POLICIES",
    "RecognizedKey",
    "ResourceTable",
    "ScreenGeometry",
    "SizeResolution",
    "SizeSource",
    "explain_size",
    "parse_c_int",
    "parse_resource_manager",
    "resolve_size",
]
