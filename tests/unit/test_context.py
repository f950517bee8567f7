import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "resources"))
sys.path.insert(0, str(ROOT / "packages" / "display_protocol"))

from cursorctx_core.config import build_options
from cursorctx_display import ContextError, RenderFormats, TransportError, new_context, release_context
from cursorctx_display.models import DirectFormat, PictFormatInfo, PictType
from cursorctx_resources import ScreenGeometry, SizeSource

ARGB32 = PictFormatInfo(id=0x24, type=PictType.DIRECT, depth=32, direct=DirectFormat(16, 0xFF, 8, 0xFF, 0, 0xFF, 24, 0xFF))


class FakeTransport:
    def __init__(self, blob=None, width=1920, height=1080, fail=()):
        self.blob = blob
        self.geometry = ScreenGeometry(root=0x1E5, width=width, height=height)
        self.fail = set(fail)
        self.property_reads = []
        self.fonts = []

    def _maybe_fail(self, name):
        if name in self.fail:
            raise TransportError(f"{name} failed")

    def root_geometry(self):
        self._maybe_fail("geometry")
        return self.geometry

    def read_property(self, root, max_length):
        self._maybe_fail("property")
        self.property_reads.append((root, max_length))
        return self.blob

    def query_render_formats(self):
        self._maybe_fail("formats")
        return RenderFormats(formats=(ARGB32,), argb32=ARGB32)

    def generate_id(self):
        self._maybe_fail("id")
        return 0x400001

    def open_font(self, fid, name):
        self._maybe_fail("font")
        self.fonts.append((fid, name))


class CursorContextTests(unittest.TestCase):
    def test_builds_from_resources(self):
        t = FakeTransport(blob=b"Xcursor.theme: Adwaita\nXcursor.size: 32\n")
        ctx = new_context(t, env={})
        self.assertEqual(ctx.theme_name, "Adwaita")
        self.assertEqual(ctx.size, 32)
        self.assertEqual(ctx.size_source, SizeSource.RESOURCE)
        self.assertEqual(ctx.root, 0x1E5)
        self.assertEqual(ctx.cursor_font, 0x400001)
        self.assertEqual(ctx.format_handle.argb32, ARGB32)
        self.assertEqual(t.property_reads, [(0x1E5, 16 * 1024)])
        self.assertEqual(t.fonts, [(0x400001, "cursor")])

    def test_environment_override(self):
        ctx = new_context(FakeTransport(blob=b"Xcursor.size: 32\n"), env={"XCURSOR_SIZE": "40"})
        self.assertEqual(ctx.size, 40)
        self.assertEqual(ctx.size_source, SizeSource.ENVIRONMENT)

    def test_absent_property_uses_screen(self):
        ctx = new_context(FakeTransport(blob=None), env={})
        self.assertTrue(ctx.resources.is_empty)
        self.assertIsNone(ctx.theme_name)
        self.assertEqual(ctx.size, 22)

    def test_transport_failures_become_absent_data(self):
        t = FakeTransport(blob=b"Xcursor.size: 32\n", fail=("property", "formats", "font"))
        with self.assertLogs("cursorctx.display", level="WARNING") as logs:
            ctx = new_context(t, env={})
        self.assertEqual(len(logs.records), 3)
        self.assertTrue(ctx.resources.is_empty)
        self.assertIsNone(ctx.format_handle)
        self.assertEqual(ctx.cursor_font, 0x400001)
        self.assertEqual(ctx.size, 22)

    def test_id_failure_skips_font(self):
        t = FakeTransport(fail=("id",))
        with self.assertLogs("cursorctx.display", level="WARNING"):
            ctx = new_context(t, env={})
        self.assertIsNone(ctx.cursor_font)
        self.assertEqual(t.fonts, [])

    def test_missing_screen_is_fatal(self):
        with self.assertRaises(ContextError):
            new_context(FakeTransport(fail=("geometry",)), env={})

    def test_options_applied(self):
        t = FakeTransport(blob=b"Xcursor.theme: Foo\nbadline\nXcursor.size: 48\n")
        opts = build_options({"malformed_lines": "skip", "property_max_length": 256, "cursor_font": "cursor2"})
        ctx = new_context(t, options=opts, env={})
        self.assertEqual(ctx.size, 48)
        self.assertEqual(t.property_reads, [(0x1E5, 256)])
        self.assertEqual(t.fonts, [(0x400001, "cursor2")])

    def test_release(self):
        ctx = new_context(FakeTransport(blob=b"Xcursor.theme: Foo\n"), env={})
        release_context(ctx)
        self.assertTrue(ctx.released)
        self.assertIsNone(ctx.resources)
        self.assertIsNone(ctx.theme_name)
        self.assertIsNone(ctx.format_handle)
        self.assertEqual(ctx.size, 22)

    def test_release_none_is_noop(self):
        release_context(None)

    def test_context_manager_releases(self):
        with new_context(FakeTransport(blob=b"Xft.dpi: 144\n"), env={}) as ctx:
            self.assertFalse(ctx.released)
            self.assertEqual(ctx.size, 32)
        self.assertTrue(ctx.released)


if __name__ == "__main__":
    unittest.main()
