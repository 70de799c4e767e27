import os
import unittest

from svrender.models import load_site
from svrender.rendering.fallbacks import TextFallbackResolver, lenient_truncate
from svrender.rendering.options import (
    IMAGE_TYPES,
    LINK_TARGET_TYPES,
    ImageRendererDefaults,
    LinkRendererDefaults,
)
from svrender.rendering.renderer_iface import StringTarget
from svrender.rendering.site_datasource import InMemorySiteDataSource
from svrender.rendering.state import ImageRenderState, LinkRenderState
from svrender.rendering.targets import TargetResolver

FIXTURE = os.path.join(os.path.dirname(__file__), "fixtures", "site.json")


class TestLenientTruncate(unittest.TestCase):
    def test_cuts_at_word_boundary(self):
        self.assertEqual(lenient_truncate("The quick brown fox", 10), "The quick")
        self.assertEqual(lenient_truncate("The quick brown fox", 10, "..."), "The quick...")

    def test_short_text_unchanged(self):
        self.assertEqual(lenient_truncate("Short", 10), "Short")

    def test_single_long_word(self):
        self.assertEqual(lenient_truncate("Supercalifragilistic", 5), "Super")


class TestLinkFallbacks(unittest.TestCase):
    def setUp(self):
        self.ds = InMemorySiteDataSource.from_document(load_site(FIXTURE))
        self.fallbacks = TextFallbackResolver(TargetResolver(self.ds, LINK_TARGET_TYPES))
        self.state = LinkRenderState.from_defaults(LinkRendererDefaults())
        self.state.target = self.ds.target("news")

    def test_text_chain(self):
        self.assertEqual(self.fallbacks.resolve_text(self.state), "News & Views")
        self.state.text = "Read"
        self.assertEqual(self.fallbacks.resolve_text(self.state), "Read")
        self.state.target = StringTarget("/x")
        self.state.text = None
        self.assertEqual(self.fallbacks.resolve_text(self.state), "")

    def test_title_chain(self):
        self.state.text = "Read"
        self.assertEqual(self.fallbacks.resolve_title(self.state), "Read")
        self.state.settings.use_auto_title = True
        self.assertEqual(self.fallbacks.resolve_title(self.state), "News & Views")
        self.state.title = "Explicit"
        self.assertEqual(self.fallbacks.resolve_title(self.state), "Explicit")

    def test_blank_title_falls_through(self):
        self.state.title = "   "
        self.assertEqual(self.fallbacks.resolve_title(self.state, "Derived"), "Derived")

    def test_auto_title_truncated(self):
        fallbacks = TextFallbackResolver(
            TargetResolver(self.ds, LINK_TARGET_TYPES), max_auto_title_length=4
        )
        self.state.settings.use_auto_title = True
        self.assertEqual(fallbacks.resolve_title(self.state), "News")


class TestImageFallbacks(unittest.TestCase):
    def setUp(self):
        self.ds = InMemorySiteDataSource.from_document(load_site(FIXTURE))
        self.fallbacks = TextFallbackResolver(
            TargetResolver(self.ds, IMAGE_TYPES), metadata=self.ds
        )
        self.state = ImageRenderState.from_defaults(ImageRendererDefaults())
        self.state.image = self.ds.target("logo")

    def test_alt_chain(self):
        self.assertEqual(self.fallbacks.resolve_alt_or_description(self.state), "")
        self.state.settings.use_auto_description = True
        self.assertEqual(
            self.fallbacks.resolve_alt_or_description(self.state), "Company logo"
        )
        self.state.description = "Our logo"
        self.assertEqual(self.fallbacks.resolve_alt_or_description(self.state), "Our logo")

    def test_title_only_when_enabled(self):
        self.state.description = "Our logo"
        self.assertIsNone(self.fallbacks.resolve_image_title(self.state))
        self.state.settings.use_title_rendering = True
        self.assertEqual(self.fallbacks.resolve_image_title(self.state), "Our logo")

    def test_auto_title_uses_metadata(self):
        self.state.settings.use_title_rendering = True
        self.assertEqual(self.fallbacks.resolve_image_title(self.state), "")
        self.state.settings.use_auto_title = True
        self.assertEqual(self.fallbacks.resolve_image_title(self.state), "Company logo")


if __name__ == "__main__":
    unittest.main()
