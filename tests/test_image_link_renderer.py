import os
import unittest

from svrender.models import load_site
from svrender.rendering.image_link_renderer import ImageLinkRenderer
from svrender.rendering.image_renderer import ImageRenderer
from svrender.rendering.link_renderer import LinkRenderer
from svrender.rendering.markup import RenderPhase
from svrender.rendering.site_datasource import InMemoryImageScaler, InMemorySiteDataSource

FIXTURE = os.path.join(os.path.dirname(__file__), "fixtures", "site.json")


class TestImageLinkRenderer(unittest.TestCase):
    def setUp(self):
        self.ds = InMemorySiteDataSource.from_document(load_site(FIXTURE))
        self.renderer = ImageLinkRenderer(LinkRenderer(self.ds), ImageRenderer(self.ds, self.ds))
        self.renderer.image_renderer.clear_source_set_mode()

    def test_linked_image(self):
        self.renderer.link_renderer.update(self.ds.target("start"), "normal")
        self.renderer.image_renderer.set_image(self.ds.target("logo"))
        self.assertEqual(
            self.renderer.render(),
            '<a href="/start" class="normal"><img src="/images/logo.png" '
            'alt="Company logo" class="sv-noborder" style="border:none"></a>',
        )

    def test_thumbnail_loop_without_font_class(self):
        logo = self.ds.target("logo")
        self.renderer.image_renderer.update(logo)
        self.renderer.link_renderer.update(logo)
        self.assertEqual(self.renderer.phase, RenderPhase.PARTIAL)
        self.assertEqual(
            self.renderer.render(),
            '<a href="/images/logo.png"><img src="/images/logo.png" '
            'alt="Company logo" class="sv-noborder" style="border:none"></a>',
        )
        self.assertEqual(self.renderer.phase, RenderPhase.RENDERED)

    def test_explicit_title_kept(self):
        self.renderer.link_renderer.update(self.ds.target("start"), "normal", title="Home")
        self.renderer.image_renderer.set_image(self.ds.target("logo"))
        self.assertTrue(self.renderer.render().startswith('<a href="/start" class="normal" title="Home">'))

    def test_missing_image(self):
        self.renderer.link_renderer.update(self.ds.target("start"), "normal")
        self.assertEqual(self.renderer.phase, RenderPhase.EMPTY)
        self.assertEqual(self.renderer.render(), "")

    def test_unscalable_image_renders_empty(self):
        self.renderer.link_renderer.update(self.ds.target("start"), "normal")
        self.renderer.image_renderer.set_image(self.ds.target("diagram"))
        self.renderer.image_renderer.set_image_scaler(InMemoryImageScaler(self.ds, 10, 10))
        self.assertEqual(self.renderer.render(), "")

    def test_phase_follows_owned_renderers(self):
        self.renderer.link_renderer.update(self.ds.target("start"), "normal")
        self.renderer.image_renderer.set_image(self.ds.target("logo"))
        self.assertEqual(self.renderer.phase, RenderPhase.PARTIAL)
        self.renderer.render()
        self.assertEqual(self.renderer.phase, RenderPhase.RENDERED)
        self.renderer.link_renderer.set_style("x")
        self.assertEqual(self.renderer.phase, RenderPhase.PARTIAL)


if __name__ == "__main__":
    unittest.main()
