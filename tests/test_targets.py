import os
import unittest
from unittest.mock import patch

from svrender.models import load_site
from svrender.rendering.options import LINK_TARGET_TYPES
from svrender.rendering.renderer_iface import FileInfo, NodeTarget, StringTarget
from svrender.rendering.site_datasource import InMemorySiteDataSource
from svrender.rendering.targets import TargetResolver, is_external_url

FIXTURE = os.path.join(os.path.dirname(__file__), "fixtures", "site.json")


class RaisingLookup:
    def classify(self, target):
        raise RuntimeError("repository unavailable")

    def resolve_url(self, target):
        return "/x"

    def resolve_display_name(self, target):
        return None


class TestIsExternalUrl(unittest.TestCase):
    def test_hosts(self):
        hosts = ("www.example.com",)
        self.assertFalse(is_external_url("http://www.example.com/a", hosts))
        self.assertFalse(is_external_url("HTTPS://WWW.EXAMPLE.COM", hosts))
        self.assertTrue(is_external_url("https://other.org/", hosts))

    def test_non_http(self):
        self.assertFalse(is_external_url("/relative"))
        self.assertFalse(is_external_url("mailto:a@b.c"))
        self.assertFalse(is_external_url("#anchor"))


class TestTargetResolver(unittest.TestCase):
    def setUp(self):
        self.ds = InMemorySiteDataSource.from_document(load_site(FIXTURE))
        self.resolver = TargetResolver(self.ds, LINK_TARGET_TYPES, self.ds.site_hosts)

    def t(self, identifier):
        return self.ds.target(identifier)

    def test_renderable(self):
        self.assertTrue(self.resolver.is_renderable(self.t("start")))
        self.assertTrue(self.resolver.is_renderable(self.t("alice")))
        # A user without mail address
        self.assertFalse(self.resolver.is_renderable(self.t("ghost")))
        # Not a link target type
        self.assertFalse(self.resolver.is_renderable(self.t("normal")))
        self.assertFalse(self.resolver.is_renderable(NodeTarget("nope", "sv:page")))
        self.assertFalse(self.resolver.is_renderable(None))

    def test_string_targets(self):
        self.assertTrue(self.resolver.is_valid(StringTarget("#anchor")))
        self.assertFalse(self.resolver.is_renderable(StringTarget("  ")))

    def test_valid_is_subset_of_renderable(self):
        self.assertTrue(self.resolver.is_renderable(self.t("old")))
        self.assertFalse(self.resolver.is_valid(self.t("old")))
        self.assertFalse(self.resolver.is_valid(self.t("ghost")))

    def test_indirection_checks_referenced_target(self):
        self.assertTrue(self.resolver.is_valid(self.t("tostart")))
        self.assertTrue(self.resolver.is_valid(self.t("ext")))
        self.assertFalse(self.resolver.is_valid(self.t("toold")))

    def test_repeated_checks_use_cache(self):
        start = self.t("start")
        with patch.object(self.ds, "classify", wraps=self.ds.classify) as classify:
            self.resolver.is_renderable(start)
            self.resolver.is_valid(start)
            self.resolver.classify(start)
            self.assertEqual(classify.call_count, 1)

            # Single entry: another target evicts the first
            self.resolver.is_renderable(self.t("news"))
            self.resolver.is_renderable(start)
            self.assertEqual(classify.call_count, 3)

    def test_invalidate(self):
        start = self.t("start")
        self.resolver.is_valid(start)
        self.resolver.invalidate(keep=start)
        self.assertEqual(self.resolver.cached_target, start)
        self.resolver.invalidate(keep=self.t("news"))
        self.assertIsNone(self.resolver.cached_target)

    def test_lookup_errors_are_not_renderable(self):
        resolver = TargetResolver(RaisingLookup(), LINK_TARGET_TYPES)
        with self.assertLogs("svrender.rendering.targets", level="DEBUG"):
            self.assertFalse(resolver.is_renderable(NodeTarget("a", "sv:page")))

    def test_resolve(self):
        start = self.resolver.resolve(self.t("start"))
        self.assertEqual(start.url, "/start")
        self.assertFalse(start.external)

        ext = self.resolver.resolve(self.t("ext"))
        self.assertEqual(ext.url, "https://vendor.example.org/")
        self.assertTrue(ext.external)

        self.assertEqual(self.resolver.resolve(self.t("alice")).url, "mailto:alice@example.com")
        self.assertIsNone(self.resolver.resolve(StringTarget(" ")))

    def test_resolve_cross_site(self):
        partner = self.t("partner")
        self.assertEqual(self.resolver.resolve(partner).url, "/partner")
        self.assertEqual(
            self.resolver.resolve(partner, cross_site=True).url,
            "https://extranet.example.com/partner",
        )

    def test_resolve_file_info(self):
        report = self.resolver.resolve(self.t("report"))
        self.assertEqual(report.file_info, FileInfo("pdf", 12288, None))

    def test_display_name(self):
        self.assertEqual(self.resolver.display_name(self.t("news")), "News & Views")
        self.assertIsNone(self.resolver.display_name(StringTarget("/x")))


if __name__ == "__main__":
    unittest.main()
