import os
import tempfile
import unittest

from typer.testing import CliRunner

from svrender.cli.main import app

FIXTURE = os.path.join(os.path.dirname(__file__), "fixtures", "site.json")


class TestCli(unittest.TestCase):
    def setUp(self):
        self.runner = CliRunner()

    def test_links_for_selected_nodes(self):
        result = self.runner.invoke(app, ["links", FIXTURE, "--node", "start", "-n", "news"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('<a href="/start" class="normal" title="Start">Start</a>', result.output)
        self.assertIn('href="/news"', result.output)
        self.assertNotIn("mailto:", result.output)

    def test_links_skip_unrenderable(self):
        result = self.runner.invoke(app, ["links", FIXTURE, "--font", "menu"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('class="menu"', result.output)
        self.assertIn("mailto:alice@example.com", result.output)
        self.assertNotIn("Ghost", result.output)

    def test_links_unknown_node(self):
        result = self.runner.invoke(app, ["links", FIXTURE, "--node", "nope"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Unknown node: nope", result.output)

    def test_links_page_to_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            out = os.path.join(tmp, "links.html")
            result = self.runner.invoke(app, ["links", FIXTURE, "--page", "-o", out])
            self.assertEqual(result.exit_code, 0, result.output)
            with open(out, encoding="utf-8") as f:
                self.assertTrue(f.read().startswith("<!doctype html>"))

    def test_images_scaled(self):
        result = self.runner.invoke(app, ["images", FIXTURE, "--scale", "400x300"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn('src="/images/logo.png?w=400&amp;h=200"', result.output)
        self.assertIn('alt="Company logo"', result.output)
        self.assertNotIn("diagram.svg", result.output)

    def test_images_bad_scale(self):
        result = self.runner.invoke(app, ["images", FIXTURE, "--scale", "big"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error:", result.output)

    def test_check(self):
        result = self.runner.invoke(app, ["check", FIXTURE])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("ghost", result.output)
        self.assertIn("14 nodes", result.output)

    def test_missing_site(self):
        result = self.runner.invoke(app, ["check", "does-not-exist.json"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error:", result.output)


if __name__ == "__main__":
    unittest.main()
