"""Tests for the Markup query layer."""

import unittest

from reports.markup import Markup, body_of, body_rows, cell_texts, header_cells, header_rows


TABLE_HTML = """
<table>
  <thead><tr><th>Name</th><th colspan="2">Dates</th></tr></thead>
  <tbody>
    <tr><td> Jane   Roe </td><td>1</td><td>2</td></tr>
    <tr><td>Max Poe</td><td>3</td><td>4</td></tr>
  </tbody>
</table>
"""

BARE_TABLE_HTML = """
<table>
  <tr><th>Name</th><th>Reason</th></tr>
  <tr><td>Jane</td><td>Moved</td></tr>
</table>
"""


class TestMarkupQueries(unittest.TestCase):
    def test_select_and_find(self):
        doc = Markup.parse(TABLE_HTML)
        self.assertEqual(len(doc.select("tbody tr")), 2)
        self.assertEqual(doc.select_one("th").clean_text(), "Name")
        self.assertIsNone(doc.select_one("h2"))
        self.assertEqual([m.name for m in doc.find_all("th", "td")][:3], ["th", "th", "td"])

    def test_labelled_cell_returns_next_sibling(self):
        doc = Markup.parse("<table><tr><th>Schedule:</th>\n<td>Mon 4:00 pm</td></tr></table>")
        self.assertEqual(doc.labelled_cell("Schedule:").clean_text(), "Mon 4:00 pm")
        self.assertIsNone(doc.labelled_cell("Zone:"))

    def test_closest_includes_self(self):
        doc = Markup.parse("<table><tr><td><h2>Doe, John</h2></td></tr></table>")
        h2 = doc.find("h2")
        self.assertEqual(h2.closest("tr").name, "tr")
        self.assertEqual(h2.closest("h2"), h2)
        self.assertIsNone(h2.closest("section"))

    def test_attr_and_colspan(self):
        doc = Markup.parse('<td class="a b" colspan="x"></td><td colspan="3"></td>')
        first, second = doc.find_all("td")
        self.assertEqual(first.attr("class"), "a b")
        self.assertEqual(first.attr("missing"), "")
        self.assertEqual(first.colspan(), 1)
        self.assertEqual(second.colspan(), 3)

    def test_visible_text_skips_script_style_and_comments(self):
        doc = Markup.parse(
            "<body><script>var x = 'Location: Hidden';</script><style>p{}</style>"
            "<!-- Location: Comment --><p>Location: Shown</p></body>"
        )
        text = doc.visible_text("\n")
        self.assertIn("Location: Shown", text)
        self.assertNotIn("Hidden", text)
        self.assertNotIn("Comment", text)

    def test_lines(self):
        doc = Markup.parse("<td>Smith, Jane<br>  Doe, John (sub) \n</td>")
        self.assertEqual(doc.find("td").lines(), ["Smith, Jane", "Doe, John (sub)"])

    def test_body_of_falls_back_to_document(self):
        doc = Markup.parse("<p>fragment</p>")
        self.assertEqual(body_of(doc), doc)


class TestTableHelpers(unittest.TestCase):
    def test_rows_with_thead(self):
        table = Markup.parse(TABLE_HTML).find("table")
        self.assertEqual(len(header_rows(table)), 1)
        self.assertEqual(len(body_rows(table)), 2)
        self.assertEqual([c.clean_text() for c in header_cells(table)], ["Name", "Dates"])
        self.assertEqual(cell_texts(body_rows(table)[0]), ["Jane Roe", "1", "2"])

    def test_rows_without_thead(self):
        table = Markup.parse(BARE_TABLE_HTML).find("table")
        self.assertEqual(len(body_rows(table)), 2)
        self.assertEqual([c.clean_text() for c in header_cells(table)], ["Name", "Reason"])
        self.assertEqual(cell_texts(table.find_all("tr")[0], "th"), ["Name", "Reason"])


if __name__ == "__main__":
    unittest.main()
