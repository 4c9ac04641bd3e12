"""
Test cases for the Document model.

Tests focus on lookups, mutations and keeping the label index in sync.
"""

import unittest

from jsondoc.model.document import Document, Entry
from jsondoc.model.values import Value


def _doc(*pairs):
    document = Document()
    for label, obj in pairs:
        document.add(Entry(label, Value.of(obj)))
    return document


class TestDocumentQueries(unittest.TestCase):
    """Test read operations."""

    def setUp(self):
        self.doc = _doc(("a", 1), ("b", "x"), ("a", 2))

    def test_get_first_match(self):
        """Test get returns the first entry's value for duplicate labels."""
        self.assertEqual(self.doc.get("a"), Value.integer(1))
        self.assertEqual(self.doc.get("b"), Value.string("x"))

    def test_get_missing(self):
        """Test get returns None for absent labels."""
        self.assertIsNone(self.doc.get("missing"))
        self.assertIsNone(self.doc.get_entry("missing"))

    def test_get_entry(self):
        """Test get_entry returns the whole pair."""
        self.assertEqual(self.doc.get_entry("b"), Entry("b", Value.string("x")))

    def test_has_and_contains(self):
        """Test membership queries."""
        self.assertTrue(self.doc.has("a"))
        self.assertIn("b", self.doc)
        self.assertFalse(self.doc.has("c"))
        self.assertNotIn(3, self.doc)

    def test_entries_in_order(self):
        """Test entries keeps duplicates in insertion order."""
        entries = self.doc.entries()
        self.assertEqual([e.label for e in entries], ["a", "b", "a"])
        self.assertEqual(entries[2].value, Value.integer(2))

    def test_entries_is_a_copy(self):
        """Test mutating the snapshot leaves the document unchanged."""
        entries = self.doc.entries()
        entries.clear()
        self.assertEqual(len(self.doc), 3)

        nested = _doc(("l", [1]))
        nested.entries()[0].value.as_list().append(Value.integer(2))
        self.assertEqual(nested.get("l"), Value.list_of([Value.integer(1)]))

    def test_iteration_and_len(self):
        """Test iterating yields entries."""
        self.assertEqual(len(self.doc), 3)
        self.assertEqual([e.label for e in self.doc], ["a", "b", "a"])


class TestDocumentMutations(unittest.TestCase):
    """Test mutating operations and label index maintenance."""

    def test_add_then_remove(self):
        """Test has and get are cleared after removing the only entry."""
        for label in ("a", "", 'q"uote', "ünï"):
            with self.subTest(label=label):
                doc = Document()
                doc.add(Entry(label, Value.integer(1)))
                self.assertTrue(doc.has(label))

                self.assertTrue(doc.remove(label))
                self.assertFalse(doc.has(label))
                self.assertIsNone(doc.get(label))

    def test_remove_missing(self):
        """Test removing an absent label reports failure."""
        doc = _doc(("a", 1))
        self.assertFalse(doc.remove("b"))
        self.assertEqual(len(doc), 1)

    def test_remove_first_of_duplicates(self):
        """Test removing one duplicate keeps the label present."""
        doc = _doc(("a", 1), ("b", 2), ("a", 3))

        self.assertTrue(doc.remove("a"))
        self.assertTrue(doc.has("a"))
        self.assertEqual(doc.get("a"), Value.integer(3))
        self.assertEqual(doc.labels(), ["b", "a"])

        self.assertTrue(doc.remove("a"))
        self.assertFalse(doc.has("a"))

    def test_remove_preserves_order(self):
        """Test removal keeps the relative order of the rest."""
        doc = _doc(("a", 1), ("b", 2), ("c", 3))
        doc.remove("b")
        self.assertEqual(doc.labels(), ["a", "c"])

    def test_set_content(self):
        """Test replacing the first matching value in place."""
        doc = _doc(("a", 1), ("b", 2), ("a", 3))

        self.assertTrue(doc.set_content("a", Value.string("new")))
        self.assertEqual(doc.get("a"), Value.string("new"))
        self.assertEqual(doc.labels(), ["a", "b", "a"])
        self.assertEqual(doc.entries()[2].value, Value.integer(3))

    def test_set_content_missing(self):
        """Test set_content on an absent label."""
        doc = Document()
        self.assertFalse(doc.set_content("a", Value.null()))
        self.assertFalse(doc.has("a"))

    def test_set_content_requires_value(self):
        """Test set_content rejects non-Value payloads."""
        doc = _doc(("a", 1))
        with self.assertRaises(TypeError):
            doc.set_content("a", 5)

    def test_rename(self):
        """Test renaming updates the index for both labels."""
        doc = _doc(("a", 1), ("b", 2))

        self.assertTrue(doc.rename("a", "c"))
        self.assertFalse(doc.has("a"))
        self.assertTrue(doc.has("c"))
        self.assertEqual(doc.get("c"), Value.integer(1))
        self.assertEqual(doc.labels(), ["c", "b"])

    def test_rename_onto_existing_label(self):
        """Test renaming into a duplicate label keeps both enumerable."""
        doc = _doc(("a", 1), ("b", 2))
        doc.rename("b", "a")

        self.assertEqual(doc.labels(), ["a", "a"])
        doc.remove("a")
        self.assertTrue(doc.has("a"))
        self.assertEqual(doc.get("a"), Value.integer(2))

    def test_rename_missing(self):
        """Test renaming an absent label reports failure."""
        doc = Document()
        self.assertFalse(doc.rename("a", "b"))
        self.assertFalse(doc.has("b"))

    def test_index_matches_entries_after_mixed_mutations(self):
        """Test has agrees with the entry sequence after every mutation."""
        doc = Document()
        operations = [
            lambda: doc.add(Entry("a", Value.integer(1))),
            lambda: doc.add(Entry("a", Value.integer(2))),
            lambda: doc.rename("a", "b"),
            lambda: doc.remove("a"),
            lambda: doc.add(Entry("c", Value.null())),
            lambda: doc.rename("b", "c"),
            lambda: doc.remove("c"),
            lambda: doc.remove("c"),
        ]

        for operation in operations:
            operation()
            for label in ("a", "b", "c"):
                self.assertEqual(doc.has(label), label in doc.labels())

    def test_add_rejects_non_entry(self):
        """Test add only accepts Entry objects."""
        with self.assertRaises(TypeError):
            Document().add(("a", Value.integer(1)))

    def test_entry_label_is_immutable(self):
        """Test entry labels cannot be changed behind the index."""
        entry = Entry("a", Value.integer(1))
        with self.assertRaises(AttributeError):
            entry.label = "b"


class TestDocumentValueSemantics(unittest.TestCase):
    """Test equality, copying and conversion."""

    def test_structural_equality(self):
        """Test documents compare by their entries."""
        self.assertEqual(_doc(("a", [1, {"b": None}])), _doc(("a", [1, {"b": None}])))
        self.assertNotEqual(_doc(("a", 1)), _doc(("a", 1.0)))
        self.assertNotEqual(_doc(("a", 1), ("b", 2)), _doc(("b", 2), ("a", 1)))

    def test_copy_is_deep(self):
        """Test mutating a copy leaves the original untouched."""
        original = _doc(("n", {"k": [1]}))
        clone = original.copy()

        clone.get("n").as_document().add(Entry("z", Value.null()))
        clone.get("n").as_document().get("k").as_list().append(Value.integer(2))

        self.assertEqual(original, _doc(("n", {"k": [1]})))
        self.assertNotEqual(original, clone)

    def test_from_dict_and_to_dict(self):
        """Test conversion to and from plain Python objects."""
        data = {"a": 1, "b": [1.5, "x", None], "c": {"d": True}}
        doc = Document.from_dict(data)

        self.assertEqual(doc.labels(), ["a", "b", "c"])
        self.assertEqual(doc.to_dict(), data)

    def test_to_dict_first_duplicate_wins(self):
        """Test duplicates collapse the same way get resolves them."""
        self.assertEqual(_doc(("a", 1), ("a", 2)).to_dict(), {"a": 1})

    def test_constructor_with_entries(self):
        """Test building a document from a list of entries."""
        doc = Document([Entry("a", Value.integer(1)), Entry("a", Value.integer(2))])
        self.assertTrue(doc.has("a"))
        self.assertEqual(len(doc), 2)

    def test_unhashable(self):
        """Test documents and entries are mutable and therefore unhashable."""
        with self.assertRaises(TypeError):
            hash(Document())
        with self.assertRaises(TypeError):
            hash(Entry("a", Value.integer(1)))


class TestDocumentOwnership(unittest.TestCase):
    """Test documents never share structure with the caller."""

    def test_nested_document_is_copied(self):
        """Test editing a document after nesting it leaves the outer one alone."""
        inner = Document()
        doc = Document([Entry("n", Value.object_of(inner))])
        inner.add(Entry("x", Value.null()))

        self.assertEqual(len(doc.get("n").as_document()), 0)
        self.assertEqual(doc.render(), '{"n":{}}')

    def test_same_value_added_twice(self):
        """Test one value added under two labels becomes two nodes."""
        shared = Value.list_of()
        doc = Document()
        doc.add(Entry("a", shared))
        doc.add(Entry("b", shared))

        doc.get("a").as_list().append(Value.integer(1))
        shared.as_list().append(Value.integer(2))

        self.assertEqual(doc.render(), '{"a":[1],"b":[]}')

    def test_set_content_copies_value(self):
        """Test set_content stores a copy of the new value."""
        replacement = Value.list_of()
        doc = _doc(("a", 1))
        doc.set_content("a", replacement)
        replacement.as_list().append(Value.null())

        self.assertEqual(doc.get("a"), Value.list_of())

    def test_parsed_document_copy_is_independent(self):
        """Test copies of parsed documents do not alias nested lists."""
        doc = Document.from_string('{"a":[[1]],"b":{"c":[]}}')
        clone = doc.copy()
        clone.get("a").as_list()[0].as_list().append(Value.integer(2))
        clone.get("b").as_document().get("c").as_list().append(Value.null())

        self.assertEqual(doc.render(), '{"a":[[1]],"b":{"c":[]}}')


if __name__ == '__main__':
    unittest.main()
