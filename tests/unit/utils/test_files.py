"""
Test cases for the file helpers.

Tests focus on separating I/O failures from format failures.
"""

import os
import tempfile
import unittest

from jsondoc.model.document import Document, Entry
from jsondoc.model.values import Value
from jsondoc.security.exceptions import DocumentIOError, LexError, ParseError
from jsondoc.utils.files import read_document, write_document


class TestReadDocument(unittest.TestCase):
    """Test reading documents from disk."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmp.name

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name, data):
        path = os.path.join(self.tmpdir, name)
        with open(path, "wb") as fp:
            fp.write(data)
        return path

    def test_read_valid_file(self):
        """Test a valid file parses into a document."""
        path = self._write("doc.json", '{"a": [1, 2], "b": "é"}\n'.encode("utf-8"))
        doc = read_document(path)

        self.assertEqual(doc.labels(), ["a", "b"])
        self.assertEqual(doc.get("b"), Value.string("é"))
        self.assertEqual(Document.from_file(path), doc)

    def test_missing_file(self):
        """Test a missing file raises DocumentIOError, not a format error."""
        path = os.path.join(self.tmpdir, "missing.json")
        with self.assertRaises(DocumentIOError) as cm:
            read_document(path)

        self.assertEqual(cm.exception.path, path)
        self.assertIsInstance(cm.exception.cause, FileNotFoundError)
        self.assertIn("Cannot read", str(cm.exception))

    def test_directory_path(self):
        """Test reading a directory is an I/O failure."""
        with self.assertRaises(DocumentIOError):
            read_document(self.tmpdir)

    def test_malformed_content(self):
        """Test bad content raises format errors."""
        path = self._write("bad.json", b'{"a":}')
        with self.assertRaises(ParseError):
            read_document(path)

        path = self._write("bad_encoding.json", b'{"a":"\xfe"}')
        with self.assertRaises(LexError):
            read_document(path)


class TestWriteDocument(unittest.TestCase):
    """Test writing documents to disk."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmpdir = self._tmp.name
        self.doc = Document([Entry("a", Value.list_of([Value.integer(1)]))])

    def tearDown(self):
        self._tmp.cleanup()

    def test_write_and_read_back(self):
        """Test written files contain the rendered text."""
        path = os.path.join(self.tmpdir, "out.json")

        self.assertTrue(write_document(self.doc, path))
        with open(path, encoding="utf-8") as fp:
            self.assertEqual(fp.read(), '{"a":[1]}')
        self.assertEqual(read_document(path), self.doc)

    def test_write_indented(self):
        """Test the indent option is applied to the file."""
        path = os.path.join(self.tmpdir, "pretty.json")

        self.assertTrue(self.doc.write_to_file(path, indent="\t"))
        with open(path, encoding="utf-8") as fp:
            self.assertEqual(fp.read(), '{\n\t"a": [\n\t\t1\n\t]\n}')

    def test_write_failure_reports_false(self):
        """Test an unwritable path returns False and logs a warning."""
        path = os.path.join(self.tmpdir, "no", "such", "dir", "out.json")

        with self.assertLogs("jsondoc.utils.files", level="WARNING") as logs:
            self.assertFalse(write_document(self.doc, path))
        self.assertIn("Failed to write document", logs.output[0])


if __name__ == '__main__':
    unittest.main()
