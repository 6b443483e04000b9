import unittest

from bson import ObjectId

from repo_service.services.repo_service import is_valid_identifier, normalize_repo_name


class TestNormalizeRepoName(unittest.TestCase):

    def test_examples(self):
        self.assertEqual(normalize_repo_name("My Repo"), "my-repo")
        self.assertEqual(normalize_repo_name("a   b"), "a-b")
        self.assertEqual(normalize_repo_name("Foo--Bar"), "foo-bar")
        self.assertEqual(normalize_repo_name("Test Repo"), "test-repo")

    def test_space_next_to_hyphen_collapses(self):
        self.assertEqual(normalize_repo_name("foo - bar"), "foo-bar")
        self.assertEqual(normalize_repo_name(" lead and trail "), "-lead-and-trail-")

    def test_only_literal_spaces_are_replaced(self):
        self.assertEqual(normalize_repo_name("Tab\tSeparated"), "tab\tseparated")
        self.assertEqual(normalize_repo_name("new\nline"), "new\nline")

    def test_idempotent(self):
        samples = ["", "My Repo", "a   b", "Foo--Bar", "--x  --  Y--", "Tab\t Mixed ", "ÄÖ Ü"]
        for sample in samples:
            once = normalize_repo_name(sample)
            self.assertEqual(normalize_repo_name(once), once, sample)


class TestIsValidIdentifier(unittest.TestCase):

    def test_object_id_hex_is_identifier(self):
        self.assertTrue(is_valid_identifier(str(ObjectId())))
        self.assertTrue(is_valid_identifier("507f1f77bcf86cd799439011"))
        self.assertTrue(is_valid_identifier("507F1F77BCF86CD799439011"))

    def test_other_strings_are_names(self):
        self.assertFalse(is_valid_identifier("my-repo"))
        self.assertFalse(is_valid_identifier(""))
        self.assertFalse(is_valid_identifier("507f1f77bcf86cd79943901"))  # 23 chars
        self.assertFalse(is_valid_identifier("507f1f77bcf86cd7994390111"))  # 25 chars
        self.assertFalse(is_valid_identifier("zzzzzzzzzzzzzzzzzzzzzzzz"))
        self.assertFalse(is_valid_identifier("twelve-chars"))

    def test_whitespace_padded_hex_is_a_name(self):
        # bytes.fromhex would skip the spaces and decode 11 bytes
        self.assertFalse(is_valid_identifier("aabbccddeeff0011223344  "))
        self.assertFalse(is_valid_identifier(" aabbccddeeff00112233445"))
        self.assertFalse(is_valid_identifier("aabbccddeeff 0011223344 "))
        self.assertFalse(is_valid_identifier("507f1f77bcf86cd799439011\n"))


if __name__ == "__main__":
    unittest.main()
