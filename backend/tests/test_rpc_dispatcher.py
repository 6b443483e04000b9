import unittest
from unittest.mock import MagicMock, patch

from bson import ObjectId

from fakes import InMemoryRepoStore
from repo_service.dtos import CreateRepoRequest, IdentifierRequest, PrivateRepoRequest
from repo_service.exceptions import DeadlineExceededError, InvalidArgumentError, NotFoundError
from repo_service.rpc.dispatcher import RepoRpcDispatcher
from repo_service.rpc.status import RpcStatus, http_status_for_exception
from repo_service.services.repo_service import RepoService

OWNER_ID = "507f1f77bcf86cd799439011"


class TestRepoRpcDispatcher(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryRepoStore()
        self.dispatcher = RepoRpcDispatcher(
            RepoService(self.store), default_page_size=3, max_page_size=4
        )

    def _create(self, name="Test Repo", owner_id=OWNER_ID):
        return self.dispatcher.create_repo(
            CreateRepoRequest(name=name, description="d", owner_id=owner_id)
        )

    def test_create_returns_private_projection(self):
        created = self._create()

        self.assertTrue(ObjectId.is_valid(created.id))
        self.assertEqual(created.name, "test-repo")
        self.assertEqual(created.owner_id, OWNER_ID)
        self.assertIsInstance(created.created_at, str)
        self.assertTrue(created.created_at.endswith("+00:00"))

    def test_private_and_public_get(self):
        created = self._create()
        request = IdentifierRequest(repo_identifier=created.id)

        private = self.dispatcher.get_private_repo(request)
        public = self.dispatcher.get_public_repo(request)

        self.assertEqual(private.owner_id, OWNER_ID)
        self.assertEqual(public.id, created.id)
        self.assertNotIn("owner_id", public.model_dump())
        self.assertNotIn(OWNER_ID, public.model_dump_json())

    def test_list_projections(self):
        for i in range(3):
            self._create(name=f"repo {i}")

        private = self.dispatcher.get_private_repos(IdentifierRequest(repo_identifier=OWNER_ID))
        public = self.dispatcher.get_public_repos(IdentifierRequest(repo_identifier="repo-1"))

        self.assertEqual(len(private.repos), 3)
        self.assertTrue(all(r.owner_id == OWNER_ID for r in private.repos))
        self.assertEqual([r.name for r in public.repos], ["repo-1"])
        self.assertNotIn(OWNER_ID, public.model_dump_json())

    def test_page_size_defaults_and_clamps(self):
        service = MagicMock()
        service.find_all_by_identifier.return_value = []
        dispatcher = RepoRpcDispatcher(service, default_page_size=3, max_page_size=4)

        dispatcher.get_private_repos(IdentifierRequest(repo_identifier="x"))
        dispatcher.get_public_repos(IdentifierRequest(repo_identifier="x", page=2, page_size=50))

        first, second = service.find_all_by_identifier.call_args_list
        self.assertEqual(first.args, ("x", 0, 3))
        self.assertEqual(second.args, ("x", 2, 4))

    def test_update_ignores_owner_change(self):
        created = self._create()

        updated = self.dispatcher.update_repo(
            PrivateRepoRequest(
                id=created.id,
                name="renamed",
                description="new",
                owner_id="someone-else",
            )
        )

        self.assertEqual(updated.name, "renamed")
        self.assertEqual(updated.description, "new")
        self.assertEqual(updated.owner_id, OWNER_ID)
        self.assertEqual(updated.created_at, created.created_at)

    def test_update_rejects_malformed_id(self):
        with self.assertRaises(InvalidArgumentError):
            self.dispatcher.update_repo(PrivateRepoRequest(id="nope", name="x"))
        with self.assertRaises(InvalidArgumentError):
            self.dispatcher.update_repo(
                PrivateRepoRequest(id="aabbccddeeff0011223344  ", name="x")
            )

    def test_delete_by_name_then_missing(self):
        created = self._create()

        self.dispatcher.delete_repo(IdentifierRequest(repo_identifier="test-repo"))

        with self.assertRaises(NotFoundError):
            self.dispatcher.get_private_repo(IdentifierRequest(repo_identifier=created.id))
        with self.assertRaises(NotFoundError):
            self.dispatcher.delete_repo(IdentifierRequest(repo_identifier=created.id))


class TestDeleteRepoDeadline(unittest.TestCase):

    def setUp(self):
        self.service = MagicMock()
        self.dispatcher = RepoRpcDispatcher(self.service)
        self.request = IdentifierRequest(repo_identifier="test-repo")

    @patch("repo_service.rpc.dispatcher.time")
    def test_delete_gets_what_is_left_after_lookup(self, mock_time):
        mock_time.monotonic.side_effect = [100.0, 100.4]

        self.dispatcher.delete_repo(self.request, timeout=1.0)

        self.service.find_by_identifier.assert_called_once_with("test-repo", timeout=1.0)
        _, kwargs = self.service.delete.call_args
        self.assertAlmostEqual(kwargs["timeout"], 0.6)

    @patch("repo_service.rpc.dispatcher.time")
    def test_lookup_using_whole_deadline_skips_delete(self, mock_time):
        mock_time.monotonic.side_effect = [100.0, 101.5]

        with self.assertRaises(DeadlineExceededError):
            self.dispatcher.delete_repo(self.request, timeout=1.0)

        self.service.delete.assert_not_called()

    def test_no_deadline_stays_unbounded(self):
        self.dispatcher.delete_repo(self.request)

        repo = self.service.find_by_identifier.return_value
        self.service.delete.assert_called_once_with(repo, timeout=None)

    def test_deadline_maps_to_deadline_exceeded(self):
        self.assertEqual(
            http_status_for_exception(DeadlineExceededError("late")),
            (RpcStatus.DEADLINE_EXCEEDED, 504),
        )


if __name__ == "__main__":
    unittest.main()
