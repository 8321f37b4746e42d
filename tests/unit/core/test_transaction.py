"""Unit tests for transaction contexts."""

import pytest
from sqlalchemy.exc import OperationalError

from recordstore.core.errors import CommitError, IllegalStateError
from recordstore.core.services import DbSessionService
from recordstore.core.transaction import TransactionContext, TransactionState


class TestTransactionStates:
    """Test the Inactive -> Active -> Committed/RolledBack state machine."""

    def test_new_context_is_inactive(self, db_service: DbSessionService):
        txn = db_service.transaction(name="t1")

        assert txn.state is TransactionState.INACTIVE
        assert not txn.is_active
        assert txn.name == "t1"
        assert "inactive" in repr(txn)

    def test_generated_names_are_unique(self, db_service: DbSessionService):
        assert db_service.transaction().name != db_service.transaction().name

    def test_begin_commit(self, db_service: DbSessionService):
        txn = db_service.transaction().begin()
        assert txn.state is TransactionState.ACTIVE

        txn.commit()
        assert txn.state is TransactionState.COMMITTED
        assert txn.state.is_terminal

    def test_begin_rollback(self, db_service: DbSessionService):
        txn = db_service.transaction().begin()
        txn.rollback()

        assert txn.state is TransactionState.ROLLED_BACK
        assert txn.state.is_terminal

    def test_begin_twice(self, db_service: DbSessionService):
        txn = db_service.transaction().begin()

        with pytest.raises(IllegalStateError, match="Cannot begin"):
            txn.begin()
        txn.rollback()

    @pytest.mark.parametrize("action", ["commit", "rollback"])
    def test_terminal_call_on_inactive(self, db_service: DbSessionService, action: str):
        txn = db_service.transaction()

        with pytest.raises(IllegalStateError):
            getattr(txn, action)()
        assert txn.state is TransactionState.INACTIVE

    @pytest.mark.parametrize("action", ["commit", "rollback", "begin"])
    def test_calls_after_commit(self, db_service: DbSessionService, action: str):
        txn = db_service.transaction().begin()
        txn.commit()

        with pytest.raises(IllegalStateError):
            getattr(txn, action)()
        assert txn.state is TransactionState.COMMITTED

    def test_session_requires_active(self, db_service: DbSessionService):
        txn = db_service.transaction()

        with pytest.raises(IllegalStateError):
            txn.session

        txn.begin()
        assert txn.session is txn.session
        txn.commit()

        with pytest.raises(IllegalStateError):
            txn.session


class TestScopedAcquisition:
    """Test the context manager guarantees termination on every exit path."""

    def test_commits_on_normal_exit(self, db_service: DbSessionService):
        with db_service.transaction() as txn:
            assert txn.is_active

        assert txn.state is TransactionState.COMMITTED

    def test_rolls_back_on_error(self, db_service: DbSessionService):
        txn = db_service.transaction()

        with pytest.raises(RuntimeError, match="boom"):
            with txn:
                raise RuntimeError("boom")

        assert txn.state is TransactionState.ROLLED_BACK

    def test_accepts_already_active_context(self, db_service: DbSessionService):
        txn = db_service.transaction().begin()

        with txn as entered:
            assert entered is txn

        assert txn.state is TransactionState.COMMITTED

    def test_leaves_manually_finished_context(self, db_service: DbSessionService):
        with db_service.transaction() as txn:
            txn.rollback()

        assert txn.state is TransactionState.ROLLED_BACK

    def test_cannot_reenter_finished_context(self, db_service: DbSessionService):
        with db_service.transaction() as txn:
            pass

        with pytest.raises(IllegalStateError):
            with txn:
                pass


class TestCommitFailures:
    def test_storage_failure_rolls_back(
        self, db_service: DbSessionService, store, hitchhiker, monkeypatch
    ):
        txn = db_service.transaction().begin()
        store.persist(hitchhiker, txn)

        def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(txn.session, "commit", failing_commit)

        with pytest.raises(CommitError) as exc_info:
            txn.commit()

        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert txn.state is TransactionState.ROLLED_BACK
        assert hitchhiker.id is None

        with db_service.transaction() as reader:
            assert store.find_all(reader) == []

    def test_factory_without_session(self):
        txn = TransactionContext(lambda: None, name="empty").begin()

        with pytest.raises(IllegalStateError, match="no open session"):
            txn.session

        txn.rollback()
        assert txn.state is TransactionState.ROLLED_BACK

    def test_custom_session_factory(self):
        calls = []

        class FakeSession:
            def commit(self):
                calls.append("commit")

            def close(self):
                calls.append("close")

        txn = TransactionContext(FakeSession, name="fake")
        with txn:
            pass

        assert calls == ["commit", "close"]
