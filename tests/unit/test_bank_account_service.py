"""Unit tests for bank account management and the default-account rule"""

import threading

import pytest

from backoffice.domain.exceptions import DuplicateAccount, NotFound, StoreUnavailable, ValidationError
from tests.conftest import OTHER_OWNER_ID, OWNER_ID


def _add(service, number, bank="Bank A", owner=OWNER_ID, **kwargs):
    return service.add_account(
        owner_user_id=owner,
        account_name="Jane Doe",
        account_number=number,
        bank_name=bank,
        **kwargs,
    )


def _assert_one_default(repository, owner=OWNER_ID):
    accounts = repository.all(owner)
    defaults = [a for a in accounts if a.is_default]
    if accounts:
        assert len(defaults) == 1
    else:
        assert defaults == []
    return defaults[0] if defaults else None


class TestAddAccount:
    """Test AddAccount"""

    def test_first_account_is_default(self, bank_account_service, bank_account_repository):
        """Test the first account becomes the default even when not requested"""
        account = _add(bank_account_service, "111", is_default=False)

        assert account.is_default is True
        assert _assert_one_default(bank_account_repository).id == account.id

    def test_second_account_not_default_by_default(self, bank_account_service, bank_account_repository):
        """Test a later account does not take the flag unless asked"""
        first = _add(bank_account_service, "111")
        second = _add(bank_account_service, "222")

        assert second.is_default is False
        assert _assert_one_default(bank_account_repository).id == first.id

    def test_add_as_default_moves_flag(self, bank_account_service, bank_account_repository):
        """Test requesting default clears the previous default"""
        _add(bank_account_service, "111")
        second = _add(bank_account_service, "222", is_default=True)

        assert second.is_default is True
        assert _assert_one_default(bank_account_repository).id == second.id

    def test_duplicate_number_at_same_bank(self, bank_account_service, bank_account_repository):
        """Test the same number at the same bank is rejected"""
        _add(bank_account_service, "111")
        with pytest.raises(DuplicateAccount):
            _add(bank_account_service, "111")
        assert len(bank_account_repository.all(OWNER_ID)) == 1

    def test_same_number_at_other_bank_is_allowed(self, bank_account_service):
        """Test uniqueness is per (number, bank)"""
        _add(bank_account_service, "111", bank="Bank A")
        account = _add(bank_account_service, "111", bank="Bank B")
        assert account.is_default is False

    def test_owners_are_independent(self, bank_account_service, bank_account_repository):
        """Test each owner gets their own default"""
        _add(bank_account_service, "111", owner=OWNER_ID)
        other = _add(bank_account_service, "111", owner=OTHER_OWNER_ID)

        assert other.is_default is True
        _assert_one_default(bank_account_repository, OWNER_ID)
        _assert_one_default(bank_account_repository, OTHER_OWNER_ID)

    def test_missing_required_field(self, bank_account_service, bank_account_repository):
        """Test blank fields are rejected before any write"""
        with pytest.raises(ValidationError):
            _add(bank_account_service, "  ")
        assert bank_account_repository.all(OWNER_ID) == []

    def test_failed_flag_move_leaves_nothing_behind(self, bank_account_service, bank_account_repository):
        """Test a store failure while moving the flag removes the new account"""
        first = _add(bank_account_service, "111")
        bank_account_repository.fail_make_sole_default = True

        with pytest.raises(StoreUnavailable):
            _add(bank_account_service, "222", is_default=True)

        assert _assert_one_default(bank_account_repository).id == first.id
        assert [a.account_number for a in bank_account_repository.all(OWNER_ID)] == ["111"]

    def test_retry_after_failed_flag_move(self, bank_account_service, bank_account_repository):
        """Test the same command succeeds once the store is back"""
        _add(bank_account_service, "111")
        bank_account_repository.fail_make_sole_default = True
        with pytest.raises(StoreUnavailable):
            _add(bank_account_service, "222", is_default=True)

        bank_account_repository.fail_make_sole_default = False
        retried = _add(bank_account_service, "222", is_default=True)

        assert _assert_one_default(bank_account_repository).id == retried.id
        assert len(bank_account_repository.all(OWNER_ID)) == 2


class TestUpdateAccount:
    """Test UpdateAccount"""

    def test_update_fields(self, bank_account_service):
        """Test provided fields change and blank ones are left alone"""
        account = _add(bank_account_service, "111")
        updated = bank_account_service.update_account(
            OWNER_ID, account.id, account_name="New Name", bank_name="  "
        )
        assert updated.account_name == "New Name"
        assert updated.bank_name == "Bank A"

    def test_update_to_default(self, bank_account_service, bank_account_repository):
        """Test is_default=True makes the account the sole default"""
        _add(bank_account_service, "111")
        second = _add(bank_account_service, "222")

        updated = bank_account_service.update_account(OWNER_ID, second.id, is_default=True)

        assert updated.is_default is True
        assert _assert_one_default(bank_account_repository).id == second.id

    def test_false_never_clears_default(self, bank_account_service, bank_account_repository):
        """Test is_default=False on the default account is ignored"""
        first = _add(bank_account_service, "111")
        updated = bank_account_service.update_account(OWNER_ID, first.id, is_default=False)

        assert updated.is_default is True
        assert _assert_one_default(bank_account_repository).id == first.id

    def test_update_into_duplicate(self, bank_account_service):
        """Test changing the number onto an existing one is rejected"""
        _add(bank_account_service, "111")
        second = _add(bank_account_service, "222")
        with pytest.raises(DuplicateAccount):
            bank_account_service.update_account(OWNER_ID, second.id, account_number="111")

    def test_update_missing_account(self, bank_account_service):
        """Test NotFound for unknown ids"""
        with pytest.raises(NotFound):
            bank_account_service.update_account(OWNER_ID, "missing", account_name="X")

    def test_cannot_update_another_owners_account(self, bank_account_service):
        """Test accounts are scoped by owner"""
        account = _add(bank_account_service, "111", owner=OTHER_OWNER_ID)
        with pytest.raises(NotFound):
            bank_account_service.update_account(OWNER_ID, account.id, account_name="X")


class TestDeleteAccount:
    """Test DeleteAccount"""

    def test_delete_default_promotes_newest(self, bank_account_service, bank_account_repository):
        """Test deleting the default promotes the most recently added account"""
        first = _add(bank_account_service, "111")
        _add(bank_account_service, "222")
        third = _add(bank_account_service, "333")

        promoted = bank_account_service.delete_account(OWNER_ID, first.id)

        assert promoted.id == third.id
        assert _assert_one_default(bank_account_repository).id == third.id

    def test_delete_non_default(self, bank_account_service, bank_account_repository):
        """Test deleting a non-default account keeps the current default"""
        first = _add(bank_account_service, "111")
        second = _add(bank_account_service, "222")

        assert bank_account_service.delete_account(OWNER_ID, second.id) is None
        assert _assert_one_default(bank_account_repository).id == first.id

    def test_delete_last_account(self, bank_account_service, bank_account_repository):
        """Test deleting the only account leaves zero accounts and zero defaults"""
        only = _add(bank_account_service, "111")
        assert bank_account_service.delete_account(OWNER_ID, only.id) is None
        assert _assert_one_default(bank_account_repository) is None

    def test_delete_missing(self, bank_account_service):
        """Test NotFound for unknown ids"""
        with pytest.raises(NotFound):
            bank_account_service.delete_account(OWNER_ID, "missing")


class TestSetDefault:
    """Test SetDefault"""

    def test_set_default(self, bank_account_service, bank_account_repository):
        """Test the target becomes the only default"""
        _add(bank_account_service, "111")
        second = _add(bank_account_service, "222")

        account = bank_account_service.set_default(OWNER_ID, second.id)

        assert account.is_default is True
        assert _assert_one_default(bank_account_repository).id == second.id

    def test_set_default_is_idempotent(self, bank_account_service, bank_account_repository):
        """Test setting the current default again changes nothing"""
        first = _add(bank_account_service, "111")
        bank_account_service.set_default(OWNER_ID, first.id)
        assert _assert_one_default(bank_account_repository).id == first.id

    def test_set_default_missing(self, bank_account_service, bank_account_repository):
        """Test NotFound leaves the existing default untouched"""
        first = _add(bank_account_service, "111")
        with pytest.raises(NotFound):
            bank_account_service.set_default(OWNER_ID, "missing")
        assert _assert_one_default(bank_account_repository).id == first.id

    def test_list_default_first(self, bank_account_service):
        """Test the listing puts the default first"""
        _add(bank_account_service, "111")
        second = _add(bank_account_service, "222")
        bank_account_service.set_default(OWNER_ID, second.id)

        accounts = bank_account_service.list_accounts(OWNER_ID)
        assert [a.id for a in accounts][0] == second.id


class TestConcurrentDefaultChanges:
    """Test the default rule under concurrent commands for one owner"""

    def test_concurrent_set_default(self, bank_account_service, bank_account_repository):
        """Test racing SetDefault calls always leave exactly one default"""
        first = _add(bank_account_service, "111")
        second = _add(bank_account_service, "222")
        barrier = threading.Barrier(10)
        errors = []

        def worker(account_id):
            barrier.wait()
            try:
                for _ in range(20):
                    bank_account_service.set_default(OWNER_ID, account_id)
            except Exception as e:
                errors.append(e)

        threads = [
            threading.Thread(target=worker, args=(first.id if i % 2 else second.id,))
            for i in range(10)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert _assert_one_default(bank_account_repository).id in (first.id, second.id)

    def test_concurrent_first_adds(self, bank_account_service, bank_account_repository):
        """Test racing first adds produce exactly one default"""
        barrier = threading.Barrier(6)

        def worker(number):
            barrier.wait()
            _add(bank_account_service, number)

        threads = [threading.Thread(target=worker, args=(str(n),)) for n in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(bank_account_repository.all(OWNER_ID)) == 6
        _assert_one_default(bank_account_repository)
