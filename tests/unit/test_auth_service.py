"""
Unit tests for registration and login.
"""

import threading

import pytest

from cashcarry.database import JsonStore
from cashcarry.exceptions import AuthenticationError, ValidationError
from cashcarry.services.auth_service import authenticate, create_user, register_user
from cashcarry.services.session_service import SessionRegistry


@pytest.fixture
def users(tmp_path):
    store = JsonStore(str(tmp_path / 'users.json'))
    store.load()
    return store


@pytest.fixture
def sessions(users):
    return SessionRegistry(users)


class TestRegistration:

    def test_concurrent_registrations_get_distinct_ids(self, users, sessions):
        """Parallel sign-ups never share an id and every one is stored."""
        count = 40
        start = threading.Barrier(count)
        errors = []

        def worker(n):
            start.wait()
            try:
                register_user(users, sessions, f'User {n}', f'0830000{n:03d}', 'pw')
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert sorted(u['id'] for u in users.all()) == list(range(1, count + 1))

    def test_concurrent_duplicate_phone_registers_once(self, users, sessions):
        count = 10
        start = threading.Barrier(count)
        outcomes = []

        def worker():
            start.wait()
            try:
                register_user(users, sessions, 'Same', '0831111111', 'pw')
                outcomes.append('ok')
            except ValidationError:
                outcomes.append('rejected')

        threads = [threading.Thread(target=worker) for _ in range(count)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count('ok') == 1
        assert len(users.all()) == 1


class TestLogin:

    def test_record_without_id_does_not_log_in(self, users, sessions):
        """A hand-edited user lacking an id is treated as no match."""
        users.save([{'name': 'Ghost', 'phone': '0840000000', 'password': 'pw', 'role': 'customer'}])

        with pytest.raises(AuthenticationError):
            authenticate(users, sessions, '0840000000', 'pw')

        assert len(sessions) == 0

    def test_login_after_create(self, users, sessions):
        user = create_user(users, 'Rep', '0850000000', 'pw', 'rep')

        token, logged_in = authenticate(users, sessions, '0850000000', 'pw')

        assert logged_in.id == user.id
        assert sessions.resolve(token).id == user.id
