from bcrypt import checkpw

import pytest

from splitledger.core.participant_service import ParticipantResolver
from splitledger.errors import ValidationError
from splitledger.expenses.models import ParticipantShare
from splitledger.users.model import ShadowUser, User


def test_resolve_creates_shadow_account_once(user_store):
    resolver = ParticipantResolver(user_store)

    first = resolver.resolve("Mary Jane")
    second = resolver.resolve("Mary Jane")

    assert first == second
    assert len(user_store) == 1

    user = user_store.find_by_id(first)
    assert isinstance(user, ShadowUser)
    assert user.is_shadow
    assert user.email == "maryjane@example.com"
    assert checkpw(b"defaultpassword", user.password_hash)


def test_resolve_returns_existing_registered_user(user_store):
    existing = user_store.create(User(name="Alice", email="alice@corp.test", password_hash=b"x"))
    resolver = ParticipantResolver(user_store)

    assert resolver.resolve("Alice") == existing.id
    assert len(user_store) == 1


def test_resolve_matches_names_exactly(user_store):
    resolver = ParticipantResolver(user_store)

    assert resolver.resolve("alice") != resolver.resolve("Alice")
    assert len(user_store) == 2


def test_resolve_uses_configured_domain(user_store):
    resolver = ParticipantResolver(user_store, email_domain="ledger.local")

    user = user_store.find_by_id(resolver.resolve("Bob Van Dyke"))

    assert user.email == "bobvandyke@ledger.local"


def test_resolve_rejects_blank_name(user_store):
    with pytest.raises(ValidationError):
        ParticipantResolver(user_store).resolve("  ")
    assert len(user_store) == 0


def test_resolve_shares_sets_ids_without_mutating_input(user_store):
    resolver = ParticipantResolver(user_store)
    shares = [ParticipantShare(name="Alice"), ParticipantShare(name="Bob")]

    resolved = resolver.resolve_shares(shares)

    assert all(s.user_id is None for s in shares)
    assert resolved[0].user_id == user_store.find_by_name("Alice").id
    assert resolved[1].user_id == user_store.find_by_name("Bob").id
