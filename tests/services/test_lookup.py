"""Tests for the lookup stage (find_by / find)."""

from typing import Any

from upsertctl.domain.outcomes import Err, ErrorCode, Found, NotFound
from upsertctl.services.lookup import find, find_by
from tests.conftest import RecordingStore, User, seed


class TestFindBy:
    def test_not_found_returns_candidate_unchanged(self, store: Any) -> None:
        candidate = User(name="Slughorn", age=100)
        outcome = find_by(candidate, ["name"], store)
        assert isinstance(outcome, NotFound)
        assert outcome.record is candidate

    def test_found_returns_stored_record(self, store: Any) -> None:
        stored = seed(store, name="Slughorn", age=100)
        outcome = find_by(User(name="Slughorn"), ["name"], store)
        assert isinstance(outcome, Found)
        assert outcome.record.identity == stored.identity
        assert outcome.record.get("age") == 100

    def test_found_carries_candidate(self, store: Any) -> None:
        seed(store, name="Slughorn")
        candidate = User(name="Slughorn", age=101)
        outcome = find_by(candidate, "name", store)
        assert isinstance(outcome, Found)
        assert outcome.candidate is candidate

    def test_multiple_selectors_must_all_match(self, store: Any) -> None:
        seed(store, first_name="Harry", last_name="Potter")
        seed(store, first_name="Lily", last_name="Potter")
        outcome = find_by(User(first_name="Harry", last_name="Potter"), ["first_name", "last_name"], store)
        assert isinstance(outcome, Found)
        assert outcome.record.get("first_name") == "Harry"

    def test_none_selector_value_not_part_of_criteria(self, store: Any) -> None:
        seed(store, first_name="Harry", last_name="Potter")
        candidate = User(first_name="Harry", last_name=None)
        outcome = find_by(candidate, ["first_name", "last_name"], store)
        assert isinstance(outcome, Found)
        assert outcome.record.get("last_name") == "Potter"

    def test_empty_criteria_match_nothing(self, store: Any) -> None:
        seed(store, name="Harry")
        outcome = find_by(User(age=None), ["age"], store)
        assert isinstance(outcome, NotFound)

    def test_ambiguous_match(self, store: Any) -> None:
        seed(store, name="Weasley", first_name="Fred")
        seed(store, name="Weasley", first_name="George")
        outcome = find_by(User(name="Weasley"), ["name"], store)
        assert isinstance(outcome, Err)
        assert outcome.code == ErrorCode.AMBIGUOUS_MATCH
        assert outcome.detail["count"] == 2
        assert outcome.detail["criteria"] == {"name": "Weasley"}

    def test_missing_selectors_skips_store(self) -> None:
        spy = RecordingStore()
        for selectors in (None, []):
            outcome = find_by(User(name="Harry"), selectors, spy)
            assert isinstance(outcome, Err)
            assert outcome.code == ErrorCode.MISSING_SELECTORS
        assert spy.calls == []

    def test_invalid_record_skips_store(self) -> None:
        spy = RecordingStore()
        outcome = find_by(42, ["name"], spy)
        assert isinstance(outcome, Err)
        assert outcome.code == ErrorCode.INVALID_RECORD
        assert spy.calls == []

    def test_one_store_read(self) -> None:
        spy = RecordingStore()
        find_by(User(name="Harry", age=11), ["name", "age"], spy)
        assert spy.calls == [("get_by", ("users", {"name": "Harry", "age": 11}))]


class TestFind:
    def test_found_by_identity(self, store: Any) -> None:
        stored = seed(store, name="Harry")
        outcome = find(User(id=stored.identity, name="Harry James"), store)
        assert isinstance(outcome, Found)
        assert outcome.record.get("name") == "Harry"
        assert outcome.candidate.get("name") == "Harry James"

    def test_unknown_identity_not_found(self, store: Any) -> None:
        outcome = find(User(id=999, name="Harry"), store)
        assert isinstance(outcome, NotFound)

    def test_unset_identity_forces_not_found(self) -> None:
        spy = RecordingStore(found=User(id=1))
        candidate = User(name="Harry")
        outcome = find(candidate, spy)
        assert outcome == NotFound(candidate)
        assert spy.calls == []

    def test_none_identity_forces_not_found(self) -> None:
        spy = RecordingStore(found=User(id=1))
        outcome = find(User(id=None, name="Harry"), spy)
        assert isinstance(outcome, NotFound)
        assert spy.calls == []

    def test_kind_without_identity_forces_not_found(self) -> None:
        from upsertctl.domain.records import RecordKind

        Tag = RecordKind.define("tags", ["label"])
        spy = RecordingStore()
        assert isinstance(find(Tag(label="owl"), spy), NotFound)
        assert spy.calls == []

    def test_never_missing_selectors(self, store: Any) -> None:
        outcome = find(User(), store)
        assert isinstance(outcome, NotFound)

    def test_non_record_invalid(self) -> None:
        outcome = find("Harry", RecordingStore())
        assert isinstance(outcome, Err)
        assert outcome.code == ErrorCode.INVALID_RECORD
