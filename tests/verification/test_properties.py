"""Tests for the property verifier."""

import pytest

from beancheck.config import VerificationConfig
from beancheck.errors import AssertionMismatch, PropertyAccessError, RecursionLimitExceeded
from beancheck.models import OutcomeStatus
from beancheck.verification import PropertyVerifier
from tests.fixtures.sample_beans.beans import (
    Account,
    Address,
    Employee,
    Inventory,
    Person,
    Settings,
)
from tests.fixtures.sample_beans.broken_beans import (
    BrokenSetter,
    CyclicHolder,
    RaisingGetter,
    WrongField,
)

pytestmark = pytest.mark.verification


def _failed(outcomes):
    return [o for o in outcomes if not o.passed]


class TestCorrectBeans:
    """Correctly wired classes verify as all-pass."""

    @pytest.mark.parametrize("cls", [Person, Employee, Account, Address, Settings])
    def test_all_pass(self, property_verifier, cls):
        outcomes = property_verifier.verify(cls)

        assert outcomes
        assert _failed(outcomes) == []

    def test_value_object_with_nested_list(self, property_verifier):
        outcomes = {o.property_name: o for o in property_verifier.verify(Inventory)}

        assert set(outcomes) == {"children", "count", "name"}
        assert all(o.status == OutcomeStatus.PASS for o in outcomes.values())
        assert outcomes["name"].actual != ""
        assert outcomes["count"].actual != 0
        assert len(outcomes["children"].actual) == 1

    def test_excluded_property_not_verified(self, property_verifier):
        outcomes = property_verifier.verify(Person, excluded={"tags"})

        assert "tags" not in {o.property_name for o in outcomes}


class TestBrokenBeans:
    """Miswired accessors produce one failing outcome each."""

    def test_ignored_setter(self, property_verifier):
        failed = _failed(property_verifier.verify(BrokenSetter))

        assert len(failed) == 1
        assert failed[0].label == "BrokenSetter.amount"
        assert isinstance(failed[0].error, AssertionMismatch)
        assert failed[0].expected == 42
        assert failed[0].actual == 0

    def test_setter_writes_wrong_field(self, property_verifier):
        failed = _failed(property_verifier.verify(WrongField))

        assert [o.property_name for o in failed] == ["first"]
        assert "Failed when testing property WrongField.first" in failed[0].describe()

    def test_raising_getter(self, property_verifier):
        failed = _failed(property_verifier.verify(RaisingGetter))

        assert len(failed) == 1
        assert isinstance(failed[0].error, PropertyAccessError)
        assert isinstance(failed[0].error.__cause__, RuntimeError)
        assert "An exception was thrown during bean test RaisingGetter.code" in str(failed[0].error)

    def test_unsynthesizable_value(self, property_verifier):
        failed = _failed(property_verifier.verify(CyclicHolder))

        assert len(failed) == 1
        assert isinstance(failed[0].error, RecursionLimitExceeded)
        assert failed[0].error.requester == "CyclicHolder.node"

    def test_failure_logged(self, property_verifier, caplog):
        with caplog.at_level("ERROR", logger="beancheck"):
            property_verifier.verify(BrokenSetter)

        assert "BrokenSetter.amount" in caplog.text


class TestFailFast:
    def test_collect_all_by_default(self, property_verifier):
        outcomes = property_verifier.verify(BrokenSetter)

        assert len(outcomes) == 2

    def test_stops_at_first_failure(self, synthesizer, introspector):
        verifier = PropertyVerifier(synthesizer, introspector, VerificationConfig(fail_fast=True))

        outcomes = verifier.verify(BrokenSetter)

        # amount sorts before label and fails
        assert len(outcomes) == 1
        assert not outcomes[0].passed
