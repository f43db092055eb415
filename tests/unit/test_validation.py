from collections import OrderedDict
from typing import Any

import pytest

from domain_models.config import HierarchyConfig
from domain_models.types import ConstructionErrorKind
from hierarchy.engines.validator import check_flat_store, find_validation_error
from hierarchy.exceptions import (
    DanglingParentReferenceError,
    EmptyInputError,
    InvalidRootCountError,
    MissingParentFieldError,
    NotAMappingError,
    UnknownRootError,
)
from tests.conftest import make_store


def test_valid_store_passes(simple_store: dict[str, Any]) -> None:
    check_flat_store(simple_store)
    assert find_validation_error(simple_store) is None


@pytest.mark.parametrize("store", [None, {}, [], 0, ""])
def test_empty_input(store: Any) -> None:
    with pytest.raises(EmptyInputError, match="There is no data"):
        check_flat_store(store)


@pytest.mark.parametrize("store", [[{"parentId": 0}], "abc", 42])
def test_not_a_mapping(store: Any) -> None:
    with pytest.raises(NotAMappingError, match="not a mapping"):
        check_flat_store(store)


def test_ordered_dict_is_accepted() -> None:
    store = OrderedDict([("root", {"parentId": "root"}), ("leaf", {"parentId": "root"})])
    check_flat_store(store)


def test_missing_parent_field_identifies_key() -> None:
    store = make_store({"A": "A", "B": "A"})
    store["C"] = {"name": "orphan"}

    with pytest.raises(MissingParentFieldError) as exc_info:
        check_flat_store(store)
    assert exc_info.value.node_id == "C"
    assert exc_info.value.kind == ConstructionErrorKind.MISSING_PARENT_FIELD


def test_null_parent_counts_as_missing() -> None:
    store = make_store({"A": "A"})
    store["B"] = {"parentId": None}

    error = find_validation_error(store)
    assert isinstance(error, MissingParentFieldError)
    assert error.node_id == "B"


def test_record_that_is_not_a_mapping_counts_as_missing() -> None:
    store: dict[str, Any] = {"A": {"parentId": "A"}, "B": "A"}

    with pytest.raises(MissingParentFieldError):
        check_flat_store(store)


def test_dangling_parent_identifies_key() -> None:
    store = make_store({"A": "A", "X": "Y"})

    with pytest.raises(DanglingParentReferenceError, match="failure at ID X") as exc_info:
        check_flat_store(store)
    assert exc_info.value.node_id == "X"


@pytest.mark.parametrize("parent", [["A"], ("A", [1]), {"A": 1}])
def test_unhashable_parent_is_dangling(parent: Any) -> None:
    store: dict[str, Any] = {"A": {"parentId": "A"}, "B": {"parentId": parent}}

    with pytest.raises(DanglingParentReferenceError) as exc_info:
        check_flat_store(store)
    assert exc_info.value.node_id == "B"
    assert isinstance(find_validation_error(store), DanglingParentReferenceError)


def test_two_roots() -> None:
    store = make_store({"A": "A", "B": "A", "A2": "A2"})

    with pytest.raises(InvalidRootCountError, match="2 were found") as exc_info:
        check_flat_store(store)
    assert exc_info.value.count == 2


def test_no_root() -> None:
    store = make_store({"A": "B", "B": "A"})

    with pytest.raises(InvalidRootCountError) as exc_info:
        check_flat_store(store)
    assert exc_info.value.count == 0


def test_missing_field_reported_before_dangling_parent() -> None:
    store: dict[str, Any] = {"A": {"parentId": "A"}, "B": {"parentId": "Z"}, "C": {}}

    error = find_validation_error(store)
    assert isinstance(error, MissingParentFieldError)


def test_dangling_parent_reported_before_root_count() -> None:
    store = make_store({"A": "A", "B": "B", "X": "Y"})

    error = find_validation_error(store)
    assert isinstance(error, DanglingParentReferenceError)


def test_forced_root_skips_root_count() -> None:
    store = make_store({"A": "A", "B": "A", "A2": "A2"})

    check_flat_store(store, forced_root_id="A")


def test_forced_root_must_exist(simple_store: dict[str, Any]) -> None:
    with pytest.raises(UnknownRootError) as exc_info:
        check_flat_store(simple_store, forced_root_id="nope")
    assert exc_info.value.node_id == "nope"


def test_custom_parent_field() -> None:
    config = HierarchyConfig(parent_field="up")
    store = {1: {"up": 1}, 2: {"up": 1}}

    check_flat_store(store, config=config)
    assert isinstance(find_validation_error(store), MissingParentFieldError)


def test_validation_does_not_mutate(simple_store: dict[str, Any]) -> None:
    before = {key: dict(record) for key, record in simple_store.items()}
    check_flat_store(simple_store)
    assert simple_store == before


def test_failure_model_conversion() -> None:
    error = find_validation_error(make_store({"A": "A", "X": "Y"}))
    assert error is not None

    failure = error.to_failure()
    assert failure.kind == ConstructionErrorKind.DANGLING_PARENT_REFERENCE
    assert failure.node_id == "X"
    assert "X" in failure.message
