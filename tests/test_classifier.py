import pytest

from clusterretry.domain.codes import NOT_MASTER_CODES, describe_code
from clusterretry.domain.enums import Disposition
from clusterretry.domain.errors import (
    OperationFailure,
    SocketError,
    SocketTimeoutError,
    UnsupportedArrayFilters,
    UnsupportedCollation,
)
from clusterretry.services.classifier import DEFAULT_CLASSIFIER, classify


@pytest.mark.parametrize(
    "error",
    [SocketError("socket error"), SocketTimeoutError("socket timeout")],
)
def test_socket_errors_are_network_failures(error):
    assert classify(error) is Disposition.NETWORK_FAILURE


@pytest.mark.parametrize(
    "error",
    [
        OperationFailure("not master"),
        OperationFailure("node is recovering"),
        OperationFailure("Not Master And SlaveOk=false"),
        OperationFailure("message missing", code=91, code_name="ShutdownInProgress"),
        OperationFailure(code=189, code_name="PrimarySteppedDown"),
    ],
)
def test_topology_failures_are_retryable(error):
    assert classify(error) is Disposition.RETRYABLE_OPERATION_FAILURE


def test_whole_not_master_family_is_retryable():
    for code in NOT_MASTER_CODES:
        assert classify(OperationFailure("boom", code=code)) is Disposition.RETRYABLE_OPERATION_FAILURE


@pytest.mark.parametrize(
    "error",
    [
        OperationFailure("not authorized"),
        OperationFailure(),
        OperationFailure("duplicate key", code=11000, code_name="DuplicateKey"),
    ],
)
def test_other_operation_failures_are_not_retryable(error):
    assert classify(error) is Disposition.NON_RETRYABLE_OPERATION_FAILURE


@pytest.mark.parametrize(
    "error",
    [
        UnsupportedCollation("unsupported collation"),
        UnsupportedArrayFilters("unsupported array filters"),
        ValueError("application bug"),
        ConnectionError("builtin errors are not part of the taxonomy"),
    ],
)
def test_everything_else_is_never_retried(error):
    assert classify(error) is Disposition.NON_RETRYABLE_OTHER


def test_classification_is_stable():
    error = OperationFailure("node is recovering")
    results = {classify(error) for _ in range(5)}
    assert results == {Disposition.RETRYABLE_OPERATION_FAILURE}


def test_extend_recognizes_new_entries_without_touching_default():
    class ProxyDropped(Exception):
        pass

    custom = DEFAULT_CLASSIFIER.extend(
        messages=["Balancer Moving Chunk"],
        codes=[50],
        network_errors=[ProxyDropped],
    )

    assert custom.classify(OperationFailure("timeout", code=50)) is Disposition.RETRYABLE_OPERATION_FAILURE
    assert custom.classify(OperationFailure("balancer moving chunk")) is Disposition.RETRYABLE_OPERATION_FAILURE
    assert custom.classify(ProxyDropped()) is Disposition.NETWORK_FAILURE
    assert custom.classify(OperationFailure("not master")) is Disposition.RETRYABLE_OPERATION_FAILURE

    assert classify(OperationFailure("timeout", code=50)) is Disposition.NON_RETRYABLE_OPERATION_FAILURE
    assert classify(ProxyDropped()) is Disposition.NON_RETRYABLE_OTHER


def test_operation_failure_keeps_server_details():
    reply = {"ok": 0, "errmsg": "message missing", "code": 91}
    error = OperationFailure("message missing", reply, code=91, code_name="ShutdownInProgress")

    assert error.result is reply
    assert error.code == 91
    assert str(error) == "[ShutdownInProgress (91)]: message missing"
    assert str(OperationFailure("not master")) == "not master"
    assert str(OperationFailure(code=91)) == "[ShutdownInProgress (91)]"


def test_describe_code():
    assert describe_code(91) == "ShutdownInProgress (91)"
    assert describe_code(11000) == "11000"
    assert describe_code(None) == "no code"
