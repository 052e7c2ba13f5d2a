import io

from pxcli.errors import (
    PxError,
    RpcError,
    StatusCode,
    from_error,
    is_error_not_found,
    is_error_permission_denied,
    print_px_error_messagef,
    px_error,
    px_error_message,
    px_error_messagef,
    rectify_error_message,
)
from pxcli.output import redirect_output

GRPC_ERROR_MSG = "Volume Not found"
VOLUME_NAME = "volume1"


def _not_found():
    return RpcError(StatusCode.NOT_FOUND, GRPC_ERROR_MSG)


def test_px_error_message():
    err = px_error_message(_not_found(), VOLUME_NAME)
    assert isinstance(err, PxError)
    assert str(err) == f"{VOLUME_NAME}: {GRPC_ERROR_MSG}"


def test_px_error_messagef():
    err = px_error_messagef(_not_found(), "%s", VOLUME_NAME)
    assert str(err) == f"[{VOLUME_NAME}]: {GRPC_ERROR_MSG}"


def test_print_px_error_messagef():
    buffer = io.StringIO()
    with redirect_output(stderr=buffer):
        print_px_error_messagef(_not_found(), "%s", VOLUME_NAME)
    assert buffer.getvalue() == f"[{VOLUME_NAME}]: {GRPC_ERROR_MSG}\n"


def test_px_error():
    assert str(px_error(_not_found())) == GRPC_ERROR_MSG


def test_px_error_none():
    assert px_error(None) is None


def test_from_error_plain_exception_is_unknown():
    status = from_error(ValueError("boom"))
    assert status.code == StatusCode.UNKNOWN
    assert status.message == "boom"


def test_from_error_rewrites_unauthenticated():
    err = RpcError(StatusCode.UNAUTHENTICATED, "Request unauthenticated with bearer")
    status = from_error(err)
    assert status.message == "Authentication information required"
    assert status.code == StatusCode.UNAUTHENTICATED


def test_is_error_not_found():
    assert is_error_not_found(_not_found()) is True
    assert is_error_not_found(ValueError("x")) is False


def test_is_error_permission_denied():
    err = RpcError(StatusCode.PERMISSION_DENIED, "denied")
    assert is_error_permission_denied(err) is True
    assert is_error_permission_denied(_not_found()) is False


def test_rectify_error_message_returns_input():
    assert rectify_error_message(GRPC_ERROR_MSG) == GRPC_ERROR_MSG