"""Error helpers for messages carried in RPC status replies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from pxcli.output import eprintf

_MESSAGE_REWRITES = {
    "Request unauthenticated with bearer": "Authentication information required",
}


class StatusCode(IntEnum):
    """Standard RPC status codes."""

    OK = 0
    CANCELLED = 1
    UNKNOWN = 2
    INVALID_ARGUMENT = 3
    DEADLINE_EXCEEDED = 4
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    PERMISSION_DENIED = 7
    RESOURCE_EXHAUSTED = 8
    FAILED_PRECONDITION = 9
    ABORTED = 10
    OUT_OF_RANGE = 11
    UNIMPLEMENTED = 12
    INTERNAL = 13
    UNAVAILABLE = 14
    DATA_LOSS = 15
    UNAUTHENTICATED = 16


@dataclass(frozen=True)
class RpcStatus:
    """A status code together with its message."""

    code: StatusCode
    message: str


class RpcError(Exception):
    """An error returned by a remote call, carrying an RPC status."""

    def __init__(self, code: StatusCode, message: str) -> None:
        self.status = RpcStatus(code, message)
        super().__init__(f"rpc error: code = {code.name} desc = {message}")


class PxError(Exception):
    """An error whose text is meant to be shown to the user."""


def from_error(err: BaseException | None) -> RpcStatus:
    """Return the RPC status of an error, cleaning up confusing messages."""
    if err is None:
        return RpcStatus(StatusCode.OK, "")
    if isinstance(err, RpcError):
        status = err.status
    else:
        status = RpcStatus(StatusCode.UNKNOWN, str(err))
    message = rectify_error_message(status.message)
    if message != status.message:
        status = RpcStatus(status.code, message)
    return status


def px_error_message(err: BaseException, msg: str) -> PxError:
    """Build an error from a message and the status message of ``err``."""
    return PxError(f"{msg}: {from_error(err).message}")


def px_error_messagef(err: BaseException, fmt: str, *args: str) -> PxError:
    """Like :func:`px_error_message`, formatting the arguments as one list."""
    rendered = "[" + " ".join(args) + "]"
    return px_error_message(err, fmt % (rendered,))


def print_px_error_messagef(err: BaseException, fmt: str, *args: str) -> None:
    """Write the formatted error message to the error stream."""
    eprintf(f"{px_error_messagef(err, fmt, *args)}\n")


def px_error(err: BaseException | None) -> PxError | None:
    """Return an error holding only the status message, or None for None."""
    if err is None:
        return None
    return PxError(from_error(err).message)


def rectify_error_message(msg: str) -> str:
    """Replace a known cryptic message with a clearer one."""
    return _MESSAGE_REWRITES.get(msg, msg)


def is_error_not_found(err: BaseException | None) -> bool:
    """Tell whether the error reports that something was not found."""
    return from_error(err).code == StatusCode.NOT_FOUND


def is_error_permission_denied(err: BaseException | None) -> bool:
    """Tell whether the error reports a denied permission."""
    return from_error(err).code == StatusCode.PERMISSION_DENIED