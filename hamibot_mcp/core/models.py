# =============================================================================
# core/models.py  —  Upstream Data Shapes
# =============================================================================
#
# These types describe what the Hamibot API sends back.  They are
# ANNOTATIONS ONLY: the client never validates or reshapes upstream payloads,
# it passes the decoded JSON straight through.  The upstream schema is not
# ours to enforce, so fields may appear or disappear without breaking us.
# =============================================================================

from typing import Any, Generic, TypeVar

# typing_extensions: generic TypedDict needs it before Python 3.11.
from typing_extensions import NotRequired, TypedDict


T = TypeVar("T")


class ApiResponse(TypedDict, Generic[T]):
    """The {data?, error?} envelope the Hamibot API wraps results in."""

    data: NotRequired[T]
    error: NotRequired[str]


class Device(TypedDict):
    id: str
    name: NotRequired[str]
    online: bool
    brand: str
    model: str
    appVersion: str
    tags: NotRequired[list[str]]


class Script(TypedDict):
    id: str
    name: str
    version: str
    slug: str
    expiresAt: NotRequired[str]


# Result of run-script / execute: opaque to us.
RunResult = Any
