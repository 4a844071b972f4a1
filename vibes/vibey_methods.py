"""Vibey alternatives to the standard HTTP method names."""

from __future__ import annotations

from typing import ClassVar

_VIBEY_TO_HTTP = {
    "VIBE": "GET",
    "MANIFEST": "POST",
    "ALIGN": "PUT",
    "RELEASE": "DELETE",
}

_HTTP_TO_VIBEY = {http: vibey for vibey, http in _VIBEY_TO_HTTP.items()}


class VibeyMethod(str):
    """A request method name; four vibey names stand in for GET, POST, PUT and DELETE."""

    __slots__ = ()

    VIBE: ClassVar[VibeyMethod]
    MANIFEST: ClassVar[VibeyMethod]
    ALIGN: ClassVar[VibeyMethod]
    RELEASE: ClassVar[VibeyMethod]

    def to_http_method(self) -> str:
        """Return the standard HTTP method; other names are returned unchanged."""
        name = str(self)
        return _VIBEY_TO_HTTP.get(name, name)

    def __repr__(self) -> str:
        return f"VibeyMethod({str(self)!r})"


VibeyMethod.VIBE = VibeyMethod("VIBE")
VibeyMethod.MANIFEST = VibeyMethod("MANIFEST")
VibeyMethod.ALIGN = VibeyMethod("ALIGN")
VibeyMethod.RELEASE = VibeyMethod("RELEASE")


def from_http_method(method: str) -> VibeyMethod:
    """Map a standard HTTP method to its vibey name; unknown methods pass through."""
    return VibeyMethod(_HTTP_TO_VIBEY.get(method, method))