"""
Profile Models - Data types for the profile directory.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, computed_field

from termprofiles.config.errors import MalformedReplyError, StoreError


class Profile(BaseModel):
    """A named terminal configuration known to the configuration store."""

    identifier: str = Field(..., min_length=1)
    name: str

    model_config = {"frozen": True}

    @computed_field  # type: ignore[prop-decorator]
    @property
    def normalized_name(self) -> str:
        """Lowercased display name used for matching."""
        return self.name.lower()


class StoreValue(BaseModel):
    """Typed value carried by a store reply."""

    signature: str
    payload: Any = None

    model_config = {"frozen": True}


class StoreReply(BaseModel):
    """
    Validated reply of a configuration store lookup.

    The raw wire shape is ``(status, (signature, payload))``; the payload of
    interest is always the second element of the second element.
    """

    status: int = 0
    value: StoreValue

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return self.status == 0

    @classmethod
    def from_wire(cls, raw: Any) -> StoreReply:
        """
        Build a reply from the raw nested sequence returned by a store.

        Raises:
            MalformedReplyError: If any nesting level has the wrong arity
        """
        if not _is_pair(raw):
            raise MalformedReplyError("Reply is not a (status, value) pair", {"reply": repr(raw)})
        status, value = raw[0], raw[1]
        if not _is_pair(value):
            raise MalformedReplyError(
                "Reply value is not a (signature, payload) pair", {"reply": repr(raw)}
            )
        try:
            return cls(status=status, value=StoreValue(signature=value[0], payload=value[1]))
        except ValidationError as e:
            raise MalformedReplyError(str(e), {"reply": repr(raw)}) from e

    def raise_for_status(self) -> StoreReply:
        """Raise StoreError if the store reported a failed lookup."""
        if not self.ok:
            raise StoreError(
                f"Lookup failed with status {self.status}",
                {"status": self.status, "payload": self.value.payload},
            )
        return self

    def payload_as(self, type_: Any) -> Any:
        """
        Validate the payload against ``type_``.

        Raises:
            MalformedReplyError: If the payload does not match
        """
        try:
            return TypeAdapter(type_).validate_python(self.value.payload, strict=True)
        except ValidationError as e:
            raise MalformedReplyError(
                f"Unexpected payload for signature '{self.value.signature}'",
                {"payload": repr(self.value.payload), "errors": e.errors(include_url=False)},
            ) from e


def _is_pair(obj: Any) -> bool:
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes)) and len(obj) >= 2
