"""Plain domain classes used as conversion inputs in tests."""

from typing import Any, Dict


class Model:
    """Minimal model exposing a single value."""

    def __init__(self, val: Any):
        self._val = val

    def get_val(self) -> Any:
        return self._val

    def to_array(self) -> Dict[str, Any]:
        return {"val": self._val}


class ModelChild(Model):
    """Subclass with no mapping of its own."""


class ModelChildOverride(Model):
    """Subclass that changes the accessor output."""

    def to_array(self) -> Dict[str, Any]:
        return {"val": self._val, "child": True}


class Unmapped:
    """Class never present in the mapping."""

    def to_array(self) -> Dict[str, Any]:
        return {"unexpected": True}


class Exploding(Model):
    """Accessor raises."""

    def to_array(self) -> Dict[str, Any]:
        raise LookupError("accessor failed")
