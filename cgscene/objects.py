"""Base class for named scene objects and a simple callback object."""

from __future__ import annotations

from typing import Any, ClassVar


class SceneObject:
    """A named object.

    Each construction advances a shared counter. An object made without a name
    is called ``SceneObject<n>``, where ``n`` is the counter after the advance.
    Copies made with :func:`copy.copy` keep the name and do not advance the
    counter.
    """

    _created: ClassVar[int] = 0

    def __init__(self, name: str | None = None) -> None:
        SceneObject._created += 1
        self.name = name if name is not None else f"SceneObject{SceneObject._created}"

    def to_dict(self) -> dict[str, Any]:
        """Return the persistent state of the object."""
        return {"name": self.name}

    def load_dict(self, data: dict[str, Any]) -> None:
        """Restore the state written by :meth:`to_dict`."""
        try:
            name = data["name"]
        except KeyError:
            raise ValueError("serialized object has no 'name'") from None
        if not isinstance(name, str):
            raise ValueError("serialized 'name' must be a string")
        self.name = name

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class Callback(SceneObject):
    """A callback that subclasses specialise; the base only honours ``enabled``."""

    def __init__(self) -> None:
        super().__init__()
        self.enabled = True

    def run(self, obj: SceneObject | None, data: Any) -> bool:
        """Run the callback on ``obj``; return ``False`` when disabled."""
        return self.enabled