"""Built-in scripts, registered in the default script registry on import."""

from __future__ import annotations

from .scene import ScriptBase, register_script


@register_script
class TestScript(ScriptBase):
    """Greets on start and reports every tick on standard output."""

    __test__ = False

    def start(self) -> None:
        print("hello world")

    def update(self, delta: float) -> None:
        print(f"tick {delta:f}")