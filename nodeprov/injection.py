"""An immutable context carrying request-scoped values through the controllers."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from nodeprov.objects import NamespacedName
from nodeprov.options import Options


@dataclass(frozen=True)
class Context:
    """Values passed along a call chain; each ``with_*`` returns a new context."""

    namespaced_name: NamespacedName = field(default_factory=NamespacedName)
    options: Options = field(default_factory=Options)
    config: Any = None
    controller_name: str = ""

    def with_namespaced_name(self, name: NamespacedName) -> Context:
        return dataclasses.replace(self, namespaced_name=name)

    def with_options(self, options: Options) -> Context:
        return dataclasses.replace(self, options=options)

    def with_config(self, config: Any) -> Context:
        return dataclasses.replace(self, config=config)

    def with_controller_name(self, name: str) -> Context:
        return dataclasses.replace(self, controller_name=name)