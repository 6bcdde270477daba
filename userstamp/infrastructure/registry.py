"""Type-level cache of stamp policies keyed by mapped class."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from sqlalchemy import event, inspect
from sqlalchemy.orm import Mapper

from userstamp.application.use_cases import classify_columns
from userstamp.domain.entities import StampPolicy
from .mapping import describe_columns

logger = logging.getLogger(__name__)


class StampPolicyRegistry:
    """Hold one immutable :class:`StampPolicy` per record type.

    Writers replace the whole mapping under a lock; readers only ever see a
    complete mapping, so lookups need no locking.
    """

    def __init__(self) -> None:
        self._policies: Mapping[type, StampPolicy] = MappingProxyType({})
        self._lock = threading.Lock()
        self._targets: list[Any] = []

    def __contains__(self, cls: object) -> bool:
        return cls in self._policies

    def __len__(self) -> int:
        return len(self._policies)

    def get(self, cls: type) -> StampPolicy:
        """Return the policy of ``cls`` or the empty policy."""

        return self._policies.get(cls, StampPolicy.empty())

    def register(self, cls: type, policy: StampPolicy) -> None:
        with self._lock:
            policies = dict(self._policies)
            policies[cls] = policy
            self._policies = MappingProxyType(policies)

    def classify(self, target: Any) -> StampPolicy:
        """Compute the policy of a mapped class (or mapper) and store it.

        Any previous policy of the class is replaced, never merged.
        """

        mapper: Mapper = inspect(target)
        policy = classify_columns(
            describe_columns(mapper), owner=mapper.class_.__name__
        )
        self.register(mapper.class_, policy)
        return policy

    def snapshot(self) -> Mapping[type, StampPolicy]:
        """Return a read-only view of the current policies."""

        return self._policies

    def clear(self) -> None:
        with self._lock:
            self._policies = MappingProxyType({})

    def listen(self, target: Any) -> None:
        """Classify every mapped subclass of ``target`` once it is configured.

        ``target`` may be an unmapped mixin or declarative base; the listener
        propagates to subclasses mapped afterwards.
        """

        if any(existing is target for existing in self._targets):
            return
        event.listen(
            target, "mapper_configured", self._on_mapper_configured, propagate=True
        )
        self._targets.append(target)

    def _on_mapper_configured(self, mapper: Mapper, class_: type) -> None:
        self.classify(mapper)


default_registry = StampPolicyRegistry()


def refresh_policy(cls: type, registry: StampPolicyRegistry | None = None) -> StampPolicy:
    """Reclassify ``cls`` after its columns were redeclared."""

    return (registry or default_registry).classify(cls)


def policy_for(cls: type, registry: StampPolicyRegistry | None = None) -> StampPolicy:
    return (registry or default_registry).get(cls)


__all__ = ["StampPolicyRegistry", "default_registry", "policy_for", "refresh_policy"]
