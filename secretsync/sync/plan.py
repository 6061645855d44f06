from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from ..common.secret_names import NameTemplate, final_secret_name
from ..infisical.export import RawSecret


@dataclass(frozen=True)
class ComputedSecret:
    name: str
    value: str = field(repr=False)
    folder: str = ""


@dataclass(frozen=True)
class ComputedSecrets:
    """Accumulated secrets across folders, in export order.

    Names may repeat when two folders produce the same computed name; every
    entry is uploaded, so the later folder wins.
    """

    secrets: Tuple[ComputedSecret, ...] = ()

    @property
    def names(self) -> List[str]:
        return [s.name for s in self.secrets]

    def __len__(self) -> int:
        return len(self.secrets)

    def with_folder(self, folder: str, raw_secrets: Iterable[RawSecret], template: NameTemplate) -> "ComputedSecrets":
        added = tuple(
            ComputedSecret(name=final_secret_name(s.key, folder, template), value=s.value, folder=folder)
            for s in raw_secrets
        )
        return ComputedSecrets(secrets=self.secrets + added)


@dataclass(frozen=True)
class SyncPlan:
    to_add: List[ComputedSecret]
    to_update: List[ComputedSecret]
    to_remove: List[str]


def plan_sync(computed: ComputedSecrets, existing_names: Iterable[str]) -> SyncPlan:
    """Diff computed secrets against the names already stored in GitHub.

    ``to_remove`` is always computed; whether it is acted upon is the caller's
    ``clean`` decision.
    """
    existing = list(existing_names)
    existing_set = set(existing)
    computed_names = set(computed.names)

    to_add = [s for s in computed.secrets if s.name not in existing_set]
    to_update = [s for s in computed.secrets if s.name in existing_set]
    to_remove = [n for n in existing if n not in computed_names]
    return SyncPlan(to_add=to_add, to_update=to_update, to_remove=to_remove)
