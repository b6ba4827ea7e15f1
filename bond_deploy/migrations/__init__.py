"""
Migrations
==========

Numbered deployment steps, run in ascending order. A network's deployment
registry remembers the last step that completed, so re-running only applies
newer steps.

- 4 basic_token_vault: BondToken and the TokenVault holding it
- 6 destination_migration: DesinationTokenManager and DestinationBondToken
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..exceptions import ConfigurationError
from . import basic_token_vault, destination_migration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    number: int
    name: str
    run: Callable


MIGRATIONS: List[Migration] = [
    Migration(4, "basic_token_vault", basic_token_vault.migrate),
    Migration(6, "destination_migration", destination_migration.migrate),
]


def pending_migrations(last_completed: int, reset: bool = False,
                       from_step: Optional[int] = None, to_step: Optional[int] = None) -> List[Migration]:
    if from_step is not None and to_step is not None and from_step > to_step:
        raise ConfigurationError(f"--from {from_step} is after --to {to_step}")

    if from_step is not None:
        lower = from_step
    elif reset:
        lower = 0
    else:
        lower = last_completed + 1

    return [
        m for m in sorted(MIGRATIONS, key=lambda m: m.number)
        if m.number >= lower and (to_step is None or m.number <= to_step)
    ]


def run_migrations(deployer, registry, reset: bool = False,
                   from_step: Optional[int] = None, to_step: Optional[int] = None) -> List[Migration]:
    """Run outstanding migrations against ``deployer``; returns the ones that ran."""
    if reset:
        registry.reset()

    todo = pending_migrations(registry.last_completed_migration, reset, from_step, to_step)
    if not todo:
        logger.info(f"Network up to date (last completed migration: {registry.last_completed_migration})")
        return []

    for migration in todo:
        logger.info(f"Running migration {migration.number}_{migration.name}")
        migration.run(deployer)
        registry.mark_completed(migration.number)
        logger.info(f"Migration {migration.number}_{migration.name} complete")

    return todo
