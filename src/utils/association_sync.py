"""Replace-all synchronization of junction tables.

A junction table's rows for one owner are made to match an in-memory list
of related identities by deleting every existing row for the owner and
inserting the current set. The synchronizer never commits: it runs inside
the caller's transaction, so the owner's row write, the delete and the
inserts are committed or rolled back together.
"""

import logging
from typing import Iterable, List

from sqlalchemy import Table, delete, insert, select
from sqlalchemy.orm import Session

from models.associations import section_students, teacher_sections

logger = logging.getLogger(__name__)


class AssociationSynchronizer:
    """Reconciles one junction table for a single owner at a time."""

    def __init__(self, table: Table, owner_column: str, related_column: str):
        """Initialize AssociationSynchronizer.

        Args:
            table: The junction table.
            owner_column: Column holding the owning entity's id.
            related_column: Column holding the related entity's id.
        """
        self.table = table
        self.owner_column = owner_column
        self.related_column = related_column

    @property
    def _owner(self):
        return self.table.c[self.owner_column]

    @property
    def _related(self):
        return self.table.c[self.related_column]

    def replace_all(
        self, db: Session, owner_id: int, related_ids: Iterable[int]
    ) -> int:
        """Make the owner's junction rows exactly match ``related_ids``.

        An empty ``related_ids`` clears the owner's associations.

        Args:
            db: Session whose transaction the statements join.
            owner_id: Identity of the owning entity.
            related_ids: Identities of the related entities.

        Returns:
            Number of junction rows written.
        """
        # dict.fromkeys keeps order and drops repeats
        unique_ids = list(dict.fromkeys(related_ids))

        removed = db.execute(delete(self.table).where(self._owner == owner_id))
        if unique_ids:
            db.execute(
                insert(self.table),
                [
                    {self.owner_column: owner_id, self.related_column: related_id}
                    for related_id in unique_ids
                ],
            )
        logger.debug(
            "Synced %s for %s=%s: removed %s, wrote %s",
            self.table.name,
            self.owner_column,
            owner_id,
            removed.rowcount,
            len(unique_ids),
        )
        return len(unique_ids)

    def related_ids(self, db: Session, owner_id: int) -> List[int]:
        """Read the raw related ids stored for one owner.

        Rows pointing at deleted entities are included.
        """
        rows = db.execute(
            select(self._related)
            .where(self._owner == owner_id)
            .order_by(self._related)
        )
        return list(rows.scalars())


TEACHER_SECTIONS = AssociationSynchronizer(
    teacher_sections, "teacher_id", "section_id"
)
SECTION_STUDENTS = AssociationSynchronizer(
    section_students, "section_id", "student_id"
)
