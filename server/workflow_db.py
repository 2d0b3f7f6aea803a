"""SQLite storage for owner-scoped workflows."""

import logging
import os
import sqlite3
from pathlib import Path

from flowgraph.exceptions import WorkflowNotFoundError
from flowgraph.models.workflow import Workflow, WorkflowCreate, WorkflowUpdate
from flowgraph.persistence import ensure_owner, ensure_saveable
from flowgraph.utils.identifiers import generate_workflow_id, utc_timestamp

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).parent / "data" / "flowgraph.db"
WORKFLOW_DB_PATH = Path(os.getenv("WORKFLOW_DB_PATH", str(DEFAULT_DB_PATH)))


class SqliteWorkflowStore:
    """Workflow store backed by one sqlite table.

    Each workflow is kept as a JSON document next to the columns used for
    scoping and ordering. A connection is opened per call.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = Path(db_path) if db_path else WORKFLOW_DB_PATH

    def _connect(self) -> sqlite3.Connection:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                create table if not exists workflows (
                    workflow_id text primary key,
                    owner text not null,
                    name text not null,
                    workflow_json text not null,
                    created_at text not null,
                    updated_at text not null
                )
                """
            )
            conn.execute(
                "create index if not exists idx_workflows_owner on workflows(owner)"
            )
            conn.commit()

    def _fetch(self, workflow_id: str) -> Workflow:
        with self._connect() as conn:
            row = conn.execute(
                "select workflow_json from workflows where workflow_id = ?",
                (workflow_id,),
            ).fetchone()
        if not row:
            raise WorkflowNotFoundError(workflow_id)
        return Workflow.model_validate_json(row["workflow_json"])

    def _write(self, conn: sqlite3.Connection, workflow: Workflow) -> None:
        conn.execute(
            """
            insert into workflows (workflow_id, owner, name, workflow_json, created_at, updated_at)
            values (?, ?, ?, ?, ?, ?)
            on conflict(workflow_id) do update set
                name = excluded.name,
                workflow_json = excluded.workflow_json,
                updated_at = excluded.updated_at
            """,
            (
                workflow.id,
                workflow.owner,
                workflow.name,
                workflow.model_dump_json(by_alias=True),
                workflow.created_at,
                workflow.updated_at,
            ),
        )

    def create(self, request: WorkflowCreate) -> Workflow:
        """validate and insert a new workflow; the id is assigned here."""
        ensure_saveable(request.nodes, request.edges)

        now = utc_timestamp()
        workflow = Workflow(
            id=generate_workflow_id(),
            name=request.name,
            owner=request.owner,
            nodes=request.nodes,
            edges=request.edges,
            created_at=now,
            updated_at=now,
        )
        with self._connect() as conn:
            self._write(conn, workflow)
            conn.commit()
        logger.info("created workflow %s for %s", workflow.id, workflow.owner)
        return workflow

    def get(self, workflow_id: str, owner: str) -> Workflow:
        workflow = self._fetch(workflow_id)
        ensure_owner(workflow, owner)
        return workflow

    def list_for_owner(self, owner: str) -> list[Workflow]:
        """list an owner's workflows, most recently created first."""
        with self._connect() as conn:
            rows = conn.execute(
                """
                select workflow_json from workflows
                where owner = ?
                order by created_at desc, rowid desc
                """,
                (owner,),
            ).fetchall()
        return [Workflow.model_validate_json(row["workflow_json"]) for row in rows]

    def update(self, request: WorkflowUpdate) -> Workflow:
        """replace name and graph of an existing workflow, refreshing updated_at."""
        existing = self._fetch(request.id)
        ensure_owner(existing, request.owner)
        ensure_saveable(request.nodes, request.edges)

        workflow = existing.model_copy(
            update={
                "name": request.name,
                "nodes": request.nodes,
                "edges": request.edges,
                "updated_at": utc_timestamp(),
            }
        )
        with self._connect() as conn:
            self._write(conn, workflow)
            conn.commit()
        logger.info("updated workflow %s", workflow.id)
        return workflow

    def delete(self, workflow_id: str, owner: str) -> None:
        ensure_owner(self._fetch(workflow_id), owner)
        with self._connect() as conn:
            conn.execute("delete from workflows where workflow_id = ?", (workflow_id,))
            conn.commit()
        logger.info("deleted workflow %s", workflow_id)

    def delete_all_for_owner(self, owner: str) -> int:
        """delete every workflow of an owner and return how many were removed."""
        with self._connect() as conn:
            cursor = conn.execute("delete from workflows where owner = ?", (owner,))
            conn.commit()
        logger.info("deleted %d workflow(s) for %s", cursor.rowcount, owner)
        return cursor.rowcount


def init_db() -> None:
    SqliteWorkflowStore().init_db()
