"""Snapshot reader for loading analytics collections from a JSON file.

This module reads a data snapshot exported from the application database
and builds an :class:`InMemoryStorage` from it. Invalid records are skipped
with a warning so one bad row does not hide the rest of the data.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from flowchain.models.base import BaseDataModel
from flowchain.models.project import Project
from flowchain.models.task import Task
from flowchain.models.timesheet import Timesheet
from flowchain.models.user import User
from flowchain.storage.interface import StorageError
from flowchain.storage.memory_storage import InMemoryStorage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseDataModel)


class SnapshotLoadError(StorageError):
    """Raised when a snapshot file cannot be read or is not a JSON object."""

    pass


class SnapshotReader:
    """Reader for JSON data snapshots.

    The expected file structure:

    ```
    {
      "projects":   [{"id": "p1", "name": "Website", "status": "Completed", ...}],
      "tasks":      [{"id": "t1", "projectId": "p1", "status": "Completed", ...}],
      "timesheets": [{"id": "ts1", "taskId": "t1", "timeLogged": 5, ...}],
      "users":      [{"id": "u1", "name": "Jane Doe", ...}]
    }
    ```

    Every collection is optional; a missing key loads as empty.

    Attributes:
        path: Location of the snapshot file

    Example:
        >>> reader = SnapshotReader("data/snapshot.json")
        >>> storage = reader.load()
        >>> len(storage.list_projects())
        12
    """

    def __init__(self, path: Union[str, Path]):
        """Initialize the snapshot reader.

        Args:
            path: Location of the snapshot JSON file
        """
        self.path = Path(path)

    def load(self) -> InMemoryStorage:
        """Read the snapshot file and build an in-memory storage.

        Returns:
            InMemoryStorage populated with every valid record

        Raises:
            SnapshotLoadError: If the file is missing, unreadable or not a
                JSON object
        """
        logger.info(f"Loading data snapshot from {self.path}")
        try:
            with self.path.open("r", encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError as e:
            raise SnapshotLoadError(f"Snapshot file not found: {self.path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotLoadError(f"Failed to read snapshot {self.path}: {e}") from e

        return self.load_from_dict(payload)

    def load_from_dict(self, payload: Any) -> InMemoryStorage:
        """Build an in-memory storage from an already decoded snapshot.

        Args:
            payload: Decoded snapshot object

        Returns:
            InMemoryStorage populated with every valid record

        Raises:
            SnapshotLoadError: If the payload is not a JSON object
        """
        if not isinstance(payload, dict):
            raise SnapshotLoadError(
                f"Snapshot must be a JSON object, got {type(payload).__name__}"
            )

        projects = self._parse_records(payload, "projects", Project)
        tasks = self._parse_records(payload, "tasks", Task)
        timesheets = self._parse_records(payload, "timesheets", Timesheet)
        users = self._parse_records(payload, "users", User, self._strip_password)

        logger.info(
            f"Loaded {len(projects)} projects, {len(tasks)} tasks, "
            f"{len(timesheets)} timesheets, {len(users)} users"
        )

        return InMemoryStorage(
            projects=projects, tasks=tasks, timesheets=timesheets, users=users
        )

    def _parse_records(
        self,
        payload: Dict[str, Any],
        key: str,
        model: Type[ModelT],
        prepare: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None,
    ) -> List[ModelT]:
        """Parse one collection, skipping records that fail validation.

        Args:
            payload: Decoded snapshot object
            key: Collection key in the snapshot
            model: Model class for the collection
            prepare: Optional hook applied to each raw record first

        Returns:
            List of validated model instances
        """
        raw_records = payload.get(key) or []
        if not isinstance(raw_records, list):
            logger.warning(f"Expected a list for '{key}', got {type(raw_records).__name__}")
            return []

        records: List[ModelT] = []
        for index, raw in enumerate(raw_records):
            if not isinstance(raw, dict):
                logger.warning(f"Skipping {key}[{index}]: not an object")
                continue
            if prepare:
                raw = prepare(raw)
            try:
                records.append(model.model_validate(raw))
            except ValidationError as e:
                logger.warning(
                    f"Validation error for {key}[{index}] "
                    f"(id={raw.get('id', 'unknown')}): {e}"
                )

        return records

    @staticmethod
    def _strip_password(record: Dict[str, Any]) -> Dict[str, Any]:
        """Drop password hashes before they reach a model."""
        return {k: v for k, v in record.items() if k != "password"}
