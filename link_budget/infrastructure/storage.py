import json

import aiofiles
from pathlib import Path

from link_budget.application.session import LinkBudgetSession
from link_budget.application.services.base import BaseSessionStorage
from link_budget.domain.exceptions import StorageException
from link_budget.logging_config import get_logger

logger = get_logger(__name__)


class FileSessionStorage(BaseSessionStorage):
    """Stores each session as one flat JSON record named ``<name>.json``."""

    suffix = ".json"

    def __init__(self, output_dir: str = "."):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        return self.output_dir / (name + self.suffix)

    async def load(self, name: str) -> LinkBudgetSession:
        file_path = self._path(name)
        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
                content = await f.read()
            return LinkBudgetSession.from_dict(json.loads(content))
        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            raise StorageException(f"Malformed session record {file_path}: {e}") from e

    async def store(self, name: str, session: LinkBudgetSession) -> None:
        file_path = self._path(name)
        content = json.dumps(session.to_dict(), indent=2)

        async with aiofiles.open(file_path, "w", encoding="utf-8") as f:
            await f.write(content)
        logger.debug("Stored session %s to %s", name, file_path)
