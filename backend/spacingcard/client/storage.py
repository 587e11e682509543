"""
SpacingCard Client — Local Storage
====================================

What:  Small persistent key/value store for client-side state.
How:   One JSON object in a file, read and written with aiofiles.
Who:   SpacingForm keeps the current component_id here between sessions.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

import aiofiles

logger = logging.getLogger(__name__)


class LocalStorage:
    """String keys to string values, persisted to `path`."""

    def __init__(self, path: str):
        self.path = Path(path)

    async def get_item(self, key: str) -> Optional[str]:
        return (await self._load()).get(key)

    async def set_item(self, key: str, value: str) -> None:
        items = await self._load()
        items[key] = value
        await self._save(items)

    async def remove_item(self, key: str) -> None:
        items = await self._load()
        if items.pop(key, None) is not None:
            await self._save(items)

    async def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            raw = await f.read()
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable local storage file %s", self.path)
            return {}
        return {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}

    async def _save(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(items, indent=2))
