"""Result artifact storage with async I/O"""

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List

import aiofiles
import orjson
from loguru import logger

from .models import Leg, Query


def build_run_dir(output_dir: Path, query: Query, timestamp: str = None) -> Path:
    """Per-search directory: <output>/<ORIG>_<DEST>_<date>_<timestamp>"""
    if timestamp is None:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return output_dir / f"{query.origin}_{query.destination}_{query.depart_date.isoformat()}_{timestamp}"


class ResultsSink:
    """
    Persists the raw artifacts of one search.

    Uses aiofiles for async I/O and orjson for serialization. Every written
    path is recorded in ``artifacts`` under the name it was saved as.
    """

    def __init__(self, browser, run_dir: Path):
        """
        Initialize results sink.

        Args:
            browser: Browser facade used to snapshot the current page
            run_dir: Directory receiving this search's artifacts
        """
        self.browser = browser
        self.run_dir = run_dir
        self.artifacts: Dict[str, List[Path]] = {}

        self.run_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Results directory: {run_dir}")

    def _record(self, name: str, path: Path) -> Path:
        self.artifacts.setdefault(name, []).append(path)
        return path

    async def _write_bytes(self, path: Path, data: bytes) -> None:
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)

    async def save_structured(self, name: str, data: Any) -> Path:
        """Save JSON-serializable data as <name>.json"""
        path = self.run_dir / f"{name}.json"
        json_bytes = orjson.dumps(data, option=orjson.OPT_INDENT_2)
        await self._write_bytes(path, json_bytes)
        logger.debug(f"💾 Saved {path.name} ({len(json_bytes)/1024:.1f}KB)")
        return self._record(name, path)

    async def save_raw_snapshot(self, name: str) -> Path:
        """Save the current page HTML as <name>.html"""
        path = self.run_dir / f"{name}.html"
        html = await self.browser.content()
        await self._write_bytes(path, html.encode("utf-8"))
        logger.debug(f"💾 Saved {path.name} ({len(html)/1024:.1f}KB)")
        return self._record(name, path)

    async def save_screenshot(self, name: str) -> Path:
        """Save a full-page screenshot as <name>.png"""
        path = self.run_dir / f"{name}.png"
        await self.browser.screenshot(path)
        logger.debug(f"📸 Saved {path.name}")
        return self._record(name, path)

    async def save_manifest(self, query: Query, legs: Iterable[Leg]) -> Path:
        """Describe the search and list every artifact written for it"""
        manifest = {
            "search_metadata": {
                "origin": query.origin,
                "destination": query.destination,
                "depart_date": query.depart_date.isoformat(),
                "return_date": query.return_date.isoformat() if query.return_date else None,
                "one_way": query.one_way,
                "passengers": query.passengers,
                "cabin_class": query.cabin.value,
            },
            "legs": [leg.value for leg in legs],
            "artifacts": {
                name: [path.name for path in paths]
                for name, paths in self.artifacts.items()
            },
            "captured_at": datetime.now(timezone.utc).isoformat(),
        }
        path = await self.save_structured("manifest", manifest)
        logger.success(f"💾 Saved results to {self.run_dir}")
        return path
