# claude_cmd/catalog.py
"""Catalog client: loads the commands index from a URL or a local JSON file.

The index is a JSON array of command records. Loaded data is kept in memory
for a fixed freshness window; failed loads fall back to the last good copy.
"""
import json
import logging
import time
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
from urllib.parse import urljoin

import httpx

from claude_cmd.config import settings
from claude_cmd.exceptions import CatalogError, CommandNotFoundError
from claude_cmd.frontmatter import normalize_tags

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
SORT_FIELDS = ("name", "author", "created_at", "updated_at")
SUB_AGENT_TYPES = {"agent", "sub-agent", "subagent"}


def _optional_str(value) -> Optional[str]:
    return None if value is None else str(value)


@dataclass
class Command:
    id: str
    name: str
    description: str = ""
    author: str = ""
    tags: list[str] = field(default_factory=list)
    file_path: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""
    version: Optional[str] = None
    downloads: Optional[int] = None
    filename: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Command":
        command_id = str(data.get("id") or data.get("name") or "")
        return cls(
            id=command_id,
            name=str(data.get("name") or command_id),
            description=str(data.get("description") or ""),
            author=str(data.get("author") or ""),
            tags=normalize_tags(data.get("tags")),
            file_path=_optional_str(data.get("filePath") or data.get("file_path")),
            created_at=str(data.get("created_at") or ""),
            updated_at=str(data.get("updated_at") or ""),
            version=_optional_str(data.get("version")),
            downloads=data.get("downloads"),
            filename=_optional_str(data.get("filename")),
            type=_optional_str(data.get("type")),
        )

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def is_sub_agent(self) -> bool:
        if self.type and self.type.lower() in SUB_AGENT_TYPES:
            return True
        path = (self.file_path or "").replace("\\", "/")
        return path.startswith("agents/") or "/agents/" in path


@dataclass
class SearchParams:
    q: Optional[str] = None
    tags: Optional[str] = None
    author: Optional[str] = None
    limit: int = DEFAULT_LIMIT
    offset: int = 0
    sort: Optional[str] = None


@dataclass
class Pagination:
    total: int
    limit: int
    offset: int
    has_next: bool
    has_previous: bool

    @property
    def current_page(self) -> int:
        return self.offset // self.limit + 1 if self.limit else 1

    @property
    def total_pages(self) -> int:
        if not self.limit:
            return 1
        return -(-self.total // self.limit)


@dataclass
class CatalogPage:
    data: list[Command]
    pagination: Pagination


def filter_commands(commands: list[Command], params: SearchParams) -> list[Command]:
    """Apply query, tag, author filters and optional sort. Unsorted results keep catalog order."""
    filtered = list(commands)

    if params.q:
        query = params.q.lower()
        filtered = [
            cmd for cmd in filtered
            if query in cmd.name.lower()
            or query in cmd.description.lower()
            or query in cmd.author.lower()
            or any(query in tag.lower() for tag in cmd.tags)
        ]

    if params.tags:
        search_tags = {t.strip().lower() for t in params.tags.split(",") if t.strip()}
        filtered = [
            cmd for cmd in filtered
            if any(tag.lower() in search_tags for tag in cmd.tags)
        ]

    if params.author:
        author_query = params.author.lower()
        filtered = [cmd for cmd in filtered if author_query in cmd.author.lower()]

    if params.sort:
        if params.sort not in SORT_FIELDS:
            raise ValueError(f"Unsupported sort field: {params.sort}. Use one of {SORT_FIELDS}")
        if params.sort in ("name", "author"):
            filtered.sort(key=lambda cmd: getattr(cmd, params.sort).lower())
        else:
            # ISO-8601 timestamps order correctly as strings
            filtered.sort(key=lambda cmd: getattr(cmd, params.sort))

    return filtered


def paginate(commands: list[Command], limit: int, offset: int) -> CatalogPage:
    limit = limit or DEFAULT_LIMIT
    offset = max(offset, 0)
    return CatalogPage(
        data=commands[offset:offset + limit],
        pagination=Pagination(
            total=len(commands),
            limit=limit,
            offset=offset,
            has_next=offset + limit < len(commands),
            has_previous=offset > 0,
        ),
    )


def count_by(values: list[str]) -> list[dict]:
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return [
        {"name": name, "count": count}
        for name, count in sorted(counts.items(), key=lambda item: item[1], reverse=True)
    ]


class CatalogClient:
    """Reads the commands catalog and serves filtered, paginated views of it."""

    def __init__(
        self,
        source: Optional[str] = None,
        cache_duration: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        self.source = source or settings.commands_url
        self.is_url = self.source.startswith(("http://", "https://"))
        self.cache_duration = (
            settings.cache_duration_seconds if cache_duration is None else cache_duration
        )
        self.timeout = settings.request_timeout if timeout is None else timeout
        self._cached_commands: Optional[list[Command]] = None
        self._cache_timestamp: float = 0.0

    # -- Loading ─────────────────────────────────────────────────────

    async def _fetch_json(self) -> list:
        """GET the catalog URL and decode it."""
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(self.source)
            response.raise_for_status()
            return response.json()

    def _read_local(self) -> Optional[list]:
        path = Path(self.source).expanduser()
        if not path.exists():
            logger.warning("Catalog file not found: %s", path)
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    def _parse_records(self, raw) -> list[Command]:
        """Build commands from a decoded catalog, skipping malformed records."""
        if not isinstance(raw, list):
            raise CatalogError("Catalog must be a JSON array of commands", source=self.source)

        commands = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                logger.warning("Skipping catalog record %d: not an object", index)
                continue
            try:
                commands.append(Command.from_dict(item))
            except (TypeError, ValueError) as e:
                logger.warning("Skipping malformed catalog record %s: %s", item.get("id", index), e)
        return commands

    def _cache_is_fresh(self) -> bool:
        if self._cached_commands is None:
            return False
        return time.monotonic() - self._cache_timestamp < self.cache_duration

    async def load_commands(self) -> list[Command]:
        """Return all catalog records, served from cache inside the freshness window."""
        if self._cache_is_fresh():
            return self._cached_commands

        try:
            if self.is_url:
                raw = await self._fetch_json()
            else:
                raw = self._read_local()
                if raw is None:
                    return self._cached_commands or []
            commands = self._parse_records(raw)
        # ValueError covers JSONDecodeError and UnicodeDecodeError
        except (httpx.HTTPError, ValueError, OSError, CatalogError) as e:
            logger.warning("Error loading commands data from %s: %s", self.source, e)
            return self._cached_commands or []

        self._cached_commands = commands
        self._cache_timestamp = time.monotonic()
        return commands

    def invalidate_cache(self) -> None:
        self._cached_commands = None
        self._cache_timestamp = 0.0

    # -- Queries ─────────────────────────────────────────────────────

    async def get_commands(self, params: Optional[SearchParams] = None) -> CatalogPage:
        params = params or SearchParams()
        commands = await self.load_commands()
        filtered = filter_commands(commands, params)
        return paginate(filtered, params.limit, params.offset)

    async def get_command(self, command_id: str) -> Command:
        commands = await self.load_commands()
        for command in commands:
            if command.id == command_id:
                return command
        raise CommandNotFoundError(command_id)

    async def search_commands(self, query: str) -> list[Command]:
        page = await self.get_commands(SearchParams(q=query))
        return page.data

    async def get_tags(self) -> list[dict]:
        commands = await self.load_commands()
        return count_by([tag for cmd in commands for tag in cmd.tags])

    async def get_authors(self) -> list[dict]:
        commands = await self.load_commands()
        return count_by([cmd.author for cmd in commands])

    async def get_sub_agents(self, params: Optional[SearchParams] = None) -> CatalogPage:
        params = params or SearchParams()
        commands = [cmd for cmd in await self.load_commands() if cmd.is_sub_agent]
        return paginate(filter_commands(commands, params), params.limit, params.offset)

    async def get_sub_agent(self, sub_agent_id: str) -> Command:
        command = await self.get_command(sub_agent_id)
        if not command.is_sub_agent:
            raise CommandNotFoundError(sub_agent_id)
        return command

    # -- File content ────────────────────────────────────────────────

    def resolve_file_location(self, file_path: str) -> str:
        """Resolve a record's filePath against the catalog's own location."""
        if self.is_url:
            return urljoin(self.source, file_path)
        return str(Path(self.source).expanduser().parent / file_path)

    async def _fetch_text(self, url: str) -> str:
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.text

    async def fetch_file_content(self, file_path: str) -> Optional[str]:
        """Fetch the markdown behind a catalog record. Returns None on failure."""
        location = self.resolve_file_location(file_path)
        try:
            if self.is_url:
                return await self._fetch_text(location)
            path = Path(location)
            if not path.exists():
                logger.warning("Command file not found: %s", path)
                return None
            return path.read_text(encoding="utf-8")
        except (httpx.HTTPError, OSError) as e:
            logger.warning("Error fetching file content from %s: %s", location, e)
            return None
