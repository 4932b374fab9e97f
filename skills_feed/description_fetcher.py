"""
SKILL.md description fetcher
Fetches SKILL.md files from GitHub and fills in descriptions in skills_index.json
"""

import re
import sys
import asyncio
import logging
import aiohttp
import jsonschema
from pathlib import Path, PureWindowsPath
from typing import Awaitable, Callable, List, Optional, TypeVar

from .config import (
    GITHUB_RAW_BASE,
    GITHUB_TOKEN,
    RAW_TIMEOUT,
    FETCH_CONCURRENCY,
    FETCH_TOP_N,
    CANDIDATE_PATHS,
    DATA_DIR,
    INDEX_FILE,
    SKILLS_MD_DIR,
)
from .index_store import load_index, save_index
from .skill_parser import SkillParser

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

T = TypeVar('T')
R = TypeVar('R')

PROGRESS_EVERY = 100


def is_safe_key(source: str, skill_id: str) -> bool:
    """True if source/skill_id stays inside the cache directory when used as a path"""
    for value in (source, skill_id):
        if not value or value.startswith(('/', '\\')) or PureWindowsPath(value).drive:
            return False
        if '..' in re.split(r'[\\/]', value):
            return False
    return True


def candidate_paths(source: str, skill_id: str) -> List[str]:
    """Repository paths to try for a skill's SKILL.md, in order"""
    return [pattern.format(skill_id=skill_id) for pattern in CANDIDATE_PATHS]


async def process_pool(
    items: List[T],
    concurrency: int,
    fn: Callable[[T], Awaitable[R]],
) -> List[R]:
    """
    Run fn over items with at most `concurrency` calls in flight.

    Workers pull the next index from a shared cursor, and each result is
    stored in the slot matching its input, so the output keeps input order.
    """
    results: List[Optional[R]] = [None] * len(items)
    cursor = 0

    async def worker():
        nonlocal cursor
        # No await between the check and the increment, so no lock is needed
        while cursor < len(items):
            idx = cursor
            cursor += 1
            results[idx] = await fn(items[idx])

    workers = max(1, min(concurrency, len(items)))
    await asyncio.gather(*(worker() for _ in range(workers)))
    return results


class SkillMdFetcher:
    """Fetch and cache SKILL.md files and extract their descriptions"""

    def __init__(
        self,
        md_dir,
        token: Optional[str] = GITHUB_TOKEN,
        concurrency: int = FETCH_CONCURRENCY,
        md_path_prefix: str = f"{DATA_DIR}/{SKILLS_MD_DIR}",
        raw_base: str = GITHUB_RAW_BASE,
        raw_timeout: float = RAW_TIMEOUT,
    ):
        self.md_dir = Path(md_dir)
        self.token = token
        self.concurrency = concurrency
        self.md_path_prefix = md_path_prefix.rstrip('/')
        self.raw_base = raw_base.rstrip('/')
        self.raw_timeout = raw_timeout
        self.parser = SkillParser()

    def cache_path(self, item: dict) -> Path:
        if not is_safe_key(item['source'], item['skillId']):
            raise ValueError(f"Unsafe cache key for {item['id']}")
        return self.md_dir / item['source'] / item['skillId'] / 'SKILL.md'

    def md_path(self, item: dict) -> str:
        return f"{self.md_path_prefix}/{item['source']}/{item['skillId']}/SKILL.md"

    def read_cache(self, item: dict) -> Optional[str]:
        """Cached SKILL.md content, or None on a miss or an unreadable file"""
        path = self.cache_path(item)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Ignoring unreadable cache file {path}: {e}")
            return None

    def write_cache(self, item: dict, content: str) -> None:
        path = self.cache_path(item)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')

    def headers(self) -> dict:
        headers = {'User-Agent': 'Skills-Feed/1.0'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'
        return headers

    async def fetch_raw(self, session: aiohttp.ClientSession, source: str, path: str) -> Optional[str]:
        """Fetch a raw file from the repository's default branch, None if unavailable"""
        url = f"{self.raw_base}/{source}/HEAD/{path}"
        try:
            async with session.get(url, timeout=aiohttp.ClientTimeout(total=self.raw_timeout)) as resp:
                if resp.status == 200:
                    return await resp.text()
                logger.debug(f"HTTP {resp.status} for {url}")
                return None
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            logger.debug(f"Request failed for {url}: {e!r}")
            return None

    async def fetch_description(self, session: aiohttp.ClientSession, item: dict) -> dict:
        """Description for one skill, from the local cache or GitHub"""
        result = {'id': item['id'], 'description': None, 'skillMdPath': None}

        if not is_safe_key(item['source'], item['skillId']):
            logger.warning(f"Skipping {item['id']}: source or skill id is not a safe relative path")
            return result

        cached = self.read_cache(item)
        if cached is not None:
            description = self.parser.describe(cached)
            if description:
                result.update(description=description, skillMdPath=self.md_path(item))
                return result

        for path in candidate_paths(item['source'], item['skillId']):
            content = await self.fetch_raw(session, item['source'], path)
            if content:
                self.write_cache(item, content)
                result.update(
                    description=self.parser.describe(content),
                    skillMdPath=self.md_path(item),
                )
                return result

        return result

    async def enrich(self, index: dict, top_n: int = FETCH_TOP_N) -> dict:
        """Fill in missing descriptions for the top_n skills of the index, in place"""
        needs_fetch = [item for item in index['items'][:top_n] if not item.get('description')]

        logger.info(f"Total skills: {len(index['items'])}")
        logger.info(f"Processing top {top_n}, {len(needs_fetch)} need descriptions")
        logger.info(f"Concurrency: {self.concurrency}")

        stats = {'total': len(needs_fetch), 'processed': 0, 'found': 0}

        async with aiohttp.ClientSession(headers=self.headers()) as session:

            async def fetch_one(item: dict) -> dict:
                result = await self.fetch_description(session, item)
                stats['processed'] += 1
                if result['description']:
                    stats['found'] += 1
                if stats['processed'] % PROGRESS_EVERY == 0:
                    logger.info(
                        f"Progress: {stats['processed']}/{stats['total']} "
                        f"({stats['found']} descriptions found)"
                    )
                return result

            results = await process_pool(needs_fetch, self.concurrency, fetch_one)

        apply_descriptions(index, results)
        return stats


def apply_descriptions(index: dict, results: List[dict]) -> int:
    """Patch index items that got a description; everything else stays as it was"""
    found = {r['id']: r for r in results if r and r.get('description')}

    patched = 0
    for item in index['items']:
        result = found.get(item['id'])
        if result:
            item['description'] = result['description']
            item['skillMdPath'] = result['skillMdPath']
            patched += 1
    return patched


def run(
    data_dir=DATA_DIR,
    top_n: int = FETCH_TOP_N,
    concurrency: int = FETCH_CONCURRENCY,
    token: Optional[str] = GITHUB_TOKEN,
) -> dict:
    """Enrich skills_index.json in data_dir with SKILL.md descriptions"""
    data_dir = Path(data_dir)
    index_path = data_dir / INDEX_FILE

    index = load_index(index_path)
    fetcher = SkillMdFetcher(
        data_dir / SKILLS_MD_DIR,
        token=token,
        concurrency=concurrency,
        md_path_prefix=(data_dir / SKILLS_MD_DIR).as_posix(),
    )
    stats = asyncio.run(fetcher.enrich(index, top_n))

    save_index(index_path, index)
    return stats


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Fetch SKILL.md descriptions for indexed skills')
    parser.add_argument('--data-dir', default=DATA_DIR, help='Data directory')
    parser.add_argument('--top', type=int, default=FETCH_TOP_N, help='Only process the top N skills')
    parser.add_argument('--concurrency', type=int, default=FETCH_CONCURRENCY, help='Concurrent fetches')
    parser.add_argument('--token', default=GITHUB_TOKEN, help='GitHub token')

    args = parser.parse_args()

    logger.info("Fetching SKILL.md descriptions...")
    try:
        stats = run(args.data_dir, top_n=args.top, concurrency=args.concurrency, token=args.token)
    except (OSError, ValueError, jsonschema.ValidationError) as e:
        logger.error(f"Fetch descriptions failed: {e}")
        sys.exit(1)

    logger.info(f"Done! {stats['found']}/{stats['processed']} skills got descriptions.")


if __name__ == '__main__':
    main()
