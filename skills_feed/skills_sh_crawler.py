"""
skills.sh Crawler
Fetches every leaderboard from the skills.sh API and builds skills_index.json
"""

import sys
import time
import logging
import requests
from pathlib import Path
from urllib.parse import quote
from typing import Callable, Dict, Iterable, List, Optional

from .config import (
    SKILLS_API_BASE,
    SKILLS_SITE_BASE,
    PROVIDER_ID,
    BOARDS,
    API_DELAY,
    REQUEST_TIMEOUT,
    MAX_RETRIES,
    BACKOFF_BASE,
    DATA_DIR,
    INDEX_FILE,
    FIRST_SEEN_FILE,
)
from .index_store import (
    utc_now,
    load_first_seen,
    save_first_seen,
    stamp_first_seen,
    save_index,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone
LINK_SAFE = "!*'()"


def skill_key(skill: dict) -> str:
    return f"{skill['source']}/{skill['skillId']}"


def skill_link(source: str, skill_id: str) -> str:
    return f"{SKILLS_SITE_BASE}/{quote(source, safe=LINK_SAFE)}/{quote(skill_id, safe=LINK_SAFE)}"


def merge_installs(rows: Iterable[dict]) -> Dict[str, int]:
    """Max install count per id, so duplicate rows within a board never lower it"""
    installs = {}
    for skill in rows:
        key = skill_key(skill)
        installs[key] = max(installs.get(key, 0), skill.get('installs') or 0)
    return installs


def collect_unique(board_data: Dict[str, List[dict]]) -> Dict[str, dict]:
    """Union of all boards keyed by id; the first row seen keeps its name and link"""
    unique = {}
    for board in BOARDS:
        for skill in board_data.get(board, []):
            unique.setdefault(skill_key(skill), skill)
    return unique


def build_items(board_data: Dict[str, List[dict]], first_seen: Dict[str, str]) -> List[dict]:
    """Build index items sorted by all-time installs, ties in first-seen order"""
    installs = {board: merge_installs(board_data.get(board, [])) for board in BOARDS}

    items = []
    for key, skill in collect_unique(board_data).items():
        items.append({
            'id': key,
            'providerId': PROVIDER_ID,
            'source': skill['source'],
            'skillId': skill['skillId'],
            'title': skill.get('name') or skill['skillId'],
            'link': skill_link(skill['source'], skill['skillId']),
            'installsAllTime': installs['all-time'].get(key, 0),
            'installsTrending': installs['trending'].get(key, 0),
            'installsHot': installs['hot'].get(key, 0),
            'firstSeenAt': first_seen.get(key),
            'description': None,
            'skillMdPath': None,
        })

    # list.sort is stable
    items.sort(key=lambda x: x['installsAllTime'], reverse=True)
    return items


def build_index(items: List[dict], now: str) -> dict:
    return {
        'updatedAt': now,
        'sourceUpdatedAt': now,
        'providerId': PROVIDER_ID,
        'count': len(items),
        'items': items,
    }


class SkillsShCrawler:
    """Crawl the skills.sh leaderboards"""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        delay: float = API_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session or requests.Session()
        self.session.headers['User-Agent'] = 'Skills-Feed/1.0'
        self.delay = delay
        self.sleep = sleep

    def _request(self, url: str) -> requests.Response:
        """GET with retries on 429, 5xx and network errors"""
        for attempt in range(MAX_RETRIES):
            last_attempt = attempt == MAX_RETRIES - 1
            wait_time = BACKOFF_BASE * 2 ** attempt

            try:
                response = self.session.get(url, timeout=REQUEST_TIMEOUT)
            except requests.RequestException as e:
                if last_attempt:
                    raise
                logger.warning(f"Request failed ({e}), retry {attempt + 1}/{MAX_RETRIES}...")
                self.sleep(wait_time)
                continue

            if response.ok:
                return response

            if response.status_code == 429 or response.status_code >= 500:
                if last_attempt:
                    response.raise_for_status()
                logger.warning(f"HTTP {response.status_code}, retry {attempt + 1}/{MAX_RETRIES}...")
                self.sleep(wait_time)
                continue

            # Any other client error will not get better by retrying
            response.raise_for_status()

        raise RuntimeError("unreachable")

    def fetch_board(self, board: str) -> List[dict]:
        """Fetch every page of a board"""
        skills = []
        page = 0

        while True:
            logger.info(f"Fetching {board} page {page}...")
            data = self._request(f"{SKILLS_API_BASE}/{board}/{page}").json()

            skills.extend(data.get('skills') or [])

            if not data.get('hasMore'):
                break
            page += 1
            self.sleep(self.delay)

        logger.info(f"{board}: {len(skills)} skills")
        return skills

    def fetch_boards(self) -> Dict[str, List[dict]]:
        return {board: self.fetch_board(board) for board in BOARDS}

    def crawl(self, first_seen: Dict[str, str], now: str):
        """
        Crawl all boards and build the index.

        Returns (index, first_seen) where first_seen is the input map with
        every newly seen id stamped with `now`.
        """
        board_data = self.fetch_boards()
        unique = collect_unique(board_data)

        first_seen = stamp_first_seen(first_seen, unique.keys(), now)
        items = build_items(board_data, first_seen)

        logger.info(f"Crawl complete: {len(items)} unique skills")
        return build_index(items, now), first_seen


def run(data_dir=DATA_DIR, delay: float = API_DELAY) -> dict:
    """Crawl skills.sh and write the first-seen map and the index"""
    data_dir = Path(data_dir)
    first_seen_path = data_dir / FIRST_SEEN_FILE

    first_seen = load_first_seen(first_seen_path)
    crawler = SkillsShCrawler(delay=delay)
    index, first_seen = crawler.crawl(first_seen, utc_now())

    save_first_seen(first_seen_path, first_seen)
    save_index(data_dir / INDEX_FILE, index)
    return index


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Crawl the skills.sh leaderboards')
    parser.add_argument('--data-dir', default=DATA_DIR, help='Data directory')
    parser.add_argument('--delay-ms', type=float, default=API_DELAY * 1000,
                        help='Delay between page requests in milliseconds')

    args = parser.parse_args()

    logger.info("Crawling skills.sh API...")
    try:
        index = run(args.data_dir, delay=args.delay_ms / 1000)
    except requests.RequestException as e:
        logger.error(f"Crawl failed: {e}")
        sys.exit(1)

    logger.info(f"Done! {index['count']} skills written to {Path(args.data_dir) / INDEX_FILE}")


if __name__ == '__main__':
    main()
