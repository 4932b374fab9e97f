#!/usr/bin/env python3
"""
Update the whole feed: crawl skills.sh, fetch descriptions, categorize
"""

import os
import sys
import logging

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import jsonschema
import requests

from skills_feed import categorizer, description_fetcher, skills_sh_crawler
from skills_feed.config import API_DELAY, DATA_DIR, FETCH_CONCURRENCY, FETCH_TOP_N, GITHUB_TOKEN

logger = logging.getLogger('update_feed')


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Crawl, enrich and categorize the skills.sh feed')
    parser.add_argument('--data-dir', default=DATA_DIR, help='Data directory')
    parser.add_argument('--delay-ms', type=float, default=API_DELAY * 1000,
                        help='Delay between page requests in milliseconds')
    parser.add_argument('--top', type=int, default=FETCH_TOP_N, help='Only enrich the top N skills')
    parser.add_argument('--concurrency', type=int, default=FETCH_CONCURRENCY, help='Concurrent fetches')
    parser.add_argument('--skip-descriptions', action='store_true', help='Do not fetch SKILL.md files')

    args = parser.parse_args()

    try:
        logger.info("[1/3] Crawling skills.sh...")
        index = skills_sh_crawler.run(args.data_dir, delay=args.delay_ms / 1000)

        if args.skip_descriptions:
            logger.info("[2/3] Skipping descriptions")
        else:
            logger.info("[2/3] Fetching descriptions...")
            stats = description_fetcher.run(
                args.data_dir, top_n=args.top, concurrency=args.concurrency, token=GITHUB_TOKEN,
            )
            logger.info(f"  {stats['found']}/{stats['processed']} skills got descriptions")

        logger.info("[3/3] Categorizing...")
        category_index = categorizer.run(args.data_dir)
    except (requests.RequestException, OSError, ValueError, jsonschema.ValidationError) as e:
        logger.error(f"Feed update failed: {e}")
        sys.exit(1)

    print(f"\nFeed Summary:")
    print(f"  Total skills: {index['count']}")
    print(f"  Categories:")
    for category, count in categorizer.category_counts(category_index['skillToCategory']):
        print(f"    {category}: {count}")


if __name__ == '__main__':
    main()
