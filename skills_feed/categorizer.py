"""
Rule-based skill categorization
Reads skills_index.json and builds skills_category_index.json
"""

import re
import sys
import logging
import jsonschema
from pathlib import Path
from collections import Counter
from typing import Dict, List, Optional, Tuple

from .config import (
    CATEGORY_RULES,
    DEFAULT_CATEGORY,
    CATEGORY_INDEX_VERSION,
    DATA_DIR,
    INDEX_FILE,
    CATEGORY_INDEX_FILE,
)
from .index_store import utc_now, load_index, write_json

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def compile_rules(rules) -> List[Tuple[str, re.Pattern]]:
    return [
        (category, re.compile(r'\b(' + '|'.join(keywords) + r')\b', re.IGNORECASE | re.ASCII))
        for category, keywords in rules
    ]


RULES = compile_rules(CATEGORY_RULES)
PRIMARY_CATEGORIES = [category for category, _ in RULES]


def categorize(skill: dict, rules: Optional[List[Tuple[str, re.Pattern]]] = None) -> str:
    """First category whose pattern matches the skill's source, id or title"""
    text = f"{skill.get('source', '')} {skill.get('skillId', '')} {skill.get('title', '')}"
    for category, pattern in (RULES if rules is None else rules):
        if pattern.search(text):
            return category
    return DEFAULT_CATEGORY


def build_category_index(index: dict, now: str) -> dict:
    skill_to_category = {item['id']: categorize(item) for item in index['items']}
    return {
        'updatedAt': now,
        'version': CATEGORY_INDEX_VERSION,
        'primaryCategories': list(PRIMARY_CATEGORIES),
        'skillToCategory': skill_to_category,
    }


def category_counts(skill_to_category: Dict[str, str]) -> List[Tuple[str, int]]:
    """Category distribution, most common first"""
    return Counter(skill_to_category.values()).most_common()


def run(data_dir=DATA_DIR) -> dict:
    data_dir = Path(data_dir)

    index = load_index(data_dir / INDEX_FILE)
    category_index = build_category_index(index, utc_now())
    write_json(data_dir / CATEGORY_INDEX_FILE, category_index)

    logger.info("Category distribution:")
    for category, count in category_counts(category_index['skillToCategory']):
        logger.info(f"  {category}: {count}")

    return category_index


def main():
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description='Build the skills category index')
    parser.add_argument('--data-dir', default=DATA_DIR, help='Data directory')

    args = parser.parse_args()

    logger.info("Building category index...")
    try:
        category_index = run(args.data_dir)
    except (OSError, ValueError, jsonschema.ValidationError) as e:
        logger.error(f"Categorize failed: {e}")
        sys.exit(1)

    logger.info(f"Done! {len(category_index['skillToCategory'])} skills categorized.")


if __name__ == '__main__':
    main()
