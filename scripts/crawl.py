#!/usr/bin/env python3
"""
Crawl the skills.sh leaderboards into data/skills_index.json
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from skills_feed.skills_sh_crawler import main


if __name__ == '__main__':
    main()
