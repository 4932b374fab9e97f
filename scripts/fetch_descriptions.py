#!/usr/bin/env python3
"""
Fetch SKILL.md descriptions into data/skills_index.json
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from skills_feed.description_fetcher import main


if __name__ == '__main__':
    main()
