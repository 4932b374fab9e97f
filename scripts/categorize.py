#!/usr/bin/env python3
"""
Build data/skills_category_index.json from the skills index
"""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from skills_feed.categorizer import main


if __name__ == '__main__':
    main()
