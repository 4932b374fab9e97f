"""
SKILL.md file parser
Extracts a short description from SKILL.md files
"""

import re
import yaml
from typing import Optional

from .config import MAX_DESCRIPTION_LENGTH, MIN_DESCRIPTION_LENGTH

LINK_RE = re.compile(r'\[([^\]]+)\]\([^)]+\)')
EMPHASIS_RE = re.compile(r'[*_`]')
FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---', re.DOTALL)


class SkillParser:
    """Parse SKILL.md files and extract a description"""

    @staticmethod
    def parse_frontmatter(content: str) -> dict:
        """Extract YAML frontmatter from SKILL.md"""
        frontmatter = {}

        match = FRONTMATTER_RE.match(content)
        if match:
            try:
                frontmatter = yaml.safe_load(match.group(1)) or {}
            except yaml.YAMLError:
                pass

        return frontmatter if isinstance(frontmatter, dict) else {}

    @staticmethod
    def strip_frontmatter(content: str) -> str:
        if content.startswith('---'):
            end = content.find('---', 3)
            if end != -1:
                return content[end + 3:].strip()
        return content

    @staticmethod
    def clean(text: str) -> Optional[str]:
        """Strip markdown links and emphasis, truncate, drop anything too short"""
        text = LINK_RE.sub(r'\1', text)
        text = EMPHASIS_RE.sub('', text)
        text = text.strip()

        if len(text) > MAX_DESCRIPTION_LENGTH:
            text = text[:MAX_DESCRIPTION_LENGTH - 3] + '...'

        return text if len(text) >= MIN_DESCRIPTION_LENGTH else None

    @classmethod
    def extract_description(cls, content: str) -> Optional[str]:
        """Extract the first paragraph after the title"""
        lines = cls.strip_frontmatter(content).split('\n')

        # Start after the first heading, or at the first line of text if there is none
        start = 0
        for i, line in enumerate(lines):
            line = line.strip()
            if line.startswith('#'):
                start = i + 1
                break
            if line:
                start = i
                break

        paragraph = []
        for line in lines[start:]:
            line = line.strip()
            if not line:
                if paragraph:
                    break
                continue
            # Skip headings, code fences and checklists
            if line.startswith('#') or line.startswith('```') or line.startswith('- ['):
                continue
            paragraph.append(line)

        if not paragraph:
            return None

        return cls.clean(' '.join(paragraph))

    @classmethod
    def describe(cls, content: str) -> Optional[str]:
        """Body description, falling back to the frontmatter description field"""
        description = cls.extract_description(content)
        if description:
            return description

        fallback = cls.parse_frontmatter(content).get('description')
        if isinstance(fallback, str):
            return cls.clean(' '.join(fallback.split()))
        return None
