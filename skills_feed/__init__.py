# skills.sh Feed
# Crawls the skills.sh leaderboards, enriches and categorizes the skills index

from .skills_sh_crawler import SkillsShCrawler
from .description_fetcher import SkillMdFetcher
from .skill_parser import SkillParser
from .categorizer import categorize

__all__ = ['SkillsShCrawler', 'SkillMdFetcher', 'SkillParser', 'categorize']
