"""
Feed configuration
"""

import os

# skills.sh API settings
SKILLS_API_BASE = "https://skills.sh/api/skills"
SKILLS_SITE_BASE = "https://skills.sh/skills"
PROVIDER_ID = "skills.sh"
BOARDS = ("all-time", "trending", "hot")

# GitHub raw content
GITHUB_RAW_BASE = "https://raw.githubusercontent.com"
GITHUB_TOKEN = os.environ.get("GITHUB_TOKEN", "")

# Rate limiting and retries
API_DELAY = float(os.environ.get("SKILLS_API_DELAY_MS", 50)) / 1000  # Seconds between pages
REQUEST_TIMEOUT = 30
RAW_TIMEOUT = 15
MAX_RETRIES = 4
BACKOFF_BASE = 0.2  # Seconds, doubled on every attempt

# Description fetching
FETCH_CONCURRENCY = int(os.environ.get("FETCH_CONCURRENCY", 8))
FETCH_TOP_N = int(os.environ.get("FETCH_TOP_N", 2000))
MAX_DESCRIPTION_LENGTH = 200
MIN_DESCRIPTION_LENGTH = 11

# Where a skill's SKILL.md usually lives, tried in order
CANDIDATE_PATHS = [
    "skills/{skill_id}/SKILL.md",
    "skills/{skill_id}/skill.md",
    ".claude/skills/{skill_id}/SKILL.md",
    ".claude/skills/{skill_id}/skill.md",
    ".cursor/skills/{skill_id}/SKILL.md",
    "SKILL.md",
    "skill.md",
]

# Category rules, first match wins
CATEGORY_RULES = [
    ("development-tools", [
        "code", "coding", "dev", "debug", "lint", "test", "git", "ci", "cd", "deploy", "docker",
        "k8s", "kubernetes", "terraform", "aws", "gcp", "azure", "api", "sdk", "cli", "compiler",
        "build", "webpack", "vite", "npm", "yarn", "rust", "python", "java", "typescript",
        "javascript", "react", "vue", "angular", "svelte", "node", "deno", "bun", "go", "swift",
        "kotlin", "flutter", "android", "ios", "mobile", "web", "frontend", "backend", "fullstack",
        "database", "sql", "postgres", "mongo", "redis", "graphql", "rest", "grpc", "microservice",
        "devops", "infra", "cloud", "server", "lambda", "function", "endpoint", "route",
        "middleware", "auth", "oauth", "jwt", "session", "cookie", "cors", "csrf", "xss",
        "injection", "security", "vuln", "pentest", "ctf", "hack", "exploit", "patch", "hotfix",
        "refactor", "migrate", "upgrade", "version", "release", "changelog", "semver", "monorepo",
        "workspace",
    ]),
    ("data-analysis", [
        "data", "analytics", "analysis", "dashboard", "chart", "graph", "viz", "visual", "report",
        "metric", "kpi", "bi", "etl", "pipeline", "warehouse", "lake", "spark", "hadoop", "pandas",
        "numpy", "scipy", "matplotlib", "jupyter", "notebook", "statistics", "stat", "ml",
        "machine.?learning", "ai", "model", "train", "predict", "classify", "cluster", "neural",
        "deep.?learn", "llm", "gpt", "bert", "transformer", "embed", "vector", "rag", "prompt",
        "fine.?tun", "dataset", "feature", "label", "annotate", "nlp", "sentiment", "token",
        "parse", "scrape", "crawl", "extract",
    ]),
    ("document-processing", [
        "document", "doc", "pdf", "word", "excel", "csv", "json", "xml", "yaml", "markdown", "md",
        "html", "latex", "template", "format", "convert", "transform", "parse", "extract", "ocr",
        "scan", "image", "photo", "video", "audio", "media", "file", "upload", "download",
        "compress", "archive", "zip", "encrypt", "decrypt", "sign", "stamp", "watermark", "merge",
        "split", "batch", "bulk", "process", "workflow", "automat", "pipe",
    ]),
    ("creative-media", [
        "design", "figma", "sketch", "photoshop", "illustrator", "canva", "ui", "ux", "css",
        "style", "theme", "color", "font", "typography", "layout", "responsive", "animate",
        "motion", "3d", "render", "game", "unity", "unreal", "godot", "pixel", "sprite", "asset",
        "texture", "material", "shader", "vfx", "sfx", "music", "sound", "voice", "tts", "stt",
        "speech", "video", "stream", "record", "edit", "cut", "trim", "subtitle", "caption",
        "transcri", "podcast", "youtube", "tiktok", "instagram", "social", "content", "blog",
        "post", "article", "story", "creative", "art", "draw", "paint", "generate", "diffusion",
        "dall", "midjourney", "stable",
    ]),
    ("communication-writing", [
        "write", "writing", "writer", "copywrite", "copy", "edit", "proofread", "grammar", "spell",
        "translate", "translat", "i18n", "l10n", "locale", "language", "english", "chinese",
        "spanish", "french", "german", "japanese", "korean", "email", "mail", "letter", "memo",
        "proposal", "pitch", "present", "slide", "deck", "speak", "communicat", "chat", "message",
        "sms", "notify", "notification", "alert", "webhook", "slack", "discord", "teams",
        "telegram", "bot", "assist", "help", "support", "faq", "knowledge.?base", "wiki",
        "documentation", "readme", "changelog", "guide", "tutorial", "howto", "explain",
        "summariz", "tldr", "brief", "abstract", "outline",
    ]),
    ("business-marketing", [
        "business", "market", "marketing", "seo", "sem", "ads", "advertis", "campaign", "funnel",
        "lead", "crm", "sales", "revenue", "price", "cost", "budget", "forecast", "finance",
        "account", "invoice", "payment", "stripe", "paypal", "billing", "subscri", "saas",
        "startup", "founder", "ceo", "cto", "product", "roadmap", "strategy", "plan", "goal",
        "okr", "kpi", "growth", "retention", "churn", "conversion", "ab.?test", "experiment",
        "survey", "feedback", "review", "rating", "nps", "customer", "client", "user", "persona",
        "segment", "cohort", "outreach", "cold", "warm", "network", "linkedin", "twitter",
    ]),
    ("productivity", [
        "productiv", "todo", "task", "project", "manage", "organize", "automate", "workflow",
        "schedule", "calendar", "time", "track", "pomodoro", "focus", "habit", "routine",
        "template", "snippet", "shortcut", "hotkey", "macro", "script", "shell", "bash", "zsh",
        "terminal", "command", "alias", "dotfile", "config", "setting", "prefer", "custom",
        "personal", "note", "notion", "obsidian", "roam", "logseq", "bookmark", "save", "archive",
        "backup", "sync", "cloud", "storage", "drive", "dropbox", "search", "find", "filter",
        "sort", "tag", "label", "folder", "workspace", "desktop", "window", "tab", "split",
        "arrange", "clipboard", "paste", "history",
    ]),
    ("collaboration", [
        "collaborat", "team", "group", "share", "invite", "permission", "role", "access", "admin",
        "member", "contributor", "reviewer", "approve", "merge", "pull.?request", "pr", "issue",
        "ticket", "bug", "feature.?request", "board", "kanban", "agile", "scrum", "sprint",
        "standup", "retro", "meeting", "call", "zoom", "google.?meet", "pair", "mob", "live",
        "real.?time", "concurrent", "conflict", "resolve", "comment", "thread", "discuss", "vote",
        "poll", "decide", "consensus",
    ]),
    ("security", [
        "security", "secure", "encrypt", "decrypt", "hash", "salt", "password", "credential",
        "secret", "vault", "key", "cert", "ssl", "tls", "https", "firewall", "vpn", "proxy", "tor",
        "privacy", "anonym", "gdpr", "compliance", "audit", "log", "monitor", "alert", "incident",
        "response", "forensic", "malware", "virus", "phish", "spam", "block", "allow", "deny",
        "rule", "policy", "rbac", "iam", "sso", "mfa", "2fa", "otp", "biometric", "zero.?trust",
    ]),
]
DEFAULT_CATEGORY = "other"
CATEGORY_INDEX_VERSION = 1

# Output paths
DATA_DIR = os.environ.get("SKILLS_DATA_DIR", "data")
INDEX_FILE = "skills_index.json"
FIRST_SEEN_FILE = "skills_first_seen.json"
CATEGORY_INDEX_FILE = "skills_category_index.json"
SKILLS_MD_DIR = "skills-md"
