"""DTOs for catalog source records (no dependency on ORM).

One read-model per indexable collection. Relations the transformer needs
(project author, prompt platform) are resolved by the repository before the
record is built.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class UserRecord:
    """Author of a project."""

    id: str
    username: str


@dataclass(frozen=True)
class PlatformRef:
    """Platform a prompt template belongs to."""

    id: str
    platform_id: str


@dataclass(frozen=True)
class ProjectRecord:
    id: str
    title: str
    description: str
    category: str | None
    created_at: datetime
    updated_at: datetime
    long_description: str | None = None
    tech_stack: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)
    screenshots: list[str] = field(default_factory=list)
    upvote_count: int = 0
    view_count: int = 0
    author: UserRecord | None = None


@dataclass(frozen=True)
class ResourceRecord:
    """Submitted resource. Only APPROVED rows reach the index."""

    id: str
    title: str
    type: str
    status: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    source: str | None = None
    author: str | None = None
    tags: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)
    view_count: int = 0
    featured: bool = False
    thumbnail: str | None = None


@dataclass(frozen=True)
class SkillRecord:
    id: str
    slug: str
    name: str
    tagline: str
    category: str | None
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    examples: list[str] = field(default_factory=list)
    triggers: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)
    author_name: str | None = None
    use_count: int = 0
    featured: bool = False
    icon_url: str | None = None


@dataclass(frozen=True)
class SubAgentRecord:
    id: str
    slug: str
    name: str
    role: str
    category: str | None
    created_at: datetime
    updated_at: datetime
    language: str | None = None
    framework: str | None = None
    when_to_use: str | None = None
    examples: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)
    author_name: str | None = None
    use_count: int = 0
    featured: bool = False


@dataclass(frozen=True)
class McpServerRecord:
    id: str
    slug: str
    name: str
    description: str
    category: str | None
    provider: str
    created_at: datetime
    updated_at: datetime
    platforms: list[str] = field(default_factory=list)
    use_count: int = 0
    featured: bool = False
    icon_url: str | None = None


@dataclass(frozen=True)
class PlatformProfileRecord:
    """Platform profile page; platform_id is the public identifier (e.g. "cursor")."""

    id: str
    platform_id: str
    name: str
    created_at: datetime
    updated_at: datetime
    tagline: str | None = None
    description: str | None = None
    cheat_sheet: list[str] = field(default_factory=list)
    best_practices: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class PromptTemplateRecord:
    id: str
    slug: str
    title: str
    description: str
    category: str
    created_at: datetime
    updated_at: datetime
    use_case: str | None = None
    use_count: int = 0
    platform: PlatformRef | None = None


@dataclass(frozen=True)
class GuideRecord:
    """End-to-end guide."""

    id: str
    slug: str
    title: str
    description: str
    created_at: datetime
    updated_at: datetime
    outcome: str | None = None
    tech_stack: list[str] = field(default_factory=list)
    platforms: list[str] = field(default_factory=list)
    author_name: str | None = None
    view_count: int = 0
    featured: bool = False
