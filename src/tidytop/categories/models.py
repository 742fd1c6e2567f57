"""Category definitions used to classify desktop icons."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from tidytop.common import HexColor, NonEmptyString


class Category(BaseModel):
    """A rule set that decides which box an icon belongs to.

    Extensions, patterns and keywords are kept in declared order; matching is
    case-insensitive. Higher ``priority`` wins when several categories match.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: NonEmptyString
    name: str = ""
    glyph: str = ""
    color: HexColor = "#4A90E2"
    extensions: tuple[str, ...] = ()
    patterns: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    priority: int = 0
    enabled: bool = True
    is_system: bool = False

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        normalized = (item.strip().lower() for item in value)
        return tuple(item if item.startswith(".") else f".{item}" for item in normalized if item)

    @property
    def label(self) -> str:
        return f"{self.glyph} {self.name}".strip() if self.glyph else self.name


def system_categories() -> list[Category]:
    """The built-in, read-only category set."""
    return [
        Category(
            id="office-tools",
            name="Office Tools",
            glyph="📊",
            color="#2E7D32",
            extensions=(".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".pdf", ".odt", ".ods", ".odp"),
            patterns=("word", "excel", "powerpoint", "acrobat", "reader", "office", "libreoffice", "openoffice"),
            keywords=("document", "spreadsheet", "presentation", "pdf", "office"),
            priority=10,
            is_system=True,
        ),
        Category(
            id="games",
            name="Games",
            glyph="🎮",
            color="#7B1FA2",
            extensions=(".exe",),
            patterns=("steam", "epic", "game", "games", "blizzard", "origin", "uplay", "gog"),
            keywords=("game", "gaming", "play", "entertainment", "steam", "epic"),
            priority=8,
            is_system=True,
        ),
        Category(
            id="social-communication",
            name="Social & Communication",
            glyph="💬",
            color="#1976D2",
            patterns=(
                "discord",
                "telegram",
                "whatsapp",
                "skype",
                "zoom",
                "teams",
                "slack",
                "outlook",
                "thunderbird",
                "chrome",
                "firefox",
                "edge",
            ),
            keywords=("chat", "messenger", "email", "browser", "communication", "social", "meeting"),
            priority=9,
            is_system=True,
        ),
        Category(
            id="files-documents",
            name="Files & Documents",
            glyph="📁",
            color="#F57C00",
            extensions=(".txt", ".rtf", ".md", ".zip", ".rar", ".7z"),
            patterns=("explorer", "notepad", "winrar", "7zip", "totalcommander", "filezilla"),
            keywords=("file", "folder", "archive", "text", "document", "manager"),
            priority=5,
            is_system=True,
        ),
        Category(
            id="development-tools",
            name="Development Tools",
            glyph="🛠️",
            color="#388E3C",
            extensions=(".cs", ".js", ".ts", ".py", ".java", ".cpp", ".h"),
            patterns=("visual studio", "code", "intellij", "eclipse", "atom", "sublime", "notepad++", "git", "github"),
            keywords=("code", "development", "programming", "ide", "editor", "git", "debug"),
            priority=7,
            is_system=True,
        ),
        Category(
            id="creative-tools",
            name="Creative Tools",
            glyph="🎨",
            color="#E91E63",
            extensions=(".psd", ".ai", ".png", ".jpg", ".jpeg", ".gif", ".mp4", ".mov", ".avi"),
            patterns=("photoshop", "illustrator", "premiere", "aftereffects", "blender", "gimp", "inkscape", "audacity"),
            keywords=("photo", "image", "video", "audio", "design", "creative", "edit", "art"),
            priority=6,
            is_system=True,
        ),
        Category(
            id="system-tools",
            name="System Tools",
            glyph="⚙️",
            color="#607D8B",
            patterns=("control", "settings", "regedit", "cmd", "powershell", "task manager", "device manager", "disk"),
            keywords=("system", "control", "settings", "admin", "utility", "tool", "configuration"),
            priority=4,
            is_system=True,
        ),
        Category(
            id="web-applications",
            name="Web Applications",
            glyph="🌐",
            color="#00ACC1",
            extensions=(".url", ".html", ".htm"),
            patterns=("web", "online", "cloud"),
            keywords=("web", "online", "cloud", "internet", "browser", "url"),
            priority=3,
            is_system=True,
        ),
    ]
