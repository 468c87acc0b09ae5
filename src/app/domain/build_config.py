"""Configuração de build vinda do wizard (Config).

Enumerações fechadas: qualquer valor fora delas é rejeitado pelo Pydantic
antes de alcançar o mapeador de schema.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Platform(StrEnum):
    NOTION = "notion"
    AIRTABLE = "airtable"
    SHEETS = "sheets"
    EXCEL = "excel"
    OBSIDIAN = "obsidian"
    LOGSEQ = "logseq"
    CUSTOM = "custom"


class Priority(StrEnum):
    ORGANIZATION = "organization"
    SEARCH = "search"
    COLLABORATION = "collaboration"
    ANALYTICS = "analytics"
    AUTOMATION = "automation"


class Feature(StrEnum):
    PROJECTS = "projects"
    TAGS = "tags"
    REMINDERS = "reminders"
    EXPORTS = "exports"
    DASHBOARD = "dashboard"
    TEMPLATES = "templates"


class TeamSize(StrEnum):
    JUST_ME = "just-me"
    SMALL = "2-5-people"
    MEDIUM = "6-20-people"
    LARGE = "20+-people"


class Complexity(StrEnum):
    SIMPLE = "simple"
    MODERATE = "moderate"
    ADVANCED = "advanced"


class BuildConfig(BaseModel):
    """Flags escolhidas pelo usuário que determinam o formato do schema.

    Imutável e nunca persistida. `priorities`/`features` são conjuntos:
    duplicatas no JSON de entrada colapsam.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    platform: Platform
    priorities: frozenset[Priority] = Field(default_factory=frozenset)
    features: frozenset[Feature] = Field(default_factory=frozenset)
    team_size: TeamSize = Field(alias="teamSize")
    complexity: Complexity

    @field_validator("priorities", "features", mode="before")
    @classmethod
    def _reject_scalar(cls, value: object) -> object:
        # Uma string solta seria iterada caractere a caractere
        if isinstance(value, str):
            raise ValueError("must be an array")
        return value

    def has_priority(self, priority: Priority) -> bool:
        return priority in self.priorities

    def has_feature(self, feature: Feature) -> bool:
        return feature in self.features


__all__ = [
    "BuildConfig",
    "Complexity",
    "Feature",
    "Platform",
    "Priority",
    "TeamSize",
]
