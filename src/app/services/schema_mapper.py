"""Mapeador BuildConfig → schema de provider.

Funções puras e determinísticas (sem IO). Cada capacidade condicional é
uma regra `{predicate, fields}` numa tabela ordenada; um único fold aplica
as regras na ordem. Adicionar capacidade = adicionar linha na tabela.

Notion: schema completo (propriedades + views) criado pelo serviço.
Airtable: apenas checklist (obrigatórios/opcionais) — o schema é do usuário.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any, Final, TypeVar

from app.domain.build_config import BuildConfig, Feature, Priority
from app.domain.schema import (
    AirtableChecklist,
    FieldSpec,
    SchemaDefinition,
    SelectOption,
    ViewSpec,
)

T = TypeVar("T")

Predicate = Callable[[BuildConfig], bool]


@dataclass(frozen=True)
class Rule:
    """Regra condicional: quando `predicate` vale, acrescenta `items`."""

    predicate: Predicate
    items: tuple[Any, ...]


def when_priority(priority: Priority) -> Predicate:
    return lambda config: config.has_priority(priority)


def when_feature(feature: Feature) -> Predicate:
    return lambda config: config.has_feature(feature)


def fold_rules(config: BuildConfig, baseline: Iterable[T], rules: Iterable[Rule]) -> list[T]:
    """Baseline seguido dos itens de cada regra satisfeita, em ordem."""
    items = list(baseline)
    for rule in rules:
        if rule.predicate(config):
            items.extend(rule.items)
    return items


def _select(name: str, *options: tuple[str, str], multi: bool = False) -> FieldSpec:
    return FieldSpec(
        name=name,
        type="multi_select" if multi else "select",
        options=tuple(SelectOption(option, color) for option, color in options),
    )


def _number(name: str) -> FieldSpec:
    return FieldSpec(name=name, type="number", number_format="number")


# ──────────────────────────────────────────────────────────────────────────────
# Notion
# ──────────────────────────────────────────────────────────────────────────────

NOTION_BASELINE_FIELDS: Final[tuple[FieldSpec, ...]] = (
    FieldSpec("Title", "title"),
    _select(
        "Platform",
        ("ChatGPT", "green"),
        ("Claude", "blue"),
        ("Gemini", "orange"),
        ("Perplexity", "purple"),
        ("Other", "gray"),
    ),
    _select(
        "Status",
        ("Active", "green"),
        ("Completed", "blue"),
        ("Paused", "yellow"),
        ("Archived", "gray"),
    ),
    FieldSpec("Created", "created_time"),
    FieldSpec("Updated", "last_edited_time"),
    FieldSpec("Summary", "rich_text"),
    FieldSpec("Key Insights", "rich_text"),
    FieldSpec("Action Items", "rich_text"),
    FieldSpec("Follow-up Date", "date"),
    FieldSpec("Notes", "rich_text"),
)

NOTION_FIELD_RULES: Final[tuple[Rule, ...]] = (
    Rule(
        when_priority(Priority.ORGANIZATION),
        (
            _select(
                "Primary Topic",
                ("Work", "blue"),
                ("Personal", "green"),
                ("Learning", "orange"),
                ("Research", "purple"),
                ("Creative", "pink"),
                ("Technical", "red"),
            ),
            _select(
                "Secondary Topics",
                ("Problem Solving", "blue"),
                ("Brainstorming", "green"),
                ("Analysis", "orange"),
                ("Planning", "purple"),
                ("Debugging", "red"),
                ("Writing", "pink"),
                ("Code Review", "yellow"),
                multi=True,
            ),
            _select(
                "Category",
                ("Quick Question", "gray"),
                ("Deep Discussion", "blue"),
                ("Tutorial/Learning", "green"),
                ("Troubleshooting", "red"),
                ("Creative Session", "purple"),
            ),
        ),
    ),
    Rule(
        when_feature(Feature.PROJECTS),
        (
            # Relation exigiria um database existente; select cobre o caso
            _select(
                "Project",
                ("Personal Projects", "blue"),
                ("Work Projects", "green"),
                ("Learning Projects", "orange"),
                ("Side Projects", "purple"),
            ),
            _select(
                "Project Phase",
                ("Planning", "gray"),
                ("Development", "blue"),
                ("Testing", "orange"),
                ("Review", "yellow"),
                ("Complete", "green"),
            ),
        ),
    ),
    Rule(
        when_feature(Feature.TAGS),
        (
            _select(
                "Tags",
                ("Important", "red"),
                ("Quick Win", "green"),
                ("Learning", "blue"),
                ("Reference", "purple"),
                ("Follow-up", "orange"),
                ("Inspiration", "pink"),
                multi=True,
            ),
            _select(
                "Priority",
                ("High", "red"),
                ("Medium", "yellow"),
                ("Low", "gray"),
                ("Someday", "blue"),
            ),
        ),
    ),
    Rule(
        when_priority(Priority.ANALYTICS),
        (
            _number("Duration"),
            _number("Message Count"),
            _select(
                "Satisfaction",
                ("Very Satisfied", "green"),
                ("Satisfied", "blue"),
                ("Neutral", "gray"),
                ("Unsatisfied", "orange"),
                ("Very Unsatisfied", "red"),
            ),
            _select(
                "Value Rating",
                ("5 - Extremely Valuable", "green"),
                ("4 - Very Valuable", "blue"),
                ("3 - Moderately Valuable", "yellow"),
                ("2 - Slightly Valuable", "orange"),
                ("1 - Not Valuable", "red"),
            ),
        ),
    ),
    Rule(
        when_feature(Feature.REMINDERS),
        (
            FieldSpec("Reminder Date", "date"),
            FieldSpec("Review Status", "checkbox"),
        ),
    ),
)

NOTION_BASELINE_VIEWS: Final[tuple[ViewSpec, ...]] = (
    ViewSpec("All Sessions"),
    ViewSpec("Recent", filter="last_edited_time"),
    ViewSpec("Active", filter="status"),
)

NOTION_VIEW_RULES: Final[tuple[Rule, ...]] = (
    Rule(when_priority(Priority.ORGANIZATION), (ViewSpec("By Topic"),)),
    Rule(when_feature(Feature.PROJECTS), (ViewSpec("By Project"),)),
    Rule(when_feature(Feature.DASHBOARD), (ViewSpec("Dashboard", type="board"),)),
)


def _ensure_known_flags(config: BuildConfig) -> None:
    # A validação HTTP é a fronteira; aqui só rechecamos membros de enum
    for priority in config.priorities:
        if not isinstance(priority, Priority):
            raise ValueError(f"Unknown priority: {priority!r}")
    for feature in config.features:
        if not isinstance(feature, Feature):
            raise ValueError(f"Unknown feature: {feature!r}")


def map_config_to_schema(config: BuildConfig) -> SchemaDefinition:
    """Traduz a BuildConfig no schema Notion (propriedades + views).

    Determinístico: a ordem vem das tabelas de regras, nunca da iteração
    dos conjuntos de flags.
    """
    _ensure_known_flags(config)
    fields = fold_rules(config, NOTION_BASELINE_FIELDS, NOTION_FIELD_RULES)
    views = fold_rules(config, NOTION_BASELINE_VIEWS, NOTION_VIEW_RULES)
    return SchemaDefinition(
        fields={spec.name: spec for spec in fields},
        views=tuple(views),
    )


def to_notion_properties(schema: SchemaDefinition) -> dict[str, dict[str, Any]]:
    """Renderiza o payload `properties` da API Notion para criar o database."""
    properties: dict[str, dict[str, Any]] = {}
    for name, spec in schema.fields.items():
        body: dict[str, Any] = {}
        if spec.options:
            body["options"] = [
                {"name": option.name, "color": option.color} for option in spec.options
            ]
        if spec.number_format:
            body["format"] = spec.number_format
        properties[name] = {"type": spec.type, spec.type: body}
    return properties


def _title(text: str) -> dict[str, Any]:
    return {"title": [{"type": "text", "text": {"content": text}}]}


def _rich_text(text: str) -> dict[str, Any]:
    return {"rich_text": [{"type": "text", "text": {"content": text}}]}


def _select_value(name: str) -> dict[str, Any]:
    return {"select": {"name": name}}


NOTION_SAMPLE_BASELINE: Final[tuple[tuple[str, dict[str, Any]], ...]] = (
    ("Title", _title("Sample Chat Session - Getting Started")),
    ("Platform", _select_value("ChatGPT")),
    ("Status", _select_value("Completed")),
    (
        "Summary",
        _rich_text(
            "Initial setup and configuration discussion for the chat session "
            "management system."
        ),
    ),
    (
        "Key Insights",
        _rich_text(
            "Learned about best practices for organizing chat sessions and "
            "implementing effective tracking systems."
        ),
    ),
)

NOTION_SAMPLE_RULES: Final[tuple[Rule, ...]] = (
    Rule(
        when_priority(Priority.ORGANIZATION),
        (
            ("Primary Topic", _select_value("Work")),
            ("Category", _select_value("Tutorial/Learning")),
        ),
    ),
    Rule(
        when_feature(Feature.TAGS),
        (
            ("Tags", {"multi_select": [{"name": "Important"}, {"name": "Learning"}]}),
            ("Priority", _select_value("High")),
        ),
    ),
    Rule(
        when_priority(Priority.ANALYTICS),
        (
            ("Duration", {"number": 25}),
            ("Message Count", {"number": 12}),
            ("Satisfaction", _select_value("Very Satisfied")),
        ),
    ),
)


def build_notion_sample_properties(config: BuildConfig) -> dict[str, dict[str, Any]]:
    """Propriedades da página de exemplo, coerentes com o schema gerado."""
    return dict(fold_rules(config, NOTION_SAMPLE_BASELINE, NOTION_SAMPLE_RULES))


# ──────────────────────────────────────────────────────────────────────────────
# Airtable
# ──────────────────────────────────────────────────────────────────────────────

AIRTABLE_REQUIRED_FIELDS: Final[tuple[str, ...]] = (
    "Title",
    "Date",
    "Platform",
    "Status",
    "Summary",
    "Rating",
)

AIRTABLE_OPTIONAL_BASELINE: Final[tuple[str, ...]] = (
    "Duration",
    "Message Count",
    "Primary Topic",
    "Tags",
    "Priority",
    "Key Insights",
    "Action Items",
    "Follow-up Date",
    "Notes",
)

AIRTABLE_OPTIONAL_RULES: Final[tuple[Rule, ...]] = (
    Rule(when_feature(Feature.PROJECTS), ("Project", "Project Phase")),
    Rule(when_priority(Priority.COLLABORATION), ("Participants", "Shared With")),
)

AIRTABLE_SAMPLE_RULES: Final[tuple[Rule, ...]] = (
    Rule(when_priority(Priority.ANALYTICS), (("Duration", 15), ("Message Count", 8))),
    Rule(
        when_priority(Priority.ORGANIZATION),
        (("Primary Topic", "Work"), ("Tags", "Setup, Learning")),
    ),
    Rule(when_feature(Feature.PROJECTS), (("Project", "Personal Organization"),)),
)


def map_config_to_airtable_checklist(config: BuildConfig | None) -> AirtableChecklist:
    """Checklist de campos para a tabela Airtable.

    Sem config (campo opcional na requisição) só a baseline opcional entra.
    """
    if config is None:
        return AirtableChecklist(AIRTABLE_REQUIRED_FIELDS, AIRTABLE_OPTIONAL_BASELINE)
    _ensure_known_flags(config)
    optional = fold_rules(config, AIRTABLE_OPTIONAL_BASELINE, AIRTABLE_OPTIONAL_RULES)
    return AirtableChecklist(AIRTABLE_REQUIRED_FIELDS, tuple(optional))


def build_airtable_sample_record(
    config: BuildConfig | None,
    today: date | None = None,
) -> dict[str, Any]:
    """Campos do registro de exemplo para a tabela Chat Sessions."""
    record_date = (today or date.today()).isoformat()
    baseline: list[tuple[str, Any]] = [
        ("Title", "Sample Chat Session - Welcome to Your Chat Manager"),
        ("Date", record_date),
        ("Platform", "ChatGPT"),
        ("Status", "Completed"),
        (
            "Summary",
            "This is a sample chat session to demonstrate your new chat management "
            "system. You can edit or delete this record and start adding your own "
            "chat sessions.",
        ),
        ("Rating", 5),
    ]
    if config is None:
        return dict(baseline)
    return dict(fold_rules(config, baseline, AIRTABLE_SAMPLE_RULES))


__all__ = [
    "AIRTABLE_REQUIRED_FIELDS",
    "NOTION_BASELINE_FIELDS",
    "Rule",
    "build_airtable_sample_record",
    "build_notion_sample_properties",
    "fold_rules",
    "map_config_to_airtable_checklist",
    "map_config_to_schema",
    "to_notion_properties",
]
