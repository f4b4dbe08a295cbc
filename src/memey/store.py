"""Template store and expression table loading.

The template catalog is seeded from the bundled ``data/templates.json``.
Once ``memey update`` has run, the merged catalog lives in
``<data_dir>/templates.json`` and takes precedence over the seed.

The expression table is read-only at runtime. It is loaded from YAML or
JSON (detected from the file extension, falling back to content sniffing)
and every pattern is compiled once here rather than per match attempt.
"""

from __future__ import annotations

import json
import re
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from memey.config import atomic_write, bundled_data_path, get_data_dir
from memey.exceptions import ConfigError
from memey.models import CompiledExpression, ExpressionRule, Template

TEMPLATES_FILENAME = "templates.json"
EXPRESSIONS_FILENAME = "expressions.yaml"


class TemplateStore:
    """Ordered collection of :class:`~memey.models.Template` records.

    Order is insertion order until :meth:`sort` is called. The store is
    append-only from the caller's perspective; :func:`save_templates` is
    the only way changes reach disk.

    Args:
        templates: Initial records, kept in the given order.
        path: Where :func:`save_templates` writes the catalog.
    """

    def __init__(self, templates: Iterable[Template] = (), path: Optional[Path] = None) -> None:
        self._templates: list[Template] = list(templates)
        self.path = path

    def __iter__(self) -> Iterator[Template]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def contains(self, template_id: int) -> bool:
        """Linear membership test by template id."""
        return any(t.id == template_id for t in self._templates)

    def append(self, template: Template) -> None:
        self._templates.append(template)

    def sort(self) -> None:
        """Sort the store ascending by template id."""
        self._templates.sort(key=lambda t: t.id)

    def to_json(self) -> str:
        """Serialise the store as a pretty-printed JSON array."""
        data = [t.model_dump(mode="json", exclude_none=True) for t in self._templates]
        return json.dumps(data, indent=4, ensure_ascii=False) + "\n"


def user_templates_path() -> Path:
    """Path of the user's merged template catalog."""
    return get_data_dir() / TEMPLATES_FILENAME


def load_templates(path: Optional[Path] = None) -> TemplateStore:
    """Load the template catalog.

    Args:
        path: Explicit catalog file. When omitted, the user's catalog is
            used if it exists, otherwise the bundled seed.

    Returns:
        A :class:`TemplateStore` whose :attr:`~TemplateStore.path` points at
        the user's catalog (or *path* when given), so that a subsequent save
        never overwrites the bundled seed.

    Raises:
        ConfigError: If the catalog cannot be read or parsed.
    """
    if path is not None:
        source, target = path, path
    else:
        target = user_templates_path()
        source = target if target.is_file() else bundled_data_path(TEMPLATES_FILENAME)

    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read template catalog {source}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid template catalog {source}: {exc}") from exc

    if not isinstance(raw, list):
        raise ConfigError(f"Template catalog {source} must be a JSON array")
    try:
        templates = [Template.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise ConfigError(f"Invalid template in {source}: {exc}") from exc
    return TemplateStore(templates, path=target)


def save_templates(store: TemplateStore) -> None:
    """Persist *store* atomically to its :attr:`~TemplateStore.path`."""
    path = store.path or user_templates_path()
    atomic_write(path, store.to_json())


# --- Expression table ---


def load_expressions(path: Optional[Path] = None) -> list[CompiledExpression]:
    """Load and compile the shorthand expression table.

    Supports ``.yaml``/``.yml`` and ``.json`` files. The document is a list
    of ``{id, regex}`` mappings, kept in file order.

    Args:
        path: Table file; defaults to the bundled ``expressions.yaml``.

    Returns:
        Compiled expressions in table order.

    Raises:
        ConfigError: If the file cannot be read, parsed, or a pattern does
            not compile.
    """
    source = path or bundled_data_path(EXPRESSIONS_FILENAME)
    try:
        content = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read expression table {source}: {exc}") from exc

    raw = _parse_table(content, source.suffix.lower(), source)
    if not isinstance(raw, list):
        raise ConfigError(f"Expression table {source} must be a list")

    compiled: list[CompiledExpression] = []
    for item in raw:
        try:
            compiled.append(CompiledExpression(ExpressionRule.model_validate(item)))
        except ValidationError as exc:
            raise ConfigError(f"Invalid expression rule in {source}: {exc}") from exc
        except re.error as exc:
            raise ConfigError(
                f"Expression {item.get('regex')!r} in {source} does not compile: {exc}"
            ) from exc
    return compiled


def _parse_table(content: str, suffix: str, source: Path) -> Any:
    """Parse *content* as JSON or YAML based on the file suffix."""
    if suffix == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {source}: {exc}") from exc

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source}: {exc}") from exc
