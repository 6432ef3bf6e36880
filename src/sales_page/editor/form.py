"""
Section editor form.

A form is bound to one section and exposes one input per content field. Every
edit produces the section's complete new content (previous content with the
changed top-level keys replaced) and hands it to `on_update`; list fields are
always replaced as whole lists, never merged entry by entry.

Usage:
    form = render_editor(section, on_update=store_update, on_remove=store_remove)
    form.append_entry("items")
    form.update_entry("items", 0, "question", "Para quem é o e-book?")
    html = form.to_html()
"""

from __future__ import annotations

import copy
import logging
import re
from pathlib import Path
from typing import Any, Callable, Optional

from src.sales_page.errors import EditorError
from src.sales_page.notifications import Notifier
from src.sales_page.publisher.storage import SupabaseStorage
from src.sales_page.sections import Section
from src.sales_page.template_engine.renderer import create_environment

from .models import EDITOR_LAYOUTS, UNSUPPORTED_MESSAGE, EditorLayout, ListFieldSpec

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"

# "<list>-<index>-<key>", e.g. "buttons-0-link"
_ENTRY_INPUT = re.compile(r"^(?P<list>[a-zA-Z_]+)-(?P<index>\d+)-(?P<key>[a-zA-Z_]+)$")

UpdateCallback = Callable[[dict], None]
RemoveCallback = Callable[[], None]


class SectionEditorForm:
    """Editable view of one section, bound to the same fields the renderer reads."""

    def __init__(
        self,
        section: Section,
        on_update: UpdateCallback,
        on_remove: RemoveCallback,
        storage: Optional[SupabaseStorage] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.section = section
        self.on_update = on_update
        self.on_remove = on_remove
        self.storage = storage
        self.notifier = notifier or Notifier()
        self.uploading = False
        variant = section.known_variant
        self.layout: Optional[EditorLayout] = EDITOR_LAYOUTS.get(variant) if variant else None

    # --- helpers ---

    @property
    def content(self) -> dict:
        """Current content exactly as stored; edits are applied to this copy."""
        return copy.deepcopy(self.section.blob)

    def _require_layout(self) -> EditorLayout:
        if self.layout is None:
            raise EditorError(f"Section variant {self.section.variant!r} is not editable")
        return self.layout

    def _list_spec(self, list_field: str) -> ListFieldSpec:
        spec = self._require_layout().list_field
        if spec is None or spec.name != list_field:
            raise EditorError(f"{self.section.variant} sections have no list field {list_field!r}")
        return spec

    def _entries(self, list_field: str) -> list:
        entries = self.content.get(list_field)
        return list(entries) if isinstance(entries, list) else []

    def _emit(self, new_content: dict) -> dict:
        self.section = self.section.with_content(new_content)
        self.on_update(new_content)
        return new_content

    def update_content(self, updates: dict[str, Any]) -> dict:
        """Shallow-merge `updates` onto the current content and emit the result."""
        return self._emit({**self.content, **updates})

    # --- scalar fields ---

    def set_field(self, name: str, value: str) -> dict:
        if self._require_layout().get_field(name) is None:
            raise EditorError(f"{self.section.variant} sections have no field {name!r}")
        return self.update_content({name: value})

    # --- list fields ---

    def append_entry(self, list_field: str) -> dict:
        spec = self._list_spec(list_field)
        return self.update_content({list_field: self._entries(list_field) + [spec.blank_entry()]})

    def update_entry(self, list_field: str, index: int, key: str, value: str) -> dict:
        """Change one key of the entry at `index`; other entries are passed through as-is."""
        spec = self._list_spec(list_field)
        if key not in {f.name for f in spec.entry_fields}:
            raise EditorError(f"{list_field} entries have no field {key!r}")
        entries = self._entries(list_field)
        if not 0 <= index < len(entries):
            raise EditorError(f"{list_field}[{index}] is out of range")
        entry = entries[index] if isinstance(entries[index], dict) else {}
        entries[index] = {**entry, key: value}
        return self.update_content({list_field: entries})

    def remove_entry(self, list_field: str, index: int) -> dict:
        self._list_spec(list_field)
        entries = self._entries(list_field)
        if not 0 <= index < len(entries):
            raise EditorError(f"{list_field}[{index}] is out of range")
        return self.update_content({list_field: [e for i, e in enumerate(entries) if i != index]})

    def apply_input(self, name: str, value: str) -> dict:
        """Route a submitted form input (`title`, `items-2-answer`) to the right edit."""
        match = _ENTRY_INPUT.match(name)
        if match:
            return self.update_entry(
                match.group("list"), int(match.group("index")), match.group("key"), value
            )
        return self.set_field(name, value)

    def apply_action(self, action: str) -> None:
        """Run a button action from the rendered form (`append:items`, `remove:items:1`, ...)."""
        kind, _, arg = action.partition(":")
        if kind == "append" and arg:
            self.append_entry(arg)
        elif kind == "remove" and arg:
            list_field, _, index = arg.partition(":")
            if not index.isdigit():
                raise EditorError(f"Malformed action {action!r}")
            self.remove_entry(list_field, int(index))
        elif action == "remove-section":
            self.remove()
        elif action == "clear-background":
            self.clear_background()
        else:
            raise EditorError(f"Unknown action {action!r}")

    # --- hero background ---

    def upload_background(
        self,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None,
    ) -> bool:
        """Upload a hero background and store its public URL.

        On failure an error notification is raised and content is left as it was.
        """
        if not self._require_layout().background_upload:
            raise EditorError(f"{self.section.variant} sections have no background image")
        if self.storage is None:
            self.notifier.error("Armazenamento de imagens não configurado.")
            return False

        self.uploading = True
        try:
            result = self.storage.upload(data, filename, content_type)
        finally:
            self.uploading = False

        if not result.success:
            logger.error("Background upload failed for section %s: %s", self.section.key, result.error)
            self.notifier.error("Não foi possível carregar a imagem.")
            return False

        self.update_content({"backgroundImage": result.public_url})
        self.notifier.success("Imagem de background carregada com sucesso!")
        return True

    def clear_background(self) -> dict:
        if not self._require_layout().background_upload:
            raise EditorError(f"{self.section.variant} sections have no background image")
        content = self.content
        content.pop("backgroundImage", None)
        return self._emit(content)

    # --- removal ---

    def remove(self) -> None:
        self.on_remove()

    # --- HTML ---

    def template_context(self) -> dict[str, Any]:
        content = self.content
        layout = self.layout
        if layout is None:
            return {"key": self.section.key, "layout": None, "unsupported_message": UNSUPPORTED_MESSAGE}

        entries = []
        if layout.list_field is not None:
            for entry in self._entries(layout.list_field.name):
                entry = entry if isinstance(entry, dict) else {}
                entries.append({
                    f.name: entry.get(f.name) if isinstance(entry.get(f.name), str) else ""
                    for f in layout.list_field.entry_fields
                })
        return {
            "key": self.section.key,
            "layout": layout,
            "values": {
                f.name: content.get(f.name) if isinstance(content.get(f.name), str) else ""
                for f in layout.fields
            },
            "entries": entries,
            "background_image": content.get("backgroundImage") or "",
            "uploading": self.uploading,
        }

    def to_html(self) -> str:
        env = create_environment(TEMPLATES_DIR)
        return env.get_template("form.html.jinja2").render(**self.template_context())


def render_editor(
    section: Section,
    on_update: UpdateCallback,
    on_remove: RemoveCallback,
    storage: Optional[SupabaseStorage] = None,
    notifier: Optional[Notifier] = None,
) -> SectionEditorForm:
    """Build the editor form for a section."""
    return SectionEditorForm(section, on_update, on_remove, storage=storage, notifier=notifier)
