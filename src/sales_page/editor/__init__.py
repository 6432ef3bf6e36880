# Section Editor Form: per-variant edit forms emitting whole-content updates

from .form import SectionEditorForm, render_editor
from .models import EDITOR_LAYOUTS, EditorLayout, FieldSpec, ListFieldSpec, Widget

__all__ = [
    "EDITOR_LAYOUTS",
    "EditorLayout",
    "FieldSpec",
    "ListFieldSpec",
    "SectionEditorForm",
    "Widget",
    "render_editor",
]
