"""Prompt template resolution and tagged-section extraction."""

from .template_resolver import (
    TagExtraction,
    TAG_EXTRACTIONS,
    extract_tag,
    extract_tagged_sections,
    build_template_variables,
    resolve_template
)

__all__ = [
    'TagExtraction',
    'TAG_EXTRACTIONS',
    'extract_tag',
    'extract_tagged_sections',
    'build_template_variables',
    'resolve_template'
]
