"""
Utility functions for loading the assistant's YAML prompt templates
"""

import logging
from functools import lru_cache
from pathlib import Path

from .validation import PromptTemplate, validate_template_file

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "eureka"


class TemplatePrompts:
    """
    Exposes a validated template as module-style constants
    (SYSTEM_PROMPT, STRUCTURE_PROMPT, ...).
    """

    def __init__(self, template: PromptTemplate):
        self.template = template
        self.ITEM_TYPE = template.metadata.item_type
        self.TEMPERATURE = template.metadata.temperature
        self.SYSTEM_PROMPT = template.prompts.system.strip()
        self.STRUCTURE_PROMPT = template.prompts.structure.strip()

    @property
    def name(self) -> str:
        return self.template.name

    def structure_prompt(self, title: str) -> str:
        return self.STRUCTURE_PROMPT.format(title=title)


def _get_yaml_template_path(template_id: str) -> Path:
    """Get the path to a YAML template file"""
    return Path(__file__).parent / "templates" / f"{template_id}.yaml"


@lru_cache(maxsize=None)
def get_prompts(template_id: str = DEFAULT_TEMPLATE) -> TemplatePrompts:
    """
    Load prompts for the given template id

    Raises:
        ValueError: if the template is missing or invalid
    """
    yaml_path = _get_yaml_template_path(template_id)
    if not yaml_path.exists():
        raise ValueError(f"No prompts found for template: {template_id}")

    template, warnings = validate_template_file(str(yaml_path))
    if warnings:
        logger.warning(f"Template warnings for {template_id}: {warnings}")
    return TemplatePrompts(template)


def list_available_templates() -> dict:
    """
    List all available prompt templates

    Returns:
        dict: Template information keyed by template id
    """
    templates = {}
    templates_dir = Path(__file__).parent / "templates"
    for yaml_file in sorted(templates_dir.glob("*.yaml")):
        template_id = yaml_file.stem
        try:
            template, warnings = validate_template_file(str(yaml_file))
            templates[template_id] = {
                'name': template.name,
                'description': template.description,
                'version': template.version,
                'author': template.author,
                'warnings': warnings,
            }
        except ValueError as e:
            templates[template_id] = {
                'name': template_id,
                'description': 'Invalid template',
                'error': str(e),
            }
    return templates
