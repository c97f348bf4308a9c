"""Template loading for the home and confirmation pages"""

import logging
from pathlib import Path
from typing import Dict

from jinja2 import Environment, Template, TemplateSyntaxError

logger = logging.getLogger(__name__)

# Logical template name -> file name inside the template directory
TEMPLATE_FILES = {
    "home": "index.html",
    "registration": "registration.html",
}

environment = Environment(autoescape=True)


class TemplateLoadError(RuntimeError):
    """Raised when a template file cannot be read or compiled"""


def load_template(name: str, path: str) -> Template:
    """
    Read a template file and compile it under the given name.

    Args:
        name: Logical template name
        path: Path of the template file

    Returns:
        Compiled Jinja2 template

    Raises:
        TemplateLoadError: If the file is missing, unreadable or not a valid template
    """
    try:
        source = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateLoadError(f"Cannot read template '{name}' from {path}: {e}") from e

    try:
        template = environment.from_string(source)
    except TemplateSyntaxError as e:
        raise TemplateLoadError(f"Invalid template '{name}' in {path}: {e}") from e

    template.name = name
    return template


def load_templates(template_dir: str) -> Dict[str, Template]:
    """Load every template the application needs from `template_dir`"""
    templates = {}
    for name, file_name in TEMPLATE_FILES.items():
        templates[name] = load_template(name, str(Path(template_dir) / file_name))
        logger.info(f"Loaded template '{name}'")
    return templates
