"""Renders ServiceDefinition objects into systemd unit file text."""

import logging
from typing import Optional

import jinja2

from ..exceptions import TemplateError
from ..models.service import ServiceDefinition
from ..utils.constants import AFTER_TARGET, SYSTEM_WANTED_BY

logger = logging.getLogger(__name__)

UNIT_TEMPLATE = """[Unit]
Description={{ description }}
After={{ after }}

[Service]
ExecStart={{ exec_command }}
WorkingDirectory={{ working_directory }}
Restart={{ restart }}
RestartSec={{ restart_sec }}
Type={{ service_kind }}
{% if run_as_user is defined %}
User={{ run_as_user }}
{% endif %}
{% if run_as_group is defined %}
Group={{ run_as_group }}
{% endif %}
{% for assignment in environment_assignments %}
Environment={{ assignment | systemd_quote }}
{% endfor %}
{% for path in environment_files %}
EnvironmentFile={{ path }}
{% endfor %}

[Install]
WantedBy={{ wanted_by }}
"""

# Characters that force an Environment= assignment into double quotes
_QUOTE_TRIGGERS = (" ", "\t", "\n", "\r", '"', "'", "\\")

# C escapes systemd decodes inside a quoted assignment
_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)


def systemd_quote(assignment: str) -> str:
    """Quote an Environment= assignment if systemd would otherwise split it.

    '%' is doubled so systemd does not expand it as a specifier.

    Args:
        assignment: KEY=VALUE string

    Returns:
        The assignment, wrapped in double quotes when needed
    """
    assignment = assignment.replace("%", "%%")
    if not any(c in assignment for c in _QUOTE_TRIGGERS):
        return assignment
    for raw, escaped in _ESCAPES:
        assignment = assignment.replace(raw, escaped)
    return f'"{assignment}"'


class UnitRenderer:
    """Serializes service definitions through a Jinja2 unit template."""

    def __init__(self, template: str = UNIT_TEMPLATE, wanted_by: str = SYSTEM_WANTED_BY):
        """Initialize the renderer.

        Args:
            template: Jinja2 template source for the unit file
            wanted_by: Target written to WantedBy=

        Raises:
            TemplateError: If the template does not compile
        """
        self.wanted_by = wanted_by
        self._env = jinja2.Environment(
            undefined=jinja2.StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self._env.filters["systemd_quote"] = systemd_quote

        try:
            self._template = self._env.from_string(template)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateError(f"failed to parse template: {e}") from e

    def render(self, definition: ServiceDefinition, wanted_by: Optional[str] = None) -> str:
        """Render a definition into unit file text.

        Args:
            definition: The service to render
            wanted_by: Optional override for WantedBy=

        Returns:
            Unit file contents

        Raises:
            TemplateError: If the template references unknown values
        """
        context = definition.to_dict()
        context["after"] = AFTER_TARGET
        context["wanted_by"] = wanted_by or self.wanted_by

        try:
            return self._template.render(**context)
        except jinja2.TemplateError as e:
            raise TemplateError(f"failed to render template: {e}") from e
