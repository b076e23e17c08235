"""
HTML rendering for the task list.

``render_task_list`` is a pure function of a :class:`TaskListView`: it
holds no state and applies no business rules, it only turns the derived
view into markup. Task text is escaped by Jinja's autoescaping.
"""

from __future__ import annotations

from jinja2 import Environment, PackageLoader, select_autoescape

from .state import FilterMode, TaskListView

_env = Environment(
    loader=PackageLoader("todo_client", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_task_list(view: TaskListView) -> str:
    """Render stats, filter buttons, the filtered list and any notification."""
    template = _env.get_template("task_list.html")
    return template.render(view=view, filters=list(FilterMode))
