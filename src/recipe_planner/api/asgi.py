"""Module-level ASGI app for the recipe planner.

Serves the recipe feed, meal plan and profile routes with settings read from
the environment, e.g. ``uvicorn recipe_planner.api.asgi:app``.
"""

from recipe_planner.api.app import create_app
from recipe_planner.config import Settings
from recipe_planner.containers import build_container

app = create_app(build_container(Settings()))
