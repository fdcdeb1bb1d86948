"""application.settings sub-package — re-exports public API."""

from application.settings.persona_service import list_personas  # noqa: F401
from application.settings.rotation_service import (  # noqa: F401
    RotationScheduler,
    get_rotation_status,
    rotate_if_due,
)
from application.settings.settings_service import (  # noqa: F401
    get_settings,
    list_models,
    replace_settings,
)
