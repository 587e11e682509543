"""
SpacingCard — Form Client Package
===================================

What:  Headless rendition of the spacing card UI.

Module Inventory:
    - form.py:     SpacingForm state machine and debounced saving
    - inputs.py:   SpacingInput / UnitSelector per-side editing state
    - api.py:      SpacingApiClient (httpx)
    - storage.py:  LocalStorage (remembers component_id)
    - guard.py:    NavigationGuard (unsaved-changes flag)
"""

from spacingcard.client.api import SpacingApiClient
from spacingcard.client.form import FormState, SpacingForm
from spacingcard.client.guard import NavigationGuard
from spacingcard.client.inputs import SpacingChange, SpacingInput, UnitSelector
from spacingcard.client.storage import LocalStorage

__all__ = [
    "FormState",
    "LocalStorage",
    "NavigationGuard",
    "SpacingApiClient",
    "SpacingChange",
    "SpacingForm",
    "SpacingInput",
    "UnitSelector",
]
