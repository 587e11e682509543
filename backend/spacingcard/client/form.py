"""
SpacingCard Client — Spacing Form
===================================

What:  Headless state machine behind the spacing card: loads a component's
       record, exposes one SpacingInput per side, and saves edits back to
       the API after a quiet period.
How:   asyncio timer handle on the running loop for the debounce, httpx
       client for the API, LocalStorage for the remembered component_id.
Who:   Hosts (a UI shell, a CLI, tests) drive it through mount(),
       new_project(), the inputs, flush() and close().

State Machine:
    LOADING ──mount()──▶ READY        stored component_id fetched
       │
       └──────mount()──▶ NO_PROJECT   nothing stored, or fetch failed
                            │
                            └──new_project()──▶ READY

Save Flow (trailing-edge debounce):
    edit ─▶ update in-memory record ─▶ cancel timer ─▶ schedule timer
                                                         │ save_delay of quiet
                                                         ▼
                              disarm guard ─▶ validate ─▶ PATCH all 8 fields

    At most one timer is pending per form. A failed or rejected save is
    reported through `alert`; the in-memory edit is kept. Loading another
    record (mount, new_project) discards a pending save.
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Dict, Optional, Set

from spacingcard.client.api import SpacingApiClient
from spacingcard.client.guard import NavigationGuard
from spacingcard.client.inputs import SpacingChange, SpacingInput
from spacingcard.client.storage import LocalStorage
from spacingcard.config import Settings, settings as default_settings
from spacingcard.exceptions import ClientError, InvalidSpacingValueError
from spacingcard.schemas.spacing import (
    SpacingField,
    SpacingPatch,
    SpacingProperty,
    SpacingResponse,
    is_valid_spacing_value,
)

logger = logging.getLogger(__name__)

COMPONENT_ID_KEY = "component_id"

AlertCallback = Callable[[str], None]


class FormState(str, Enum):
    LOADING = "loading"
    NO_PROJECT = "no_project"
    READY = "ready"


def log_alert(message: str) -> None:
    """Default alert: no dialog available, so the message goes to the log."""
    logger.error("Alert: %s", message)


def build_patch(record: SpacingResponse) -> SpacingPatch:
    """
    Validate every side of the record and wrap all eight in a patch.

    Raises:
        InvalidSpacingValueError: a value is neither "auto" nor numeric
    """
    for field, prop in record.spacing().items():
        if not is_valid_spacing_value(prop.value):
            raise InvalidSpacingValueError(field=field.value, value=prop.value)
    return SpacingPatch.from_record(record)


class SpacingForm:
    """
    Spacing card state for one component.

    Args:
        api:        client used for GET/POST/PATCH
        storage:    where the current component_id is remembered
        guard:      unsaved-changes flag (armed while a save is pending)
        alert:      called with a message whenever an operation fails
        save_delay: seconds of inactivity before an edit is saved
    """

    def __init__(
        self,
        api: SpacingApiClient,
        storage: LocalStorage,
        guard: Optional[NavigationGuard] = None,
        alert: Optional[AlertCallback] = None,
        save_delay: float = 8.0,
    ):
        self.api = api
        self.storage = storage
        self.guard = guard or NavigationGuard()
        self.alert = alert or log_alert
        self.save_delay = save_delay

        self.state = FormState.LOADING
        self.record: Optional[SpacingResponse] = None
        self.inputs: Dict[SpacingField, SpacingInput] = {}

        self._timer: Optional[asyncio.TimerHandle] = None
        self._saves: Set[asyncio.Task] = set()
        self._owns_api = False

    @classmethod
    def from_settings(
        cls,
        config: Optional[Settings] = None,
        **kwargs,
    ) -> "SpacingForm":
        """Build a form wired to the configured API URL and storage file."""
        config = config or default_settings
        form = cls(
            api=SpacingApiClient(config.api_base_url, timeout=config.client_timeout_seconds),
            storage=LocalStorage(config.local_storage_path),
            save_delay=config.save_delay_seconds,
            **kwargs,
        )
        form._owns_api = True
        return form

    # ── Read-only views ───────────────────────────────────────────────────

    @property
    def component_id(self) -> Optional[str]:
        return self.record.component_id if self.record else None

    @property
    def save_pending(self) -> bool:
        return self._timer is not None

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def mount(self) -> FormState:
        """Load the remembered component, or fall back to NO_PROJECT."""
        self.state = FormState.LOADING
        component_id = await self.storage.get_item(COMPONENT_ID_KEY)
        if not component_id:
            logger.info("No stored component_id; waiting for a new project")
            self.state = FormState.NO_PROJECT
            return self.state

        try:
            await self._load(component_id)
        except ClientError as e:
            self._report("Error retrieving spacing data", e)
            self.state = FormState.NO_PROJECT
        return self.state

    async def new_project(self) -> FormState:
        """Create a default record, remember its id and load it."""
        try:
            component_id = await self.api.post_spacing()
            await self.storage.set_item(COMPONENT_ID_KEY, component_id)
            await self._load(component_id)
        except ClientError as e:
            self._report("Error creating project", e)
        return self.state

    async def flush(self) -> None:
        """Save a pending edit now instead of waiting for the timer."""
        if self._timer is not None:
            self._timer.cancel()
            self._fire_save()
        await self.wait_for_saves()

    async def wait_for_saves(self) -> None:
        """Wait until every in-flight PATCH has finished."""
        if self._saves:
            await asyncio.gather(*list(self._saves))

    async def close(self) -> None:
        """Flush pending edits, then release the API client if we built it."""
        await self.flush()
        if self._owns_api:
            await self.api.aclose()

    # ── Editing ───────────────────────────────────────────────────────────

    def update(self, change: SpacingChange) -> None:
        """
        Apply an edit locally and (re)start the save timer.

        The value is stored unvalidated so the user can type freely;
        validation happens when the timer fires.
        """
        if self.record is None:
            logger.warning("Ignoring %s edit: no record loaded", change.property_key.value)
            return

        self.record.set_property(
            change.property_key,
            SpacingProperty.model_construct(value=change.value, unit=change.unit),
        )
        self._schedule_save()

    def _schedule_save(self) -> None:
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._timer = loop.call_later(self.save_delay, self._fire_save)
        self.guard.arm()

    def _fire_save(self) -> None:
        self._timer = None
        self.guard.disarm()
        task = asyncio.ensure_future(self._save())
        self._saves.add(task)
        task.add_done_callback(self._saves.discard)

    async def _save(self) -> None:
        record = self.record
        if record is None:
            return
        try:
            patch = build_patch(record)
            await self.api.patch_spacing(record.component_id, patch)
        except ClientError as e:
            self._report("Error saving spacing data", e)
            return
        logger.info("Saved spacing for component %s", record.component_id)

    # ── Internals ─────────────────────────────────────────────────────────

    async def _load(self, component_id: str) -> None:
        record = await self.api.get_spacing(component_id)
        # A pending save belongs to the record being replaced
        self._cancel_pending_save()
        self.record = record
        self.inputs = {
            field: SpacingInput(field, prop.model_copy(), on_change=self.update)
            for field, prop in record.spacing().items()
        }
        self.state = FormState.READY
        logger.info("Loaded spacing for component %s", component_id)

    def _cancel_pending_save(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.info("Discarded unsaved edit of component %s", self.component_id)
        self.guard.disarm()

    def _report(self, context: str, error: ClientError) -> None:
        logger.error("%s: %s", context, error.message)
        self.alert(error.message)
