"""
SpacingCard — Spacing Form Tests
==================================

What:  Tests for the SpacingForm state machine and debounced saving.
How:   Mock API client (AsyncMock) with a short save_delay; one end-to-end
       class drives the real FastAPI app through httpx.ASGITransport.

What we test:
    ✅ mount() without a stored id → NO_PROJECT
    ✅ mount() with a stored id → READY with eight inputs
    ✅ mount() fetch failure or unusable body → alert, NO_PROJECT
    ✅ new_project() creates, remembers and loads a record
    ✅ A burst of edits produces one PATCH carrying the latest values
    ✅ An edit after the quiet period produces a second PATCH
    ✅ Invalid values are reported and never sent
    ✅ Navigation guard armed while a save is pending
    ✅ flush()/close() save immediately
    ✅ Loading another record discards a pending save
"""

import asyncio

import httpx
import pytest
from httpx import ASGITransport

from spacingcard.client.api import SpacingApiClient
from spacingcard.client.form import COMPONENT_ID_KEY, FormState, SpacingForm, build_patch
from spacingcard.exceptions import ApiRequestError, InvalidSpacingValueError
from spacingcard.schemas.spacing import (
    SpacingField,
    SpacingProperty,
    SpacingResponse,
    SpacingUnit,
)

SAVE_DELAY = 0.1
SETTLE = 0.3


def make_form(api, storage, alerts=None):
    return SpacingForm(
        api=api,
        storage=storage,
        alert=(alerts.append if alerts is not None else None),
        save_delay=SAVE_DELAY,
    )


class TestMount:

    @pytest.mark.asyncio
    async def test_no_stored_component(self, mock_api, local_storage):
        form = make_form(mock_api, local_storage)

        assert await form.mount() == FormState.NO_PROJECT
        assert form.record is None
        mock_api.get_spacing.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stored_component_loaded(self, mock_api, local_storage, sample_record):
        await local_storage.set_item(COMPONENT_ID_KEY, sample_record.component_id)
        form = make_form(mock_api, local_storage)

        assert await form.mount() == FormState.READY
        mock_api.get_spacing.assert_awaited_once_with(sample_record.component_id)
        assert form.component_id == sample_record.component_id
        assert set(form.inputs) == set(SpacingField)
        assert all(i.pristine for i in form.inputs.values())

    @pytest.mark.asyncio
    async def test_fetch_failure_alerts(self, mock_api, local_storage):
        await local_storage.set_item(COMPONENT_ID_KEY, "stale-id")
        mock_api.get_spacing.side_effect = ApiRequestError("no matching spacing record found")
        alerts = []
        form = make_form(mock_api, local_storage, alerts)

        assert await form.mount() == FormState.NO_PROJECT
        assert alerts == ["no matching spacing record found"]

    @pytest.mark.asyncio
    async def test_new_project(self, mock_api, local_storage, sample_record):
        form = make_form(mock_api, local_storage)
        await form.mount()

        assert await form.new_project() == FormState.READY
        mock_api.post_spacing.assert_awaited_once()
        assert await local_storage.get_item(COMPONENT_ID_KEY) == sample_record.component_id
        assert form.state == FormState.READY

    @pytest.mark.asyncio
    async def test_new_project_failure(self, mock_api, local_storage):
        mock_api.post_spacing.side_effect = ApiRequestError("create failed")
        alerts = []
        form = make_form(mock_api, local_storage, alerts)
        await form.mount()

        assert await form.new_project() == FormState.NO_PROJECT
        assert alerts == ["create failed"]
        assert await local_storage.get_item(COMPONENT_ID_KEY) is None

    @pytest.mark.asyncio
    async def test_wrong_shape_body_alerts(self, local_storage):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"id": 1, "user_id": "u"}])

        await local_storage.set_item(COMPONENT_ID_KEY, "c-1")
        api = SpacingApiClient("http://api.test", transport=httpx.MockTransport(handler))
        alerts = []
        form = make_form(api, local_storage, alerts)

        assert await form.mount() == FormState.NO_PROJECT
        assert alerts == ["Empty response received for get_spacing"]
        assert form.record is None

        await api.aclose()


class TestDebouncedSave:

    async def ready_form(self, mock_api, local_storage, sample_record, alerts=None):
        await local_storage.set_item(COMPONENT_ID_KEY, sample_record.component_id)
        form = make_form(mock_api, local_storage, alerts)
        await form.mount()
        return form

    @pytest.mark.asyncio
    async def test_burst_of_edits_saves_once(self, mock_api, local_storage, sample_record):
        form = await self.ready_form(mock_api, local_storage, sample_record)
        margin_top = form.inputs[SpacingField.MARGIN_TOP]

        for value in ["1", "12", "123"]:
            margin_top.set_value(value)
            await asyncio.sleep(0.01)
        form.inputs[SpacingField.PADDING_LEFT].set_unit("em")

        mock_api.patch_spacing.assert_not_awaited()
        await asyncio.sleep(SETTLE)

        mock_api.patch_spacing.assert_awaited_once()
        component_id, patch = mock_api.patch_spacing.await_args.args
        assert component_id == sample_record.component_id
        assert patch.margin_top == SpacingProperty(value="123", unit=SpacingUnit.PX)
        assert patch.padding_left == SpacingProperty(value="auto", unit=SpacingUnit.EM)
        assert set(patch.supplied_fields()) == set(SpacingField)

    @pytest.mark.asyncio
    async def test_edit_after_quiet_period_saves_again(self, mock_api, local_storage, sample_record):
        form = await self.ready_form(mock_api, local_storage, sample_record)

        form.inputs[SpacingField.MARGIN_TOP].set_value("4")
        await asyncio.sleep(SETTLE)
        form.inputs[SpacingField.MARGIN_TOP].set_value("5")
        await asyncio.sleep(SETTLE)

        assert mock_api.patch_spacing.await_count == 2
        _, last_patch = mock_api.patch_spacing.await_args.args
        assert last_patch.margin_top.value == "5"

    @pytest.mark.asyncio
    async def test_invalid_value_reported_not_sent(self, mock_api, local_storage, sample_record):
        alerts = []
        form = await self.ready_form(mock_api, local_storage, sample_record, alerts)

        form.inputs[SpacingField.PADDING_TOP].set_value("12px")
        await asyncio.sleep(SETTLE)

        mock_api.patch_spacing.assert_not_awaited()
        assert len(alerts) == 1
        assert "12px" in alerts[0]
        assert form.record.padding_top.value == "12px"

    @pytest.mark.asyncio
    async def test_failed_save_keeps_edit(self, mock_api, local_storage, sample_record):
        mock_api.patch_spacing.side_effect = ApiRequestError("Database query failed")
        alerts = []
        form = await self.ready_form(mock_api, local_storage, sample_record, alerts)

        form.inputs[SpacingField.MARGIN_LEFT].set_value("9")
        await form.flush()

        assert alerts == ["Database query failed"]
        assert form.record.margin_left.value == "9"

    @pytest.mark.asyncio
    async def test_guard_armed_until_save_fires(self, mock_api, local_storage, sample_record):
        form = await self.ready_form(mock_api, local_storage, sample_record)

        form.inputs[SpacingField.MARGIN_TOP].set_value("7")
        assert form.save_pending
        assert form.guard.armed

        await asyncio.sleep(SETTLE)

        assert not form.save_pending
        assert not form.guard.armed

    @pytest.mark.asyncio
    async def test_flush_saves_immediately(self, mock_api, local_storage, sample_record):
        form = await self.ready_form(mock_api, local_storage, sample_record)
        form.save_delay = 60

        form.inputs[SpacingField.MARGIN_TOP].set_value("2")
        await form.flush()

        mock_api.patch_spacing.assert_awaited_once()
        assert not form.save_pending

    @pytest.mark.asyncio
    async def test_close_flushes_pending_edit(self, mock_api, local_storage, sample_record):
        form = await self.ready_form(mock_api, local_storage, sample_record)
        form.save_delay = 60

        form.inputs[SpacingField.PADDING_RIGHT].set_value("1")
        await form.close()

        mock_api.patch_spacing.assert_awaited_once()
        mock_api.aclose.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_project_discards_pending_save(self, mock_api, local_storage, sample_record):
        form = await self.ready_form(mock_api, local_storage, sample_record)
        form.inputs[SpacingField.MARGIN_TOP].set_value("6")
        assert form.guard.armed

        replacement = SpacingResponse(user_id="u2", project_id="p2", component_id="c-2")
        mock_api.post_spacing.return_value = "c-2"
        mock_api.get_spacing.return_value = replacement
        await form.new_project()
        await asyncio.sleep(SETTLE)

        assert form.component_id == "c-2"
        assert not form.save_pending
        assert not form.guard.armed
        mock_api.patch_spacing.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_edit_without_record_ignored(self, mock_api, local_storage):
        from spacingcard.client.inputs import SpacingChange
        form = make_form(mock_api, local_storage)
        await form.mount()

        form.update(SpacingChange(SpacingField.MARGIN_TOP, "3", SpacingUnit.PX))

        assert not form.save_pending


class TestBuildPatch:

    def test_all_fields_included(self, sample_record):
        patch = build_patch(sample_record)
        assert set(patch.supplied_fields()) == set(SpacingField)

    def test_invalid_value_named(self, sample_record):
        sample_record.set_property(
            SpacingField.MARGIN_BOTTOM,
            SpacingProperty.model_construct(value="x", unit=SpacingUnit.PX),
        )
        with pytest.raises(InvalidSpacingValueError) as exc_info:
            build_patch(sample_record)
        assert exc_info.value.field == "margin_bottom"


class TestFormAgainstApi:
    """The form driving the real app over ASGITransport."""

    @pytest.mark.asyncio
    async def test_new_project_edit_and_reload(self, db_engine, local_storage):
        from spacingcard.main import app

        api = SpacingApiClient("http://test", transport=ASGITransport(app=app))
        form = make_form(api, local_storage)
        await form.mount()
        await form.new_project()

        form.inputs[SpacingField.MARGIN_RIGHT].set_value("16")
        form.inputs[SpacingField.MARGIN_RIGHT].set_unit(SpacingUnit.VW)
        await form.flush()

        reloaded = make_form(api, local_storage)
        assert await reloaded.mount() == FormState.READY
        margin_right = reloaded.inputs[SpacingField.MARGIN_RIGHT]
        assert (margin_right.value, margin_right.unit) == ("16", SpacingUnit.VW)
        assert reloaded.inputs[SpacingField.MARGIN_TOP].pristine

        await api.aclose()
