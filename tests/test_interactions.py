"""
インタラクション実行のテスト
"""
import pytest
from unittest.mock import AsyncMock
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from element_probe.interactions import perform_interaction, wait_for_settle
from element_probe.models import (
    ChangeType, DomSnapshot, InteractionSpec, InteractionType, ProbeSettings,
)
from fakes import make_element, make_page, nearby_raw, sibling_raw, snapshot_raw, state_raw

INITIAL = DomSnapshot.from_raw(snapshot_raw())


class TestPerformInteraction:

    @pytest.mark.asyncio
    async def test_click_opens_dropdown(self):
        """クリックでドロップダウンが開く"""
        element = make_element(states=[state_raw(expanded='false'), state_raw(expanded='true')])
        page = make_page(snapshots=[snapshot_raw(nearby=[
            nearby_raw(tag='UL', cls='dropdown', top=60),
            nearby_raw(cls='dropdown-item', top=120),
            nearby_raw(cls='dropdown-item', top=180),
        ])])

        result, changes = await perform_interaction(page, element, InteractionSpec(InteractionType.CLICK), INITIAL)

        element.click.assert_awaited_once()
        page.wait_for_timeout.assert_awaited_once_with(300)
        assert result.success is True
        assert result.error is None
        assert result.state_change.aria_expanded_changed is True
        assert changes.interaction_type == ChangeType.DROPDOWN
        assert len(changes.new_elements) == 3
        assert result.accessibility_score >= 60

    @pytest.mark.asyncio
    async def test_click_without_aria_expanded(self):
        """aria-expanded がない要素では変化なし"""
        element = make_element(states=[state_raw(), state_raw()])
        page = make_page(snapshots=[snapshot_raw()])

        result, changes = await perform_interaction(page, element, InteractionSpec(InteractionType.CLICK), INITIAL)

        assert result.success is True
        assert result.state_change.aria_expanded_changed is False
        assert changes.interaction_type == ChangeType.NONE
        assert result.accessibility_score == 50

    @pytest.mark.asyncio
    async def test_focus_and_hover_dispatch(self):
        for kind, method in [(InteractionType.FOCUS, 'focus'), (InteractionType.HOVER, 'hover')]:
            element = make_element(states=[state_raw(), state_raw(focused=kind == InteractionType.FOCUS)])
            page = make_page(snapshots=[snapshot_raw()])

            result, _ = await perform_interaction(page, element, InteractionSpec(kind), INITIAL)

            getattr(element, method).assert_awaited_once()
            element.click.assert_not_awaited()
            assert result.type == kind
        assert result.state_change.focus_changed is False

    @pytest.mark.asyncio
    async def test_keydown_focuses_then_presses(self):
        """keydown はフォーカスしてからキーを押す"""
        element = make_element(states=[state_raw(), state_raw(focused=True, pressed='true')])
        page = make_page(snapshots=[snapshot_raw()])

        result, _ = await perform_interaction(page, element, InteractionSpec(InteractionType.KEYDOWN, key='Enter'), INITIAL)

        element.focus.assert_awaited_once()
        element.press.assert_awaited_once_with('Enter')
        assert result.state_change.focus_changed is True
        assert result.state_change.aria_pressed_changed is True
        assert result.accessibility_score == 80

    @pytest.mark.asyncio
    async def test_keydown_without_key(self):
        element = make_element(states=[state_raw(), state_raw()])
        page = make_page(snapshots=[snapshot_raw()])

        result, _ = await perform_interaction(page, element, InteractionSpec(InteractionType.KEYDOWN), INITIAL)

        element.focus.assert_awaited_once()
        element.press.assert_not_awaited()
        assert result.success is True

    @pytest.mark.asyncio
    async def test_detached_element(self):
        """要素が外れても例外は外に出ない"""
        element = make_element(states=[state_raw()])
        element.click.side_effect = Exception("Element is not attached to the DOM")
        page = make_page()

        result, changes = await perform_interaction(page, element, InteractionSpec(InteractionType.CLICK), INITIAL)

        assert result.success is False
        assert result.error == "Element is not attached to the DOM"
        assert result.accessibility_score == 0
        assert result.state_change is None
        assert changes is None

    @pytest.mark.asyncio
    async def test_state_read_failure(self):
        element = AsyncMock()
        element.evaluate.side_effect = Exception("Execution context was destroyed")
        result, _ = await perform_interaction(make_page(), element, InteractionSpec(InteractionType.HOVER), INITIAL)
        assert result.success is False
        assert "context was destroyed" in result.error

    @pytest.mark.asyncio
    async def test_custom_settle_delay(self):
        element = make_element(states=[state_raw(), state_raw()])
        page = make_page(snapshots=[snapshot_raw()])
        await perform_interaction(page, element, InteractionSpec(InteractionType.CLICK), INITIAL, ProbeSettings(settle_delay_ms=50))
        page.wait_for_timeout.assert_awaited_once_with(50)

    @pytest.mark.asyncio
    async def test_result_to_dict(self):
        element = make_element(states=[state_raw(), state_raw()])
        page = make_page(snapshots=[snapshot_raw()])
        result, _ = await perform_interaction(page, element, InteractionSpec(InteractionType.CLICK), INITIAL)

        data = result.to_dict()
        assert data['type'] == 'click'
        assert data['stateChange']['focusChanged'] is False
        assert 'interactionTime' in data
        assert data['accessibilityScore'] == 50


class TestWaitForSettle:

    @pytest.mark.asyncio
    async def test_poll_until_stable(self):
        """連続2回同じスナップショットで安定とみなす"""
        changing = snapshot_raw(siblings=[sibling_raw(visible=False)])
        stable = snapshot_raw(siblings=[sibling_raw(visible=True)])
        page = make_page(snapshots=[changing, stable, stable])
        settings = ProbeSettings(poll_until_stable=True, poll_interval_ms=10, poll_timeout_ms=60000)

        snapshot = await wait_for_settle(page, AsyncMock(), settings)

        assert snapshot.siblings[0].is_visible is True
        assert page.evaluate.await_count == 3
        assert page.wait_for_timeout.await_count == 3

    @pytest.mark.asyncio
    async def test_poll_gives_up_after_timeout(self):
        page = make_page(snapshots=[snapshot_raw()])
        settings = ProbeSettings(poll_until_stable=True, poll_interval_ms=10, poll_timeout_ms=0)

        snapshot = await wait_for_settle(page, AsyncMock(), settings)

        assert snapshot.parent_tag_name == 'DIV'
        assert page.evaluate.await_count == 1

    def test_snapshot_equality(self):
        assert DomSnapshot.from_raw(snapshot_raw()) == DomSnapshot.from_raw(snapshot_raw())
