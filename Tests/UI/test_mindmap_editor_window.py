"""
Tests for the mindmap editor application, driven through the Textual pilot
"""

import pytest

from mindmap_editor.Tools.Mind_Map.layout_adapter import LayoutSettings
from mindmap_editor.Tools.Mind_Map.mindmap_graph import ROOT_ID, LayoutOrientation
from mindmap_editor.UI.Mindmap_Editor_Window import MindmapCanvas, MindmapEditorApp
from mindmap_editor.Widgets.ad_slot import AdSlot, RecordingAdQueue
from mindmap_editor.Widgets.discard_dialog import DiscardMindmapDialog


@pytest.fixture
def app(tmp_path):
    return MindmapEditorApp(export_dir=tmp_path)


class TestKeyboardEditing:
    """Keyboard surface of the canvas"""

    @pytest.mark.asyncio
    async def test_root_selected_and_canvas_focused(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            assert app.model.selected_id == ROOT_ID
            assert isinstance(app.focused, MindmapCanvas)

    @pytest.mark.asyncio
    async def test_tab_enter_arrows_delete(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("tab")
            assert len(app.model.store) == 2

            await pilot.press("right")
            child = app.model.selected_id
            assert child != ROOT_ID

            await pilot.press("enter")
            assert len(app.model.store) == 3
            assert [e.source for e in app.model.store.get_edges()] == [ROOT_ID, ROOT_ID]

            await pilot.press("delete")
            assert len(app.model.store) == 2
            assert app.model.selected_id == ROOT_ID

    @pytest.mark.asyncio
    async def test_deleting_root_is_refused(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("tab")
            await pilot.press("delete")
            await pilot.pause()
            assert len(app.model.store) == 2

    @pytest.mark.asyncio
    async def test_f2_edits_label(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("f2")
            await pilot.pause()
            assert app.editing_node_id == ROOT_ID
            assert app.label_editor.has_class("visible")

            app.label_editor.value = "Project"
            await pilot.press("enter")
            await pilot.pause()
            assert app.model.store.get_node(ROOT_ID).label == "Project"
            assert app.editing_node_id is None
            assert len(app.model.store) == 1

    @pytest.mark.asyncio
    async def test_escape_cancels_edit(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("f2")
            await pilot.pause()
            app.label_editor.value = "Discarded"
            await pilot.press("escape")
            await pilot.pause()
            assert app.model.store.get_node(ROOT_ID).label == "New idea"
            assert not app.label_editor.has_class("visible")


class TestDialogs:
    """Confirmation and import dialogs"""

    @pytest.mark.asyncio
    async def test_reset_needs_confirmation(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("tab")
            app.action_reset_all()
            await pilot.pause()
            await pilot.click("#cancel-button")
            await pilot.pause()
            assert len(app.model.store) == 2

            app.action_reset_all()
            await pilot.pause()
            await pilot.click("#confirm-button")
            await pilot.pause()
            assert len(app.model.store) == 1
            assert app.model.selected_id == ROOT_ID

    @pytest.mark.asyncio
    async def test_orientation_switch_answered_from_keyboard(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("tab")
            app.action_toggle_orientation()
            await pilot.pause()
            assert isinstance(app.screen, DiscardMindmapDialog)
            assert "2 nodes" in app.screen.summary()

            await pilot.press("n")
            await pilot.pause()
            assert app.model.orientation is LayoutOrientation.HORIZONTAL

            app.action_toggle_orientation()
            await pilot.pause()
            await pilot.press("y")
            await pilot.pause()
            assert app.model.orientation is LayoutOrientation.VERTICAL
            assert len(app.model.store) == 1
            assert app.model.selected_id == ROOT_ID

    @pytest.mark.asyncio
    async def test_toggle_without_reset(self, tmp_path):
        app = MindmapEditorApp(reset_on_orientation_change=False, export_dir=tmp_path)
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("tab")
            app.action_toggle_orientation()
            await pilot.pause()
            assert app.model.orientation is LayoutOrientation.VERTICAL
            assert len(app.model.store) == 2

    @pytest.mark.asyncio
    async def test_confirmed_toggle_is_reported(self, tmp_path):
        chosen = []
        app = MindmapEditorApp(export_dir=tmp_path, on_orientation_change=chosen.append)
        async with app.run_test(size=(120, 40)) as pilot:
            app.action_toggle_orientation()
            await pilot.pause()
            await pilot.press("n")
            await pilot.pause()
            assert chosen == []

            app.action_toggle_orientation()
            await pilot.pause()
            await pilot.press("y")
            await pilot.pause()
            assert chosen == [LayoutOrientation.VERTICAL]

    @pytest.mark.asyncio
    async def test_import_replaces_graph(self, app):
        text = ('{"layoutDirection": "vertical", "nodes": [{"id": "1", "data": {"label": "R"}}, '
                '{"id": "2", "data": {"label": "C"}}], "edges": [{"source": "1", "target": "2"}]}')
        async with app.run_test(size=(120, 40)) as pilot:
            app.action_open_import()
            await pilot.pause()
            app.screen.query_one("#import-text").text = text
            await pilot.click("#load-button")
            await pilot.pause()
            assert app.model.orientation is LayoutOrientation.VERTICAL
            assert [n.label for n in app.model.store.get_nodes()] == ["R", "C"]

    @pytest.mark.asyncio
    async def test_bad_import_keeps_graph(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("tab")
            app.action_open_import()
            await pilot.pause()
            app.screen.query_one("#import-text").text = "garbage"
            await pilot.click("#load-button")
            await pilot.pause()
            assert len(app.model.store) == 2


class TestExport:
    @pytest.mark.asyncio
    async def test_csv_export_writes_file(self, app, tmp_path):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.press("tab")
            app.action_export_csv()
            await pilot.pause()
            assert (tmp_path / "mindmap.csv").exists()

    @pytest.mark.asyncio
    async def test_pristine_csv_export_writes_nothing(self, app, tmp_path):
        async with app.run_test(size=(120, 40)) as pilot:
            app.action_export_csv()
            await pilot.pause()
            assert not (tmp_path / "mindmap.csv").exists()


class TestAdBannerHosting:
    @pytest.mark.asyncio
    async def test_ad_banner_registers(self, tmp_path):
        queue = RecordingAdQueue()
        app = MindmapEditorApp(export_dir=tmp_path,
                               settings=LayoutSettings(),
                               ad_slot=AdSlot("side", 200, 60, queue))
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            assert len(queue.requests) == 1
