"""Tests for the rectangle editor."""

import pytest

from patch_annotator.core.drawing import draw_rectangle, make_canvas
from patch_annotator.core.errors import ConfigurationError
from patch_annotator.core.models import ClickPairMode, EditMode, PointerButton, Rectangle
from patch_annotator.modes import RectangleEditor
from patch_annotator.modes.editor import DELETE_TOGGLE_NAME

from scripted_display import ScriptedDisplay, Toggle, click, drag, move, press, release

SECONDARY = PointerButton.SECONDARY

DELETE = Toggle(DELETE_TOGGLE_NAME, 1)
ADD = Toggle(DELETE_TOGGLE_NAME, 0)


@pytest.fixture
def image(make_image):
    return make_image(600, 600)


def make_editor(*scripts, ratio=0, click_pair_mode=ClickPairMode.TL_BR):
    display = ScriptedDisplay(*scripts)
    return RectangleEditor(ratio, click_pair_mode, display=display), display


class TestAddMode:
    """Tests for adding and moving rectangles."""

    def test_two_clicks_add_rectangle(self, image):
        editor, _ = make_editor(click(10, 10) + click(30, 50))

        assert editor.edit_rectangles(image, []) == [Rectangle(10, 10, 20, 40)]

    def test_click_pair_mode_used(self, image):
        editor, _ = make_editor(click(50, 50) + click(70, 50),
                                ratio=0.5, click_pair_mode=ClickPairMode.C_R)

        assert editor.edit_rectangles(image, []) == [Rectangle(30, 10, 40, 80)]

    def test_existing_rectangles_kept(self, image):
        existing = [Rectangle(0, 0, 10, 10), Rectangle(100, 100, 20, 20)]
        editor, _ = make_editor([])

        result = editor.edit_rectangles(image, existing)

        assert result == existing
        assert result is not existing

    def test_input_list_not_modified(self, image):
        existing = [Rectangle(0, 0, 10, 10)]
        editor, _ = make_editor([DELETE, press(5, 5, SECONDARY)])

        assert editor.edit_rectangles(image, existing) == []
        assert existing == [Rectangle(0, 0, 10, 10)]

    def test_collect_starts_empty(self, image):
        editor, _ = make_editor(click(10, 10) + click(20, 20))
        assert editor.collect_rectangles(image) == [Rectangle(10, 10, 10, 10)]

    def test_move_nearest_rectangle(self, image):
        """Test a secondary drag re-centers the nearest rectangle at the release point."""
        existing = [Rectangle(0, 0, 10, 10), Rectangle(100, 100, 20, 20)]
        script = [press(108, 108, SECONDARY), move(200, 200), release(300, 300, SECONDARY)]
        editor, _ = make_editor(script)

        result = editor.edit_rectangles(image, existing)

        assert result == [Rectangle(0, 0, 10, 10), Rectangle(290, 290, 20, 20)]

    def test_moving_rectangle_removed_while_dragging(self, image):
        existing = [Rectangle(0, 0, 10, 10)]
        seen = []
        editor, display = make_editor([press(5, 5, SECONDARY), move(50, 50)])
        original_show = display.show

        def show(img):
            seen.append((editor.rectangles, editor.moving_rectangle))
            original_show(img)

        display.show = show
        editor.edit_rectangles(image, existing)

        assert ([], Rectangle(0, 0, 10, 10)) in seen

    def test_finishing_mid_move_restores_rectangle(self, image):
        existing = [Rectangle(0, 0, 10, 10), Rectangle(100, 100, 10, 10)]
        editor, _ = make_editor([press(5, 5, SECONDARY), move(300, 300)])

        result = editor.edit_rectangles(image, existing)

        assert result == [Rectangle(100, 100, 10, 10), Rectangle(0, 0, 10, 10)]
        assert editor.moving_rectangle is None

    def test_move_on_empty_collection_is_noop(self, image):
        script = [press(5, 5, SECONDARY), move(10, 10), release(20, 20, SECONDARY)]
        editor, _ = make_editor(script)

        assert editor.edit_rectangles(image, []) == []

    def test_primary_clicks_ignored_while_moving(self, image):
        existing = [Rectangle(0, 0, 10, 10)]
        script = [press(5, 5, SECONDARY), *click(40, 40), *click(60, 60),
                  release(100, 100, SECONDARY)]
        editor, _ = make_editor(script)

        assert editor.edit_rectangles(image, existing) == [Rectangle(95, 95, 10, 10)]


class TestDeleteMode:
    """Tests for deleting rectangles."""

    def test_toggle_switches_mode(self, image):
        editor, display = make_editor([DELETE])

        editor.edit_rectangles(image, [])

        assert DELETE_TOGGLE_NAME in display.toggles
        assert display.toggles[DELETE_TOGGLE_NAME][0] == 1
        assert editor.edit_mode == EditMode.DELETE

    def test_secondary_click_deletes_nearest(self, image):
        existing = [Rectangle(0, 0, 10, 10), Rectangle(100, 100, 20, 20)]
        editor, _ = make_editor([DELETE, press(4, 4, SECONDARY), release(4, 4, SECONDARY)])

        assert editor.edit_rectangles(image, existing) == [Rectangle(100, 100, 20, 20)]

    def test_selection_box_deletes_contained_centers(self, image):
        existing = [
            Rectangle(0, 0, 10, 10),
            Rectangle(45, 45, 10, 10),
            Rectangle(495, 495, 10, 10),
        ]
        editor, _ = make_editor([DELETE, *drag((0, 0), (60, 60), steps=[(30, 30)])])

        assert editor.edit_rectangles(image, existing) == [Rectangle(495, 495, 10, 10)]

    def test_selection_box_preserves_survivor_order(self, image):
        existing = [
            Rectangle(300, 0, 10, 10),
            Rectangle(0, 0, 10, 10),
            Rectangle(200, 200, 10, 10),
            Rectangle(20, 20, 10, 10),
        ]
        editor, _ = make_editor([DELETE, *drag((0, 0), (100, 100))])

        assert editor.edit_rectangles(image, existing) == [
            Rectangle(300, 0, 10, 10),
            Rectangle(200, 200, 10, 10),
        ]

    def test_delete_on_empty_collection_is_noop(self, image):
        editor, _ = make_editor([DELETE, press(5, 5, SECONDARY)])
        assert editor.edit_rectangles(image, []) == []

    def test_primary_clicks_do_not_add(self, image):
        editor, _ = make_editor([DELETE, *click(10, 10), *click(30, 50)])
        assert editor.edit_rectangles(image, []) == []

    def test_canvas_redrawn_from_pristine_image(self, image):
        existing = [Rectangle(0, 0, 10, 10), Rectangle(100, 100, 20, 20)]
        editor, _ = make_editor([DELETE, press(4, 4, SECONDARY)])

        editor.edit_rectangles(image, existing)

        expected = make_canvas(image)
        draw_rectangle(expected, Rectangle(100, 100, 20, 20), editor.style)
        assert editor.drawn_image == expected


class TestModeSwitching:
    """Tests for switching between add and delete modes."""

    def test_switch_restores_moving_rectangle(self, image):
        existing = [Rectangle(0, 0, 10, 10)]
        editor, _ = make_editor([press(5, 5, SECONDARY), move(50, 50), DELETE,
                                 release(50, 50, SECONDARY)])

        assert editor.edit_rectangles(image, existing) == [Rectangle(0, 0, 10, 10)]

    def test_switch_discards_pending_first_click(self, image):
        script = [*click(10, 10), DELETE, ADD, *click(30, 50), *click(40, 60)]
        editor, _ = make_editor(script)

        assert editor.edit_rectangles(image, []) == [Rectangle(30, 50, 10, 10)]

    def test_add_and_delete_sequence(self, image):
        script = [
            *click(10, 10), *click(30, 30),
            *click(100, 100), *click(140, 140),
            *click(300, 300), *click(310, 320),
            DELETE,
            press(121, 119, SECONDARY),
            ADD,
            *click(400, 400), *click(420, 410),
        ]
        editor, _ = make_editor(script)

        assert editor.edit_rectangles(image, []) == [
            Rectangle(10, 10, 20, 20),
            Rectangle(300, 300, 10, 20),
            Rectangle(400, 400, 20, 10),
        ]

    def test_same_input_same_result(self, image):
        """Test replaying a gesture sequence is deterministic."""
        existing = [Rectangle(0, 0, 10, 10), Rectangle(50, 50, 10, 10)]
        script = [
            *click(200, 200), *click(260, 240),
            press(6, 6, SECONDARY), move(90, 90), release(100, 100, SECONDARY),
            DELETE, *drag((40, 40), (70, 70)),
        ]

        first, _ = make_editor(script)
        second, _ = make_editor(script)

        assert first.edit_rectangles(image, existing) == second.edit_rectangles(image, existing)

    def test_mode_resets_each_image(self, image):
        editor, _ = make_editor([DELETE], [])

        editor.edit_rectangles(image, [])
        assert editor.edit_mode == EditMode.DELETE

        editor.edit_rectangles(image, [])
        assert editor.edit_mode == EditMode.ADD

    def test_zero_ratio_rejected_for_fixed_dimension_modes(self):
        with pytest.raises(ConfigurationError):
            RectangleEditor(0, ClickPairMode.T_B, display=ScriptedDisplay())
