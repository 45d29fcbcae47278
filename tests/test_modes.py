"""Tests for the gesture-based interaction modes."""

import pytest

from patch_annotator.core.drawing import MarkerStyle, MarkerType, make_canvas
from patch_annotator.core.errors import ConfigurationError
from patch_annotator.core.models import ClickPairMode, Point, PointerButton, Rectangle, Size
from patch_annotator.modes import (
    FixedSizeClickMode,
    PaintedOutlineMode,
    SingleDragMode,
    TwoClickMode,
)

from scripted_display import ScriptedDisplay, click, drag, move, press, release


class TestSingleDragMode:
    """Tests for SingleDragMode."""

    def test_drag_records_rectangle(self, make_image):
        """Test a press-drag-release gesture records one rectangle."""
        image = make_image(200, 100)
        display = ScriptedDisplay(drag((10, 10), (50, 40), steps=[(20, 20)]))
        mode = SingleDragMode(display=display)

        rects = mode.collect_rectangles(image)

        assert rects == [Rectangle(10, 10, 40, 30)]

    def test_drag_up_left(self, make_image):
        """Test dragging towards the origin gives the same rectangle."""
        display = ScriptedDisplay(drag((50, 40), (10, 10)))
        mode = SingleDragMode(display=display)

        assert mode.collect_rectangles(make_image()) == [Rectangle(10, 10, 40, 30)]

    def test_preview_does_not_touch_canvas(self, make_image):
        """Test moves only show scratch copies."""
        image = make_image()
        display = ScriptedDisplay([press(10, 10), move(40, 40), move(60, 60)])
        mode = SingleDragMode(display=display)

        rects = mode.collect_rectangles(image)

        assert rects == []
        assert mode.drawn_image == make_canvas(image)
        # initial canvas plus one preview per move
        assert len(display.shown) == 3

    def test_commit_draws_on_canvas(self, make_image):
        image = make_image()
        original = image.copy()
        display = ScriptedDisplay(drag((10, 10), (50, 40)))
        mode = SingleDragMode(display=display)

        mode.collect_rectangles(image)

        assert mode.drawn_image != make_canvas(image)
        assert image == original

    def test_degenerate_click_recorded(self, make_image):
        """Test a click without movement records an empty rectangle as-is."""
        display = ScriptedDisplay(click(5, 5))
        mode = SingleDragMode(display=display)

        assert mode.collect_rectangles(make_image()) == [Rectangle(5, 5, 0, 0)]

    def test_secondary_button_ignored(self, make_image):
        display = ScriptedDisplay(drag((10, 10), (50, 40), button=PointerButton.SECONDARY))
        mode = SingleDragMode(display=display)

        assert mode.collect_rectangles(make_image()) == []

    def test_several_rectangles_in_order(self, make_image):
        script = drag((10, 10), (20, 20)) + drag((100, 50), (60, 30))
        mode = SingleDragMode(display=ScriptedDisplay(script))

        assert mode.collect_rectangles(make_image()) == [
            Rectangle(10, 10, 10, 10),
            Rectangle(60, 30, 40, 20),
        ]

    def test_state_reset_between_images(self, make_image):
        """Test an unfinished drag does not leak into the next image."""
        display = ScriptedDisplay([press(10, 10)], [move(50, 50), *click(70, 70)])
        mode = SingleDragMode(display=display)

        assert mode.collect_rectangles(make_image()) == []
        assert mode.collect_rectangles(make_image()) == [Rectangle(70, 70, 0, 0)]


class TestTwoClickMode:
    """Tests for TwoClickMode."""

    def test_two_clicks_unconstrained(self, make_image):
        display = ScriptedDisplay(click(10, 10) + click(30, 50))
        mode = TwoClickMode(0, ClickPairMode.TL_BR, display=display)

        assert mode.collect_rectangles(make_image()) == [Rectangle(10, 10, 20, 40)]

    def test_aspect_ratio_applied(self, make_image):
        display = ScriptedDisplay(click(10, 10) + click(30, 50))
        mode = TwoClickMode(1.0, ClickPairMode.TL_BR, display=display)

        assert mode.collect_rectangles(make_image()) == [Rectangle(0, 10, 40, 40)]

    def test_center_top_mode(self, make_image):
        display = ScriptedDisplay(click(50, 50) + click(50, 30))
        mode = TwoClickMode(0.5, ClickPairMode.C_T, display=display)

        assert mode.collect_rectangles(make_image()) == [Rectangle(40, 30, 20, 40)]

    def test_only_releases_count(self, make_image):
        """Test presses and moves do not advance the gesture."""
        script = [press(10, 10), move(15, 15), press(12, 12), release(10, 10),
                  move(20, 20), release(30, 50)]
        mode = TwoClickMode(0, display=ScriptedDisplay(script))

        assert mode.collect_rectangles(make_image()) == [Rectangle(10, 10, 20, 40)]

    def test_first_click_marker_not_on_canvas(self, make_image):
        image = make_image()
        display = ScriptedDisplay(click(40, 40))
        mode = TwoClickMode(0, display=display)

        assert mode.collect_rectangles(image) == []
        assert mode.drawn_image == make_canvas(image)
        assert display.shown[-1] != make_canvas(image)

    def test_pending_click_discarded_between_images(self, make_image):
        display = ScriptedDisplay(click(1, 1), click(10, 10) + click(30, 50))
        mode = TwoClickMode(0, display=display)

        assert mode.collect_rectangles(make_image()) == []
        assert mode.collect_rectangles(make_image()) == [Rectangle(10, 10, 20, 40)]

    def test_identical_clicks_recorded(self, make_image):
        display = ScriptedDisplay(click(10, 10) + click(10, 10))
        mode = TwoClickMode(0, display=display)

        assert mode.collect_rectangles(make_image()) == [Rectangle(10, 10, 0, 0)]

    def test_zero_ratio_rejected_for_fixed_dimension_modes(self):
        with pytest.raises(ConfigurationError):
            TwoClickMode(0, ClickPairMode.C_T, display=ScriptedDisplay())

    def test_mode_accepts_string_value(self):
        mode = TwoClickMode(0.5, "l_r", display=ScriptedDisplay())
        assert mode.click_pair_mode is ClickPairMode.L_R


class TestFixedSizeClickMode:
    """Tests for FixedSizeClickMode."""

    def test_click_centers_rectangle(self, make_image):
        display = ScriptedDisplay(click(50, 50) + click(100, 20))
        mode = FixedSizeClickMode(Size(10, 20), display=display)

        rects = mode.collect_rectangles(make_image())

        assert rects == [Rectangle(45, 40, 10, 20), Rectangle(95, 10, 10, 20)]
        assert mode.marked_points == [Point(50, 50), Point(100, 20)]

    def test_press_alone_does_nothing(self, make_image):
        mode = FixedSizeClickMode(Size(10, 10), display=ScriptedDisplay([press(50, 50)]))
        assert mode.collect_rectangles(make_image()) == []

    def test_marker_mode(self, make_image):
        image = make_image()
        display = ScriptedDisplay(click(50, 50))
        marker = MarkerStyle(marker_type=MarkerType.DIAMOND, size=6)
        mode = FixedSizeClickMode.marking_points(marker, display=display)

        rects = mode.collect_rectangles(image)

        assert mode.draws_markers
        assert rects == [Rectangle(46, 46, 8, 8)]
        assert mode.drawn_image != make_canvas(image)

    def test_points_reset_between_images(self, make_image):
        display = ScriptedDisplay(click(5, 5), click(7, 7))
        mode = FixedSizeClickMode(Size(2, 2), display=display)

        mode.collect_rectangles(make_image())
        mode.collect_rectangles(make_image())

        assert mode.marked_points == [Point(7, 7)]

    def test_invalid_size(self):
        with pytest.raises(ConfigurationError):
            FixedSizeClickMode(Size(0, 10), display=ScriptedDisplay())


class TestPaintedOutlineMode:
    """Tests for PaintedOutlineMode."""

    def test_every_visited_point_recorded(self, make_image):
        script = drag((50, 25), (97, 25), steps=[(60, 25)])
        mode = PaintedOutlineMode(Size(10, 10), display=ScriptedDisplay(script))

        rects = mode.collect_rectangles(make_image(100, 50))

        # the box at x=97 would leave the canvas
        assert rects == [Rectangle(45, 20, 10, 10), Rectangle(55, 20, 10, 10)]

    def test_box_near_right_edge_rejected(self, make_image):
        width = 100
        display = ScriptedDisplay(click(width - 3, 25))
        mode = PaintedOutlineMode(Size(10, 10), display=display)

        assert mode.collect_rectangles(make_image(width, 50)) == []

    def test_moves_without_press_ignored(self, make_image):
        display = ScriptedDisplay([move(50, 25), move(60, 25)])
        mode = PaintedOutlineMode(Size(10, 10), display=display)

        assert mode.collect_rectangles(make_image(100, 50)) == []

    def test_scaled_canvas(self, make_image):
        """Test boxes are checked on the rescaled canvas and recorded unscaled."""
        display = ScriptedDisplay(click(100, 50))
        mode = PaintedOutlineMode(Size(10, 10), scale=2.0, display=display)

        rects = mode.collect_rectangles(make_image(100, 50))

        assert mode.rect_size == Size(20, 20)
        assert mode.canvas_size == Size(200, 100)
        assert rects == [Rectangle(45, 20, 10, 10), Rectangle(45, 20, 10, 10)]

    def test_marker_style(self, make_image):
        image = make_image(100, 50)
        mode = PaintedOutlineMode(Size(10, 10), display=ScriptedDisplay(click(50, 25)))
        mode.use_marker_style(MarkerStyle(marker_type=MarkerType.STAR, size=8))

        rects = mode.collect_rectangles(image)

        assert mode.marker.marker_type == MarkerType.STAR
        assert len(rects) == 2
        assert mode.drawn_image != make_canvas(image)

    def test_invalid_scale(self):
        with pytest.raises(ConfigurationError):
            PaintedOutlineMode(Size(10, 10), scale=0, display=ScriptedDisplay())
