"""
Unit tests for layout models and canvas config.
"""

import pytest

from dochistory_toolkit.layout import CanvasSpec, LayoutPlan, PageDimensions


class TestCanvasSpec:

    def test_default_canvas_is_full_hd(self):
        assert CanvasSpec().size == (1920, 1080)

    @pytest.mark.parametrize("width,height", [(0, 1080), (1920, -5)])
    def test_canvas_when_non_positive_then_raises(self, width, height):
        with pytest.raises(ValueError, match="canvas"):
            CanvasSpec(width, height)


class TestLayoutPlan:

    def test_capacity_and_shape(self):
        plan = LayoutPlan(columns=4, rows=3, scale=0.25, left_margin=1.0, top_margin=2.0)

        assert plan.capacity == 12
        assert plan.shape == (4, 3, 0.25)

    def test_cell_of_is_row_major(self):
        plan = LayoutPlan(columns=3, rows=3, scale=1.0, left_margin=0, top_margin=0)

        assert plan.cell_of(0) == (0, 0)
        assert plan.cell_of(2) == (2, 0)
        assert plan.cell_of(3) == (0, 1)
        assert plan.cell_of(7) == (1, 2)

    def test_plan_is_frozen(self):
        plan = LayoutPlan(columns=1, rows=1, scale=1.0, left_margin=0, top_margin=0)

        with pytest.raises(AttributeError):
            plan.scale = 2.0


class TestPageDimensions:

    def test_area(self):
        assert PageDimensions(595.0, 842.0).area == pytest.approx(500990.0)
