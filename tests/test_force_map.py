"""Tests for force map state and resizing."""

import pytest
from structlog.testing import capture_logs

from py_forcemap.config import get_settings
from py_forcemap.core.boundary_force import ForceNode
from py_forcemap.core.exceptions import ValidationError
from py_forcemap.core.force_map import ForceMap, init_force_map, resize_grid
from py_forcemap.core.zone_grid import ZoneCenter, create_zone_grid


@pytest.fixture
def state():
    """Force map over an 800x600 container with 4 columns and 3 rows."""
    return init_force_map(800, 600, 4, 3)


class TestInitForceMap:
    """Test initial state construction."""

    def test_initial_state(self, state):
        """Test container metadata and grid."""
        assert state.container_width == 800
        assert state.container_height == 600
        assert state.container_center == ZoneCenter(x=400, y=300)
        assert state.cols == 4
        assert state.rows == 3
        assert state.zones == create_zone_grid(800, 600, 4, 3)

    def test_missing_container_rejected(self):
        """Test that a missing container size fails validation."""
        with pytest.raises(ValidationError, match="not initialized"):
            init_force_map(None, 600, 2, 2)
        with pytest.raises(ValidationError, match="not initialized"):
            init_force_map(800, None, 2, 2)

    def test_counts_default_from_settings(self, monkeypatch):
        """Test that omitted counts come from the settings."""
        monkeypatch.setenv("FORCEMAP_DEFAULT_COLS", "3")
        monkeypatch.setenv("FORCEMAP_DEFAULT_ROWS", "2")
        get_settings.cache_clear()
        try:
            state = init_force_map(300, 200)
            force_map = ForceMap(300, 200, cols=5)
        finally:
            get_settings.cache_clear()

        assert (state.cols, state.rows) == (3, 2)
        assert state.zones.zone_width == 100
        assert (force_map.state.cols, force_map.state.rows) == (5, 2)

    @pytest.mark.parametrize("cols,rows", [(0, 1), (1, 0), (-1, 2)])
    def test_invalid_counts_rejected(self, cols, rows):
        """Test that invalid counts fail at construction."""
        with pytest.raises(ValidationError):
            init_force_map(800, 600, cols, rows)


class TestResizeGrid:
    """Test state re-derivation."""

    def test_unchanged_inputs_reproduce_grid(self, state):
        """Test that resizing with the same values yields an equal state."""
        resized = resize_grid(state, 800, 600, 4, 3)

        assert resized == state
        assert resized.zones == state.zones

    def test_omitted_counts_keep_previous(self, state):
        """Test that omitted counts keep the previous grid shape."""
        resized = resize_grid(state, 1000, 900)

        assert resized.cols == 4
        assert resized.rows == 3
        assert resized.zones.zone_width == 250
        assert resized.zones.zone_height == 300
        assert resized.container_center == ZoneCenter(x=500, y=450)

    def test_new_counts_applied(self, state):
        """Test that new counts produce a new grid shape."""
        resized = resize_grid(state, 800, 600, new_cols=2, new_rows=5)

        assert resized.cols == 2
        assert resized.rows == 5
        assert len(resized.zones) == 5
        assert len(resized.zones[0]) == 2

    def test_zero_count_is_not_omission(self, state):
        """Test that 0 is rejected rather than treated as omitted."""
        with pytest.raises(ValidationError, match="column"):
            resize_grid(state, 800, 600, new_cols=0)
        with pytest.raises(ValidationError, match="row"):
            resize_grid(state, 800, 600, new_rows=0)

    def test_invalid_size_rejected(self, state):
        """Test that non-positive sizes are rejected on resize."""
        with pytest.raises(ValidationError, match="height"):
            resize_grid(state, 800, -1)

    def test_previous_state_untouched(self, state):
        """Test that resizing returns a new snapshot."""
        old_zones = state.zones
        old_corner = state.zones[0][0]

        resized = resize_grid(state, 400, 300)

        assert resized is not state
        assert state.zones is old_zones
        assert state.zones[0][0] is old_corner
        assert state.container_width == 800
        assert resized.zones[0][0].right == 100

    def test_resize_logged(self, state):
        """Test that a resize emits an info event."""
        with capture_logs() as logs:
            resize_grid(state, 400, 300)

        assert any(e["event"] == "Resized force map" for e in logs)

    def test_rejected_resize_not_logged(self, state):
        """Test that a resize failing validation emits no resize event."""
        with capture_logs() as logs:
            with pytest.raises(ValidationError):
                resize_grid(state, 400, 300, new_cols=0)

        assert not [e for e in logs if e["event"] == "Resized force map"]


class TestForceMapHolder:
    """Test the state holder."""

    def test_resize_swaps_state(self):
        """Test that resize replaces the held snapshot."""
        force_map = ForceMap(200, 100, 2, 1)
        before = force_map.state

        after = force_map.resize(400, 200)

        assert force_map.state is after
        assert after is not before
        assert force_map.zones.zone_width == 200

    def test_failed_resize_keeps_state(self):
        """Test that a rejected resize leaves the held snapshot in place."""
        force_map = ForceMap(200, 100, 2, 1)
        before = force_map.state

        with pytest.raises(ValidationError):
            force_map.resize(0, 100)

        assert force_map.state is before

    def test_boundary_forces_per_zone(self):
        """Test that one bound force is created per assigned zone."""
        force_map = ForceMap(200, 100, 2, 1)
        left_nodes = [ForceNode(x=120, y=50)]
        right_nodes = [ForceNode(x=90, y=50)]

        forces = force_map.boundary_forces({(0, 0): left_nodes, (0, 1): right_nodes},
                                           strength=0.2)

        assert set(forces) == {(0, 0), (0, 1)}
        assert forces[(0, 0)].zone is force_map.zones[0][0]
        assert forces[(0, 1)].nodes is right_nodes

        for force in forces.values():
            force.step(1.0)

        assert left_nodes[0].vx == pytest.approx(-4.0)
        assert right_nodes[0].vx == pytest.approx(2.0)

    def test_forces_keep_old_geometry_after_resize(self):
        """Test that existing forces are not rebound to a resized grid."""
        force_map = ForceMap(200, 100, 2, 1)
        forces = force_map.boundary_forces({(0, 0): []})
        old_zone = forces[(0, 0)].zone

        force_map.resize(400, 200)

        assert forces[(0, 0)].zone is old_zone
        assert forces[(0, 0)].zone.right == 100
        assert force_map.zones[0][0].right == 200

    @pytest.mark.parametrize("key", [(-1, -1), (0, -1), (-1, 0), (1, 0), (0, 2)])
    def test_out_of_range_zone_key_rejected(self, key):
        """Test that keys outside the grid fail instead of wrapping."""
        force_map = ForceMap(200, 100, 2, 1)

        with pytest.raises(ValidationError, match="outside the 1x2 grid"):
            force_map.boundary_forces({key: []})


class TestEndToEnd:
    """Test a small simulation loop against the grid."""

    def test_nodes_pulled_into_zones(self):
        """Test that stray nodes converge into their assigned zones."""
        force_map = ForceMap(400, 400, 2, 2)
        grid = force_map.zones
        targets = {(0, 0): [ForceNode(x=350, y=350)],
                   (1, 1): [ForceNode(x=10, y=20)]}

        forces = force_map.boundary_forces(targets, strength=0.2)

        alpha = 1.0
        for _ in range(300):
            for force in forces.values():
                force.step(alpha)
            for nodes in targets.values():
                for node in nodes:
                    node.vx *= 0.6
                    node.vy *= 0.6
                    node.x += node.vx
                    node.y += node.vy
            alpha += (0.001 - alpha) * 0.0228

        for (row, col), nodes in targets.items():
            zone = grid[row][col]
            for node in nodes:
                assert zone.contains(node.x, node.y, radius=-1.0)
