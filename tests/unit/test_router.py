"""Unit tests for the router module."""

from mermaidflow.geometry import Point, Rect
from mermaidflow.router import EdgeRoute, EdgeRouter


def make_router():
    router = EdgeRouter()
    router.set_boxes(
        {
            "A": Rect(0, 0, 100, 50),
            "X": Rect(0, 100, 100, 150),
            "B": Rect(0, 200, 100, 250),
        }
    )
    return router


class TestEdgeRoute:
    """Tests for EdgeRoute dataclass."""

    def test_straight(self):
        """Test a two-point route is not a detour."""
        route = EdgeRoute("A", "B", [Point(0, 0), Point(0, 100)])
        assert not route.is_detour

    def test_label_position(self):
        """Test the label sits above the midpoint of the ends."""
        waypoints = [Point(0, 0), Point(-20, 0), Point(-20, 100), Point(0, 100)]
        route = EdgeRoute("A", "B", waypoints)
        assert route.is_detour
        assert route.label_position == Point(0, 40)


class TestEdgeRouter:
    """Tests for EdgeRouter."""

    def test_defaults(self):
        """Test default padding and offset."""
        router = EdgeRouter()
        assert router.obstacle_padding == 4
        assert router.detour_offset == 20
        assert router.boxes == {}

    def test_straight_when_clear(self):
        """Test an unobstructed edge stays straight."""
        route = make_router().route("A", "X", Point(30, 50), Point(30, 100))
        assert route.waypoints == [Point(30, 50), Point(30, 100)]
        assert route.obstacles == []

    def test_endpoints_are_not_obstacles(self):
        """Test the edge's own boxes never block it."""
        router = make_router()
        assert router.find_obstacles("A", "X", Point(30, 50), Point(30, 100)) == []

    def test_vertical_detour(self):
        """Test a blocked vertical edge bends to the nearer side."""
        route = make_router().route("A", "B", Point(30, 50), Point(30, 200))
        assert route.obstacles == ["X"]
        assert route.waypoints == [
            Point(30, 50),
            Point(-24, 50),
            Point(-24, 200),
            Point(30, 200),
        ]

    def test_vertical_detour_right_side(self):
        """Test a start nearer the right edge detours to the right."""
        route = make_router().route("A", "B", Point(90, 50), Point(90, 200))
        assert route.waypoints[1] == Point(124, 50)

    def test_vertical_detour_tie_goes_right(self):
        """Test a start centred on the obstacles detours to the right."""
        route = make_router().route("A", "B", Point(50, 50), Point(50, 200))
        assert route.waypoints == [
            Point(50, 50),
            Point(124, 50),
            Point(124, 200),
            Point(50, 200),
        ]

    def test_horizontal_detour_tie_goes_below(self):
        """Test a start centred on the obstacles detours below them."""
        router = EdgeRouter()
        router.set_boxes(
            {
                "A": Rect(0, 0, 50, 100),
                "X": Rect(100, 0, 150, 100),
                "B": Rect(200, 0, 250, 100),
            }
        )
        route = router.route("A", "B", Point(50, 50), Point(200, 50))
        assert route.waypoints[1:3] == [Point(50, 124), Point(200, 124)]

    def test_horizontal_detour(self):
        """Test a blocked horizontal edge bends above or below."""
        router = EdgeRouter()
        router.set_boxes(
            {
                "A": Rect(0, 0, 50, 100),
                "X": Rect(100, 0, 150, 100),
                "B": Rect(200, 0, 250, 100),
            }
        )
        route = router.route("A", "B", Point(50, 30), Point(200, 30))
        assert route.waypoints == [
            Point(50, 30),
            Point(50, -24),
            Point(200, -24),
            Point(200, 30),
        ]

    def test_padding_catches_near_miss(self):
        """Test a segment grazing a box within the padding is blocked."""
        router = EdgeRouter()
        router.set_boxes({"X": Rect(0, 100, 100, 150)})
        route = router.route("A", "B", Point(102, 50), Point(102, 200))
        assert route.is_detour

    def test_route_edges_keeps_order(self):
        """Test route_edges routes every edge in order."""
        routes = make_router().route_edges(
            [
                ("A", "X", Point(30, 50), Point(30, 100)),
                ("A", "B", Point(30, 50), Point(30, 200)),
            ]
        )
        assert [(r.source, r.target) for r in routes] == [("A", "X"), ("A", "B")]
        assert [r.is_detour for r in routes] == [False, True]
